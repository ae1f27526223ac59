"""
Domain entities - Pure business logic, no framework dependencies.

Every entity is an immutable value record. Changing one means building a
new instance; the store never updates fields in place.
"""

from dataclasses import dataclass
from typing import Optional

ADMIN_ROLE = "ADMIN"


@dataclass(frozen=True)
class PersonInfo:
    """Identifier and full name shared by doctors and patients."""

    id: str
    full_name: str


@dataclass(frozen=True)
class Doctor:
    """Domain entity representing a Doctor."""

    person: PersonInfo
    specialty: str = ""

    @classmethod
    def create(cls, doctor_id: str, full_name: str, specialty: str) -> "Doctor":
        return cls(person=PersonInfo(doctor_id, full_name), specialty=specialty)

    @property
    def id(self) -> str:
        return self.person.id

    @property
    def full_name(self) -> str:
        return self.person.full_name


@dataclass(frozen=True)
class Patient:
    """Domain entity representing a Patient."""

    person: PersonInfo

    @classmethod
    def create(cls, patient_id: str, full_name: str) -> "Patient":
        return cls(person=PersonInfo(patient_id, full_name))

    @property
    def id(self) -> str:
        return self.person.id

    @property
    def full_name(self) -> str:
        return self.person.full_name


@dataclass(frozen=True)
class Appointment:
    """Domain entity for an appointment between one doctor and one patient.

    ``date_time`` is free text; ISO-8601 (``2026-02-08T10:30``) is the
    recommended shape but it is never parsed or validated.
    """

    id: str
    date_time: str
    reason: str
    doctor_id: str
    patient_id: str


@dataclass(frozen=True)
class Account:
    """Domain entity for an operator account.

    ``password_hash`` is an opaque hex digest produced by
    ``clinic_records.core.security.hash_password``.
    """

    id: str
    username: str
    password_hash: str
    role: str = ADMIN_ROLE

    @property
    def is_admin(self) -> bool:
        return (self.role or "").upper() == ADMIN_ROLE


@dataclass(frozen=True)
class Session:
    """Explicit session value handed to every guarded operation.

    A session either carries the logged-in account or nothing at all.
    """

    account: Optional[Account] = None

    @classmethod
    def anonymous(cls) -> "Session":
        return cls(account=None)

    @property
    def is_authenticated(self) -> bool:
        return self.account is not None

    @property
    def is_admin(self) -> bool:
        return self.account is not None and self.account.is_admin

    @property
    def username(self) -> Optional[str]:
        return self.account.username if self.account else None
