"""
Clinic service holding the in-memory records.

This service:
- Owns the doctors, patients, appointments and accounts collections
- Enforces unique ids per collection and that appointments reference an
  existing doctor and patient
- Guards every mutating operation with an explicit administrator Session
- Validates before mutating, so a failed call leaves every collection unchanged

Persistence is a separate step (see RecordsService).
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from clinic_records.core.auth_decorators import require_admin
from clinic_records.core.exceptions import (
    DuplicateIdError,
    DuplicateUsernameError,
    UnknownDoctorError,
    UnknownPatientError,
)
from clinic_records.domain.entities import (
    Account,
    Appointment,
    Doctor,
    Patient,
    Session,
)

logger = logging.getLogger(__name__)

COLLECTIONS = ("doctors", "patients", "appointments", "accounts")


class ClinicService:
    """Application service for the clinic's records."""

    def __init__(self) -> None:
        self._collections: Dict[str, List[Any]] = {name: [] for name in COLLECTIONS}

    # ---- read access ----

    @property
    def doctors(self) -> Tuple[Doctor, ...]:
        return self.snapshot("doctors")

    @property
    def patients(self) -> Tuple[Patient, ...]:
        return self.snapshot("patients")

    @property
    def appointments(self) -> Tuple[Appointment, ...]:
        return self.snapshot("appointments")

    @property
    def accounts(self) -> Tuple[Account, ...]:
        return self.snapshot("accounts")

    def find_doctor(self, doctor_id: str) -> Optional[Doctor]:
        """Get doctor by id, or None."""
        return self._find_by_id("doctors", doctor_id)

    def find_patient(self, patient_id: str) -> Optional[Patient]:
        """Get patient by id, or None."""
        return self._find_by_id("patients", patient_id)

    def find_appointment(self, appointment_id: str) -> Optional[Appointment]:
        """Get appointment by id, or None."""
        return self._find_by_id("appointments", appointment_id)

    def find_account(self, username: str) -> Optional[Account]:
        """Get account by username, or None."""
        for account in self._collections["accounts"]:
            if account.username == username:
                return account
        return None

    def _find_by_id(self, name: str, entity_id: str) -> Optional[Any]:
        for item in self._collections[name]:
            if item.id == entity_id:
                return item
        return None

    # ---- guarded mutations ----

    @require_admin
    def register_doctor(self, session: Session, doctor: Doctor) -> Doctor:
        """Register a new doctor.

        Raises:
            NotAuthorizedError: If ``session`` is not an administrator session
            DuplicateIdError: If a doctor with the same id exists
        """
        if self.find_doctor(doctor.id) is not None:
            logger.warning(
                "Duplicate doctor id rejected",
                extra={"context": {"doctor_id": doctor.id}},
            )
            raise DuplicateIdError("Doctor", doctor.id)

        self._collections["doctors"].append(doctor)
        logger.info(
            "Doctor registered",
            extra={"context": {"doctor_id": doctor.id, "by": session.username}},
        )
        return doctor

    @require_admin
    def register_patient(self, session: Session, patient: Patient) -> Patient:
        """Register a new patient.

        Raises:
            NotAuthorizedError: If ``session`` is not an administrator session
            DuplicateIdError: If a patient with the same id exists
        """
        if self.find_patient(patient.id) is not None:
            logger.warning(
                "Duplicate patient id rejected",
                extra={"context": {"patient_id": patient.id}},
            )
            raise DuplicateIdError("Patient", patient.id)

        self._collections["patients"].append(patient)
        logger.info(
            "Patient registered",
            extra={"context": {"patient_id": patient.id, "by": session.username}},
        )
        return patient

    @require_admin
    def create_appointment(
        self,
        session: Session,
        appointment_id: str,
        date_time: str,
        reason: str,
        doctor_id: str,
        patient_id: str,
    ) -> Appointment:
        """Create an appointment between an existing doctor and patient.

        Business Rules (checked in this order, first failure wins):
        - Appointment id must be unused
        - Doctor must exist
        - Patient must exist

        Raises:
            NotAuthorizedError: If ``session`` is not an administrator session
            DuplicateIdError: If the appointment id is already used
            UnknownDoctorError: If no doctor has ``doctor_id``
            UnknownPatientError: If no patient has ``patient_id``
        """
        if self.find_appointment(appointment_id) is not None:
            logger.warning(
                "Duplicate appointment id rejected",
                extra={"context": {"appointment_id": appointment_id}},
            )
            raise DuplicateIdError("Appointment", appointment_id)

        if self.find_doctor(doctor_id) is None:
            logger.warning(
                "Appointment references unknown doctor",
                extra={
                    "context": {
                        "appointment_id": appointment_id,
                        "doctor_id": doctor_id,
                    }
                },
            )
            raise UnknownDoctorError(doctor_id)

        if self.find_patient(patient_id) is None:
            logger.warning(
                "Appointment references unknown patient",
                extra={
                    "context": {
                        "appointment_id": appointment_id,
                        "patient_id": patient_id,
                    }
                },
            )
            raise UnknownPatientError(patient_id)

        appointment = Appointment(
            id=appointment_id,
            date_time=date_time,
            reason=reason,
            doctor_id=doctor_id,
            patient_id=patient_id,
        )
        self._collections["appointments"].append(appointment)
        logger.info(
            "Appointment created",
            extra={
                "context": {
                    "appointment_id": appointment_id,
                    "doctor_id": doctor_id,
                    "patient_id": patient_id,
                    "by": session.username,
                }
            },
        )
        return appointment

    def add_account(self, account: Account) -> Account:
        """Add an account; callers are responsible for authorization.

        Raises:
            DuplicateUsernameError: If the username is taken
        """
        if self.find_account(account.username) is not None:
            raise DuplicateUsernameError(account.username)
        self._collections["accounts"].append(account)
        logger.info(
            "Account added",
            extra={"context": {"account_id": account.id, "username": account.username}},
        )
        return account

    # ---- bulk snapshot / replace ----

    def snapshot(self, name: str) -> Tuple[Any, ...]:
        """Return an immutable copy of one collection."""
        return tuple(self._collection(name))

    def replace_collection(self, name: str, items: Iterable[Any]) -> None:
        """Replace one whole collection with ``items``; never merges."""
        self._collection(name)
        self._collections[name] = list(items)
        logger.debug(
            "Collection replaced",
            extra={
                "context": {
                    "collection": name,
                    "count": len(self._collections[name]),
                }
            },
        )

    def _collection(self, name: str) -> List[Any]:
        try:
            return self._collections[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name}") from None
