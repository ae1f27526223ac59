"""
Custom exceptions for the application.
Centralized error handling: every error the records layer raises derives
from ClinicRecordsError so callers can catch them in one place.
"""

from typing import Optional


class ClinicRecordsError(Exception):
    """Base class for all clinic records errors."""

    pass


class DuplicateIdError(ClinicRecordsError):
    """Raised when an entity id is already used within its collection."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id '{entity_id}' already exists")


class DuplicateUsernameError(ClinicRecordsError):
    """Raised when an account username is already taken."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username '{username}' already exists")


class UnknownDoctorError(ClinicRecordsError):
    """Raised when an appointment references a doctor that does not exist."""

    def __init__(self, doctor_id: str):
        self.doctor_id = doctor_id
        super().__init__(f"Doctor '{doctor_id}' does not exist")


class UnknownPatientError(ClinicRecordsError):
    """Raised when an appointment references a patient that does not exist."""

    def __init__(self, patient_id: str):
        self.patient_id = patient_id
        super().__init__(f"Patient '{patient_id}' does not exist")


class NotAuthorizedError(ClinicRecordsError):
    """Raised when a mutating operation runs without an administrator session."""

    def __init__(self, message: str = "Access denied: administrator session required"):
        super().__init__(message)


class PersistenceError(ClinicRecordsError):
    """
    Raised when reading or writing a resource fails.
    The underlying exception is kept in ``cause`` (and chained as __cause__).
    """

    def __init__(self, resource: str, action: str, cause: Optional[BaseException]):
        self.resource = resource
        self.action = action
        self.cause = cause
        super().__init__(f"Error {action} {resource}: {cause}")
