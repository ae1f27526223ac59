"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Immutable domain records and the session value
- interfaces.py: Storage contracts
"""

from .entities import (
    ADMIN_ROLE,
    Account,
    Appointment,
    Doctor,
    Patient,
    PersonInfo,
    Session,
)
from .interfaces import IRecordReader, IRecordStorage, IRecordWriter

__all__ = [
    # Domain entities
    "ADMIN_ROLE",
    "Account",
    "Appointment",
    "Doctor",
    "Patient",
    "PersonInfo",
    "Session",
    # Storage interfaces
    "IRecordStorage",
    "IRecordReader",
    "IRecordWriter",
]
