"""
Abstract interfaces for record storage following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from .entities import Account, Appointment, Doctor, Patient


class IRecordReader(ABC):
    """Interface for reading whole collections from storage."""

    @abstractmethod
    def load(self, name: str) -> List[Any]:
        """Load the collection called ``name``."""
        pass

    @abstractmethod
    def load_doctors(self) -> List[Doctor]:
        """Load every stored doctor."""
        pass

    @abstractmethod
    def load_patients(self) -> List[Patient]:
        """Load every stored patient."""
        pass

    @abstractmethod
    def load_appointments(self) -> List[Appointment]:
        """Load every stored appointment."""
        pass

    @abstractmethod
    def load_accounts(self) -> List[Account]:
        """Load every stored account."""
        pass


class IRecordWriter(ABC):
    """Interface for overwriting whole collections in storage."""

    @abstractmethod
    def save(self, name: str, items: Sequence[Any]) -> None:
        """Replace the collection called ``name`` with ``items``."""
        pass

    @abstractmethod
    def save_doctors(self, doctors: Sequence[Doctor]) -> None:
        """Replace the stored doctors with ``doctors``."""
        pass

    @abstractmethod
    def save_patients(self, patients: Sequence[Patient]) -> None:
        """Replace the stored patients with ``patients``."""
        pass

    @abstractmethod
    def save_appointments(self, appointments: Sequence[Appointment]) -> None:
        """Replace the stored appointments with ``appointments``."""
        pass

    @abstractmethod
    def save_accounts(self, accounts: Sequence[Account]) -> None:
        """Replace the stored accounts with ``accounts``."""
        pass


class IRecordStorage(IRecordReader, IRecordWriter):
    """Complete storage interface combining read/write operations."""

    pass
