"""
Records service moving whole collections between the store and storage.

Loading replaces every in-memory collection with the stored snapshot;
saving overwrites every resource with the in-memory snapshot.
"""

import logging
from typing import Dict

from clinic_records.domain.interfaces import IRecordStorage
from clinic_records.services.clinic_service import COLLECTIONS, ClinicService

logger = logging.getLogger(__name__)


class RecordsService:
    """Application service for load/save of all clinic records."""

    def __init__(self, store: ClinicService, storage: IRecordStorage) -> None:
        self.store = store
        self.storage = storage

    def load_all(self) -> Dict[str, int]:
        """Load every collection from storage, replacing in-memory state.

        All resources are read before any collection is replaced, so a
        PersistenceError leaves the store untouched.

        Returns:
            Number of records loaded per collection
        """
        loaded = {name: self.storage.load(name) for name in COLLECTIONS}
        for name, items in loaded.items():
            self.store.replace_collection(name, items)

        counts = {name: len(items) for name, items in loaded.items()}
        logger.info("Records loaded", extra={"context": counts})
        return counts

    def save_all(self) -> Dict[str, int]:
        """Overwrite every resource with the current in-memory collections.

        Returns:
            Number of records saved per collection
        """
        counts = {}
        for name in COLLECTIONS:
            items = self.store.snapshot(name)
            self.storage.save(name, items)
            counts[name] = len(items)

        logger.info("Records saved", extra={"context": counts})
        return counts
