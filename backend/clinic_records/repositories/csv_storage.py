"""File storage for the clinic records following SOLID principles.

Each collection lives in its own ``;``-delimited text file inside the data
directory. Loads read the whole file; saves overwrite the whole file. The
storage never keeps entity instances between calls.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence, Union

from clinic_records.core.exceptions import PersistenceError
from clinic_records.domain.entities import Account, Appointment, Doctor, Patient
from clinic_records.domain.interfaces import IRecordStorage
from clinic_records.utils.record_codec import decode_record, encode_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordSchema:
    """How one collection maps to its resource file."""

    filename: str
    field_count: int
    to_fields: Callable[[Any], Sequence[str]]
    from_fields: Callable[[List[str]], Any]


SCHEMAS: Dict[str, RecordSchema] = {
    "doctors": RecordSchema(
        filename="doctors.csv",
        field_count=3,
        to_fields=lambda d: (d.id, d.full_name, d.specialty),
        from_fields=lambda f: Doctor.create(f[0], f[1], f[2]),
    ),
    "patients": RecordSchema(
        filename="patients.csv",
        field_count=2,
        to_fields=lambda p: (p.id, p.full_name),
        from_fields=lambda f: Patient.create(f[0], f[1]),
    ),
    "appointments": RecordSchema(
        filename="appointments.csv",
        field_count=5,
        to_fields=lambda a: (a.id, a.date_time, a.reason, a.doctor_id, a.patient_id),
        from_fields=lambda f: Appointment(
            id=f[0], date_time=f[1], reason=f[2], doctor_id=f[3], patient_id=f[4]
        ),
    ),
    "accounts": RecordSchema(
        filename="accounts.csv",
        field_count=4,
        to_fields=lambda u: (u.id, u.username, u.password_hash, u.role),
        from_fields=lambda f: Account(
            id=f[0], username=f[1], password_hash=f[2], role=f[3]
        ),
    ),
}


class CsvStorage(IRecordStorage):
    """Storage backed by one delimited text file per collection."""

    def __init__(self, data_dir: Union[str, Path], atomic_save: bool = True) -> None:
        self.data_dir = Path(data_dir)
        self.atomic_save = atomic_save

    def path_for(self, name: str) -> Path:
        return self.data_dir / self._schema(name).filename

    def _schema(self, name: str) -> RecordSchema:
        try:
            return SCHEMAS[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name}") from None

    # ---- generic operations ----

    def load(self, name: str) -> List[Any]:
        """Load one collection. A missing file yields an empty list."""
        schema = self._schema(name)
        path = self.data_dir / schema.filename
        if not path.exists():
            logger.info(
                "Resource not found, starting empty",
                extra={"context": {"resource": str(path)}},
            )
            return []

        items = []
        skipped = 0
        try:
            with open(path, "r", encoding="utf-8", newline="") as fh:
                for line_no, line in enumerate(fh, start=1):
                    fields = decode_record(line)
                    if fields is None:
                        continue
                    if len(fields) < schema.field_count:
                        skipped += 1
                        logger.debug(
                            "Skipping short record",
                            extra={
                                "context": {
                                    "resource": str(path),
                                    "line": line_no,
                                    "fields": len(fields),
                                    "expected": schema.field_count,
                                }
                            },
                        )
                        continue
                    items.append(schema.from_fields(fields))
        except (OSError, UnicodeError) as e:
            logger.error(
                f"Failed reading {path}: {e}",
                extra={"context": {"resource": str(path)}},
            )
            raise PersistenceError(str(path), "reading", e) from e

        logger.info(
            f"Loaded {len(items)} {name}",
            extra={"context": {"resource": str(path), "skipped": skipped}},
        )
        return items

    def save(self, name: str, items: Sequence[Any]) -> None:
        """Overwrite one collection's file with ``items``."""
        schema = self._schema(name)
        path = self.data_dir / schema.filename
        content = "".join(encode_record(schema.to_fields(i)) + "\n" for i in items)

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            if self.atomic_save:
                self._write_atomic(path, content)
            else:
                with open(path, "w", encoding="utf-8", newline="\n") as fh:
                    fh.write(content)
        except (OSError, UnicodeError) as e:
            logger.error(
                f"Failed writing {path}: {e}",
                extra={"context": {"resource": str(path)}},
            )
            raise PersistenceError(str(path), "writing", e) from e

        logger.info(
            f"Saved {len(items)} {name}",
            extra={"context": {"resource": str(path), "atomic": self.atomic_save}},
        )

    def _write_atomic(self, path: Path, content: str) -> None:
        """Write to a temporary sibling file, then rename it over ``path``."""
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    # ---- per-collection operations ----

    def load_doctors(self) -> List[Doctor]:
        return self.load("doctors")

    def load_patients(self) -> List[Patient]:
        return self.load("patients")

    def load_appointments(self) -> List[Appointment]:
        return self.load("appointments")

    def load_accounts(self) -> List[Account]:
        return self.load("accounts")

    def save_doctors(self, doctors: Sequence[Doctor]) -> None:
        self.save("doctors", doctors)

    def save_patients(self, patients: Sequence[Patient]) -> None:
        self.save("patients", patients)

    def save_appointments(self, appointments: Sequence[Appointment]) -> None:
        self.save("appointments", appointments)

    def save_accounts(self, accounts: Sequence[Account]) -> None:
        self.save("accounts", accounts)
