"""
Unit tests for CsvStorage.

This module tests:
- Missing resources loading as empty collections
- Field order and encoding of saved files
- Tolerance of blank and short lines
- PersistenceError on I/O and decoding failures
- Temporary-file saves leaving no stray files
"""

import os

import pytest

from clinic_records.core.exceptions import PersistenceError
from clinic_records.domain.entities import Account, Appointment, Doctor, Patient
from clinic_records.repositories import csv_storage
from clinic_records.repositories.csv_storage import CsvStorage


@pytest.mark.repositories
class TestLoad:
    def test_missing_resources_yield_empty_collections(self, storage, data_dir):
        assert storage.load_doctors() == []
        assert storage.load_patients() == []
        assert storage.load_appointments() == []
        assert storage.load_accounts() == []
        assert not data_dir.exists()

    def test_short_and_blank_lines_are_skipped(self, storage, data_dir):
        data_dir.mkdir()
        (data_dir / "doctors.csv").write_text(
            "D1;Only Name\n\n   \nD2;Bob Stone;Dermatología\n", encoding="utf-8"
        )

        assert storage.load_doctors() == [
            Doctor.create("D2", "Bob Stone", "Dermatología")
        ]

    def test_extra_fields_are_ignored(self, storage, data_dir):
        data_dir.mkdir()
        (data_dir / "patients.csv").write_text("P1;Ana;extra;more\n", encoding="utf-8")

        assert storage.load_patients() == [Patient.create("P1", "Ana")]

    def test_escaped_fields_are_decoded(self, storage, data_dir):
        data_dir.mkdir()
        (data_dir / "appointments.csv").write_text(
            "C1;2026-02-08T10:30;Pain\\; fever\\nsince monday;D1;P1\n",
            encoding="utf-8",
        )

        (appointment,) = storage.load_appointments()
        assert appointment.reason == "Pain; fever\nsince monday"

    def test_crlf_files_are_read(self, storage, data_dir):
        data_dir.mkdir()
        (data_dir / "accounts.csv").write_bytes(b"A1;admin;abc;ADMIN\r\n")

        assert storage.load_accounts() == [
            Account(id="A1", username="admin", password_hash="abc", role="ADMIN")
        ]

    def test_unreadable_resource_raises_persistence_error(self, storage, data_dir):
        (data_dir / "doctors.csv").mkdir(parents=True)

        with pytest.raises(PersistenceError) as exc_info:
            storage.load_doctors()

        assert isinstance(exc_info.value.cause, OSError)
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_invalid_encoding_raises_persistence_error(self, storage, data_dir):
        data_dir.mkdir()
        (data_dir / "patients.csv").write_bytes(b"P1;\xff\xfe broken\n")

        with pytest.raises(PersistenceError) as exc_info:
            storage.load_patients()

        assert isinstance(exc_info.value.cause, UnicodeError)

    def test_unknown_collection(self, storage):
        with pytest.raises(ValueError):
            storage.load("nurses")


@pytest.mark.repositories
class TestSave:
    def test_save_creates_directory_and_writes_fields_in_order(self, tmp_path):
        data_dir = tmp_path / "nested" / "db"
        storage = CsvStorage(data_dir)

        storage.save_doctors([Doctor.create("D1", "Ana Ruiz", "Cardiología")])
        storage.save_appointments(
            [Appointment("C1", "2026-02-08T10:30", "Checkup", "D1", "P1")]
        )

        assert (data_dir / "doctors.csv").read_text(encoding="utf-8") == (
            "D1;Ana Ruiz;Cardiología\n"
        )
        assert (data_dir / "appointments.csv").read_text(encoding="utf-8") == (
            "C1;2026-02-08T10:30;Checkup;D1;P1\n"
        )

    def test_save_overwrites_previous_content(self, storage, data_dir):
        storage.save_patients([Patient.create("P1", "A"), Patient.create("P2", "B")])
        storage.save_patients([Patient.create("P3", "C")])

        assert (data_dir / "patients.csv").read_text(encoding="utf-8") == "P3;C\n"

    def test_save_empty_collection_writes_empty_file(self, storage, data_dir):
        storage.save_accounts([])

        assert (data_dir / "accounts.csv").read_text(encoding="utf-8") == ""
        assert storage.load_accounts() == []

    def test_atomic_save_leaves_no_temporary_files(self, storage, data_dir):
        storage.save_doctors([Doctor.create("D1", "Ana", "Gen")])

        assert sorted(os.listdir(data_dir)) == ["doctors.csv"]

    def test_failed_rename_keeps_previous_file(self, storage, data_dir, monkeypatch):
        storage.save_patients([Patient.create("P1", "Original")])

        def boom(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(csv_storage.os, "replace", boom)

        with pytest.raises(PersistenceError):
            storage.save_patients([Patient.create("P2", "Replacement")])

        monkeypatch.undo()
        assert sorted(os.listdir(data_dir)) == ["patients.csv"]
        assert storage.load_patients() == [Patient.create("P1", "Original")]

    def test_in_place_save(self, data_dir):
        storage = CsvStorage(data_dir, atomic_save=False)

        storage.save_patients([Patient.create("P1", "Luis; Pérez")])

        assert (data_dir / "patients.csv").read_text(encoding="utf-8") == (
            "P1;Luis\\; Pérez\n"
        )

    def test_leading_byte_order_mark_in_first_field_survives(self, storage):
        doctor = Doctor.create("\ufeffD1", "Ana", "Gen")

        storage.save_doctors([doctor])

        assert storage.load_doctors() == [doctor]

    def test_unwritable_location_raises_persistence_error(self, tmp_path):
        blocker = tmp_path / "db"
        blocker.write_text("not a directory", encoding="utf-8")
        storage = CsvStorage(blocker)

        with pytest.raises(PersistenceError) as exc_info:
            storage.save_doctors([])

        assert isinstance(exc_info.value.cause, OSError)
