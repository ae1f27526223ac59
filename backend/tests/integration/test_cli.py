"""
Integration tests for the console commands.

The interactive menu is driven through click's CliRunner with scripted
input against a temporary data directory.
"""

import pytest
from click.testing import CliRunner

from clinic_records.cli import cli
from clinic_records.core.security import hash_password
from clinic_records.repositories.csv_storage import CsvStorage

pytestmark = pytest.mark.cli


def _script(*lines):
    return "\n".join(lines) + "\n"


@pytest.fixture
def runner(monkeypatch, clean_logging):
    monkeypatch.setenv("LOG_LEVEL", "CRITICAL")
    return CliRunner()


def _invoke(runner, data_dir, input_text, *args):
    return runner.invoke(cli, ["--data-dir", str(data_dir), *args], input=input_text)


class TestMenu:
    def test_full_session_persists_records(self, runner, data_dir):
        result = _invoke(
            runner,
            data_dir,
            _script(
                "admin", "admin123",
                "1", "D1", "Ana Ruiz", "Cardiología",
                "2", "P1", "Luis; Pérez",
                "3", "C1", "2026-02-08T10:30", "Checkup", "D1", "P1",
                "5",
            ),
        )

        assert result.exit_code == 0, result.output
        assert "Default admin created: username=admin" in result.output
        assert "Doctor registered" in result.output
        assert "Patient registered" in result.output
        assert "Appointment created: C1" in result.output
        assert "Exiting..." in result.output

        storage = CsvStorage(data_dir)
        assert [d.id for d in storage.load_doctors()] == ["D1"]
        assert storage.load_patients()[0].full_name == "Luis; Pérez"
        assert storage.load_appointments()[0].doctor_id == "D1"
        assert storage.load_accounts()[0].username == "admin"

    def test_domain_errors_are_reported_and_loop_continues(self, runner, data_dir):
        result = _invoke(
            runner,
            data_dir,
            _script(
                "admin", "admin123",
                "2", "P1", "Luis",
                "3", "C2", "2026-02-08T10:30", "Checkup", "D9", "P1",
                "2", "P1", "Duplicate",
                "5",
            ),
        )

        assert result.exit_code == 0, result.output
        assert "ERROR: Doctor 'D9' does not exist" in result.output
        assert "ERROR: Patient with id 'P1' already exists" in result.output
        assert CsvStorage(data_dir).load_appointments() == []

    def test_invalid_options(self, runner, data_dir):
        result = _invoke(
            runner, data_dir, _script("admin", "admin123", "abc", "9", "5")
        )

        assert result.exit_code == 0, result.output
        assert "is not a valid integer" in result.output
        assert "Invalid option" in result.output

    def test_save_option_writes_files(self, runner, data_dir):
        result = _invoke(
            runner,
            data_dir,
            _script("admin", "admin123", "1", "D1", "Ana", "Gen", "4", "5"),
        )

        assert "Data saved" in result.output
        assert (data_dir / "doctors.csv").exists()

    def test_wrong_password_denies_access(self, runner, data_dir):
        result = _invoke(runner, data_dir, _script("admin", "wrong"))

        assert result.exit_code == 1
        assert "Access denied" in result.output
        assert (data_dir / "accounts.csv").exists()

    def test_non_admin_account_is_refused(self, runner, data_dir):
        data_dir.mkdir()
        (data_dir / "accounts.csv").write_text(
            f"U1;clerk;{hash_password('pw')};CLERK\n", encoding="utf-8"
        )

        result = _invoke(runner, data_dir, _script("clerk", "pw"))

        assert result.exit_code == 1
        assert "Administrator permissions required" in result.output

    def test_existing_data_is_loaded(self, runner, data_dir):
        _invoke(
            runner,
            data_dir,
            _script("admin", "admin123", "1", "D1", "Ana", "Gen", "5"),
        )

        result = _invoke(
            runner,
            data_dir,
            _script("admin", "admin123", "1", "D1", "Again", "Gen", "5"),
        )

        assert "Default admin created" not in result.output
        assert "ERROR: Doctor with id 'D1' already exists" in result.output

    def test_unreadable_data_aborts(self, runner, data_dir):
        (data_dir / "doctors.csv").mkdir(parents=True)

        result = _invoke(runner, data_dir, "")

        assert result.exit_code == 1
        assert "Error reading" in result.output


class TestEnsureAdmin:
    def test_creates_admin_once(self, runner, data_dir):
        first = _invoke(
            runner, data_dir, None,
            "ensure-admin", "--username", "boss", "--password", "pw",
        )
        second = _invoke(runner, data_dir, None, "ensure-admin")

        assert first.exit_code == 0, first.output
        assert "Default admin created: username=boss" in first.output
        assert "no changes made" in second.output
        accounts = CsvStorage(data_dir).load_accounts()
        assert [a.username for a in accounts] == ["boss"]
        assert accounts[0].id == "A1"

    def test_default_credentials_from_environment(self, runner, data_dir, monkeypatch):
        monkeypatch.setenv("CLINIC_DEFAULT_ADMIN_USERNAME", "owner")

        _invoke(runner, data_dir, None, "ensure-admin")

        assert CsvStorage(data_dir).load_accounts()[0].username == "owner"
