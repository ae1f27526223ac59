"""Console commands for the clinic records manager."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import click
from dotenv import load_dotenv

from clinic_records.core.config import Settings, load_settings, log_settings
from clinic_records.core.exceptions import ClinicRecordsError, PersistenceError
from clinic_records.core.logging_config import setup_logging
from clinic_records.domain.entities import Doctor, Patient, Session
from clinic_records.repositories.csv_storage import CsvStorage
from clinic_records.services.auth_service import AuthService
from clinic_records.services.clinic_service import ClinicService
from clinic_records.services.records_service import RecordsService

logger = logging.getLogger(__name__)

MENU = """
=== Clinic Appointments ===
1) Register doctor
2) Register patient
3) Create appointment
4) Save
5) Exit"""


@dataclass
class ClinicApp:
    """Wired-up services shared by every command."""

    settings: Settings
    store: ClinicService
    storage: CsvStorage
    records: RecordsService
    auth: AuthService


def build_app(settings: Settings) -> ClinicApp:
    store = ClinicService()
    storage = CsvStorage(settings.data_dir, atomic_save=settings.atomic_save)
    return ClinicApp(
        settings=settings,
        store=store,
        storage=storage,
        records=RecordsService(store, storage),
        auth=AuthService(store),
    )


def _ask(label: str) -> str:
    return click.prompt(label, default="", show_default=False).strip()


def _load_records(app: ClinicApp) -> None:
    try:
        app.records.load_all()
    except PersistenceError as e:
        raise click.ClickException(str(e)) from e


def _save_records(app: ClinicApp) -> None:
    try:
        app.records.save_all()
    except PersistenceError as e:
        raise click.ClickException(str(e)) from e


def _ensure_default_admin(
    app: ClinicApp,
    account_id: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> bool:
    settings = app.settings
    created = app.auth.ensure_default_admin(
        account_id or settings.default_admin_id,
        username or settings.default_admin_username,
        password or settings.default_admin_password,
    )
    if created is None:
        return False
    _save_records(app)
    click.echo(f"Default admin created: username={created.username}")
    return True


@click.group(invoke_without_command=True)
@click.option(
    "--data-dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Directory holding the record files. Overrides CLINIC_DATA_DIR.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Optional[str]) -> None:
    """Clinic records manager. Without a command, starts the interactive menu."""
    load_dotenv()
    settings = load_settings(data_dir)
    setup_logging(
        log_level=settings.log_level,
        log_to_file=settings.log_to_file,
        use_json_format=settings.log_json,
        log_dir=settings.log_dir,
    )
    log_settings(settings)
    ctx.obj = build_app(settings)

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command("run")
@click.pass_obj
def run(app: ClinicApp) -> None:
    """Log in and operate the interactive menu."""
    _load_records(app)
    _ensure_default_admin(app)

    click.echo("=== Login ===")
    username = _ask("Username")
    password = click.prompt(
        "Password", default="", show_default=False, hide_input=True
    ).strip()

    session = app.auth.login(username, password)
    if session is None:
        click.echo("Access denied")
        raise click.exceptions.Exit(1)

    if not session.is_admin:
        click.echo("Administrator permissions required")
        raise click.exceptions.Exit(1)

    menu_loop(app, session)


def menu_loop(app: ClinicApp, session: Session) -> None:
    """Run menu actions until the operator exits. Exiting saves all records."""
    while True:
        click.echo(MENU)
        option = click.prompt("Option", type=int)

        try:
            if option == 1:
                doctor = Doctor.create(
                    _ask("Doctor ID"), _ask("Full name"), _ask("Specialty")
                )
                app.store.register_doctor(session, doctor)
                click.echo("Doctor registered")
            elif option == 2:
                patient = Patient.create(_ask("Patient ID"), _ask("Full name"))
                app.store.register_patient(session, patient)
                click.echo("Patient registered")
            elif option == 3:
                appointment = app.store.create_appointment(
                    session,
                    _ask("Appointment ID"),
                    _ask("Date/time (ISO-8601 recommended)"),
                    _ask("Reason"),
                    _ask("Doctor ID"),
                    _ask("Patient ID"),
                )
                click.echo(f"Appointment created: {appointment.id}")
            elif option == 4:
                app.records.save_all()
                click.echo("Data saved")
            elif option == 5:
                app.records.save_all()
                click.echo("Exiting...")
                return
            else:
                click.echo("Invalid option")
        except ClinicRecordsError as e:
            click.echo(f"ERROR: {e}")


@cli.command("ensure-admin")
@click.option("--id", "account_id", default=None, help="Account id for the admin.")
@click.option("--username", default=None, help="Admin username.")
@click.option("--password", default=None, help="Admin password.")
@click.pass_obj
def ensure_admin(
    app: ClinicApp,
    account_id: Optional[str],
    username: Optional[str],
    password: Optional[str],
) -> None:
    """Ensure at least one admin account exists."""
    _load_records(app)
    if not _ensure_default_admin(app, account_id, username, password):
        logger.info("Accounts already present; no changes made.")
        click.echo("Accounts already present; no changes made.")


if __name__ == "__main__":
    cli()
