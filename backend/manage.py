"""Management commands for the clinic records manager."""

from clinic_records.cli import cli

if __name__ == "__main__":
    cli()
