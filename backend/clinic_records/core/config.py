"""
Centralized configuration module for application-wide settings.

All settings come from environment variables. The CLI loads an optional
``.env`` file with python-dotenv before reading them.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

TRUTHY_VALUES = ("true", "1", "yes")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_flag(name: str, default: str) -> bool:
    """Read a boolean flag. Truthy values: "true", "1", "yes" (case-insensitive)."""
    return os.getenv(name, default).strip().lower() in TRUTHY_VALUES


# ===========================
# Storage Configuration
# ===========================


def get_data_dir() -> Path:
    """
    Get the directory holding the record resources.

    Environment Variables:
        CLINIC_DATA_DIR: Directory path (default: 'db')
    """
    return Path(os.getenv("CLINIC_DATA_DIR", "db"))


def get_atomic_save() -> bool:
    """
    Get whether saves go through a temporary file and an atomic rename.

    Environment Variables:
        CLINIC_ATOMIC_SAVE: 'true' (default) or 'false'
    """
    return _env_flag("CLINIC_ATOMIC_SAVE", "true")


# ===========================
# Default Admin Configuration
# ===========================


def get_default_admin() -> tuple:
    """
    Get the (id, username, password) used to bootstrap the first admin.

    Environment Variables:
        CLINIC_DEFAULT_ADMIN_ID: default 'A1'
        CLINIC_DEFAULT_ADMIN_USERNAME: default 'admin'
        CLINIC_DEFAULT_ADMIN_PASSWORD: default 'admin123'
    """
    return (
        os.getenv("CLINIC_DEFAULT_ADMIN_ID", "A1"),
        os.getenv("CLINIC_DEFAULT_ADMIN_USERNAME", "admin"),
        os.getenv("CLINIC_DEFAULT_ADMIN_PASSWORD", "admin123"),
    )


# ===========================
# Logging Configuration
# ===========================


def get_log_level() -> str:
    """
    Get the root log level name.

    Environment Variables:
        LOG_LEVEL: one of DEBUG, INFO, WARNING, ERROR, CRITICAL (default: WARNING)
    """
    level = os.getenv("LOG_LEVEL", "WARNING").strip().upper()
    if level not in VALID_LOG_LEVELS:
        logger.warning(
            f"Invalid log level '{level}' specified in LOG_LEVEL. "
            "Falling back to WARNING."
        )
        return "WARNING"
    return level


@dataclass(frozen=True)
class Settings:
    """Snapshot of every setting the application reads."""

    data_dir: Path
    atomic_save: bool
    default_admin_id: str
    default_admin_username: str
    default_admin_password: str
    log_level: str
    log_to_file: bool
    log_dir: Path
    log_json: bool


def load_settings(data_dir: Optional[str] = None) -> Settings:
    """Build a Settings snapshot from the environment.

    Args:
        data_dir: Optional override for CLINIC_DATA_DIR
    """
    admin_id, admin_username, admin_password = get_default_admin()
    return Settings(
        data_dir=Path(data_dir) if data_dir else get_data_dir(),
        atomic_save=get_atomic_save(),
        default_admin_id=admin_id,
        default_admin_username=admin_username,
        default_admin_password=admin_password,
        log_level=get_log_level(),
        log_to_file=_env_flag("LOG_TO_FILE", "false"),
        log_dir=Path(os.getenv("LOG_DIR", "logs")),
        log_json=_env_flag("LOG_JSON", "false"),
    )


def log_settings(settings: Settings) -> None:
    """
    Log the active configuration.

    Should be called during startup to provide visibility into where data
    is read from and written to.
    """
    logger.info(
        "Configuration initialized",
        extra={
            "context": {
                "data_dir": str(settings.data_dir),
                "atomic_save": settings.atomic_save,
                "log_level": settings.log_level,
                "log_to_file": settings.log_to_file,
            }
        },
    )
