"""
Centralized logging configuration for the clinic records manager.

This module provides structured logging with:
- JSON formatting for log files (and optionally the console)
- Console formatting for interactive use
- Log rotation
- Console-only fallback when the log directory is unusable

Console output goes to stderr so it never interleaves with the menu
printed on stdout.

Usage:
    from clinic_records.core.logging_config import setup_logging, get_logger

    # At CLI start
    setup_logging(log_level="INFO", log_to_file=True, log_dir=Path("logs"))

    # In any module
    logger = get_logger(__name__)
    logger.info("Doctor registered", extra={"context": {"doctor_id": "D1"}})
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.
    Outputs logs as JSON with timestamp, level, message, and extra context.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_data["context"] = getattr(record, "context", {})

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter with colors.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so file handlers sharing the record see the plain level
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname:8}{self.RESET}"
        return super().format(record)


def _fallback_warning(handler: logging.Handler, message: str) -> None:
    handler.handle(
        logging.LogRecord(
            name="clinic_records.logging",
            level=logging.WARNING,
            pathname=__file__,
            lineno=0,
            msg=message,
            args=(),
            exc_info=None,
        )
    )


def setup_logging(
    log_level: Union[int, str] = "WARNING",
    log_to_file: bool = False,
    use_json_format: bool = False,
    log_dir: Optional[Path] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (int like logging.INFO or string "INFO")
        log_to_file: Write logs to rotating files under ``log_dir``
        use_json_format: Use JSON format instead of console format
        log_dir: Directory for log files (default: ./logs)
    """
    if isinstance(log_level, int):
        level = log_level
    else:
        level = getattr(logging, str(log_level).upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Close and remove existing handlers properly
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    if use_json_format:
        console_formatter: logging.Formatter = JSONFormatter()
    else:
        console_formatter = ConsoleFormatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else Path("logs")
        file_formatter = JSONFormatter()  # Always JSON for files

        file_handler = None
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_dir / "clinic_records.log",
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            error_handler = logging.handlers.RotatingFileHandler(
                log_dir / "clinic_records_errors.log",
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
        except OSError as e:
            if file_handler is not None:
                file_handler.close()
            # Disk full, read-only directory, etc.: keep the console handler only
            _fallback_warning(
                console_handler,
                f"Failed to create file handlers in {log_dir}: {e}. "
                "Falling back to console-only logging.",
            )
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(file_formatter)
            root_logger.addHandler(file_handler)

            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(file_formatter)
            root_logger.addHandler(error_handler)

    app_logger = logging.getLogger("clinic_records")
    app_logger.setLevel(level)
    app_logger.info(
        f"Logging configured: level={level}, log_to_file={log_to_file}, "
        f"json_format={use_json_format}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Example:
        logger = get_logger(__name__)
        logger.info("Records saved", extra={"context": {"doctors": 3}})
    """
    return logging.getLogger(name)
