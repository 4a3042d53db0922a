"""Structured JSON logging for StyleSync.

Provides consistent logging across all modules with:
    - JSON format for file logs
    - Human-readable console output
    - Rotating file handler
    - Context fields (contact_id, caller, etc.)

Usage:
    from src.core.logging import get_logger, setup_logging

    setup_logging()  # Call once at startup
    logger = get_logger(__name__)

    logger.info("Analyzing contact", extra={"context": {"contact_id": "2"}})
"""

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

ROOT_LOGGER_NAME = "stylesync"


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for file output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON string with timestamp, level, module, message, and context
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "context"):
            log_data["context"] = record.context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable format for console output."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%H:%M:%S")
        level = record.levelname[:4]
        message = record.getMessage()

        if hasattr(record, "context") and record.context:
            ctx_parts = [f"{k}={v}" for k, v in record.context.items()]
            if ctx_parts:
                message += f" [{', '.join(ctx_parts)}]"

        return f"{timestamp} {level:4s} {record.name}: {message}"


_logging_initialized = False


def setup_logging(
    log_dir: Optional[Path] = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """Initialize logging system.

    Call once at application startup. Later calls are ignored.

    Args:
        log_dir: Directory for log files. Defaults to ~/.stylesync/logs
        console_level: Minimum level for console output (default: INFO)
        file_level: Minimum level for file output (default: DEBUG)
    """
    global _logging_initialized

    if _logging_initialized:
        return

    if log_dir is None:
        log_dir = Path.home() / ".stylesync" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ConsoleFormatter())
    root_logger.addHandler(console_handler)

    log_file = log_dir / "stylesync.log"
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)

    _logging_initialized = True
    root_logger.info("Logging initialized", extra={"context": {"log_dir": str(log_dir)}})


def get_logger(name: str) -> logging.Logger:
    """Get logger for module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance under the stylesync namespace
    """
    if name.startswith("src."):
        name = name[4:]
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
