"""
Centralized logging configuration for the 2e100 search service.

Records are written as one JSON object per line so they can be shipped to a
log aggregator as-is. Structured context is passed through
``extra={"extra_fields": {...}}`` and merged into the record.

Environment:
    LOG_LEVEL          root level (default INFO)
    LOG_DIR            directory for rotating files (default ./logs)
    LOG_TO_FILE        write app.log / error.log / debug.log (default true)
    LOG_TO_CONSOLE     also log human-readable lines to stderr (default false)
    LOG_CONSOLE_LEVEL  stderr level when enabled (default WARNING)
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5
CONSOLE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


class JsonFormatter(logging.Formatter):
    """Render a LogRecord as a single-line JSON document."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            log_data.update(extra_fields)

        return json.dumps(log_data, default=str)


class LoggerConfig:
    """
    One-time setup of the root logger.
    """

    _initialized = False

    @classmethod
    def _file_handler(cls, path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
        handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
        )
        handler.setLevel(level)
        handler.setFormatter(formatter)
        return handler

    @classmethod
    def setup_logging(cls) -> None:
        """
        Configure handlers on the root logger. Safe to call more than once.
        """
        if cls._initialized:
            return

        level_name = os.getenv("LOG_LEVEL", "INFO").upper()
        log_dir = Path(os.getenv("LOG_DIR", "logs"))
        to_file = _env_flag("LOG_TO_FILE", "true")
        to_console = _env_flag("LOG_TO_CONSOLE", "false")

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, level_name, logging.INFO))
        root_logger.handlers.clear()

        json_formatter = JsonFormatter()

        if to_file:
            log_dir.mkdir(parents=True, exist_ok=True)
            root_logger.addHandler(cls._file_handler(log_dir / "app.log", logging.INFO, json_formatter))
            root_logger.addHandler(cls._file_handler(log_dir / "error.log", logging.ERROR, json_formatter))
            if level_name == "DEBUG":
                root_logger.addHandler(cls._file_handler(log_dir / "debug.log", logging.DEBUG, json_formatter))

        if to_console:
            console_level = os.getenv("LOG_CONSOLE_LEVEL", "WARNING").upper()
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, console_level, logging.WARNING))
            console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
            root_logger.addHandler(console_handler)

        cls._initialized = True

        logging.getLogger(__name__).info(
            "Logging system initialized",
            extra={
                "extra_fields": {
                    "log_level": level_name,
                    "log_dir": str(log_dir) if to_file else None,
                    "console_logging": to_console,
                }
            },
        )


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Example:
        >>> from utils.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Search finished", extra={"extra_fields": {"link_count": 3}})
    """
    LoggerConfig.setup_logging()
    return logging.getLogger(name)
