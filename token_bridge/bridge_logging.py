"""Logging setup for token-bridge.

Everything logs under the "token_bridge" logger. Components use a child
logger per category (token_bridge.extract, token_bridge.server, ...) so
one area can be turned up without the rest.

Console output goes to stderr only: stdout carries generated themes and
the JSON-RPC stream.
"""

import json
import logging
import logging.config
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "token_bridge"

TEXT_FORMAT = "%(levelname)s [%(name)s] %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s (%(module)s:%(lineno)d) %(message)s"


class LogCategory(Enum):
    """Component areas with their own child logger."""

    EXTRACT = "extract"
    VALIDATE = "validate"
    GENERATE = "generate"
    CONTRAST = "contrast"
    SERVER = "server"


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Context passed through ``extra=`` is copied into the object when it
    uses one of CONTEXT_FIELDS.
    """

    CONTEXT_FIELDS = ("operation", "source_format", "token_count", "request_id")

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        entry.update(
            {name: getattr(record, name) for name in self.CONTEXT_FIELDS if hasattr(record, name)}
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _console_level(level: str, quiet: bool, verbose: bool) -> str:
    if quiet:
        return "ERROR"
    if verbose:
        return "DEBUG"
    return level.upper()


def _formatter_name(log_format: str, fallback: str) -> str:
    return "json" if log_format == "json" else fallback


def setup_logging(
    level: str = "INFO",
    quiet: bool = False,
    verbose: bool = False,
    log_file: Path | None = None,
    log_format: str = "text",
    backup_count: int = 3,
    max_bytes: int = 5 * 1024 * 1024,
) -> logging.Logger:
    """Configure the package logger.

    quiet wins over verbose. The package logger itself always passes
    DEBUG; the console handler does the filtering so a log file still
    gets everything.

    Args:
        level: Console level when neither quiet nor verbose is set.
        quiet: Only errors on the console.
        verbose: Debug output on the console.
        log_file: Also write to this file, rotated by size.
        log_format: "text" or "json".
        backup_count: Rotated files to keep.
        max_bytes: Size at which the file rotates.

    Returns:
        The package logger.
    """
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "level": _console_level(level, quiet, verbose),
            "formatter": _formatter_name(log_format, "text"),
        }
    }
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(log_file),
            "maxBytes": max_bytes,
            "backupCount": backup_count,
            "encoding": "utf-8",
            "level": "DEBUG",
            "formatter": _formatter_name(log_format, "file"),
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {"format": TEXT_FORMAT},
                "file": {"format": FILE_FORMAT},
                "json": {"()": JSONFormatter},
            },
            "handlers": handlers,
            "loggers": {
                ROOT_LOGGER_NAME: {
                    "level": "DEBUG",
                    "handlers": list(handlers),
                    "propagate": False,
                }
            },
        }
    )
    return get_logger()


def get_logger() -> logging.Logger:
    """The package logger."""
    return logging.getLogger(ROOT_LOGGER_NAME)


def get_category_logger(category: LogCategory) -> logging.Logger:
    """Child logger for one component area.

    >>> get_category_logger(LogCategory.EXTRACT).name
    'token_bridge.extract'
    """
    return get_logger().getChild(category.value)
