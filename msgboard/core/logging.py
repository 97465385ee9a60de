"""
Logging setup for the message board.

Both formatters understand structured fields passed as
``extra={"extra_data": {...}}``: the JSON formatter merges them into the
record, the text formatter appends them as ``key=value`` pairs so the
statistics report stays readable on a console.
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict

from msgboard.core.config import get_settings

ROOT_LOGGER_NAME = "msgboard"

# Fields a caller may not overwrite through extra_data
RESERVED_FIELDS = ("timestamp", "level", "logger", "message")


def structured_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Extra fields attached to a record, minus any that clash with reserved keys."""
    extra = getattr(record, "extra_data", None) or {}
    return {key: value for key, value in extra.items() if key not in RESERVED_FIELDS}


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(structured_fields(record))
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = structured_fields(record)
        if fields:
            line += " | " + " ".join(f"{key}={value}" for key, value in fields.items())
        return line


def setup_logging() -> logging.Logger:
    """Attach a stdout handler to the application logger, replacing any previous one."""
    settings = get_settings()
    level = getattr(logging, settings.log_level.upper())

    handler = logging.StreamHandler(sys.stdout)
    if settings.log_format.lower() == "json":
        handler.setFormatter(JSONFormatter(settings.app_name))
    else:
        handler.setFormatter(TextFormatter())

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
