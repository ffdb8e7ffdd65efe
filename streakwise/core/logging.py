"""Logging setup: console output, optionally as one JSON object per line."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from streakwise.core.config import Settings

ROOT_LOGGER = "streakwise"


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    # Standard LogRecord attributes that should not be treated as extra fields
    _STANDARD_ATTRS = {
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
        "processName", "relativeCreated", "thread", "threadName", "exc_info",
        "exc_text", "stack_info", "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Fields passed via logger.info(..., extra={...})
        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self._STANDARD_ATTRS
        }
        if extra_fields:
            log_data["extra"] = extra_fields

        return json.dumps(log_data, default=str)


def setup_logging(config: "Settings") -> logging.Logger:
    """Attach a single console handler to the `streakwise` logger.

    Safe to call more than once: existing handlers are replaced.
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(config.LOG_LEVEL.upper())
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    if config.LOG_JSON:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
    root_logger.addHandler(handler)

    root_logger.debug(
        "Logging initialized",
        extra={"env": config.APP_ENV, "json": config.LOG_JSON},
    )
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return the `streakwise.<name>` child logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
