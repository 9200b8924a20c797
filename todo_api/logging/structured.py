"""Structured JSON logging for the todo service.

One JSON object per line on stdout, which CloudWatch Logs indexes
field by field. Handlers attach per-event fields with
``extra={"log_data": {...}}``; exceptions logged with ``exc_info``
gain ``error`` and ``stack`` keys.
"""

import json
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

from todo_api.config.settings import Settings, get_settings

LOGGER_NAME = "todo_api"

# Set by the web layer at the start of each request
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class JSONFormatter(logging.Formatter):
    """Renders a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": request_id_var.get(""),
        }
        entry.update(getattr(record, "log_data", {}))
        if record.exc_info:
            entry["error"] = str(record.exc_info[1])
            entry["stack"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _build_handlers(settings: Settings) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))
    return handlers


def setup_logging() -> None:
    """(Re)configure the service logger from settings. Safe to call repeatedly."""
    settings = get_settings()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    logger.handlers.clear()

    formatter = JSONFormatter()
    for handler in _build_handlers(settings):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # The Lambda runtime's root handler would print every line twice
    logger.propagate = False


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def generate_request_id() -> str:
    """Short correlation id for one request's log lines."""
    return uuid.uuid4().hex[:12]


class RequestTimer:
    """Wall-clock duration of a ``with`` block, in milliseconds."""

    def __init__(self):
        self.start_time: float = 0
        self.elapsed_ms: float = 0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed_ms = round((time.perf_counter() - self.start_time) * 1000, 2)
