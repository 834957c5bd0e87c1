"""
Logging utility for the Kanban API.

Emits one JSON object per log line so request handlers and services can
attach structured fields (user id, task id, ...) to every message.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from app.config import LOG_LEVEL


class StructuredLogger:
    """Wraps a stdlib logger; keyword arguments become JSON fields."""

    def __init__(self, name: str, level: int | str = LOG_LEVEL):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        # Loggers are shared by name; attach the handler once
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter("%(message)s"))
            self.logger.addHandler(handler)
            self.logger.propagate = False

    def render(self, level: int, message: str, **fields) -> str:
        """JSON line for one record: timestamp, level, message, service, then fields."""
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": logging.getLevelName(level),
            "message": message,
            "service": self.logger.name,
        }
        record.update(fields)
        return json.dumps(record, default=str)

    def log(self, level: int, message: str, **fields):
        if self.logger.isEnabledFor(level):
            self.logger.log(level, self.render(level, message, **fields))

    def debug(self, message: str, **fields):
        self.log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields):
        self.log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields):
        self.log(logging.WARNING, message, **fields)

    def error(self, message: str, **fields):
        self.log(logging.ERROR, message, **fields)

    def exception(self, message: str, **fields):
        """Error record with the active traceback appended."""
        if self.logger.isEnabledFor(logging.ERROR):
            self.logger.exception(self.render(logging.ERROR, message, exception=True, **fields))


def get_logger(name: str) -> StructuredLogger:
    return StructuredLogger(name)
