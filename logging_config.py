"""Structured JSON logging for the sheet server."""

import json
import logging
import sys

from config import LOG_LEVEL


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
        }
        if hasattr(record, "actor_id"):
            payload["actor_id"] = record.actor_id
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger to write JSON lines to stdout."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.setLevel(level.upper())
    # Avoid duplicate lines when uvicorn reloads the app
    root.handlers.clear()
    root.addHandler(handler)
