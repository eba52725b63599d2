"""JSON log lines for the metric suite.

Records are emitted one JSON object per line, tagged with the ``MM_ENV`` the
process runs under. Fields passed through ``extra=`` (morph lengths, scaling
mode, ...) are carried into the payload next to the message.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional

from .config import get_settings

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON object."""

    def __init__(self, env: Optional[str] = None):
        super().__init__()
        self.env = env

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.env:
            payload["env"] = self.env
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and key not in payload:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=repr)


def setup_logging(level: Optional[str] = None) -> None:
    """Route the root logger to stdout as JSON.

    ``level`` overrides ``MM_LOG_LEVEL``; the environment tag comes from ``MM_ENV``.
    """
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(env=settings.MM_ENV))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel((level or settings.MM_LOG_LEVEL).upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["setup_logging", "get_logger", "JsonFormatter"]
