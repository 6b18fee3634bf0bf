"""JSON-line logging shared by the responders service and the smoke runner.

Events are logged by name with structured fields, e.g.
`logger.info("request.end", extra={"status_code": 200})`, and come out as one
JSON object per line on stdout.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

LOG_LEVEL_ENV = "LOG_LEVEL"

# Every attribute a bare LogRecord carries; anything else arrived via `extra`.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}


class JsonFormatter(logging.Formatter):
    """Render a record as `{"ts", "level", "logger", "message", **extras}`.

    A dict passed as the message is merged in place of "message". Extras never
    overwrite the base fields.
    """

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
        }
        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()

        for key, value in _extras(record).items():
            payload.setdefault(key, value)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def resolve_level(level: str | int | None = None) -> int:
    """Map a level name or number to a logging level; LOG_LEVEL when None."""
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def setup_logging(level: str | int | None = None, *, stream: TextIO | None = None) -> None:
    """Install the JSON handler on the root logger once and route uvicorn through it.

    A root logger that already has handlers (reload, pytest) is left alone.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    resolved = resolve_level(level)
    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setLevel(resolved)
    handler.setFormatter(JsonFormatter())
    root.setLevel(resolved)
    root.addHandler(handler)

    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.setLevel(resolved)
        server_logger.propagate = True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a named logger, e.g. get_logger("api")."""
    return logging.getLogger(name if name else __name__)
