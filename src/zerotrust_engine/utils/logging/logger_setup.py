"""Logger setup for zerotrust-engine.

All engine loggers live under the "zerotrust_engine" hierarchy. The engine
never installs handlers on import; a host application (or the CLI) calls
setup_logging() to route records somewhere.

Records whose message is a dict (decision events) are rendered as one JSON
object per line; plain messages become {"level", "logger", "message"}.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TextIO

__all__ = [
    "ISO8601Formatter",
    "ROOT_LOGGER_NAME",
    "setup_logging",
]

ROOT_LOGGER_NAME = "zerotrust_engine"


class ISO8601Formatter(logging.Formatter):
    """Format records as JSON lines with an ISO 8601 "time" field first."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds")

        if isinstance(record.msg, dict):
            payload = {"time": timestamp, **record.msg}
        else:
            payload = {
                "time": timestamp,
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info:
                payload["stacktrace"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_logging(level: str | int = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Route the zerotrust_engine logger hierarchy to a stream as JSON lines.

    Replaces handlers previously installed by this function, so calling it
    twice does not duplicate output.

    Args:
        level: Logging level name or number.
        stream: Output stream (default: stderr).

    Returns:
        The configured root engine logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_zerotrust_engine", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ISO8601Formatter())
    handler._zerotrust_engine = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.propagate = False

    return logger
