"""
Logging setup for applications using pytrendline.

The library itself only creates module loggers; nothing is printed until
an application calls configure_logging() or installs its own handlers.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

PACKAGE_LOGGER = "pytrendline"

_HANDLER_MARK = "_pytrendline_handler"


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(
    level: str = "INFO",
    fmt: str = "plain",
    *,
    debug_engine: bool = False,
) -> logging.Handler:
    """
    Install a stream handler on the root logger.

    Calling this again replaces the handler it installed before and leaves
    every other handler alone.

    Args:
        level: Root level name ('DEBUG', 'INFO', ...); unknown names mean INFO
        fmt: 'plain' or 'json'
        debug_engine: Also show the engine's DEBUG records (fits, sampler
            gaps) regardless of `level`

    Returns:
        The installed handler
    """
    level_value = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level_value)

    for existing in list(root.handlers):
        if getattr(existing, _HANDLER_MARK, False):
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    if fmt.lower() == "json":
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(name)s] (%(threadName)s) %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        ))
    setattr(handler, _HANDLER_MARK, True)
    root.addHandler(handler)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG if debug_engine else logging.NOTSET)
    return handler
