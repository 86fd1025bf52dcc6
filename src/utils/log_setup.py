"""
Logging setup: JSON formatter and root logger configuration.

Library modules only call logging.getLogger(__name__); entry points
(main.py, actions/) configure handlers once at startup via setup_logging.
"""

import json
import logging
from datetime import datetime, timezone

from src.config.settings import Settings

_HANDLER_NAME = "gcd-engine"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("method", "arity", "elapsed_ns", "cases"):
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "WARNING", fmt: str = "text") -> logging.Handler:
    """
    Configure the root logger.

    Calling this again replaces the handler installed by the previous call
    instead of stacking a second one.

    Args:
        level: Level name (case-insensitive); unknown names fall back to WARNING.
        fmt: "json" for JSONFormatter, anything else for plain text.

    Returns:
        The installed handler.
    """
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    return handler


def setup_logging_from_settings(settings: Settings) -> logging.Handler:
    """Configure logging from a loaded Settings object."""
    return setup_logging(level=settings.logging.level, fmt=settings.logging.fmt)
