"""
Logging setup shared by the services and the API layer.
"""

import logging
from typing import Optional

_CONTEXT_KEYS = ("session_id", "step", "service_id", "booking_id", "year", "month", "error")


class ContextFormatter(logging.Formatter):
    """Append known ``extra=`` fields to the rendered log line."""

    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in _CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


def get_logger(name: str) -> logging.Logger:
    """Return a logger in the ``booking`` namespace."""
    if not name.startswith("booking"):
        name = f"booking.{name}"
    return logging.getLogger(name)


def configure_logging(level: Optional[str] = None) -> None:
    """Install the context formatter on the ``booking`` logger tree."""
    from ..config import get_settings

    level_name = (level or get_settings().log_level).upper()

    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger("booking")
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
    root.propagate = False
