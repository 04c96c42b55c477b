"""
API middleware modules.
"""

from .security import SecurityHeaders
from .logging import LoggingMiddleware

__all__ = [
    "SecurityHeaders",
    "LoggingMiddleware",
]
