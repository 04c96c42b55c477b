"""
API layer for the event booking wizard.
"""

from .app import create_app
from .middleware import SecurityHeaders, LoggingMiddleware

__all__ = [
    "create_app",
    "SecurityHeaders",
    "LoggingMiddleware",
]
