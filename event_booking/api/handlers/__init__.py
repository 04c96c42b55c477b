"""
API handlers.
"""

from .booking import BookingHandler
from .health import HealthHandler

__all__ = [
    "BookingHandler",
    "HealthHandler",
]
