"""
External API service module.
"""

from .base import BookingAPI
from .service import ExternalAPIService

__all__ = [
    "BookingAPI",
    "ExternalAPIService",
]
