"""
Enums for the event booking wizard.
"""

from .booking import BookingStep

__all__ = [
    "BookingStep",
]
