"""
Core data models for the event booking wizard.
"""

from .catalog import AddOn, Service
from .availability import AvailabilityRecord, CalendarDay
from .booking import (
    BookingPayload,
    BookingSession,
    BookingSnapshot,
    CustomerInfo,
    PriceBreakdown,
    ValidationResult,
)

__all__ = [
    "AddOn",
    "Service",
    "AvailabilityRecord",
    "CalendarDay",
    "BookingPayload",
    "BookingSession",
    "BookingSnapshot",
    "CustomerInfo",
    "PriceBreakdown",
    "ValidationResult",
]
