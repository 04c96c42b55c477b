"""
Service layer for the event booking wizard.
"""

from .booking import (
    AvailabilityResolver,
    BookingService,
    PricingEngine,
    ServiceCatalog,
    SessionRegistry,
    StepController,
    StepValidator,
)
from .external import BookingAPI, ExternalAPIService

__all__ = [
    "AvailabilityResolver",
    "BookingService",
    "PricingEngine",
    "ServiceCatalog",
    "SessionRegistry",
    "StepController",
    "StepValidator",
    "BookingAPI",
    "ExternalAPIService",
]
