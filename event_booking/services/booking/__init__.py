"""
Booking wizard services.
"""

from .availability import AvailabilityResolver
from .catalog import ServiceCatalog
from .pricing import PricingEngine
from .registry import SessionRegistry
from .service import BookingService
from .step_controller import StepController
from .validator import StepValidator

__all__ = [
    "AvailabilityResolver",
    "ServiceCatalog",
    "PricingEngine",
    "SessionRegistry",
    "BookingService",
    "StepController",
    "StepValidator",
]
