"""
Custom exceptions for the event booking wizard.
"""

from .booking import (
    BookingFlowError,
    BookingValidationError,
    StepOrderError,
    SessionCompletedError,
    SubmissionInProgressError,
    UnknownServiceError,
    UnknownAddOnError,
    SubmissionError,
)
from .external import ExternalAPIError, AvailabilityFetchError, CatalogFetchError

__all__ = [
    "BookingFlowError",
    "BookingValidationError",
    "StepOrderError",
    "SessionCompletedError",
    "SubmissionInProgressError",
    "UnknownServiceError",
    "UnknownAddOnError",
    "SubmissionError",
    "ExternalAPIError",
    "AvailabilityFetchError",
    "CatalogFetchError",
]
