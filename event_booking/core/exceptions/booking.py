"""
Booking-related exceptions.
"""

from typing import Dict, Optional


class BookingFlowError(Exception):
    """Base exception for booking flow errors."""
    pass


class BookingValidationError(BookingFlowError):
    """Exception raised when booking validation fails.

    Carries the field -> message map so callers can render errors inline.
    """

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        self.errors = dict(errors)
        super().__init__(message or "Validation failed: " + ", ".join(sorted(self.errors)))


class StepOrderError(BookingFlowError):
    """Exception raised when an operation does not belong to the current step."""
    pass


class SessionCompletedError(BookingFlowError):
    """Exception raised when a completed session is mutated."""
    pass


class SubmissionInProgressError(BookingFlowError):
    """Exception raised while a booking submission is still in flight."""
    pass


class UnknownServiceError(BookingFlowError):
    """Exception raised when a service id is not in the catalog."""
    pass


class UnknownAddOnError(BookingFlowError):
    """Exception raised when an add-on does not belong to the selected service."""
    pass


class SubmissionError(BookingFlowError):
    """Exception raised when the backend refuses or fails to create a booking."""
    pass
