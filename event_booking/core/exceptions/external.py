"""
External API-related exceptions.
"""

from typing import Optional


class ExternalAPIError(Exception):
    """Base exception for external API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class AvailabilityFetchError(ExternalAPIError):
    """Exception raised when the availability calendar cannot be fetched."""
    pass


class CatalogFetchError(ExternalAPIError):
    """Exception raised when the service catalog cannot be fetched."""
    pass
