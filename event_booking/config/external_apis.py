"""
External API configuration.
"""

from typing import Dict, Optional

from pydantic import BaseModel

from .settings import Settings


class ExternalAPIConfig(BaseModel):
    """Endpoints and credentials for the booking backend."""

    base_url: str = "http://localhost:3000/api"
    api_token: Optional[str] = None
    timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExternalAPIConfig":
        """Build the config from application settings."""
        return cls(
            base_url=settings.booking_api_base,
            api_token=settings.booking_api_token,
            timeout=settings.request_timeout,
        )

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def get_services_url(self) -> str:
        return self._url("/services")

    def get_service_options_url(self, service_id: str) -> str:
        return self._url(f"/services/{service_id}/options")

    def get_availability_url(self, service_id: Optional[str] = None) -> str:
        """Availability for one service, or the shared calendar when no service is chosen yet."""
        if service_id:
            return self._url(f"/availability/{service_id}")
        return self._url("/availability")

    def get_bookings_url(self) -> str:
        return self._url("/bookings")

    def auth_headers(self) -> Dict[str, str]:
        """Bearer header when a token is configured."""
        if self.api_token:
            return {"Authorization": f"Bearer {self.api_token}"}
        return {}
