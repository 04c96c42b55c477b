"""
External API service for handling all booking backend calls.
"""

from typing import Any, Dict, List, Optional

import httpx

from ...config import ExternalAPIConfig, get_settings
from ...core.exceptions import AvailabilityFetchError, CatalogFetchError, ExternalAPIError
from ...utils.logging import get_logger
from .base import BookingAPI

logger = get_logger("booking.external")


def _unwrap(body: Any) -> Any:
    """Backends wrap payloads as ``{"data": ...}`` inconsistently; peel one level."""
    if isinstance(body, dict) and "data" in body and body["data"] is not None:
        return body["data"]
    return body


def _as_list(body: Any, *keys: str) -> List[Dict[str, Any]]:
    """Extract a list from a bare array or from the first matching key."""
    body = _unwrap(body)
    if isinstance(body, list):
        return [item for item in body if isinstance(item, dict)]
    if isinstance(body, dict):
        for key in keys:
            value = body.get(key)
            if isinstance(value, list):
                return [item for item in value if isinstance(item, dict)]
    return []


class ExternalAPIService(BookingAPI):
    """Service for handling external API calls."""

    def __init__(
        self,
        config: Optional[ExternalAPIConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or ExternalAPIConfig.from_settings(get_settings())
        self.timeout = self.config.timeout
        self._transport = transport

    async def _make_request(
        self,
        method: str,
        url: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make HTTP request with error handling."""
        request_headers = {"Content-Type": "application/json", **self.config.auth_headers()}
        request_headers.update(headers or {})
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json,
                    params=params,
                    headers=request_headers,
                )
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException:
            raise ExternalAPIError("Request timed out")
        except httpx.HTTPStatusError as e:
            raise ExternalAPIError(
                self._error_message(e.response), status_code=e.response.status_code
            )
        except (httpx.HTTPError, ValueError) as e:
            raise ExternalAPIError(f"Request failed: {str(e)}")

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Prefer the server's own message over the bare status code."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if body.get("message"):
                return str(body["message"])
        return f"HTTP error {response.status_code}"

    async def get_services(self) -> List[Dict[str, Any]]:
        """Get all bookable services."""
        try:
            body = await self._make_request("GET", self.config.get_services_url())
        except ExternalAPIError as e:
            raise CatalogFetchError(str(e), status_code=e.status_code) from e
        return _as_list(body, "services", "items")

    async def get_service_add_ons(self, service_id: str) -> List[Dict[str, Any]]:
        """Get the add-on options for one service."""
        try:
            body = await self._make_request("GET", self.config.get_service_options_url(service_id))
        except ExternalAPIError as e:
            raise CatalogFetchError(str(e), status_code=e.status_code) from e
        return _as_list(body, "options", "addOns")

    async def get_availability(
        self, service_id: Optional[str], year: int, month: int
    ) -> List[Dict[str, Any]]:
        """Get availability records for one month."""
        params = {"year": year, "month": month}
        try:
            body = await self._make_request(
                "GET", self.config.get_availability_url(service_id), params=params
            )
        except ExternalAPIError as e:
            raise AvailabilityFetchError(str(e), status_code=e.status_code) from e
        return _as_list(body, "availableDates", "dates")

    async def create_booking(
        self, payload: Dict[str, Any], idempotency_key: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create booking via the backend."""
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else None
        body = await self._make_request(
            "POST", self.config.get_bookings_url(), json=payload, headers=headers
        )
        body = _unwrap(body)
        if not isinstance(body, dict):
            raise ExternalAPIError("Malformed booking response")
        logger.info("booking created upstream", extra={"booking_id": body.get("id")})
        return body
