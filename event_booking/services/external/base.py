"""
Abstract boundary to the booking backend.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class BookingAPI(ABC):
    """Calls the wizard core makes to the outside world."""

    @abstractmethod
    async def get_services(self) -> List[Dict[str, Any]]:
        """Return raw service entries, add-ons inline when the backend has them."""
        raise NotImplementedError

    @abstractmethod
    async def get_service_add_ons(self, service_id: str) -> List[Dict[str, Any]]:
        """Return raw add-on entries for one service."""
        raise NotImplementedError

    @abstractmethod
    async def get_availability(
        self, service_id: Optional[str], year: int, month: int
    ) -> List[Dict[str, Any]]:
        """Return raw availability records for one month."""
        raise NotImplementedError

    @abstractmethod
    async def create_booking(
        self, payload: Dict[str, Any], idempotency_key: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create a booking. The response carries the new booking ``id``."""
        raise NotImplementedError
