"""
Service catalog for bookable event services.
"""

import asyncio
from typing import Any, Dict, Iterable, Iterator, List, Optional

from pydantic import ValidationError

from ...core.exceptions import CatalogFetchError, ExternalAPIError
from ...core.models import AddOn, Service
from ...utils.logging import get_logger
from ..external import BookingAPI

logger = get_logger("booking.catalog")

_INLINE_ADD_ON_KEYS = ("addOns", "add_ons", "options")


class ServiceCatalog:
    """Read-only registry of services and their add-ons.

    Populated once, either from already-normalized ``Service`` objects or
    from raw backend payloads via :meth:`from_payload` / :meth:`fetch`.
    """

    def __init__(self, services: Iterable[Service] = ()):
        self._services: Dict[str, Service] = {}
        self._add_ons: Dict[str, AddOn] = {}
        for service in services:
            if service.id in self._services:
                logger.warning("duplicate service id ignored", extra={"service_id": service.id})
                continue
            self._services[service.id] = service
            for add_on in service.add_ons:
                self._add_ons.setdefault(add_on.id, add_on)

    @classmethod
    def from_payload(cls, items: Iterable[Dict[str, Any]]) -> "ServiceCatalog":
        """Build a catalog from raw entries, skipping malformed ones."""
        return cls(cls.normalize(items))

    @staticmethod
    def normalize(items: Iterable[Dict[str, Any]]) -> List[Service]:
        """Coerce raw service entries into strict ``Service`` models."""
        services: List[Service] = []
        for raw in items:
            try:
                services.append(Service.model_validate(raw))
            except ValidationError as e:
                service_id = raw.get("id") if isinstance(raw, dict) else None
                logger.warning(
                    "skipping malformed service entry",
                    extra={"service_id": service_id, "error": e.error_count()},
                )
        return services

    @classmethod
    async def fetch(cls, api: BookingAPI) -> "ServiceCatalog":
        """
        Load the catalog from the backend.

        Services whose payload carries no add-on list get theirs from the
        per-service options endpoint; a failed options call leaves that
        service without add-ons.

        Raises:
            CatalogFetchError: if the service list itself cannot be fetched
        """
        try:
            raw_services = await api.get_services()
        except CatalogFetchError:
            raise
        except ExternalAPIError as e:
            raise CatalogFetchError(f"Failed to fetch services: {e}", status_code=e.status_code) from e

        async def with_add_ons(raw: Dict[str, Any]) -> Dict[str, Any]:
            if any(key in raw for key in _INLINE_ADD_ON_KEYS) or raw.get("id") is None:
                return raw
            service_id = str(raw["id"])
            try:
                add_ons = await api.get_service_add_ons(service_id)
            except ExternalAPIError as e:
                logger.warning(
                    "add-on fetch failed; service listed without add-ons",
                    extra={"service_id": service_id, "error": str(e)},
                )
                add_ons = []
            return {**raw, "addOns": add_ons}

        enriched = await asyncio.gather(*(with_add_ons(raw) for raw in raw_services))
        catalog = cls.from_payload(enriched)
        logger.info(f"catalog loaded with {len(catalog)} services")
        return catalog

    def get_by_id(self, service_id: str) -> Optional[Service]:
        """Find a service by id."""
        return self._services.get(service_id)

    def add_ons_for(self, service_id: str) -> List[AddOn]:
        """Add-ons of one service in catalog order; empty for unknown ids."""
        service = self._services.get(service_id)
        return list(service.add_ons) if service else []

    def get_add_on(self, add_on_id: str) -> Optional[AddOn]:
        return self._add_ons.get(add_on_id)

    def list_services(self) -> List[Service]:
        """Return all services in load order."""
        return list(self._services.values())

    def __len__(self) -> int:
        return len(self._services)

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._services

    def __iter__(self) -> Iterator[Service]:
        return iter(self._services.values())
