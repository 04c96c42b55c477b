"""
Booking wizard handler.
"""

import asyncio
from datetime import date
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import APIRouter, Body, HTTPException, Query, Response, status

from ...config import get_settings
from ...core.exceptions import (
    BookingFlowError,
    BookingValidationError,
    CatalogFetchError,
    SubmissionError,
    UnknownAddOnError,
    UnknownServiceError,
)
from ...services.booking import (
    AvailabilityResolver,
    BookingService,
    PricingEngine,
    ServiceCatalog,
    SessionRegistry,
    StepController,
)
from ...services.external import BookingAPI, ExternalAPIService
from ...utils.logging import get_logger
from ..schemas import (
    AdditionalHoursRequest,
    GuestCountRequest,
    SelectDateRequest,
    SelectServiceRequest,
)

logger = get_logger("booking.api")


def _http_error(e: BookingFlowError) -> HTTPException:
    """Map a wizard error onto an HTTP status."""
    if isinstance(e, BookingValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(e), "errors": e.errors},
        )
    if isinstance(e, (UnknownServiceError, UnknownAddOnError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, SubmissionError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


class BookingHandler:
    """Handler for the wizard session routes.

    Sessions live in memory only. The catalog is fetched on first use and
    shared by every session.
    """

    def __init__(
        self,
        api: Optional[BookingAPI] = None,
        catalog: Optional[ServiceCatalog] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.settings = get_settings()
        self.router = APIRouter()

        self.api = api or ExternalAPIService()
        self.booking_service = BookingService(self.api)
        self.pricing = PricingEngine()
        self.registry = SessionRegistry(max_sessions=self.settings.max_sessions)
        self.today = today

        self.catalog = catalog
        self._catalog_lock = asyncio.Lock()

        self._setup_routes()

    async def _get_catalog(self) -> ServiceCatalog:
        if self.catalog is None:
            async with self._catalog_lock:
                if self.catalog is None:
                    try:
                        self.catalog = await ServiceCatalog.fetch(self.api)
                    except CatalogFetchError as e:
                        logger.error("catalog unavailable", extra={"error": str(e)})
                        raise HTTPException(
                            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                            detail="Service catalog is unavailable",
                        )
        return self.catalog

    def _new_controller(self, catalog: ServiceCatalog) -> StepController:
        availability = AvailabilityResolver(self.api, today=self.today)
        return StepController(
            catalog, availability, self.booking_service, pricing=self.pricing
        )

    def _controller(self, session_id: str) -> StepController:
        try:
            return self.registry.get(session_id)
        except KeyError:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Session '{session_id}' not found",
            )

    @staticmethod
    def _state(controller: StepController, **extra: Any) -> Dict[str, Any]:
        data = controller.session.to_dict()
        data["step_position"] = controller.current_step.position
        data.update(extra)
        return data

    def _apply(self, session_id: str, operation: Callable[[StepController], Any]) -> Dict[str, Any]:
        """Run one synchronous controller operation and return the new state."""
        controller = self._controller(session_id)
        try:
            result = operation(controller)
        except BookingFlowError as e:
            raise _http_error(e)
        return self._state(controller, result=result)

    async def _apply_async(
        self, session_id: str, operation: Callable[[StepController], Awaitable[Any]]
    ) -> Dict[str, Any]:
        """Await one controller operation that may fetch availability."""
        controller = self._controller(session_id)
        try:
            result = await operation(controller)
        except BookingFlowError as e:
            raise _http_error(e)
        return self._state(controller, result=result)

    def status(self) -> Dict[str, Any]:
        return {
            "catalog_loaded": self.catalog is not None,
            "active_sessions": len(self.registry),
        }

    def _setup_routes(self):
        """Setup wizard routes."""

        @self.router.get("/services")
        async def list_services():
            """List bookable services with their add-ons."""
            catalog = await self._get_catalog()
            return {"services": [s.model_dump(mode="json") for s in catalog.list_services()]}

        @self.router.post("/sessions", status_code=status.HTTP_201_CREATED)
        async def create_session():
            """Start a new wizard session."""
            catalog = await self._get_catalog()
            controller = self.registry.create(lambda: self._new_controller(catalog))
            return self._state(controller)

        @self.router.get("/sessions/{session_id}")
        async def get_session(session_id: str):
            return self._state(self._controller(session_id))

        @self.router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
        async def delete_session(session_id: str):
            if not self.registry.discard(session_id):
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        @self.router.get("/sessions/{session_id}/calendar")
        async def calendar(
            session_id: str,
            year: Optional[int] = Query(default=None, ge=1),
            month: Optional[int] = Query(default=None, ge=1, le=12),
        ):
            """Month view for the date step; fetches the month if needed."""
            controller = self._controller(session_id)
            availability = controller.availability
            if year is None or month is None:
                year, month = availability.focused_month
            await availability.show_month(year, month)
            days = availability.month_view(year, month, selected=controller.session.selected_date)
            return {
                "year": year,
                "month": month,
                "service_id": availability.service_id,
                "booked_count": availability.booked_in_month(year, month),
                "loading": availability.loading,
                "error": availability.last_error,
                "days": [day.to_dict() for day in days],
            }

        @self.router.post("/sessions/{session_id}/date")
        async def select_date(session_id: str, body: SelectDateRequest):
            return await self._apply_async(
                session_id, lambda c: c.load_and_select_date(body.selected_date)
            )

        @self.router.post("/sessions/{session_id}/service")
        async def select_service(session_id: str, body: SelectServiceRequest):
            return self._apply(session_id, lambda c: c.select_service(body.service_id).id)

        @self.router.put("/sessions/{session_id}/guests")
        async def set_guests(session_id: str, body: GuestCountRequest):
            return self._apply(session_id, lambda c: c.set_guest_count(body.guest_count))

        @self.router.post("/sessions/{session_id}/guests/increment")
        async def increment_guests(session_id: str):
            return self._apply(session_id, lambda c: c.increment_guests())

        @self.router.post("/sessions/{session_id}/guests/decrement")
        async def decrement_guests(session_id: str):
            return self._apply(session_id, lambda c: c.decrement_guests())

        @self.router.put("/sessions/{session_id}/hours")
        async def set_hours(session_id: str, body: AdditionalHoursRequest):
            return self._apply(session_id, lambda c: c.set_additional_hours(body.additional_hours))

        @self.router.post("/sessions/{session_id}/hours/increment")
        async def increment_hours(session_id: str):
            return self._apply(session_id, lambda c: c.increment_hours())

        @self.router.post("/sessions/{session_id}/hours/decrement")
        async def decrement_hours(session_id: str):
            return self._apply(session_id, lambda c: c.decrement_hours())

        @self.router.post("/sessions/{session_id}/add-ons/{add_on_id}/toggle")
        async def toggle_add_on(session_id: str, add_on_id: str):
            return self._apply(session_id, lambda c: c.toggle_add_on(add_on_id))

        @self.router.patch("/sessions/{session_id}/customer")
        async def update_customer(session_id: str, fields: Dict[str, Optional[str]] = Body(...)):
            return self._apply(
                session_id, lambda c: c.update_customer_info(**fields).model_dump()
            )

        @self.router.post("/sessions/{session_id}/next")
        async def advance(session_id: str):
            return await self._apply_async(session_id, lambda c: c.advance_verified())

        @self.router.post("/sessions/{session_id}/back")
        async def go_back(session_id: str):
            return self._apply(session_id, lambda c: c.go_back())

        @self.router.post("/sessions/{session_id}/reset")
        async def reset(session_id: str):
            return self._apply(session_id, lambda c: c.reset().session_id)

        @self.router.post("/sessions/{session_id}/submit")
        async def submit(session_id: str):
            """Submit the booking and return the confirmation snapshot."""
            controller = self._controller(session_id)
            try:
                snapshot = await controller.submit()
            except BookingFlowError as e:
                raise _http_error(e)
            return {
                "booking": snapshot.to_dict(),
                "summary": self.booking_service.format_booking_summary(
                    snapshot, self.settings.currency
                ),
                "session": self._state(controller),
            }
