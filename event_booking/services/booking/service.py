"""
Booking service for turning a finished wizard session into a booking.
"""

import hashlib
import json
from typing import Optional

from ...config import get_settings
from ...core.exceptions import BookingValidationError, ExternalAPIError, SubmissionError
from ...core.models import BookingPayload, BookingSession, BookingSnapshot, PriceBreakdown
from ...utils.date import DateUtils
from ...utils.logging import get_logger
from ...utils.money import format_price
from ..external import BookingAPI

logger = get_logger("booking.service")

_BOOKING_ID_KEYS = ("id", "bookingId", "booking_id", "orderId")


class BookingService:
    """Service for submitting bookings to the backend."""

    def __init__(self, external_api: BookingAPI):
        self.external_api = external_api

    def build_payload(self, session: BookingSession) -> BookingPayload:
        """
        Build the backend request body from a session.

        Raises:
            BookingValidationError: if the date or service is missing
        """
        missing = {}
        if session.selected_date is None:
            missing["selected_date"] = "Please select a date"
        if session.selected_service is None:
            missing["selected_service"] = "Please select a service"
        if missing:
            raise BookingValidationError(missing)

        return BookingPayload(
            service_id=session.selected_service.id,
            booking_date=session.selected_date,
            guest_count=session.guest_count,
            additional_hours=session.additional_hours,
            selected_add_on_ids=[a.id for a in session.selected_add_ons()],
            customer_info=session.customer_info,
        )

    def build_idempotency_key(self, payload: BookingPayload) -> str:
        """Build idempotency key for booking to prevent duplicates."""
        raw = payload.to_wire()
        raw["selectedAddOnIds"] = sorted(raw.get("selectedAddOnIds", []))
        return hashlib.sha256(
            json.dumps(raw, ensure_ascii=False, sort_keys=True).encode("utf-8")
        ).hexdigest()

    async def create_booking(self, payload: BookingPayload) -> str:
        """
        Create the booking and return the backend's booking id.

        Raises:
            SubmissionError: on transport failure, backend refusal or a
                response without an id
        """
        idempotency_key = self.build_idempotency_key(payload)
        try:
            result = await self.external_api.create_booking(
                payload.to_wire(), idempotency_key=idempotency_key
            )
        except ExternalAPIError as e:
            logger.error(
                "booking submission failed",
                extra={"service_id": payload.service_id, "error": str(e)},
            )
            raise SubmissionError(str(e) or "Failed to create booking") from e

        booking_id = next((result[k] for k in _BOOKING_ID_KEYS if result.get(k)), None)
        if booking_id is None:
            raise SubmissionError("Booking response did not include a booking id")
        return str(booking_id)

    def format_booking_summary(self, snapshot: BookingSnapshot, currency: Optional[str] = None) -> str:
        """Format a human-readable confirmation summary."""
        currency = currency or get_settings().currency
        price: PriceBreakdown = snapshot.price

        lines = [
            f"Booking {snapshot.booking_id}",
            f"Name: {snapshot.customer_info.full_name}",
            f"Date: {DateUtils.format_for_display(snapshot.selected_date)}",
            f"Service: {snapshot.service.name}",
            f"Guests: {snapshot.guest_count}",
            f"Duration: {float(snapshot.total_hours):g} hours",
        ]
        if snapshot.add_ons:
            lines.append("Add-ons:")
            lines.extend(f"  • {a.name} ({format_price(a.price, currency)})" for a in snapshot.add_ons)
        if price.tax is not None:
            lines.append(f"Tax: {format_price(price.tax, currency)}")
        lines.append(f"Total: {format_price(snapshot.total_price, currency)}")
        return "\n".join(lines)
