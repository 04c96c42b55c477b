"""
Step controller for managing booking wizard state.
"""

from datetime import date
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from ...config import get_settings
from ...core.enums import BookingStep
from ...core.exceptions import (
    BookingValidationError,
    SessionCompletedError,
    StepOrderError,
    SubmissionError,
    SubmissionInProgressError,
    UnknownAddOnError,
    UnknownServiceError,
)
from ...core.models import BookingPayload, BookingSession, BookingSnapshot, CustomerInfo, Service
from ...utils.date import DateUtils
from ...utils.logging import get_logger
from ...utils.validation import ValidationUtils
from .availability import AvailabilityResolver
from .catalog import ServiceCatalog
from .pricing import PricingEngine
from .service import BookingService
from .validator import StepValidator

logger = get_logger("booking.step_controller")


def _customer_field_names() -> Dict[str, str]:
    """Map both snake_case names and camelCase aliases to field names."""
    names: Dict[str, str] = {}
    for name, info in CustomerInfo.model_fields.items():
        names[name] = name
        names[info.alias or to_camel(name)] = name
    names["additionalNotes"] = "notes"
    return names


_CUSTOMER_FIELDS = _customer_field_names()


class StepController:
    """Own a :class:`BookingSession` and every mutation applied to it.

    Each setter is synchronous and atomic: it checks the step, applies the
    change, recomputes the price, clears the touched field's error and bumps
    the session version before returning. Only :meth:`submit` awaits, and
    the session rejects mutations while it is in flight.
    """

    _SUBMIT_ERROR = "submit"

    def __init__(
        self,
        catalog: ServiceCatalog,
        availability: AvailabilityResolver,
        booking_service: BookingService,
        *,
        pricing: Optional[PricingEngine] = None,
        validator: Optional[StepValidator] = None,
        session: Optional[BookingSession] = None,
    ) -> None:
        self.catalog = catalog
        self.availability = availability
        self.booking_service = booking_service
        self.pricing = pricing or PricingEngine()
        self.validator = validator or StepValidator(
            is_booked=availability.is_booked, today=availability.today
        )
        self.session = session or self._new_session()
        self.snapshot: Optional[BookingSnapshot] = None
        self._recompute_price()

    @staticmethod
    def _new_session(session_id: Optional[str] = None) -> BookingSession:
        kwargs: Dict[str, Any] = {"guest_count": max(1, get_settings().default_guest_count)}
        if session_id:
            kwargs["session_id"] = session_id
        return BookingSession(**kwargs)

    # ------------------------------------------------------------------
    # Guards

    def _ensure_mutable(self) -> None:
        if self.session.is_completed:
            raise SessionCompletedError("Booking is already completed")
        if self.session.submitting:
            raise SubmissionInProgressError("Booking submission is in progress")

    def _require_step(self, operation: str, *steps: BookingStep) -> None:
        self._ensure_mutable()
        current = self.session.current_step
        if current not in steps:
            raise StepOrderError(
                f"Cannot {operation} during the '{current.label}' step"
            )

    def _require_service(self) -> Service:
        service = self.session.selected_service
        if service is None:
            raise StepOrderError("No service selected")
        return service

    def _recompute_price(self) -> None:
        s = self.session
        s.price = self.pricing.compute(
            s.selected_service, s.guest_count, s.additional_hours, s.selected_add_on_ids
        )

    def _commit(self, *touched: str) -> None:
        """Finish a mutation: price, touched errors, version."""
        self._recompute_price()
        for name in touched:
            self.session.errors.pop(name, None)
        self.session.errors.pop(self._SUBMIT_ERROR, None)
        self.session.version += 1

    def _log_step_transition(self, from_step: BookingStep, to_step: BookingStep) -> None:
        logger.info(
            f"step {from_step.value} -> {to_step.value}",
            extra={"session_id": self.session.session_id, "step": to_step.value},
        )

    # ------------------------------------------------------------------
    # Navigation

    @property
    def current_step(self) -> BookingStep:
        return self.session.current_step

    def advance(self) -> bool:
        """
        Move to the next step if the current one validates.

        On failure the step and data are unchanged and the validation errors
        are attached to the session.

        Returns:
            True if the step changed
        """
        self._ensure_mutable()
        s = self.session
        step = s.current_step
        if step is BookingStep.CONTACT_INFO:
            raise StepOrderError("Submit the booking to complete the final step")

        errors = dict(self.validator.validate(s, step).errors)
        if step is BookingStep.SERVICE_SELECTION:
            # the date must still be open for the chosen service
            errors.update(self.validator.validate(s, BookingStep.DATE_SELECTION).errors)
        if errors:
            s.errors = errors
            logger.info(
                "step validation failed",
                extra={"session_id": s.session_id, "step": step.value},
            )
            return False

        next_step = step.next()
        s.errors = {}
        s.current_step = next_step
        s.version += 1
        self._log_step_transition(step, next_step)
        return True

    async def advance_verified(self) -> bool:
        """
        Like :meth:`advance`, but leaving service selection first fetches the
        selected service's month so the date is checked against its bookings.
        """
        self._ensure_mutable()
        if self.session.current_step is BookingStep.SERVICE_SELECTION:
            await self._load_selected_month()
        return self.advance()

    async def _load_selected_month(self) -> None:
        day = self.session.selected_date
        if day is not None:
            await self.availability.load(day.year, day.month)

    def go_back(self) -> bool:
        """Return to the previous step; data entered so far is kept."""
        self._ensure_mutable()
        s = self.session
        step = s.current_step
        previous = step.previous()
        if previous is None:
            return False
        s.errors = {}
        s.current_step = previous
        s.version += 1
        self._log_step_transition(step, previous)
        return True

    def reset(self) -> BookingSession:
        """Start over with an empty session under the same id."""
        if self.session.submitting:
            raise SubmissionInProgressError("Booking submission is in progress")
        session_id = self.session.session_id
        version = self.session.version
        self.session = self._new_session(session_id)
        self.session.version = version + 1
        self.snapshot = None
        self.availability.set_service(None)
        self._recompute_price()
        logger.info("session reset", extra={"session_id": session_id})
        return self.session

    # ------------------------------------------------------------------
    # Step 1: date

    def select_date(self, value: Union[date, str]) -> bool:
        """
        Select the event date.

        Booked or past dates are ignored, matching a disabled calendar cell.

        Returns:
            True if the date was taken
        """
        self._require_step("select a date", BookingStep.DATE_SELECTION)
        day = self._parse_date(value)

        if not self.availability.is_selectable(day):
            logger.info(
                f"ignoring unavailable date {day.isoformat()}",
                extra={"session_id": self.session.session_id},
            )
            return False

        self.session.selected_date = day
        self._commit("selected_date")
        return True

    async def load_and_select_date(self, value: Union[date, str]) -> bool:
        """Fetch the month of ``value`` if it is not cached yet, then select it."""
        self._require_step("select a date", BookingStep.DATE_SELECTION)
        day = self._parse_date(value)
        await self.availability.load(day.year, day.month)
        return self.select_date(day)

    @staticmethod
    def _parse_date(value: Union[date, str]) -> date:
        try:
            return DateUtils.parse_iso_date(value)
        except (AttributeError, TypeError, ValueError):
            raise BookingValidationError({"selected_date": "Please enter a valid date (YYYY-MM-DD)"})

    # ------------------------------------------------------------------
    # Step 2: service

    def select_service(self, service_id: str) -> Service:
        """
        Select (or switch) the service.

        Switching to a different service from the customization step resets
        guests to the new minimum, extra hours to zero and add-ons to none.
        From the service step the existing values are clamped into the new
        service's bounds and add-ons it does not own are dropped.

        Raises:
            UnknownServiceError: if the id is not in the catalog
        """
        self._require_step(
            "select a service", BookingStep.SERVICE_SELECTION, BookingStep.CUSTOMIZATION
        )
        service = self.catalog.get_by_id(str(service_id))
        if service is None:
            raise UnknownServiceError(f"Unknown service '{service_id}'")

        s = self.session
        previous = s.selected_service
        if previous is not None and previous.id == service.id:
            return service

        if s.current_step is BookingStep.CUSTOMIZATION:
            guest_count = service.min_guests
            additional_hours = 0
            add_on_ids = set()
        else:
            guest_count = service.clamp_guests(s.guest_count)
            additional_hours = max(0, s.additional_hours)
            add_on_ids = {a for a in s.selected_add_on_ids if service.owns_add_on(a)}

        s.selected_service = service
        s.guest_count = guest_count
        s.additional_hours = additional_hours
        s.selected_add_on_ids = add_on_ids
        self.availability.set_service(service.id)
        self._commit("selected_service", "guest_count", "additional_hours")
        logger.info(
            f"service selected: {service.name}",
            extra={"session_id": s.session_id, "service_id": service.id},
        )
        return service

    # ------------------------------------------------------------------
    # Step 3: customization

    def set_guest_count(self, count: int) -> int:
        """Set the guest count, clamped into the service's bounds."""
        self._require_step("change guests", BookingStep.CUSTOMIZATION)
        service = self._require_service()
        self.session.guest_count = service.clamp_guests(int(count))
        self._commit("guest_count")
        return self.session.guest_count

    def increment_guests(self) -> bool:
        """Add one guest; no-op at the service maximum."""
        self._require_step("change guests", BookingStep.CUSTOMIZATION)
        service = self._require_service()
        if self.session.guest_count >= service.max_guests:
            return False
        self.session.guest_count += 1
        self._commit("guest_count")
        return True

    def decrement_guests(self) -> bool:
        """Remove one guest; no-op at the service minimum."""
        self._require_step("change guests", BookingStep.CUSTOMIZATION)
        service = self._require_service()
        if self.session.guest_count <= service.min_guests:
            return False
        self.session.guest_count -= 1
        self._commit("guest_count")
        return True

    def set_additional_hours(self, hours: int) -> int:
        """Set purchased extra hours; negative values clamp to zero."""
        self._require_step("change hours", BookingStep.CUSTOMIZATION)
        self._require_service()
        self.session.additional_hours = max(0, int(hours))
        self._commit("additional_hours")
        return self.session.additional_hours

    def increment_hours(self) -> bool:
        """Add one extra hour."""
        self._require_step("change hours", BookingStep.CUSTOMIZATION)
        self._require_service()
        self.session.additional_hours += 1
        self._commit("additional_hours")
        return True

    def decrement_hours(self) -> bool:
        """Remove one extra hour; no-op at zero."""
        self._require_step("change hours", BookingStep.CUSTOMIZATION)
        self._require_service()
        if self.session.additional_hours <= 0:
            return False
        self.session.additional_hours -= 1
        self._commit("additional_hours")
        return True

    def toggle_add_on(self, add_on_id: str) -> bool:
        """
        Toggle an add-on of the selected service.

        Returns:
            True if the add-on is selected after the toggle

        Raises:
            UnknownAddOnError: if the selected service does not offer it
        """
        self._require_step("change add-ons", BookingStep.CUSTOMIZATION)
        service = self._require_service()
        add_on_id = str(add_on_id)
        if not service.owns_add_on(add_on_id):
            raise UnknownAddOnError(
                f"Add-on '{add_on_id}' is not offered by service '{service.id}'"
            )

        selected = self.session.selected_add_on_ids
        if add_on_id in selected:
            selected.discard(add_on_id)
        else:
            selected.add(add_on_id)
        self._commit("selected_add_on_ids")
        return add_on_id in selected

    # ------------------------------------------------------------------
    # Step 4: contact

    def set_customer_field(self, field: str, value: Optional[str]) -> CustomerInfo:
        """Set one contact field; accepts snake_case or camelCase names."""
        return self.update_customer_info(**{field: value})

    def update_customer_info(self, **fields: Optional[str]) -> CustomerInfo:
        """
        Update several contact fields at once.

        Raises:
            BookingValidationError: for unknown field names
        """
        self._require_step("edit contact details", BookingStep.CONTACT_INFO)

        updates: Dict[str, Optional[str]] = {}
        unknown: Dict[str, str] = {}
        for name, value in fields.items():
            target = _CUSTOMER_FIELDS.get(name)
            if target is None:
                unknown[name] = f"Unknown contact field '{name}'"
                continue
            cleaned = ValidationUtils.sanitize_text(value)
            if not cleaned and CustomerInfo.model_fields[target].default is None:
                cleaned = None
            updates[target] = cleaned
        if unknown:
            raise BookingValidationError(unknown)

        current = self.session.customer_info.model_dump()
        try:
            info = CustomerInfo.model_validate({**current, **updates})
        except ValidationError as e:
            raise BookingValidationError(
                {str(err["loc"][0]): err["msg"] for err in e.errors() if err["loc"]}
            ) from e

        self.session.customer_info = info
        self._commit(*updates)
        return info

    # ------------------------------------------------------------------
    # Submission

    def snapshot_payload(self) -> BookingPayload:
        """The request body :meth:`submit` would send right now."""
        return self.booking_service.build_payload(self.session)

    async def submit(self) -> BookingSnapshot:
        """
        Validate every step and create the booking.

        The price on the returned snapshot is the breakdown computed for the
        session's final inputs; mutations are rejected while the request is
        in flight.

        Raises:
            BookingValidationError: if any step fails validation
            SubmissionError: if the backend call fails
        """
        s = self.session
        self._require_step("submit", BookingStep.CONTACT_INFO)

        s.submitting = True
        try:
            await self._load_selected_month()
        finally:
            s.submitting = False

        result = self.validator.validate_all(s)
        if not result.valid:
            s.errors = dict(result.errors)
            raise BookingValidationError(result.errors)

        payload = self.snapshot_payload()
        price = s.price
        add_ons = s.selected_add_ons()

        s.errors = {}
        s.submitting = True
        logger.info(
            "submitting booking",
            extra={"session_id": s.session_id, "service_id": payload.service_id},
        )
        try:
            booking_id = await self.booking_service.create_booking(payload)
        except SubmissionError as e:
            s.errors = {self._SUBMIT_ERROR: str(e)}
            raise
        finally:
            s.submitting = False

        snapshot = BookingSnapshot(
            booking_id=booking_id,
            selected_date=s.selected_date,
            service=s.selected_service,
            guest_count=s.guest_count,
            additional_hours=s.additional_hours,
            add_ons=add_ons,
            customer_info=s.customer_info,
            price=price,
        )
        s.booking_id = booking_id
        s.current_step = BookingStep.COMPLETED
        s.version += 1
        self.snapshot = snapshot
        self._log_step_transition(BookingStep.CONTACT_INFO, BookingStep.COMPLETED)
        logger.info(
            "booking confirmed",
            extra={"session_id": s.session_id, "booking_id": booking_id},
        )
        return snapshot
