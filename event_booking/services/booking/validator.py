"""
Per-step gating rules for the booking wizard.
"""

from datetime import date
from typing import Callable, Dict, Optional

from ...core.enums import BookingStep
from ...core.models import BookingSession, ValidationResult
from ...utils.date import DateUtils
from ...utils.validation import ValidationUtils


class StepValidator:
    """Validate the fields a wizard step is responsible for.

    ``validate`` never mutates the session. Booked-date lookups and the
    notion of "today" are injected so the rules stay pure.
    """

    def __init__(
        self,
        is_booked: Optional[Callable[[date], bool]] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self._is_booked = is_booked or (lambda day: False)
        self._today = today or DateUtils().today

    def validate(self, session: BookingSession, step: BookingStep) -> ValidationResult:
        """Validate one step and return field -> message errors."""
        checks = {
            BookingStep.DATE_SELECTION: self._validate_date,
            BookingStep.SERVICE_SELECTION: self._validate_service,
            BookingStep.CUSTOMIZATION: self._validate_customization,
            BookingStep.CONTACT_INFO: self._validate_contact,
        }
        check = checks.get(step)
        errors = check(session) if check else {}
        return ValidationResult.from_errors(errors)

    def validate_all(self, session: BookingSession) -> ValidationResult:
        """Validate every wizard step; used right before submission."""
        errors: Dict[str, str] = {}
        for step in BookingStep.wizard_steps():
            errors.update(self.validate(session, step).errors)
        return ValidationResult.from_errors(errors)

    def _validate_date(self, session: BookingSession) -> Dict[str, str]:
        day = session.selected_date
        if day is None:
            return {"selected_date": "Please select a date"}
        if self._is_booked(day):
            return {"selected_date": "This date is already booked. Please select another date."}
        if day < self._today():
            return {"selected_date": "Please select a date that is not in the past"}
        return {}

    def _validate_service(self, session: BookingSession) -> Dict[str, str]:
        if session.selected_service is None:
            return {"selected_service": "Please select a service"}
        return {}

    def _validate_customization(self, session: BookingSession) -> Dict[str, str]:
        service = session.selected_service
        if service is None:
            return {"selected_service": "No service selected"}

        errors: Dict[str, str] = {}
        if session.guest_count < service.min_guests:
            errors["guest_count"] = f"Minimum {service.min_guests} guests required"
        elif session.guest_count > service.max_guests:
            errors["guest_count"] = f"Maximum {service.max_guests} guests allowed"
        if session.additional_hours < 0:
            errors["additional_hours"] = "Additional hours cannot be negative"
        return errors

    def _validate_contact(self, session: BookingSession) -> Dict[str, str]:
        info = session.customer_info
        errors: Dict[str, str] = {}

        checks = {
            "first_name": ValidationUtils.validate_required(info.first_name, "First name"),
            "last_name": ValidationUtils.validate_required(info.last_name, "Last name"),
            "email": ValidationUtils.validate_email(info.email),
            "phone": ValidationUtils.validate_phone(info.phone),
        }
        for field_name, (is_valid, message) in checks.items():
            if not is_valid:
                errors[field_name] = message
        return errors
