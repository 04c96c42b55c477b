"""
Tests for per-step validation.
"""

from datetime import date

import pytest

from event_booking.core.enums import BookingStep
from event_booking.core.models import BookingSession, CustomerInfo
from event_booking.services.booking import StepValidator

TODAY = date(2025, 12, 1)
BOOKED = {date(2025, 12, 5)}


@pytest.fixture
def rules():
    return StepValidator(is_booked=lambda day: day in BOOKED, today=lambda: TODAY)


def _valid_contact():
    return CustomerInfo(
        first_name="Ada", last_name="Lovelace", email="ada@example.com", phone="555-123-4567"
    )


class TestDateStep:
    """Test date step rules."""

    def test_missing_date(self, rules):
        result = rules.validate(BookingSession(), BookingStep.DATE_SELECTION)
        assert not result.valid
        assert result.errors == {"selected_date": "Please select a date"}

    def test_booked_date(self, rules):
        session = BookingSession(selected_date=date(2025, 12, 5))
        result = rules.validate(session, BookingStep.DATE_SELECTION)
        assert "already booked" in result.errors["selected_date"]

    def test_past_date(self, rules):
        session = BookingSession(selected_date=date(2025, 11, 30))
        assert not rules.validate(session, BookingStep.DATE_SELECTION).valid

    def test_today_is_allowed(self, rules):
        session = BookingSession(selected_date=TODAY)
        assert rules.validate(session, BookingStep.DATE_SELECTION).valid


class TestServiceStep:
    """Test service step rules."""

    def test_service_required(self, rules):
        result = rules.validate(BookingSession(), BookingStep.SERVICE_SELECTION)
        assert result.errors == {"selected_service": "Please select a service"}

    def test_service_present(self, rules, catalog):
        session = BookingSession(selected_service=catalog.get_by_id("2"))
        assert rules.validate(session, BookingStep.SERVICE_SELECTION).valid


class TestCustomizationStep:
    """Test guest and hour bounds."""

    def test_no_service(self, rules):
        result = rules.validate(BookingSession(), BookingStep.CUSTOMIZATION)
        assert result.errors == {"selected_service": "No service selected"}

    @pytest.mark.parametrize("guests,valid", [(1, False), (2, True), (20, True), (21, False)])
    def test_guest_bounds(self, rules, catalog, guests, valid):
        session = BookingSession(selected_service=catalog.get_by_id("1"), guest_count=guests)
        assert rules.validate(session, BookingStep.CUSTOMIZATION).valid is valid

    def test_guest_messages(self, rules, catalog):
        session = BookingSession(selected_service=catalog.get_by_id("1"), guest_count=1)
        assert rules.validate(session, BookingStep.CUSTOMIZATION).errors["guest_count"] == "Minimum 2 guests required"
        session.guest_count = 30
        assert rules.validate(session, BookingStep.CUSTOMIZATION).errors["guest_count"] == "Maximum 20 guests allowed"

    def test_negative_hours(self, rules, catalog):
        session = BookingSession(
            selected_service=catalog.get_by_id("1"), guest_count=2, additional_hours=-1
        )
        assert "additional_hours" in rules.validate(session, BookingStep.CUSTOMIZATION).errors


class TestContactStep:
    """Test contact field rules."""

    def test_all_required(self, rules):
        result = rules.validate(BookingSession(), BookingStep.CONTACT_INFO)
        assert set(result.errors) == {"first_name", "last_name", "email", "phone"}

    def test_valid_contact(self, rules):
        session = BookingSession(customer_info=_valid_contact())
        assert rules.validate(session, BookingStep.CONTACT_INFO).valid

    def test_address_fields_never_block(self, rules):
        info = _valid_contact().model_copy(update={"street_address": None, "city": None})
        assert rules.validate(BookingSession(customer_info=info), BookingStep.CONTACT_INFO).valid

    def test_bad_email_and_phone(self, rules):
        info = _valid_contact().model_copy(update={"email": "ada@example", "phone": "555"})
        result = rules.validate(BookingSession(customer_info=info), BookingStep.CONTACT_INFO)
        assert set(result.errors) == {"email", "phone"}


class TestValidateAll:
    """Test whole-session validation before submit."""

    def test_merges_every_step(self, rules):
        result = rules.validate_all(BookingSession())
        assert {"selected_date", "selected_service", "first_name", "email"} <= set(result.errors)

    def test_complete_session(self, rules, catalog):
        session = BookingSession(
            selected_date=date(2025, 12, 12),
            selected_service=catalog.get_by_id("1"),
            guest_count=4,
            customer_info=_valid_contact(),
        )
        assert rules.validate_all(session).valid

    def test_validate_does_not_mutate(self, rules):
        session = BookingSession()
        rules.validate_all(session)
        assert session.errors == {}
        assert session.version == 0

    def test_completed_step_has_no_rules(self, rules):
        assert rules.validate(BookingSession(), BookingStep.COMPLETED).valid
