"""
Tests for core models and enums.
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from event_booking.core.enums import BookingStep
from event_booking.core.models import (
    AddOn,
    AvailabilityRecord,
    BookingPayload,
    BookingSession,
    BookingSnapshot,
    CalendarDay,
    CustomerInfo,
    PriceBreakdown,
    Service,
)


class TestBookingStep:
    """Test wizard step ordering."""

    def test_order_and_labels(self):
        """Steps run date -> service -> customize -> contact -> completed."""
        steps = BookingStep.wizard_steps()
        assert steps == [
            BookingStep.DATE_SELECTION,
            BookingStep.SERVICE_SELECTION,
            BookingStep.CUSTOMIZATION,
            BookingStep.CONTACT_INFO,
        ]
        assert [s.label for s in steps] == [
            "Select Date", "Choose Service", "Customize", "Contact Info",
        ]

    def test_next_and_previous(self):
        assert BookingStep.DATE_SELECTION.next() is BookingStep.SERVICE_SELECTION
        assert BookingStep.CONTACT_INFO.next() is BookingStep.COMPLETED
        assert BookingStep.COMPLETED.next() is None
        assert BookingStep.DATE_SELECTION.previous() is None
        assert BookingStep.CUSTOMIZATION.previous() is BookingStep.SERVICE_SELECTION

    def test_terminal(self):
        assert BookingStep.COMPLETED.is_terminal
        assert not BookingStep.CONTACT_INFO.is_terminal
        assert BookingStep("customization") is BookingStep.CUSTOMIZATION


class TestService:
    """Test service normalization at ingestion."""

    def test_string_numbers_are_normalized(self):
        """Numeric strings become Decimal/int exactly once."""
        service = Service.model_validate({
            "id": 7,
            "name": "Karaoke",
            "basePrice": "89.99",
            "minGuests": "4",
            "maxGuests": "30",
            "duration": "90",
        })
        assert service.id == "7"
        assert service.base_price == Decimal("89.99")
        assert service.min_guests == 4
        assert service.max_guests == 30
        assert service.duration_minutes == 90
        assert service.base_hours == Decimal("1.5")

    def test_price_is_fallback_for_base_price(self):
        service = Service.model_validate({"id": "x", "name": "X", "price": 40})
        assert service.base_price == Decimal("40")

    def test_add_ons_are_owned_by_service(self):
        service = Service.model_validate({
            "id": "1",
            "name": "VR",
            "addOns": [{"id": "a", "name": "Headsets", "price": "50"}, {"id": "b", "name": "Group"}],
        })
        assert [a.id for a in service.add_ons] == ["a", "b"]
        assert all(a.service_id == "1" for a in service.add_ons)
        assert service.add_ons[1].price == Decimal("0")
        assert service.owns_add_on("a")
        assert not service.owns_add_on("z")
        assert service.get_add_on("a").name == "Headsets"

    def test_add_on_price_fallbacks(self):
        add_on = AddOn.model_validate({"id": 3, "name": "Mats", "additionalPrice": "12.5"})
        assert add_on.id == "3"
        assert add_on.price == Decimal("12.5")

    def test_guest_bounds_must_be_ordered(self):
        with pytest.raises(ValidationError):
            Service.model_validate({"id": "1", "minGuests": 10, "maxGuests": 2})

    def test_clamp_guests(self):
        service = Service(id="1", min_guests=2, max_guests=20)
        assert service.clamp_guests(1) == 2
        assert service.clamp_guests(25) == 20
        assert service.clamp_guests(8) == 8

    def test_frozen(self):
        service = Service(id="1")
        with pytest.raises(ValidationError):
            service.name = "changed"


class TestAvailabilityRecord:
    """Test availability record parsing."""

    def test_booked_only_when_not_available(self):
        record = AvailabilityRecord.model_validate({"date": "2025-12-05", "isAvailable": False})
        assert record.is_booked
        assert record.date == date(2025, 12, 5)

    def test_spots_available_alias(self):
        record = AvailabilityRecord.model_validate({"date": "2025-12-06", "spotsAvailable": 4})
        assert record.spots_remaining == 4
        assert not record.is_booked

    def test_calendar_day_selectable(self):
        day = CalendarDay(date(2025, 12, 5), is_booked=True, is_past=False, is_today=False, is_selected=False)
        assert not day.is_selectable
        assert day.to_dict()["date"] == "2025-12-05"


class TestCustomerInfo:
    """Test contact details model."""

    def test_camel_case_and_notes_alias(self):
        info = CustomerInfo.model_validate({
            "firstName": "  Ada ",
            "lastName": "Lovelace",
            "additionalNotes": "Gate code 42",
        })
        assert info.first_name == "Ada"
        assert info.notes == "Gate code 42"
        assert info.full_name == "Ada Lovelace"

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            CustomerInfo.model_validate({"nickname": "ada"})


class TestPriceBreakdown:
    """Test derived price totals."""

    def test_total_is_derived(self):
        price = PriceBreakdown(
            base_price=Decimal("150"),
            hours_surcharge=Decimal("100"),
            add_ons_total=Decimal("50"),
        )
        assert price.subtotal == Decimal("300")
        assert price.total == Decimal("300")

    def test_tax_included_in_total(self):
        price = PriceBreakdown(base_price=Decimal("100"), tax=Decimal("8.875"))
        assert price.total == Decimal("108.875")
        assert price.rounded()["total"] == Decimal("108.88")
        assert price.rounded()["tax"] == Decimal("8.88")

    def test_empty(self):
        assert PriceBreakdown.empty().total == Decimal("0")


class TestBookingSession:
    """Test session defaults and serialization."""

    def test_defaults(self):
        session = BookingSession()
        assert session.current_step is BookingStep.DATE_SELECTION
        assert session.additional_hours == 0
        assert session.selected_add_on_ids == set()
        assert not session.is_completed

    def test_to_dict(self):
        session = BookingSession(selected_date=date(2025, 12, 12))
        data = session.to_dict()
        assert data["current_step"] == "date_selection"
        assert data["step_label"] == "Select Date"
        assert data["selected_date"] == "2025-12-12"
        assert data["price"]["total"] == "0.00"


class TestBookingPayload:
    """Test wire payload shape."""

    def test_wire_keys(self):
        payload = BookingPayload(
            service_id="1",
            booking_date=date(2025, 12, 12),
            guest_count=5,
            additional_hours=2,
            selected_add_on_ids=["addon-vr-1"],
            customer_info=CustomerInfo(first_name="Ada", last_name="L", email="a@b.co", phone="5551234567"),
        )
        wire = payload.to_wire()
        assert set(wire) == {
            "serviceId", "date", "guestCount", "additionalHours", "selectedAddOnIds", "customerInfo",
        }
        assert wire["date"] == "2025-12-12"
        assert wire["customerInfo"]["firstName"] == "Ada"
        assert "city" not in wire["customerInfo"]

    def test_negative_hours_rejected(self):
        with pytest.raises(ValidationError):
            BookingPayload(
                service_id="1",
                booking_date=date(2025, 12, 12),
                guest_count=5,
                additional_hours=-1,
                customer_info=CustomerInfo(),
            )


class TestBookingSnapshot:
    """Test the confirmation snapshot."""

    def test_total_hours_and_price(self):
        service = Service(id="1", name="VR", base_price=Decimal("150"), duration_minutes=120)
        price = PriceBreakdown(base_price=Decimal("150"), hours_surcharge=Decimal("50"))
        snapshot = BookingSnapshot(
            booking_id="BK-1",
            selected_date=date(2025, 12, 12),
            service=service,
            guest_count=4,
            additional_hours=1,
            add_ons=(),
            customer_info=CustomerInfo(),
            price=price,
        )
        assert snapshot.total_hours == Decimal("3")
        assert snapshot.total_price == price.total
        data = snapshot.to_dict()
        assert data["total_hours"] == 3.0
        assert data["total_price"] == "200.00"
