"""
Pytest configuration and fixtures.
"""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from event_booking.core.enums import BookingStep
from event_booking.services.booking import (
    AvailabilityResolver,
    BookingService,
    PricingEngine,
    ServiceCatalog,
    StepController,
    StepValidator,
)
from event_booking.services.external import ExternalAPIService

TODAY = date(2025, 12, 1)

BOOKED_DECEMBER = ["2025-12-05", "2025-12-10", "2025-12-15", "2025-12-20", "2025-12-25"]


def _add_on(add_on_id, name, price, description=""):
    return {"id": add_on_id, "name": name, "price": price, "description": description}


SERVICES_PAYLOAD = [
    {
        "id": "1",
        "name": "360° VR Experience",
        "description": "Immersive virtual reality experiences for all ages",
        "basePrice": 150,
        "category": "entertainment",
        "duration": 120,
        "minGuests": 2,
        "minHours": 2,
        "maxGuests": 20,
        "addOns": [
            _add_on("addon-vr-1", "Premium Headsets", 50, "Latest VR technology"),
            _add_on("addon-vr-2", "Group Session", 75, "Guided group experience"),
            _add_on("addon-vr-3", "Extended Play", 100, "Extra 30 mins gameplay"),
        ],
    },
    {
        "id": "2",
        "name": "Bouncy House",
        "description": "Fun bouncy castle for kids parties and events",
        "basePrice": "100",
        "category": "entertainment",
        "duration": "240",
        "minGuests": "5",
        "minHours": 4,
        "maxGuests": 50,
        "addOns": [
            _add_on("addon-bh-1", "Extra Setup", 45),
            _add_on("addon-bh-2", "Safety Mats", 60),
            _add_on("addon-bh-3", "Extended Time", 50),
        ],
    },
    {
        "id": "3",
        "name": "Cotton Candy Machine",
        "basePrice": 75,
        "category": "catering",
        "duration": 180,
        "minGuests": 10,
        "minHours": 3,
        "maxGuests": 100,
        "addOns": [
            _add_on("addon-cc-1", "Premium Flavors", 40),
            _add_on("addon-cc-2", "Custom Colors", 35),
            _add_on("addon-cc-3", "Extra Machine", 80),
        ],
    },
    {
        "id": "4",
        "name": "Waffle Station",
        "basePrice": 120,
        "category": "catering",
        "duration": 180,
        "minGuests": 15,
        "minHours": 3,
        "maxGuests": 100,
        "addOns": [
            _add_on("addon-wf-1", "Premium Toppings", 60),
            _add_on("addon-wf-2", "Staff Attendant", 80),
            _add_on("addon-wf-3", "Extra Hour", 45),
        ],
    },
    {
        "id": "5",
        "name": "Photo Booth",
        "basePrice": 200,
        "category": "entertainment",
        "duration": 240,
        "minGuests": 10,
        "minHours": 4,
        "maxGuests": 200,
        "addOns": [
            _add_on("addon-pb-1", "Custom Backdrop", 100),
            _add_on("addon-pb-2", "Premium Prints", 75),
            _add_on("addon-pb-3", "Extra Hours", 60),
        ],
    },
]


def availability_payload(year, month, booked=()):
    """Availability records the way the backend sends them."""
    booked = set(booked)
    return [
        {"date": f"{year:04d}-{month:02d}-{day:02d}",
         "isAvailable": f"{year:04d}-{month:02d}-{day:02d}" not in booked,
         "spotsRemaining": 0 if f"{year:04d}-{month:02d}-{day:02d}" in booked else 3}
        for day in (1, 5, 10, 15, 20, 25, 28)
    ]


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def catalog():
    """Static catalog used across the suite."""
    return ServiceCatalog.from_payload(SERVICES_PAYLOAD)


@pytest.fixture
def mock_external_api():
    """Mock external API service."""
    api = Mock(spec=ExternalAPIService)
    api.get_services = AsyncMock(return_value=SERVICES_PAYLOAD)
    api.get_service_add_ons = AsyncMock(return_value=[])
    api.get_availability = AsyncMock(
        side_effect=lambda service_id, year, month: availability_payload(
            year, month, BOOKED_DECEMBER if (year, month) == (2025, 12) else ()
        )
    )
    api.create_booking = AsyncMock(return_value={"id": "BK-1001"})
    return api


@pytest.fixture
def pricing():
    return PricingEngine(hourly_rate=Decimal("50"))


@pytest.fixture
def availability(mock_external_api):
    return AvailabilityResolver(mock_external_api, today=lambda: TODAY)


@pytest.fixture
def booking_service(mock_external_api):
    """Create booking service with mocked dependencies."""
    return BookingService(mock_external_api)


@pytest.fixture
def controller(catalog, availability, booking_service, pricing):
    """Fresh wizard controller on the date step."""
    return StepController(catalog, availability, booking_service, pricing=pricing)


@pytest.fixture
def validator(availability):
    return StepValidator(is_booked=availability.is_booked, today=lambda: TODAY)


def _walk_to(controller, step, service_id="1", day="2025-12-12"):
    """Drive a controller forward to ``step`` with valid inputs."""
    if controller.current_step is BookingStep.DATE_SELECTION and step is not BookingStep.DATE_SELECTION:
        controller.select_date(day)
        assert controller.advance()
    if controller.current_step is BookingStep.SERVICE_SELECTION and step not in (
        BookingStep.SERVICE_SELECTION,
    ):
        controller.select_service(service_id)
        assert controller.advance()
    if controller.current_step is BookingStep.CUSTOMIZATION and step is BookingStep.CONTACT_INFO:
        assert controller.advance()
    assert controller.current_step is step
    return controller


def _fill_contact(controller):
    controller.update_customer_info(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        phone="+1 (555) 123-4567",
    )
    return controller


@pytest.fixture
def walk_to():
    return _walk_to


@pytest.fixture
def fill_contact():
    return _fill_contact
