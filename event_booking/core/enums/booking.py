"""
Booking-related enums.
"""

from enum import Enum
from typing import Optional


class BookingStep(str, Enum):
    """Enumeration of the booking wizard steps, in order."""

    DATE_SELECTION = "date_selection"
    SERVICE_SELECTION = "service_selection"
    CUSTOMIZATION = "customization"
    CONTACT_INFO = "contact_info"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        """Human-readable step name for progress displays."""
        return _STEP_LABELS[self]

    @property
    def position(self) -> int:
        return _STEP_ORDER.index(self)

    @property
    def is_terminal(self) -> bool:
        return self is BookingStep.COMPLETED

    def next(self) -> Optional["BookingStep"]:
        """Return the immediately following step, or None at the end."""
        idx = self.position + 1
        return _STEP_ORDER[idx] if idx < len(_STEP_ORDER) else None

    def previous(self) -> Optional["BookingStep"]:
        """Return the immediately preceding step, or None at the start."""
        idx = self.position - 1
        return _STEP_ORDER[idx] if idx >= 0 else None

    @classmethod
    def wizard_steps(cls) -> list["BookingStep"]:
        """Steps the user fills in (everything except the terminal one)."""
        return [step for step in _STEP_ORDER if not step.is_terminal]


_STEP_ORDER = [
    BookingStep.DATE_SELECTION,
    BookingStep.SERVICE_SELECTION,
    BookingStep.CUSTOMIZATION,
    BookingStep.CONTACT_INFO,
    BookingStep.COMPLETED,
]

_STEP_LABELS = {
    BookingStep.DATE_SELECTION: "Select Date",
    BookingStep.SERVICE_SELECTION: "Choose Service",
    BookingStep.CUSTOMIZATION: "Customize",
    BookingStep.CONTACT_INFO: "Contact Info",
    BookingStep.COMPLETED: "Confirmed",
}
