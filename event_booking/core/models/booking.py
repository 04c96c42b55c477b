"""
Booking-related data models.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from ..enums import BookingStep
from .catalog import AddOn, Service
from ...utils.money import round_money


class CustomerInfo(BaseModel):
    """Contact details collected on the last wizard step."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="forbid",
        str_strip_whitespace=True,
    )

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    street_address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_payload(cls, data: Any) -> Any:
        if isinstance(data, dict) and "additionalNotes" in data:
            data = dict(data)
            notes = data.pop("additionalNotes")
            data.setdefault("notes", notes)
        return data

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class PriceBreakdown:
    """Price components for one set of wizard inputs.

    ``subtotal`` and ``total`` are derived on access so they can never drift
    from their components. Values keep full precision; use :meth:`rounded`
    at display boundaries.
    """

    base_price: Decimal = Decimal("0")
    hours_surcharge: Decimal = Decimal("0")
    add_ons_total: Decimal = Decimal("0")
    tax: Optional[Decimal] = None
    add_ons: Tuple[AddOn, ...] = ()

    @classmethod
    def empty(cls) -> "PriceBreakdown":
        return cls()

    @property
    def subtotal(self) -> Decimal:
        return self.base_price + self.hours_surcharge + self.add_ons_total

    @property
    def total(self) -> Decimal:
        return self.subtotal + (self.tax or Decimal("0"))

    def rounded(self) -> Dict[str, Optional[Decimal]]:
        """Display values rounded half-up to cents."""
        return {
            "base_price": round_money(self.base_price),
            "hours_surcharge": round_money(self.hours_surcharge),
            "add_ons_total": round_money(self.add_ons_total),
            "tax": round_money(self.tax) if self.tax is not None else None,
            "subtotal": round_money(self.subtotal),
            "total": round_money(self.total),
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of gating one wizard step."""

    valid: bool
    errors: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_errors(cls, errors: Mapping[str, str]) -> "ValidationResult":
        return cls(valid=not errors, errors=dict(errors))


@dataclass
class BookingSession:
    """Mutable wizard state for one in-progress booking.

    Only :class:`~event_booking.services.booking.StepController` writes to it.
    """

    session_id: str = field(default_factory=lambda: uuid4().hex)

    # Flow
    current_step: BookingStep = BookingStep.DATE_SELECTION

    # Step 1: date
    selected_date: Optional[date] = None

    # Step 2: service
    selected_service: Optional[Service] = None

    # Step 3: customization
    guest_count: int = 1
    additional_hours: int = 0
    selected_add_on_ids: Set[str] = field(default_factory=set)

    # Step 4: contact
    customer_info: CustomerInfo = field(default_factory=CustomerInfo)

    # Derived
    price: PriceBreakdown = field(default_factory=PriceBreakdown.empty)
    errors: Dict[str, str] = field(default_factory=dict)

    # Submission
    submitting: bool = False
    booking_id: Optional[str] = None

    # Versioning
    version: int = 0

    @property
    def is_completed(self) -> bool:
        return self.current_step.is_terminal

    def selected_add_ons(self) -> Tuple[AddOn, ...]:
        """Selected add-ons of the current service, in catalog order."""
        if self.selected_service is None:
            return ()
        return tuple(
            a for a in self.selected_service.add_ons if a.id in self.selected_add_on_ids
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view of the session for UI clients."""
        return {
            "session_id": self.session_id,
            "current_step": self.current_step.value,
            "step_label": self.current_step.label,
            "selected_date": self.selected_date.isoformat() if self.selected_date else None,
            "selected_service_id": self.selected_service.id if self.selected_service else None,
            "guest_count": self.guest_count,
            "additional_hours": self.additional_hours,
            "selected_add_on_ids": sorted(self.selected_add_on_ids),
            "customer_info": self.customer_info.model_dump(),
            "price": {k: (str(v) if v is not None else None) for k, v in self.price.rounded().items()},
            "errors": dict(self.errors),
            "submitting": self.submitting,
            "booking_id": self.booking_id,
            "version": self.version,
        }


class BookingPayload(BaseModel):
    """Request body for the backend ``createBooking`` call."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    service_id: str
    booking_date: date = Field(alias="date")
    guest_count: int
    additional_hours: int = Field(ge=0)
    selected_add_on_ids: List[str] = Field(default_factory=list)
    customer_info: CustomerInfo

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with the backend's camelCase keys."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


@dataclass(frozen=True)
class BookingSnapshot:
    """Immutable record of a successfully submitted booking."""

    booking_id: str
    selected_date: date
    service: Service
    guest_count: int
    additional_hours: int
    add_ons: Tuple[AddOn, ...]
    customer_info: CustomerInfo
    price: PriceBreakdown
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_price(self) -> Decimal:
        return self.price.total

    @property
    def total_hours(self) -> Decimal:
        """Included duration plus purchased extra hours."""
        return self.service.base_hours + self.additional_hours

    def to_dict(self) -> Dict[str, Any]:
        return {
            "booking_id": self.booking_id,
            "selected_date": self.selected_date.isoformat(),
            "service": self.service.model_dump(mode="json"),
            "guest_count": self.guest_count,
            "additional_hours": self.additional_hours,
            "total_hours": float(self.total_hours),
            "add_ons": [a.model_dump(mode="json") for a in self.add_ons],
            "customer_info": self.customer_info.model_dump(),
            "price": {k: (str(v) if v is not None else None) for k, v in self.price.rounded().items()},
            "total_price": str(round_money(self.total_price)),
            "created_at": self.created_at.isoformat(),
        }
