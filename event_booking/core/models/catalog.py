"""
Service catalog data models.
"""

from decimal import Decimal
from typing import Any, Dict, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


_CATALOG_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
    extra="ignore",
    str_strip_whitespace=True,
)


def _pick(data: Dict[str, Any], *keys: str) -> Any:
    """Return the first non-empty value among keys."""
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return None


def _drop_empty(data: Dict[str, Any], *keys: str) -> None:
    """Remove null/blank values so field defaults apply."""
    for key in keys:
        if key in data and data[key] in (None, ""):
            del data[key]


class AddOn(BaseModel):
    """Optional paid enhancement tied to exactly one service."""

    model_config = _CATALOG_CONFIG

    id: str
    name: str
    price: Decimal = Field(default=Decimal("0"), ge=0)
    service_id: str = ""
    description: Optional[str] = None

    @field_validator("id", "service_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @model_validator(mode="before")
    @classmethod
    def _normalize_payload(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if _pick(data, "price") is None:
            fallback = _pick(data, "additionalPrice", "priceModifier")
            data["price"] = fallback if fallback is not None else 0
        return data


class Service(BaseModel):
    """Bookable event service.

    Instances are normalized once at catalog ingestion: numeric fields that
    arrive as strings become ``Decimal``/``int`` here and nowhere else.
    """

    model_config = _CATALOG_CONFIG

    id: str
    name: str = "Unnamed Service"
    description: str = ""
    base_price: Decimal = Field(default=Decimal("0"), ge=0)
    min_guests: int = Field(default=1, ge=0)
    max_guests: int = Field(default=100, ge=0)
    min_hours: int = Field(default=0, ge=0)
    duration_minutes: int = Field(default=0, ge=0)
    category: Optional[str] = None
    image: Optional[str] = None
    add_ons: Tuple[AddOn, ...] = ()

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @model_validator(mode="before")
    @classmethod
    def _normalize_payload(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        _drop_empty(
            data,
            "name", "description", "basePrice", "base_price", "minGuests", "min_guests",
            "maxGuests", "max_guests", "minHours", "min_hours",
            "durationMinutes", "duration_minutes",
        )

        if _pick(data, "basePrice", "base_price") is None and _pick(data, "price") is not None:
            data["basePrice"] = data["price"]
        if _pick(data, "durationMinutes", "duration_minutes") is None and _pick(data, "duration") is not None:
            data["durationMinutes"] = data["duration"]

        raw_add_ons = _pick(data, "addOns", "add_ons", "options") or ()
        data.pop("add_ons", None)
        data.pop("options", None)
        owner = data.get("id")
        owner = str(owner) if owner is not None else ""
        add_ons = []
        for item in raw_add_ons:
            if isinstance(item, AddOn):
                add_ons.append(item.model_copy(update={"service_id": owner}))
            elif isinstance(item, dict):
                add_ons.append({**item, "serviceId": owner, "service_id": owner})
        data["addOns"] = add_ons
        return data

    @model_validator(mode="after")
    def _check_guest_bounds(self) -> "Service":
        if self.min_guests > self.max_guests:
            raise ValueError(
                f"min_guests ({self.min_guests}) exceeds max_guests ({self.max_guests})"
            )
        return self

    @property
    def add_on_ids(self) -> FrozenSet[str]:
        return frozenset(a.id for a in self.add_ons)

    @property
    def base_hours(self) -> Decimal:
        """Included event duration in hours."""
        return Decimal(self.duration_minutes) / Decimal(60)

    def owns_add_on(self, add_on_id: str) -> bool:
        return add_on_id in self.add_on_ids

    def get_add_on(self, add_on_id: str) -> Optional[AddOn]:
        return next((a for a in self.add_ons if a.id == add_on_id), None)

    def clamp_guests(self, count: int) -> int:
        """Clamp a guest count into this service's bounds."""
        return max(self.min_guests, min(self.max_guests, count))
