"""
Availability data models.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class AvailabilityRecord(BaseModel):
    """Booked/open status of one calendar day."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    date: date
    is_available: bool = True
    spots_remaining: int = Field(default=0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _normalize_payload(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "spotsRemaining" not in data and "spots_remaining" not in data:
            spots = data.get("spotsAvailable")
            if spots is not None:
                data["spotsRemaining"] = spots
        return data

    @property
    def is_booked(self) -> bool:
        """A day counts as booked only when the backend says so explicitly."""
        return not self.is_available


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the month calendar as the date step renders it."""

    date: date
    is_booked: bool
    is_past: bool
    is_today: bool
    is_selected: bool
    spots_remaining: Optional[int] = None

    @property
    def is_selectable(self) -> bool:
        return not (self.is_booked or self.is_past)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "is_booked": self.is_booked,
            "is_past": self.is_past,
            "is_today": self.is_today,
            "is_selected": self.is_selected,
            "is_selectable": self.is_selectable,
            "spots_remaining": self.spots_remaining,
        }
