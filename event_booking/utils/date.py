"""
Calendar date utilities.
"""

import calendar
from datetime import date, datetime
from typing import List, Optional, Tuple, Union

import pytz

from ..config import get_settings

MonthKey = Tuple[int, int]


class DateUtils:
    """Calendar-day helpers bound to the configured timezone."""

    def __init__(self, timezone: Optional[str] = None):
        self.tz = pytz.timezone(timezone or get_settings().timezone)

    def today(self) -> date:
        """Today's calendar day in the configured timezone."""
        return datetime.now(self.tz).date()

    def is_past(self, day: date, today: Optional[date] = None) -> bool:
        """Compare calendar days only; today itself is not past."""
        return day < (today or self.today())

    @staticmethod
    def parse_iso_date(value: Union[str, date, datetime]) -> date:
        """
        Parse a YYYY-MM-DD string (or date/datetime) into a date.

        Raises:
            ValueError: if the string is not a valid ISO calendar date
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()

    @staticmethod
    def is_valid_iso_date(date_str: str) -> bool:
        """Check if string is a valid ISO date (YYYY-MM-DD)."""
        try:
            datetime.strptime(date_str, "%Y-%m-%d")
            return True
        except (TypeError, ValueError):
            return False

    @staticmethod
    def shift_month(year: int, month: int, delta: int) -> MonthKey:
        """Move ``delta`` months forward (or back when negative)."""
        index = year * 12 + (month - 1) + delta
        return index // 12, index % 12 + 1

    @staticmethod
    def days_in_month(year: int, month: int) -> List[date]:
        _, last = calendar.monthrange(year, month)
        return [date(year, month, d) for d in range(1, last + 1)]

    @staticmethod
    def format_for_display(day: date) -> str:
        """Format like ``Friday, December 5, 2025``."""
        return f"{day.strftime('%A')}, {day.strftime('%B')} {day.day}, {day.year}"
