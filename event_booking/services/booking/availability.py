"""
Month-by-month availability for the date step.
"""

from datetime import date
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from pydantic import ValidationError

from ...core.exceptions import ExternalAPIError
from ...core.models import AvailabilityRecord, CalendarDay
from ...utils.date import DateUtils, MonthKey
from ...utils.logging import get_logger
from ..external import BookingAPI

logger = get_logger("booking.availability")

CacheKey = Tuple[Optional[str], int, int]


class AvailabilityResolver:
    """Fetch, cache and answer questions about booked dates.

    Months are cached per ``(service_id, year, month)`` and never re-fetched
    once cached. Every fetch takes a token from a monotonically increasing
    counter; a completion only writes the cache when its token is still the
    latest issued for its key, and only updates the focused view (loading
    flag, error banner) when it is the latest issued overall.
    """

    def __init__(
        self,
        api: BookingAPI,
        service_id: Optional[str] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.api = api
        self.service_id = service_id
        self._today = today or DateUtils().today

        self._records: Dict[CacheKey, Tuple[AvailabilityRecord, ...]] = {}
        self._booked: Dict[CacheKey, FrozenSet[date]] = {}
        self._spots: Dict[CacheKey, Dict[date, int]] = {}

        self._issued = 0
        self._latest_by_key: Dict[CacheKey, int] = {}
        self._latest_token = 0

        current = self._today()
        self.focused_month: MonthKey = (current.year, current.month)
        self.loading = False
        self.last_error: Optional[str] = None

    def today(self) -> date:
        return self._today()

    def _key(self, year: int, month: int) -> CacheKey:
        return (self.service_id, year, month)

    def set_service(self, service_id: Optional[str]) -> None:
        """Switch the resource key; months cached for other services are kept."""
        if service_id != self.service_id:
            logger.info("availability service switched", extra={"service_id": service_id})
            self.service_id = service_id
            self.last_error = None

    def is_cached(self, year: int, month: int) -> bool:
        return self._key(year, month) in self._records

    async def load(self, year: int, month: int) -> List[AvailabilityRecord]:
        """
        Return the availability records of one month.

        A cached month is returned without a fetch. A failed fetch degrades
        to an empty list and is not cached, so the next focus retries it.
        """
        if not 1 <= month <= 12:
            raise ValueError(f"month must be 1-12, got {month}")

        key = self._key(year, month)
        cached = self._records.get(key)
        if cached is not None:
            return list(cached)

        self._issued += 1
        token = self._issued
        self._latest_by_key[key] = token
        self._latest_token = token
        self.loading = True

        error: Optional[str] = None
        try:
            raw = await self.api.get_availability(key[0], year, month)
            records = self._parse(raw, year, month)
        except ExternalAPIError as e:
            logger.warning(
                "availability fetch failed; treating month as unknown",
                extra={"service_id": key[0], "year": year, "month": month, "error": str(e)},
            )
            records, error = [], str(e) or "Failed to fetch availability"

        is_focus = token == self._latest_token
        if is_focus:
            self.loading = False
            self.last_error = error

        if token != self._latest_by_key.get(key):
            logger.info(
                "discarding stale availability response",
                extra={"service_id": key[0], "year": year, "month": month},
            )
            return records

        if error is None:
            self._store(key, records)
        return records

    def focus(self, year: int, month: int) -> MonthKey:
        """Move the calendar to a month without fetching."""
        if not 1 <= month <= 12:
            raise ValueError(f"month must be 1-12, got {month}")
        self.focused_month = (year, month)
        return self.focused_month

    async def show_month(self, year: int, month: int) -> List[AvailabilityRecord]:
        """Focus a month and make sure its availability is loaded."""
        self.focus(year, month)
        if self.is_cached(year, month):
            self._claim_focus()
        return await self.load(year, month)

    def _claim_focus(self) -> None:
        # Any fetch still in flight no longer owns the loading flag or banner.
        self._issued += 1
        self._latest_token = self._issued
        self.loading = False
        self.last_error = None

    async def next_month(self) -> List[AvailabilityRecord]:
        year, month = DateUtils.shift_month(*self.focused_month, 1)
        return await self.show_month(year, month)

    async def previous_month(self) -> List[AvailabilityRecord]:
        year, month = DateUtils.shift_month(*self.focused_month, -1)
        return await self.show_month(year, month)

    def is_booked(self, day: date) -> bool:
        """O(1) membership test against the cached month of ``day``."""
        booked = self._booked.get(self._key(day.year, day.month))
        return booked is not None and day in booked

    def is_past(self, day: date) -> bool:
        return day < self._today()

    def is_selectable(self, day: date) -> bool:
        return not (self.is_booked(day) or self.is_past(day))

    def booked_dates(self, year: int, month: int) -> FrozenSet[date]:
        return self._booked.get(self._key(year, month), frozenset())

    def booked_in_month(self, year: int, month: int) -> int:
        """Number of booked days in a month, for the availability notice."""
        return len(self.booked_dates(year, month))

    def month_view(
        self, year: int, month: int, selected: Optional[date] = None
    ) -> List[CalendarDay]:
        """Every day of a month with its UI flags."""
        today = self._today()
        key = self._key(year, month)
        booked = self._booked.get(key, frozenset())
        spots = self._spots.get(key, {})
        return [
            CalendarDay(
                date=day,
                is_booked=day in booked,
                is_past=day < today,
                is_today=day == today,
                is_selected=day == selected,
                spots_remaining=spots.get(day),
            )
            for day in DateUtils.days_in_month(year, month)
        ]

    def _store(self, key: CacheKey, records: Iterable[AvailabilityRecord]) -> None:
        records = tuple(sorted(records, key=lambda r: r.date))
        self._records[key] = records
        self._booked[key] = frozenset(r.date for r in records if r.is_booked)
        self._spots[key] = {r.date: r.spots_remaining for r in records}

    @staticmethod
    def _parse(raw: Iterable[Dict[str, Any]], year: int, month: int) -> List[AvailabilityRecord]:
        records: List[AvailabilityRecord] = []
        seen: Set[date] = set()
        for item in raw or []:
            try:
                record = AvailabilityRecord.model_validate(item)
            except ValidationError:
                logger.warning("skipping malformed availability record", extra={"year": year, "month": month})
                continue
            if (record.date.year, record.date.month) != (year, month) or record.date in seen:
                continue
            seen.add(record.date)
            records.append(record)
        return records
