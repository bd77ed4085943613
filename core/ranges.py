"""
Range resolution shared by every analytics view.

A ``DateRange`` is inclusive on both ends at calendar-day granularity. The data
layer receives it as the half-open timestamp interval
``[start 00:00, end + 1 day 00:00)``.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterator, Optional, Union

from core.exceptions import InvalidRangeError

logger = logging.getLogger(__name__)

DateInput = Union[date, datetime, str, None]
OUT_OF_RANGE = "leaves no room for the range within the supported calendar"


@dataclass(frozen=True)
class TimeBounds:
    """Half-open ``[start, end)`` timestamp interval."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    @property
    def is_inverted(self) -> bool:
        return self.start > self.end

    def day_count(self) -> int:
        return max((self.end - self.start).days + 1, 0)

    def days(self) -> Iterator[date]:
        for offset in range(self.day_count()):
            yield self.start + timedelta(days=offset)

    def to_bounds(self) -> TimeBounds:
        try:
            next_day = self.end + timedelta(days=1)
        except OverflowError:
            raise InvalidRangeError("endDate", self.end, OUT_OF_RANGE) from None
        return TimeBounds(
            start=datetime.combine(self.start, time.min),
            end=datetime.combine(next_day, time.min),
        )

    def cache_token(self) -> str:
        return f"{self.start.isoformat()}:{self.end.isoformat()}"


def _as_date(value: DateInput, field: str) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            raise InvalidRangeError(field, value) from None
    raise InvalidRangeError(field, value)


def resolve_range(
    start: DateInput = None,
    end: DateInput = None,
    default_span_days: int = 0,
    *,
    today: Optional[Callable[[], date]] = None,
) -> DateRange:
    """
    Turn optional caller boundaries into a concrete inclusive range.

    A missing ``end`` is today; a missing ``start`` is ``end`` minus the
    default span. An inverted range is returned as-is and matches no rows.
    """
    resolved_end = _as_date(end, "endDate")
    if resolved_end is None:
        resolved_end = (today or date.today)()

    resolved_start = _as_date(start, "startDate")
    if resolved_start is None:
        try:
            resolved_start = resolved_end - timedelta(days=default_span_days)
        except OverflowError:
            raise InvalidRangeError("endDate", resolved_end, OUT_OF_RANGE) from None

    date_range = DateRange(start=resolved_start, end=resolved_end)
    # raises InvalidRangeError when end is the last representable day
    date_range.to_bounds()
    if date_range.is_inverted:
        logger.info(
            f"Inverted range {date_range.cache_token()} requested; treating as empty"
        )
    return date_range
