"""
Defensive coercion of collaborator cell values.

Drivers hand back dates as ``date``, ``datetime`` or ISO strings, and counts
as ``int``, ``Decimal`` (PostgreSQL ``EXTRACT``/``SUM`` results) or strings.
Anything that cannot be read raises ``RowParseError``.
"""
import math
from datetime import date, datetime
from decimal import Decimal

from core.exceptions import RowParseError


def coerce_date(value, field: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise RowParseError(field, value) from None
    raise RowParseError(field, value)


def _integral(value, field: str) -> int:
    if value is None or isinstance(value, bool):
        raise RowParseError(field, value)
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        if not value.is_finite() or value != value.to_integral_value():
            raise RowParseError(field, value)
        return int(value)
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise RowParseError(field, value)
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise RowParseError(field, value) from None
    raise RowParseError(field, value)


def coerce_count(value, field: str = "count") -> int:
    """Read a non-negative integer counter; ``None`` means no rows, i.e. zero."""
    if value is None:
        return 0
    count = _integral(value, field)
    if count < 0:
        raise RowParseError(field, value)
    return count


def coerce_hour(value) -> int:
    """Read an hour-of-day cell. Range checking is left to the caller."""
    return _integral(value, "hour")
