from datetime import date, datetime

import pytest

from core.exceptions import InvalidRangeError
from core.ranges import DateRange, resolve_range

TODAY = date(2024, 1, 10)


def _today():
    return TODAY


def test_missing_end_is_today_and_start_uses_span():
    resolved = resolve_range(None, None, 6, today=_today)

    assert resolved == DateRange(date(2024, 1, 4), TODAY)
    assert resolved.day_count() == 7


def test_zero_span_resolves_to_single_day():
    resolved = resolve_range(None, None, 0, today=_today)

    assert resolved.start == resolved.end == TODAY
    assert list(resolved.days()) == [TODAY]


def test_missing_start_is_relative_to_supplied_end():
    resolved = resolve_range(None, date(2024, 3, 31), 30, today=_today)

    assert resolved.start == date(2024, 3, 1)
    assert resolved.end == date(2024, 3, 31)


def test_explicit_bounds_are_kept():
    resolved = resolve_range(date(2024, 1, 1), date(2024, 1, 3), 30, today=_today)

    assert list(resolved.days()) == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]


def test_accepts_iso_strings_and_datetimes():
    resolved = resolve_range("2024-02-01", datetime(2024, 2, 5, 23, 59), 0, today=_today)

    assert resolved == DateRange(date(2024, 2, 1), date(2024, 2, 5))


def test_blank_string_falls_back_to_default():
    resolved = resolve_range("  ", "", 1, today=_today)

    assert resolved == DateRange(date(2024, 1, 9), TODAY)


def test_unparseable_string_is_rejected():
    with pytest.raises(InvalidRangeError) as excinfo:
        resolve_range("01/02/2024", None, 0, today=_today)

    assert excinfo.value.field == "startDate"


def test_inverted_range_is_carried_through_as_empty():
    resolved = resolve_range(date(2024, 1, 5), date(2024, 1, 1), 0, today=_today)

    assert resolved.is_inverted
    assert resolved.day_count() == 0
    assert list(resolved.days()) == []


def test_bounds_are_half_open_over_whole_days():
    bounds = DateRange(date(2024, 1, 31), date(2024, 1, 31)).to_bounds()

    assert bounds.start == datetime(2024, 1, 31, 0, 0)
    assert bounds.end == datetime(2024, 2, 1, 0, 0)


def test_cache_token_is_iso_pair():
    assert DateRange(date(2024, 1, 1), date(2024, 1, 7)).cache_token() == "2024-01-01:2024-01-07"


def test_last_calendar_day_as_end_is_rejected():
    with pytest.raises(InvalidRangeError) as excinfo:
        resolve_range(date(9999, 12, 30), date(9999, 12, 31), 0, today=_today)

    assert excinfo.value.field == "endDate"


def test_default_start_before_first_calendar_day_is_rejected():
    with pytest.raises(InvalidRangeError) as excinfo:
        resolve_range(None, date(1, 1, 5), 30, today=_today)

    assert excinfo.value.field == "endDate"


def test_directly_built_range_at_calendar_end_has_no_bounds():
    with pytest.raises(InvalidRangeError):
        DateRange(date(9999, 12, 31), date(9999, 12, 31)).to_bounds()


def test_first_calendar_days_resolve_when_span_fits():
    resolved = resolve_range(None, date(1, 1, 5), 4, today=_today)

    assert resolved.start == date(1, 1, 1)
    assert resolved.to_bounds().start == datetime(1, 1, 1)
