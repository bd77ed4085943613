from datetime import date, datetime
from decimal import Decimal

import pytest

from core.exceptions import RowParseError
from core.parsing import coerce_count, coerce_date, coerce_hour


def test_coerce_date_accepts_driver_shapes():
    assert coerce_date(date(2024, 1, 2)) == date(2024, 1, 2)
    assert coerce_date(datetime(2024, 1, 2, 13, 5)) == date(2024, 1, 2)
    assert coerce_date("2024-01-02") == date(2024, 1, 2)
    assert coerce_date("2024-01-02T08:00:00") == date(2024, 1, 2)


def test_coerce_date_rejects_garbage():
    with pytest.raises(RowParseError) as excinfo:
        coerce_date("yesterday", "day")

    assert excinfo.value.field == "day"


def test_coerce_count_handles_numeric_driver_types():
    assert coerce_count(None) == 0
    assert coerce_count(5) == 5
    assert coerce_count(Decimal("5")) == 5
    assert coerce_count(5.0) == 5
    assert coerce_count("5") == 5


@pytest.mark.parametrize("bad", [-1, Decimal("2.5"), 2.5, float("nan"), "five", True])
def test_coerce_count_rejects_invalid_counters(bad):
    with pytest.raises(RowParseError):
        coerce_count(bad)


def test_coerce_hour_reads_extract_results():
    assert coerce_hour(Decimal("13")) == 13
    assert coerce_hour(7.0) == 7


def test_coerce_hour_does_not_range_check():
    assert coerce_hour(24) == 24
