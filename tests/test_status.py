from enum import Enum

import pytest

from core.contracts import DailyCombinedRow, DailyStatusRow, DailyVolumeRow
from core.status import StatusKind, classify_status
from store.enums import TxnStatus
from tests.fakes import FakeCombinedTransactions, FakeTransactions, make_engine


@pytest.mark.parametrize(
    "raw, kind",
    [
        ("SUCCESS", StatusKind.SUCCESS),
        ("PENDING", StatusKind.PENDING),
        ("FAILED", StatusKind.FAILED),
        (TxnStatus.FAILED, StatusKind.FAILED),
    ],
)
def test_modelled_statuses(raw, kind):
    assert classify_status(raw).kind is kind


@pytest.mark.parametrize("raw", ["REFUNDED", "", None, "success", " SUCCESS "])
def test_unmodelled_status_keeps_raw_value(raw):
    status = classify_status(raw)

    assert status.kind is StatusKind.UNKNOWN
    assert status.raw == ("" if raw is None else raw)


def test_other_enums_are_read_by_value():
    class DriverStatus(str, Enum):
        DONE = "SUCCESS"

    assert classify_status(DriverStatus.DONE).kind is StatusKind.SUCCESS


def test_case_variants_count_the_same_in_both_query_shapes():
    day = "2024-01-02"
    # a combined query compares status exactly, so only "SUCCESS" is counted
    combined = FakeCombinedTransactions(
        daily_combined=[DailyCombinedRow(day, 3, "30.00", 1, 0, 0)]
    )
    split = FakeTransactions(
        daily_status=[
            DailyStatusRow(day, "SUCCESS", 1),
            DailyStatusRow(day, "success", 1),
            DailyStatusRow(day, " SUCCESS ", 1),
        ],
        daily_volume=[DailyVolumeRow(day, "30.00", 3)],
    )

    assert make_engine(split).daily_series(day, day) == make_engine(combined).daily_series(day, day)
