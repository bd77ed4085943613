"""
Every view is a pure function of the collaborator output for one call, so
repeating a call over the same rows must give equal results.
"""
from datetime import date
from decimal import Decimal

import pytest

from core.contracts import (
    DailyCombinedRow,
    DailyStatusRow,
    DailyVolumeRow,
    HourlyCombinedRow,
    HourlyStatusRow,
    PaymentMethodRow,
    SummaryAggregates,
)
from tests.fakes import FakeCombinedTransactions, FakeTransactions, FakeUsers, make_engine

JAN_1 = date(2024, 1, 1)
JAN_3 = date(2024, 1, 3)

SUMMARY = SummaryAggregates(
    total_count=9,
    success_count=5,
    pending_count=1,
    failed_count=2,
    success_amount=Decimal("512.3400"),
    failed_amount=Decimal("40.00"),
)
METHODS = [PaymentMethodRow("CARD", 4), PaymentMethodRow("UPI", 4), PaymentMethodRow(None, 1)]


def _split_source():
    return FakeTransactions(
        summary=SUMMARY,
        daily_status=[
            DailyStatusRow(JAN_1, "SUCCESS", 5),
            DailyStatusRow(JAN_1, "REFUNDED", 1),
            DailyStatusRow(JAN_3, "FAILED", 2),
        ],
        daily_volume=[DailyVolumeRow(JAN_1, "512.34", 6), DailyVolumeRow(JAN_3, "40.00", 2)],
        hourly_status=[HourlyStatusRow(8, "SUCCESS", 5), HourlyStatusRow(21, "PENDING", 1)],
        payment_methods=METHODS,
    )


def _combined_source():
    return FakeCombinedTransactions(
        summary=SUMMARY,
        daily_combined=[
            DailyCombinedRow(JAN_1, 6, "512.34", 5, 0, 0),
            DailyCombinedRow(JAN_3, 2, "40.00", 0, 2, 0),
        ],
        hourly_combined=[HourlyCombinedRow(8, 5, 0, 0), HourlyCombinedRow(21, 0, 0, 1)],
        payment_methods=METHODS,
    )


@pytest.mark.parametrize("make_source", [_split_source, _combined_source])
def test_repeated_calls_give_equal_results(make_source):
    engine = make_engine(make_source(), FakeUsers(total=12, recent=2))

    views = [
        lambda: engine.summary(),
        lambda: engine.summary_for_range(JAN_1, JAN_3),
        lambda: engine.daily_series(JAN_1, JAN_3),
        lambda: engine.hourly_series(JAN_1, JAN_3),
        lambda: engine.payment_method_stats(JAN_1, JAN_3),
    ]
    for view in views:
        assert view() == view()


@pytest.mark.parametrize(
    "success, total",
    [(0, 0), (0, 1), (1, 1), (1, 3), (2, 3), (60, 100), (999, 1000), (1, 10**9), (10**9, 10**9)],
)
def test_success_rate_stays_within_percentage_bounds(success, total):
    source = FakeTransactions(summary=SummaryAggregates(total_count=total, success_count=success))

    rate = make_engine(source).summary().success_rate_percent

    assert 0.0 <= rate <= 100.0
    if success == total and total > 0:
        assert rate == 100.0
