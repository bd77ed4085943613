from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from core.contracts import SummaryAggregates
from core.exceptions import RowParseError
from tests.fakes import NOW, FakeTransactions, FakeUsers, make_engine


def test_kpis_from_collaborator_aggregates(users):
    source = FakeTransactions(
        summary=SummaryAggregates(
            total_count=100,
            success_count=60,
            pending_count=10,
            failed_count=30,
            success_amount=Decimal("6000.00"),
            failed_amount=Decimal("1500.00"),
        )
    )

    summary = make_engine(source, users).summary()

    assert summary.total_transactions == 100
    assert summary.pending_count == 10
    assert summary.success_count == 60
    assert summary.failed_count == 30
    assert summary.total_success_volume == Decimal("6000.00")
    assert summary.total_failed_volume == Decimal("1500.00")
    assert summary.average_ticket_size == Decimal("100.00")
    assert summary.success_rate_percent == 60.0
    assert summary.total_users == 42
    assert summary.new_users_today == 3


def test_no_successful_transactions_gives_zero_ticket_size():
    source = FakeTransactions(
        summary=SummaryAggregates(
            total_count=4,
            success_count=0,
            pending_count=4,
            failed_count=0,
            success_amount=Decimal("0"),
            failed_amount=Decimal("0"),
        )
    )

    summary = make_engine(source).summary()

    assert summary.average_ticket_size == Decimal("0")
    assert summary.success_rate_percent == 0.0


def test_empty_ledger_has_zero_rate():
    summary = make_engine(FakeTransactions(summary=SummaryAggregates(total_count=0))).summary()

    assert summary.total_transactions == 0
    assert summary.success_rate_percent == 0.0
    assert summary.total_success_volume == Decimal("0")


def test_missing_aggregate_row_is_all_zero():
    summary = make_engine(FakeTransactions(summary=None)).summary()

    assert summary.total_transactions == 0
    assert summary.pending_count == 0
    assert summary.total_failed_volume == Decimal("0")
    assert summary.average_ticket_size == Decimal("0")


def test_ticket_size_keeps_sixteen_significant_digits():
    source = FakeTransactions(
        summary=SummaryAggregates(total_count=3, success_count=3, success_amount=Decimal("100.00"))
    )

    summary = make_engine(source).summary()

    assert summary.average_ticket_size == Decimal("33.33333333333333")


def test_unranged_summary_fetches_all_time():
    source = FakeTransactions(summary=SummaryAggregates())

    make_engine(source).summary()

    assert source.calls == [("summary", None)]


def test_ranged_summary_uses_half_open_bounds():
    source = FakeTransactions(summary=SummaryAggregates())

    make_engine(source).summary_for_range(date(2024, 1, 1), date(2024, 1, 31))

    (_, bounds), = source.calls
    assert bounds.start == datetime(2024, 1, 1)
    assert bounds.end == datetime(2024, 2, 1)


def test_ranged_summary_defaults_to_last_thirty_days():
    source = FakeTransactions(summary=SummaryAggregates())

    make_engine(source).summary_for_range()

    (_, bounds), = source.calls
    assert bounds.start == datetime(2023, 12, 11)
    assert bounds.end == datetime(2024, 1, 11)


def test_user_counters_ignore_the_range():
    users = FakeUsers(total=500, recent=7)
    engine = make_engine(FakeTransactions(summary=SummaryAggregates()), users)

    ranged = engine.summary_for_range(date(2020, 1, 1), date(2020, 1, 2))

    assert ranged.total_users == 500
    assert ranged.new_users_today == 7
    assert users.since == NOW - timedelta(days=1)


def test_negative_counter_from_collaborator_is_rejected():
    source = FakeTransactions(summary=SummaryAggregates(total_count=-1))

    with pytest.raises(RowParseError):
        make_engine(source).summary()
