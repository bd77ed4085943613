from datetime import date, datetime
from enum import Enum

from core.contracts import PaymentMethodRow
from tests.fakes import FakeTransactions, make_engine


def _stats(rows, *args):
    return [(stat.method, stat.count) for stat in make_engine(FakeTransactions(payment_methods=rows)).payment_method_stats(*args)]


def test_sorted_by_count_then_name():
    rows = [
        PaymentMethodRow("WALLET", 3),
        PaymentMethodRow("CARD", 10),
        PaymentMethodRow("UPI", 3),
    ]

    assert _stats(rows) == [("CARD", 10), ("UPI", 3), ("WALLET", 3)]


def test_zero_count_methods_are_omitted():
    rows = [PaymentMethodRow("CARD", 2), PaymentMethodRow("NET_BANKING", 0)]

    assert _stats(rows) == [("CARD", 2)]


def test_enum_and_missing_methods_are_labelled():
    class Instrument(str, Enum):
        UPI = "UPI"

    rows = [
        PaymentMethodRow(Instrument.UPI, 4),
        PaymentMethodRow("UPI", 1),
        PaymentMethodRow(None, 2),
    ]

    assert _stats(rows) == [("UPI", 5), ("UNKNOWN", 2)]


def test_no_transactions_gives_empty_list():
    assert _stats([]) == []


def test_default_range_is_last_thirty_days():
    source = FakeTransactions()

    make_engine(source).payment_method_stats()

    (_, bounds), = source.calls
    assert bounds.start == datetime(2023, 12, 11)
    assert bounds.end == datetime(2024, 1, 11)


def test_explicit_range_bounds():
    source = FakeTransactions()

    make_engine(source).payment_method_stats(date(2024, 1, 1), date(2024, 1, 1))

    (_, bounds), = source.calls
    assert bounds.start == datetime(2024, 1, 1)
    assert bounds.end == datetime(2024, 1, 2)
