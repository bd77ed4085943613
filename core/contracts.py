"""
Row shapes and data-source interfaces consumed by the aggregation engine.

The engine only reads attributes off the rows it is given, so SQLAlchemy
``Row`` objects labelled with the same names satisfy these shapes as well as
the ``NamedTuple`` types below.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, NamedTuple, Optional

from core.ranges import TimeBounds


class SummaryAggregates(NamedTuple):
    total_count: Optional[int] = None
    success_count: Optional[int] = None
    pending_count: Optional[int] = None
    failed_count: Optional[int] = None
    success_amount: Optional[Decimal] = None
    failed_amount: Optional[Decimal] = None


class DailyCombinedRow(NamedTuple):
    day: Any
    transaction_count: Any
    total_amount: Any
    success_count: Any
    failed_count: Any
    pending_count: Any


class DailyStatusRow(NamedTuple):
    day: Any
    status: Any
    count: Any


class DailyVolumeRow(NamedTuple):
    day: Any
    total_amount: Any
    transaction_count: Any


class HourlyCombinedRow(NamedTuple):
    hour: Any
    success_count: Any
    failed_count: Any
    pending_count: Any


class HourlyStatusRow(NamedTuple):
    hour: Any
    status: Any
    count: Any


class PaymentMethodRow(NamedTuple):
    method: Any
    count: Any


class TransactionAggregateSource:
    """
    Interface for grouped transaction aggregates.

    ``bounds`` is a half-open timestamp interval, or ``None`` for all time.
    A source advertises which daily/hourly shape it can produce through the
    ``supports_combined_*`` flags; the engine only calls the matching fetches.
    """

    supports_combined_daily: bool = False
    supports_combined_hourly: bool = False

    def fetch_summary(self, bounds: Optional[TimeBounds]) -> Optional[SummaryAggregates]:
        raise NotImplementedError

    def fetch_daily_combined(self, bounds: TimeBounds) -> Iterable[DailyCombinedRow]:
        raise NotImplementedError

    def fetch_daily_status_counts(self, bounds: TimeBounds) -> Iterable[DailyStatusRow]:
        raise NotImplementedError

    def fetch_daily_volume(self, bounds: TimeBounds) -> Iterable[DailyVolumeRow]:
        raise NotImplementedError

    def fetch_hourly_combined(self, bounds: TimeBounds) -> Iterable[HourlyCombinedRow]:
        raise NotImplementedError

    def fetch_hourly_status_counts(self, bounds: TimeBounds) -> Iterable[HourlyStatusRow]:
        raise NotImplementedError

    def fetch_payment_methods(self, bounds: Optional[TimeBounds]) -> Iterable[PaymentMethodRow]:
        raise NotImplementedError


class UserCountSource:
    """Interface for the user counters shown on the dashboard."""

    def count_users(self) -> int:
        raise NotImplementedError

    def count_users_created_since(self, since: datetime) -> int:
        raise NotImplementedError
