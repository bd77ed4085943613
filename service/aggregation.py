"""
Aggregation engine: turns collaborator rows into dashboard views.

Every view is a pure function of the rows returned by the sources for one
call. Day and hour buckets are pre-filled with zeros so charts always get a
stable x-axis, and rows that land outside the bucket domain are dropped
instead of growing it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Callable, Dict, List, Optional

from core.contracts import SummaryAggregates, TransactionAggregateSource, UserCountSource
from core.decimals import ZERO, divide, percentage, to_decimal
from core.parsing import coerce_count, coerce_date, coerce_hour
from core.ranges import DateInput, DateRange, TimeBounds, resolve_range
from core.results import DailyBucket, DashboardSummary, HourlyBucket, PaymentMethodStat
from core.status import ClassifiedStatus, StatusKind, classify_status

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24
UNKNOWN_METHOD = "UNKNOWN"


@dataclass(frozen=True)
class RangeDefaults:
    """Days subtracted from the end date when a caller omits the start date."""

    summary_days: int = 30
    daily_days: int = 6
    hourly_days: int = 0
    payment_methods_days: int = 30


@dataclass
class _StatusCounts:
    success: int = 0
    failed: int = 0
    pending: int = 0

    def add(self, status: ClassifiedStatus, count: int) -> None:
        if status.kind is StatusKind.SUCCESS:
            self.success += count
        elif status.kind is StatusKind.FAILED:
            self.failed += count
        elif status.kind is StatusKind.PENDING:
            self.pending += count
        else:
            logger.debug(f"Ignoring {count} transactions with unmodelled status {status.raw!r}")


@dataclass
class _DaySlot:
    counts: _StatusCounts
    total_amount: Decimal = ZERO
    transaction_count: int = 0

    def freeze(self, day: date) -> DailyBucket:
        return DailyBucket(
            date=day,
            success_count=self.counts.success,
            failed_count=self.counts.failed,
            pending_count=self.counts.pending,
            total_amount=self.total_amount,
            transaction_count=self.transaction_count,
        )


class AnalyticsEngine:
    """
    Computes dashboard summary, daily/hourly status series and payment method
    distribution from an aggregate source and a user counter.
    """

    def __init__(
        self,
        transactions: TransactionAggregateSource,
        users: UserCountSource,
        *,
        defaults: Optional[RangeDefaults] = None,
        today: Optional[Callable[[], date]] = None,
        now: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.transactions = transactions
        self.users = users
        self.defaults = defaults or RangeDefaults()
        self.today = today or date.today
        self.now = now or datetime.now

    # ------------------------------------------------------------------
    # Range resolution
    # ------------------------------------------------------------------
    def resolve(self, start: DateInput, end: DateInput, span_days: int) -> DateRange:
        return resolve_range(start, end, span_days, today=self.today)

    def summary_range(self, start: DateInput = None, end: DateInput = None) -> DateRange:
        return self.resolve(start, end, self.defaults.summary_days)

    def daily_range(self, start: DateInput = None, end: DateInput = None) -> DateRange:
        return self.resolve(start, end, self.defaults.daily_days)

    def hourly_range(self, start: DateInput = None, end: DateInput = None) -> DateRange:
        return self.resolve(start, end, self.defaults.hourly_days)

    def payment_methods_range(self, start: DateInput = None, end: DateInput = None) -> DateRange:
        return self.resolve(start, end, self.defaults.payment_methods_days)

    # ------------------------------------------------------------------
    # Dashboard summary
    # ------------------------------------------------------------------
    def summary(self) -> DashboardSummary:
        """All-time KPIs."""
        return self._summarize(self.transactions.fetch_summary(None))

    def summary_for_range(self, start: DateInput = None, end: DateInput = None) -> DashboardSummary:
        """KPIs for the resolved range; user counters stay unfiltered."""
        date_range = self.summary_range(start, end)
        return self._summarize(self.transactions.fetch_summary(date_range.to_bounds()))

    def _summarize(self, aggregates: Optional[SummaryAggregates]) -> DashboardSummary:
        if aggregates is None:
            aggregates = SummaryAggregates()

        total = coerce_count(aggregates.total_count, "total_count")
        success = coerce_count(aggregates.success_count, "success_count")
        pending = coerce_count(aggregates.pending_count, "pending_count")
        failed = coerce_count(aggregates.failed_count, "failed_count")
        success_volume = to_decimal(aggregates.success_amount, "success_amount")
        failed_volume = to_decimal(aggregates.failed_amount, "failed_amount")

        since = self.now() - timedelta(days=1)
        total_users = coerce_count(self.users.count_users(), "total_users")
        new_users = coerce_count(self.users.count_users_created_since(since), "new_users_today")

        return DashboardSummary(
            total_users=total_users,
            new_users_today=new_users,
            total_transactions=total,
            pending_count=pending,
            total_success_volume=success_volume,
            average_ticket_size=divide(success_volume, success),
            total_failed_volume=failed_volume,
            success_rate_percent=percentage(success, total),
            success_count=success,
            failed_count=failed,
        )

    # ------------------------------------------------------------------
    # Daily status series
    # ------------------------------------------------------------------
    def daily_series(self, start: DateInput = None, end: DateInput = None) -> List[DailyBucket]:
        date_range = self.daily_range(start, end)
        slots: Dict[date, _DaySlot] = {
            day: _DaySlot(counts=_StatusCounts()) for day in date_range.days()
        }
        if not slots:
            return []

        bounds = date_range.to_bounds()
        if self.transactions.supports_combined_daily:
            self._merge_daily_combined(slots, bounds)
        else:
            self._merge_daily_split(slots, bounds)

        return [slot.freeze(day) for day, slot in slots.items()]

    def _merge_daily_combined(self, slots: Dict[date, _DaySlot], bounds: TimeBounds) -> None:
        for row in self.transactions.fetch_daily_combined(bounds):
            slot = self._slot_for(slots, row.day)
            if slot is None:
                continue
            slot.transaction_count += coerce_count(row.transaction_count, "transaction_count")
            slot.total_amount += to_decimal(row.total_amount, "total_amount")
            slot.counts.success += coerce_count(row.success_count, "success_count")
            slot.counts.failed += coerce_count(row.failed_count, "failed_count")
            slot.counts.pending += coerce_count(row.pending_count, "pending_count")

    def _merge_daily_split(self, slots: Dict[date, _DaySlot], bounds: TimeBounds) -> None:
        for row in self.transactions.fetch_daily_status_counts(bounds):
            slot = self._slot_for(slots, row.day)
            if slot is None:
                continue
            slot.counts.add(classify_status(row.status), coerce_count(row.count))

        for row in self.transactions.fetch_daily_volume(bounds):
            slot = self._slot_for(slots, row.day)
            if slot is None:
                continue
            slot.transaction_count += coerce_count(row.transaction_count, "transaction_count")
            slot.total_amount += to_decimal(row.total_amount, "total_amount")

    @staticmethod
    def _slot_for(slots: Dict[date, _DaySlot], raw_day) -> Optional[_DaySlot]:
        day = coerce_date(raw_day, "day")
        slot = slots.get(day)
        if slot is None:
            logger.debug(f"Dropping aggregate row for {day} outside the requested range")
        return slot

    # ------------------------------------------------------------------
    # Hourly traffic series
    # ------------------------------------------------------------------
    def hourly_series(self, start: DateInput = None, end: DateInput = None) -> List[HourlyBucket]:
        date_range = self.hourly_range(start, end)
        hours: Dict[int, _StatusCounts] = {hour: _StatusCounts() for hour in range(HOURS_PER_DAY)}
        bounds = date_range.to_bounds()

        if self.transactions.supports_combined_hourly:
            for row in self.transactions.fetch_hourly_combined(bounds):
                counts = self._hour_slot(hours, row.hour)
                if counts is None:
                    continue
                counts.success += coerce_count(row.success_count, "success_count")
                counts.failed += coerce_count(row.failed_count, "failed_count")
                counts.pending += coerce_count(row.pending_count, "pending_count")
        else:
            for row in self.transactions.fetch_hourly_status_counts(bounds):
                counts = self._hour_slot(hours, row.hour)
                if counts is None:
                    continue
                counts.add(classify_status(row.status), coerce_count(row.count))

        return [
            HourlyBucket(
                hour=hour,
                success_count=counts.success,
                failed_count=counts.failed,
                pending_count=counts.pending,
            )
            for hour, counts in hours.items()
        ]

    @staticmethod
    def _hour_slot(hours: Dict[int, _StatusCounts], raw_hour) -> Optional[_StatusCounts]:
        hour = coerce_hour(raw_hour)
        counts = hours.get(hour)
        if counts is None:
            logger.warning(f"Dropping aggregate row for invalid hour-of-day {hour}")
        return counts

    # ------------------------------------------------------------------
    # Payment method distribution
    # ------------------------------------------------------------------
    def payment_method_stats(
        self, start: DateInput = None, end: DateInput = None
    ) -> List[PaymentMethodStat]:
        date_range = self.payment_methods_range(start, end)
        return self._method_stats(self.transactions.fetch_payment_methods(date_range.to_bounds()))

    @staticmethod
    def _method_stats(rows) -> List[PaymentMethodStat]:
        totals: Dict[str, int] = {}
        for row in rows:
            method = row.method
            if isinstance(method, Enum):
                method = method.value
            label = UNKNOWN_METHOD if method is None else str(method)
            totals[label] = totals.get(label, 0) + coerce_count(row.count)

        return [
            PaymentMethodStat(method=method, count=count)
            for method, count in sorted(totals.items(), key=lambda item: (-item[1], item[0]))
            if count > 0
        ]
