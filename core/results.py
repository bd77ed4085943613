from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """
    Headline KPIs for the dashboard cards.

    ``total_users``/``new_users_today`` always describe the whole user base,
    even when the transaction figures are restricted to a date range.
    """

    total_users: int
    new_users_today: int
    total_transactions: int
    pending_count: int
    total_success_volume: Decimal
    average_ticket_size: Decimal
    total_failed_volume: Decimal
    success_rate_percent: float
    success_count: int = 0
    failed_count: int = 0


@dataclass(frozen=True)
class DailyBucket:
    """
    Per-day status counts plus status-agnostic volume.

    ``transaction_count``/``total_amount`` include statuses outside the three
    named counters, so they are not required to add up.
    """

    date: date
    success_count: int
    failed_count: int
    pending_count: int
    total_amount: Decimal
    transaction_count: int


@dataclass(frozen=True)
class HourlyBucket:
    hour: int
    success_count: int
    failed_count: int
    pending_count: int


@dataclass(frozen=True)
class PaymentMethodStat:
    method: str
    count: int
