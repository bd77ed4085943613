"""
Response schemas for the analytics endpoints.

Field aliases keep the JSON names the dashboard frontend already consumes.
Decimal fields serialize as strings so no digit is lost on the way out.
"""
import datetime as dt
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from core.results import DailyBucket, DashboardSummary, HourlyBucket, PaymentMethodStat


class AnalyticsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class DashboardStats(AnalyticsModel):
    total_users: int = Field(alias="totalUsers")
    new_users_today: int = Field(alias="newUsersToday")
    total_transactions: int = Field(alias="totalTxns")
    pending_count: int = Field(alias="pendingTrxns")
    total_success_volume: Decimal = Field(alias="totalGtv")
    average_ticket_size: Decimal = Field(alias="averageTicketSize")
    total_failed_volume: Decimal = Field(alias="totalFailedVolume")
    success_rate_percent: float = Field(alias="successRate")

    @classmethod
    def from_summary(cls, summary: DashboardSummary) -> "DashboardStats":
        return cls(
            total_users=summary.total_users,
            new_users_today=summary.new_users_today,
            total_transactions=summary.total_transactions,
            pending_count=summary.pending_count,
            total_success_volume=summary.total_success_volume,
            average_ticket_size=summary.average_ticket_size,
            total_failed_volume=summary.total_failed_volume,
            success_rate_percent=summary.success_rate_percent,
        )


class DailyStatus(AnalyticsModel):
    date: dt.date
    success_count: int = Field(alias="successCount")
    failed_count: int = Field(alias="failedCount")
    pending_count: int = Field(alias="pendingCount")
    total_amount: Decimal = Field(alias="totalAmount")
    transaction_count: int = Field(alias="txnCount")

    @classmethod
    def from_bucket(cls, bucket: DailyBucket) -> "DailyStatus":
        return cls(
            date=bucket.date,
            success_count=bucket.success_count,
            failed_count=bucket.failed_count,
            pending_count=bucket.pending_count,
            total_amount=bucket.total_amount,
            transaction_count=bucket.transaction_count,
        )


class HourlyStat(AnalyticsModel):
    hour: int
    success_count: int = Field(alias="successCount")
    failed_count: int = Field(alias="failedCount")
    pending_count: int = Field(alias="pendingCount")

    @classmethod
    def from_bucket(cls, bucket: HourlyBucket) -> "HourlyStat":
        return cls(
            hour=bucket.hour,
            success_count=bucket.success_count,
            failed_count=bucket.failed_count,
            pending_count=bucket.pending_count,
        )


class PaymentStat(AnalyticsModel):
    payment_method: str = Field(alias="paymentMethod")
    count: int

    @classmethod
    def from_stat(cls, stat: PaymentMethodStat) -> "PaymentStat":
        return cls(payment_method=stat.method, count=stat.count)


DailyStatusList = List[DailyStatus]
HourlyStatList = List[HourlyStat]
PaymentStatList = List[PaymentStat]
