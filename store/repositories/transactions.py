"""
Transaction repository: grouped aggregate queries for the analytics engine.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import Date, case, cast, extract, func
from sqlalchemy.orm import Query, Session

from config.settings import settings
from core.contracts import TransactionAggregateSource
from core.ranges import TimeBounds
from models.transaction import Transaction
from store.enums import TxnStatus
from store.repositories.base import BaseRepository


def _status_count(status: TxnStatus):
    return func.coalesce(
        func.sum(case((Transaction.status == status.value, 1), else_=0)), 0
    )


def _status_amount(status: TxnStatus):
    return func.sum(case((Transaction.status == status.value, Transaction.amount), else_=0))


class TransactionRepository(BaseRepository[Transaction], TransactionAggregateSource):
    """
    Runs the aggregate queries behind the dashboard views.

    With ``combined_queries`` (the default) each chart is one grouped query
    with conditional counts; otherwise per-status counts and volume are
    fetched separately and merged by the engine.
    """

    def __init__(self, db: Session, combined_queries: Optional[bool] = None):
        super().__init__(Transaction, db)
        if combined_queries is None:
            combined_queries = settings.USE_COMBINED_QUERIES
        self.supports_combined_daily = combined_queries
        self.supports_combined_hourly = combined_queries

    @staticmethod
    def _within(query: Query, bounds: Optional[TimeBounds]) -> Query:
        if bounds is None:
            return query
        return query.filter(
            Transaction.created_at >= bounds.start,
            Transaction.created_at < bounds.end,
        )

    # ------------------------------------------------------------------
    # Dashboard summary
    # ------------------------------------------------------------------
    def fetch_summary(self, bounds: Optional[TimeBounds]):
        query = self.db.query(
            func.count(Transaction.id).label("total_count"),
            _status_count(TxnStatus.SUCCESS).label("success_count"),
            _status_count(TxnStatus.PENDING).label("pending_count"),
            _status_count(TxnStatus.FAILED).label("failed_count"),
            _status_amount(TxnStatus.SUCCESS).label("success_amount"),
            _status_amount(TxnStatus.FAILED).label("failed_amount"),
        )
        return self._within(query, bounds).one_or_none()

    # ------------------------------------------------------------------
    # Daily series
    # ------------------------------------------------------------------
    def fetch_daily_combined(self, bounds: TimeBounds) -> List:
        day = cast(Transaction.created_at, Date)
        query = self.db.query(
            day.label("day"),
            func.count(Transaction.id).label("transaction_count"),
            func.coalesce(func.sum(Transaction.amount), 0).label("total_amount"),
            _status_count(TxnStatus.SUCCESS).label("success_count"),
            _status_count(TxnStatus.FAILED).label("failed_count"),
            _status_count(TxnStatus.PENDING).label("pending_count"),
        )
        return self._within(query, bounds).group_by(day).order_by(day).all()

    def fetch_daily_status_counts(self, bounds: TimeBounds) -> List:
        day = cast(Transaction.created_at, Date)
        query = self.db.query(
            day.label("day"),
            Transaction.status.label("status"),
            func.count(Transaction.id).label("count"),
        )
        return self._within(query, bounds).group_by(day, Transaction.status).order_by(day).all()

    def fetch_daily_volume(self, bounds: TimeBounds) -> List:
        day = cast(Transaction.created_at, Date)
        query = self.db.query(
            day.label("day"),
            func.coalesce(func.sum(Transaction.amount), 0).label("total_amount"),
            func.count(Transaction.id).label("transaction_count"),
        )
        return self._within(query, bounds).group_by(day).order_by(day).all()

    # ------------------------------------------------------------------
    # Hourly traffic
    # ------------------------------------------------------------------
    def fetch_hourly_combined(self, bounds: TimeBounds) -> List:
        hour = extract("hour", Transaction.created_at)
        query = self.db.query(
            hour.label("hour"),
            _status_count(TxnStatus.SUCCESS).label("success_count"),
            _status_count(TxnStatus.FAILED).label("failed_count"),
            _status_count(TxnStatus.PENDING).label("pending_count"),
        )
        return self._within(query, bounds).group_by(hour).order_by(hour).all()

    def fetch_hourly_status_counts(self, bounds: TimeBounds) -> List:
        hour = extract("hour", Transaction.created_at)
        query = self.db.query(
            hour.label("hour"),
            Transaction.status.label("status"),
            func.count(Transaction.id).label("count"),
        )
        return self._within(query, bounds).group_by(hour, Transaction.status).order_by(hour).all()

    # ------------------------------------------------------------------
    # Payment methods
    # ------------------------------------------------------------------
    def fetch_payment_methods(self, bounds: Optional[TimeBounds]) -> List:
        query = self.db.query(
            Transaction.payment_method.label("method"),
            func.count(Transaction.id).label("count"),
        )
        return self._within(query, bounds).group_by(Transaction.payment_method).all()
