"""
Analytics service: resolves the requested range, reads through the cache and
shapes engine results into response schemas.

Cached values are the aliased JSON dumps of the schemas, so a Redis hit and
an in-memory hit both rebuild identical models.
"""
import logging
from typing import Any, Callable, List, Optional

from config.settings import settings
from core.ranges import DateInput
from schemas.analytics import DailyStatus, DashboardStats, HourlyStat, PaymentStat
from service.aggregation import AnalyticsEngine
from utils.cache import CacheKeys

logger = logging.getLogger(__name__)


def _read_through(cache, key: str, compute: Callable[[], Any]) -> Any:
    return cache.get_or_compute(key, compute, settings.CACHE_TTL_SECONDS)


def _dump(model) -> dict:
    return model.model_dump(mode="json", by_alias=True)


def get_dashboard_stats(*, engine: AnalyticsEngine, cache) -> DashboardStats:
    """All-time KPIs."""
    payload = _read_through(
        cache,
        CacheKeys.SUMMARY_ALL,
        lambda: _dump(DashboardStats.from_summary(engine.summary())),
    )
    return DashboardStats.model_validate(payload)


def get_filtered_dashboard_stats(
    *,
    engine: AnalyticsEngine,
    cache,
    start: Optional[DateInput] = None,
    end: Optional[DateInput] = None,
) -> DashboardStats:
    date_range = engine.summary_range(start, end)
    key = CacheKeys.format(CacheKeys.SUMMARY_RANGE, range=date_range.cache_token())
    payload = _read_through(
        cache,
        key,
        lambda: _dump(
            DashboardStats.from_summary(engine.summary_for_range(date_range.start, date_range.end))
        ),
    )
    return DashboardStats.model_validate(payload)


def get_daily_status_stats(
    *,
    engine: AnalyticsEngine,
    cache,
    start: Optional[DateInput] = None,
    end: Optional[DateInput] = None,
) -> List[DailyStatus]:
    date_range = engine.daily_range(start, end)
    key = CacheKeys.format(CacheKeys.DAILY, range=date_range.cache_token())
    payload = _read_through(
        cache,
        key,
        lambda: [
            _dump(DailyStatus.from_bucket(bucket))
            for bucket in engine.daily_series(date_range.start, date_range.end)
        ],
    )
    logger.debug(f"Daily status series {date_range.cache_token()}: {len(payload)} buckets")
    return [DailyStatus.model_validate(item) for item in payload]


def get_hourly_traffic_stats(
    *,
    engine: AnalyticsEngine,
    cache,
    start: Optional[DateInput] = None,
    end: Optional[DateInput] = None,
) -> List[HourlyStat]:
    date_range = engine.hourly_range(start, end)
    key = CacheKeys.format(CacheKeys.HOURLY, range=date_range.cache_token())
    payload = _read_through(
        cache,
        key,
        lambda: [
            _dump(HourlyStat.from_bucket(bucket))
            for bucket in engine.hourly_series(date_range.start, date_range.end)
        ],
    )
    return [HourlyStat.model_validate(item) for item in payload]


def get_payment_method_stats(
    *,
    engine: AnalyticsEngine,
    cache,
    start: Optional[DateInput] = None,
    end: Optional[DateInput] = None,
) -> List[PaymentStat]:
    date_range = engine.payment_methods_range(start, end)
    key = CacheKeys.format(CacheKeys.PAYMENT_METHODS, range=date_range.cache_token())
    payload = _read_through(
        cache,
        key,
        lambda: [
            _dump(PaymentStat.from_stat(stat))
            for stat in engine.payment_method_stats(date_range.start, date_range.end)
        ],
    )
    return [PaymentStat.model_validate(item) for item in payload]
