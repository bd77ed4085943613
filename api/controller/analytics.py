"""
Analytics controller - exposes the dashboard and chart endpoints.
"""
from datetime import date
from typing import List, Optional

from fastapi import Depends, Query

from schemas.analytics import DailyStatus, DashboardStats, HourlyStat, PaymentStat
from service.aggregation import AnalyticsEngine
from service.analytics import (
    get_daily_status_stats,
    get_dashboard_stats,
    get_filtered_dashboard_stats,
    get_hourly_traffic_stats,
    get_payment_method_stats,
)
from utils.dependencies import get_analytics_cache, get_analytics_engine


def dashboard_stats_controller(
    engine: AnalyticsEngine = Depends(get_analytics_engine),
    cache=Depends(get_analytics_cache),
) -> DashboardStats:
    """All-time dashboard KPIs."""
    return get_dashboard_stats(engine=engine, cache=cache)


def filtered_dashboard_stats_controller(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
    cache=Depends(get_analytics_cache),
) -> DashboardStats:
    """Dashboard KPIs for a date range (last 30 days by default)."""
    return get_filtered_dashboard_stats(engine=engine, cache=cache, start=start_date, end=end_date)


def daily_status_controller(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
    cache=Depends(get_analytics_cache),
) -> List[DailyStatus]:
    return get_daily_status_stats(engine=engine, cache=cache, start=start_date, end=end_date)


def hourly_traffic_controller(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
    cache=Depends(get_analytics_cache),
) -> List[HourlyStat]:
    return get_hourly_traffic_stats(engine=engine, cache=cache, start=start_date, end=end_date)


def payment_methods_controller(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    engine: AnalyticsEngine = Depends(get_analytics_engine),
    cache=Depends(get_analytics_cache),
) -> List[PaymentStat]:
    return get_payment_method_stats(engine=engine, cache=cache, start=start_date, end=end_date)
