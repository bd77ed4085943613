"""
Analytics router - registers dashboard and chart endpoints.
"""
from fastapi import APIRouter

from api.controller.analytics import (
    daily_status_controller,
    dashboard_stats_controller,
    filtered_dashboard_stats_controller,
    hourly_traffic_controller,
    payment_methods_controller,
)
from schemas.analytics import DailyStatusList, DashboardStats, HourlyStatList, PaymentStatList

analytics_router = APIRouter(prefix="/dashboard", tags=["Analytics"])

analytics_router.add_api_route(
    "/stats",
    endpoint=dashboard_stats_controller,
    methods=["GET"],
    response_model=DashboardStats,
    summary="All-time dashboard KPIs",
)

analytics_router.add_api_route(
    "/stats/filtered",
    endpoint=filtered_dashboard_stats_controller,
    methods=["GET"],
    response_model=DashboardStats,
    summary="Dashboard KPIs for a date range",
)

analytics_router.add_api_route(
    "/analytics/daily",
    endpoint=daily_status_controller,
    methods=["GET"],
    response_model=DailyStatusList,
    summary="Per-day status counts and volume",
)

analytics_router.add_api_route(
    "/analytics/hourly-traffic",
    endpoint=hourly_traffic_controller,
    methods=["GET"],
    response_model=HourlyStatList,
    summary="Per-hour-of-day status counts",
)

analytics_router.add_api_route(
    "/analytics/payment-methods",
    endpoint=payment_methods_controller,
    methods=["GET"],
    response_model=PaymentStatList,
    summary="Transaction counts per payment method",
)
