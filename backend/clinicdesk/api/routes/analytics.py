"""
Analytics API — dashboard cards and charts.

Provides aggregated data for:
- Revenue, profit, stock alerts, today's appointments
- Daily revenue/profit trend
- Revenue by medicine category
"""
from fastapi import APIRouter, Depends, Query

from clinicdesk.api.deps import get_state
from clinicdesk.services import analytics_service
from clinicdesk.services.state import AppState

router = APIRouter()


@router.get("/summary")
def get_analytics_summary(state: AppState = Depends(get_state)):
    """
    Overall figures for the dashboard cards.
    Returns: total revenue/profit, low/out-of-stock counts, today's appointments and revenue
    """
    return analytics_service.summary(state)


@router.get("/revenue-trend")
def get_revenue_trend(
    days: int = Query(7, ge=1, le=90, description="Number of days to fetch"),
    state: AppState = Depends(get_state),
):
    """Returns: [{date: "2026-10-13", day: "Tue", revenue: 1500, profit: 420}, ...]"""
    return analytics_service.revenue_trend(state, days=days)


@router.get("/categories")
def get_sales_by_category(
    limit: int = Query(5, ge=1, description="Number of top categories to return"),
    state: AppState = Depends(get_state),
):
    """Returns: [{name: "Analgesic", value: 3200}, ...]"""
    return analytics_service.sales_by_category(state, limit=limit)
