"""
Dashboard figures derived from the ledger and the catalog.

Profit is revenue minus the purchase cost of the units sold, priced at the
medicine's current purchase price. A sale whose medicine was deleted adds
revenue but no cost.
"""
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from clinicdesk.core.clock import utc_today
from clinicdesk.schemas.ledger import Sale
from clinicdesk.services import catalog_service, ledger_service
from clinicdesk.services.state import AppState


def _profit(state: AppState, sales: List[Sale]) -> Decimal:
    total = Decimal("0")
    for sale in sales:
        med = catalog_service.get_medicine(state, sale.medicine_id)
        cost = med.purchase_price * sale.quantity if med else Decimal("0")
        total += sale.total_amount - cost
    return total


def summary(state: AppState, today: Optional[date] = None) -> dict:
    """Overall figures for the dashboard cards."""
    today = today or utc_today()
    todays = [s for s in state.sales if s.timestamp.date() == today]
    return {
        "total_revenue": float(ledger_service.sales_total(state.sales)),
        "total_profit": float(_profit(state, state.sales)),
        "low_stock_count": len(catalog_service.low_stock(state)),
        "out_of_stock_count": len(catalog_service.out_of_stock(state)),
        "today_appointments": sum(1 for a in state.appointments if a.date == today),
        "today_revenue": float(ledger_service.sales_total(todays)),
        "total_sales": len(state.sales),
    }


def revenue_trend(state: AppState, days: int = 7, today: Optional[date] = None) -> List[dict]:
    """
    Per-day revenue and profit for the last N days, oldest first.
    Returns: [{date: "2026-10-13", day: "Tue", revenue: 1500.0, profit: 420.0}, ...]
    """
    today = today or utc_today()
    start = today - timedelta(days=days - 1)

    by_day: Dict[date, List[Sale]] = defaultdict(list)
    for sale in state.sales:
        day = sale.timestamp.date()
        if start <= day <= today:
            by_day[day].append(sale)

    day_names = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]  # Python weekday(): 0=Mon, 6=Sun
    trend = []
    for i in range(days):
        d = start + timedelta(days=i)
        day_sales = by_day.get(d, [])
        trend.append({
            "date": d.isoformat(),
            "day": day_names[d.weekday()],
            "revenue": float(ledger_service.sales_total(day_sales)),
            "profit": float(_profit(state, day_sales)),
        })
    return trend


def sales_by_category(state: AppState, limit: int = 5) -> List[dict]:
    """Revenue per medicine category, highest first. Sales of deleted medicines are skipped."""
    totals: Dict[str, Decimal] = defaultdict(Decimal)
    for sale in state.sales:
        med = catalog_service.get_medicine(state, sale.medicine_id)
        if med:
            totals[med.category] += sale.total_amount

    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)[:limit]
    return [{"name": name, "value": float(value)} for name, value in ranked]
