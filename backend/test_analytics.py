"""Dashboard figures from the ledger and the catalog."""
from datetime import date, datetime, timezone

from clinicdesk.schemas.ledger import SaleItem
from clinicdesk.schemas.scheduling import Appointment
from clinicdesk.services import analytics_service, catalog_service, ledger_service

TODAY = date(2026, 10, 19)


def _at(day, hour=10):
    return datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc)


def test_summary(state):
    ledger_service.record_sale(state, [SaleItem(medicine_id="m1", quantity=10)], now=_at(TODAY))
    ledger_service.record_sale(state, [SaleItem(medicine_id="m2", quantity=1)], now=_at(date(2026, 10, 18)))
    state.appointments.append(Appointment(id="a1", patient_id="X", doctor_id="d1", date=TODAY, time="10:00 AM"))

    s = analytics_service.summary(state, today=TODAY)

    assert s["total_revenue"] == 475.0          # 10 * 32 + 155
    assert s["total_profit"] == 210.0           # (32 - 18) * 10 + (155 - 85)
    assert s["today_revenue"] == 320.0
    assert s["today_appointments"] == 1
    assert s["low_stock_count"] == 1            # m2: 19 <= 50
    assert s["out_of_stock_count"] == 0
    assert s["total_sales"] == 2


def test_profit_ignores_cost_of_deleted_medicine(state):
    ledger_service.record_sale(state, [SaleItem(medicine_id="m1", quantity=2)], now=_at(TODAY))
    catalog_service.delete_medicine(state, "m1")

    assert analytics_service.summary(state, today=TODAY)["total_profit"] == 64.0


def test_revenue_trend_is_zero_filled(state):
    ledger_service.record_sale(state, [SaleItem(medicine_id="m1", quantity=1)], now=_at(TODAY))
    ledger_service.record_sale(state, [SaleItem(medicine_id="m1", quantity=2)], now=_at(date(2026, 10, 16)))
    ledger_service.record_sale(state, [SaleItem(medicine_id="m1", quantity=5)], now=_at(date(2026, 10, 1)))

    trend = analytics_service.revenue_trend(state, days=7, today=TODAY)

    assert len(trend) == 7
    assert trend[0]["date"] == "2026-10-13"
    assert trend[-1] == {"date": "2026-10-19", "day": "Mon", "revenue": 32.0, "profit": 14.0}
    assert trend[3]["revenue"] == 64.0
    assert sum(d["revenue"] for d in trend) == 96.0


def test_sales_by_category(state):
    ledger_service.record_sale(state, [
        SaleItem(medicine_id="m1", quantity=1),
        SaleItem(medicine_id="m2", quantity=1),
    ])
    assert analytics_service.sales_by_category(state) == [
        {"name": "Antacid", "value": 155.0},
        {"name": "Analgesic", "value": 32.0},
    ]
    assert len(analytics_service.sales_by_category(state, limit=1)) == 1
