"""Ledger: stock must always move together with the sale log."""
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from clinicdesk.core.config import settings
from clinicdesk.core.exceptions import InsufficientStockError
from clinicdesk.schemas.ledger import SaleItem, SaleUpdate
from clinicdesk.services import catalog_service, ledger_service
from clinicdesk.services.ledger_service import StockPolicy


def stock_of(state, mid):
    return catalog_service.get_medicine(state, mid).stock


def test_sell_edit_void_walkthrough(state):
    """m1 at 100 units, MRP 32: sell 10, raise to 15, then void."""
    [sale] = ledger_service.record_sale(state, [SaleItem(medicine_id="m1", quantity=10)])
    assert sale.unit_price == Decimal("32")
    assert sale.total_amount == Decimal("320")
    assert stock_of(state, "m1") == 90

    edited = ledger_service.edit_sale(state, SaleUpdate(id=sale.id, quantity=15))
    assert edited.total_amount == Decimal("480")
    assert stock_of(state, "m1") == 85

    ledger_service.delete_sale(state, sale.id)
    assert stock_of(state, "m1") == 100
    assert ledger_service.get_sale(state, sale.id) is None
    assert state.sales == []


def test_price_override_is_kept_on_edit(state):
    [sale] = ledger_service.record_sale(
        state, [SaleItem(medicine_id="m1", quantity=4, unit_price=Decimal("28.50"))]
    )
    assert sale.total_amount == Decimal("114.00")

    # MRP changes later must not leak into an existing sale
    med = catalog_service.get_medicine(state, "m1")
    catalog_service.edit_medicine(state, "m1", med.model_copy(update={"mrp": Decimal("40")}))

    edited = ledger_service.edit_sale(state, SaleUpdate(id=sale.id, quantity=2))
    assert edited.unit_price == Decimal("28.50")
    assert edited.total_amount == Decimal("57.00")
    assert edited.medicine_id == sale.medicine_id
    assert edited.timestamp == sale.timestamp


def test_edit_moves_stock_by_difference(state):
    [sale] = ledger_service.record_sale(state, [SaleItem(medicine_id="m2", quantity=5)])
    before = stock_of(state, "m2")

    ledger_service.edit_sale(state, SaleUpdate(id=sale.id, quantity=2))
    assert stock_of(state, "m2") == before - (2 - 5)


def test_stock_matches_live_sales_after_mixed_operations(state):
    start = stock_of(state, "m1")
    sales = ledger_service.record_sale(state, [
        SaleItem(medicine_id="m1", quantity=3),
        SaleItem(medicine_id="m1", quantity=7),
        SaleItem(medicine_id="m2", quantity=1),
    ])
    more = ledger_service.record_sale(state, [SaleItem(medicine_id="m1", quantity=12)])

    ledger_service.edit_sale(state, SaleUpdate(id=sales[0].id, quantity=9))
    ledger_service.delete_sale(state, sales[1].id)
    ledger_service.edit_sale(state, SaleUpdate(id=more[0].id, quantity=1))

    live = sum(s.quantity for s in state.sales if s.medicine_id == "m1")
    assert stock_of(state, "m1") == start - live
    for s in state.sales:
        assert s.total_amount == s.quantity * s.unit_price


def test_unknown_medicine_is_skipped(state):
    before = [(m.id, m.stock) for m in state.medicines]

    created = ledger_service.record_sale(state, [SaleItem(medicine_id="does-not-exist", quantity=5)])

    assert created == []
    assert state.sales == []
    assert [(m.id, m.stock) for m in state.medicines] == before


def test_partial_basket_records_known_items(state):
    created = ledger_service.record_sale(state, [
        SaleItem(medicine_id="ghost", quantity=1),
        SaleItem(medicine_id="m2", quantity=2),
    ])
    assert [s.medicine_id for s in created] == ["m2"]
    assert stock_of(state, "m2") == 18


def test_double_delete_restores_once(state):
    [sale] = ledger_service.record_sale(state, [SaleItem(medicine_id="m1", quantity=10)])

    assert ledger_service.delete_sale(state, sale.id) is not None
    assert ledger_service.delete_sale(state, sale.id) is None
    assert stock_of(state, "m1") == 100


def test_edit_unknown_sale_is_noop(state):
    assert ledger_service.edit_sale(state, SaleUpdate(id="sale-missing", quantity=3)) is None
    assert stock_of(state, "m1") == 100


def test_sale_of_deleted_medicine_can_still_be_voided(state):
    [sale] = ledger_service.record_sale(state, [SaleItem(medicine_id="m2", quantity=2)])
    catalog_service.delete_medicine(state, "m2")

    assert catalog_service.medicine_name(state, sale.medicine_id) == "Unknown"
    assert ledger_service.delete_sale(state, sale.id) is not None
    assert state.sales == []


def test_permissive_policy_allows_negative_stock(state):
    ledger_service.record_sale(state, [SaleItem(medicine_id="m2", quantity=25)], policy=StockPolicy.PERMISSIVE)
    assert stock_of(state, "m2") == -5


def test_strict_policy_rejects_whole_basket(state):
    with pytest.raises(InsufficientStockError) as exc:
        ledger_service.record_sale(
            state,
            [SaleItem(medicine_id="m1", quantity=1), SaleItem(medicine_id="m2", quantity=21)],
            policy=StockPolicy.STRICT,
        )
    assert exc.value.available == 20
    assert state.sales == []
    assert stock_of(state, "m1") == 100


def test_strict_policy_counts_repeated_lines(state):
    with pytest.raises(InsufficientStockError):
        ledger_service.record_sale(
            state,
            [SaleItem(medicine_id="m2", quantity=15), SaleItem(medicine_id="m2", quantity=15)],
            policy=StockPolicy.STRICT,
        )


def test_strict_policy_on_edit(state):
    [sale] = ledger_service.record_sale(state, [SaleItem(medicine_id="m2", quantity=10)], policy=StockPolicy.STRICT)

    with pytest.raises(InsufficientStockError):
        ledger_service.edit_sale(state, SaleUpdate(id=sale.id, quantity=21), policy=StockPolicy.STRICT)
    assert ledger_service.get_sale(state, sale.id).quantity == 10
    assert stock_of(state, "m2") == 10

    # Using exactly the remaining stock is fine
    ledger_service.edit_sale(state, SaleUpdate(id=sale.id, quantity=20), policy=StockPolicy.STRICT)
    assert stock_of(state, "m2") == 0


def test_policy_comes_from_settings(state, monkeypatch):
    monkeypatch.setattr(settings, "LEDGER_STOCK_POLICY", "strict")
    with pytest.raises(InsufficientStockError):
        ledger_service.record_sale(state, [SaleItem(medicine_id="m2", quantity=99)])

    monkeypatch.setattr(settings, "LEDGER_STOCK_POLICY", "bogus")
    assert ledger_service.configured_policy() == StockPolicy.PERMISSIVE


def test_mutations_notify_persistence(state):
    touched = []
    state.on_change = touched.append

    [sale] = ledger_service.record_sale(state, [SaleItem(medicine_id="m1", quantity=1)])
    assert touched == ["sales", "medicines"]

    touched.clear()
    ledger_service.delete_sale(state, "sale-missing")
    assert touched == []

    ledger_service.delete_sale(state, sale.id)
    assert touched == ["sales", "medicines"]


def test_list_sales_filters(state):
    monday = datetime(2026, 10, 12, 9, 30, tzinfo=timezone.utc)
    tuesday = datetime(2026, 10, 13, 18, 0, tzinfo=timezone.utc)
    ledger_service.record_sale(state, [SaleItem(medicine_id="m1", quantity=1)], now=monday)
    ledger_service.record_sale(state, [SaleItem(medicine_id="m2", quantity=1)], now=tuesday)

    assert len(ledger_service.list_sales(state)) == 2
    assert [s.medicine_id for s in ledger_service.list_sales(state, day=monday.date())] == ["m1"]
    assert [s.medicine_id for s in ledger_service.list_sales(state, search="pan")] == ["m2"]
    assert ledger_service.todays_sales(state, today=tuesday.date())[0].medicine_id == "m2"
    assert ledger_service.recent_sales(state, limit=1)[0].timestamp == tuesday
    assert ledger_service.sales_total(state.sales) == Decimal("187")
