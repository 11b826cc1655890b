"""
Sales counter: record, edit and void sales.

The stock-sufficiency check lives here, before the ledger is called. The
ledger itself only refuses an oversell under the strict stock policy.
"""
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from clinicdesk.api.deps import get_state
from clinicdesk.core.exceptions import BusinessError, ClinicError
from clinicdesk.schemas.ledger import Sale, SaleItem, SaleUpdate
from clinicdesk.services import catalog_service, ledger_service
from clinicdesk.services.state import AppState

router = APIRouter()


class SaleRequest(BaseModel):
    items: List[SaleItem] = Field(min_length=1)


class SaleQuantity(BaseModel):
    quantity: int = Field(gt=0)


def _view(state: AppState, sale: Sale) -> dict:
    data = sale.model_dump(mode="json")
    data["medicine_name"] = catalog_service.medicine_name(state, sale.medicine_id)
    return data


def _listing(state: AppState, sales: List[Sale]) -> dict:
    return {
        "sales": [_view(state, s) for s in sales],
        "count": len(sales),
        "total_revenue": float(ledger_service.sales_total(sales)),
    }


@router.get("", response_model=dict)
def list_sales(
    day: Optional[date] = Query(None, description="Only sales on this date (YYYY-MM-DD)"),
    search: Optional[str] = Query(None, description="Medicine name contains"),
    state: AppState = Depends(get_state),
):
    """Sales history with filtered revenue total."""
    return _listing(state, ledger_service.list_sales(state, day=day, search=search))


@router.get("/today", response_model=dict)
def list_todays_sales(state: AppState = Depends(get_state)):
    return _listing(state, ledger_service.todays_sales(state))


@router.get("/{sale_id}", response_model=dict)
def get_sale(sale_id: str, state: AppState = Depends(get_state)):
    sale = ledger_service.get_sale(state, sale_id)
    if sale is None:
        raise BusinessError.not_found("Sale")
    return _view(state, sale)


@router.post("", response_model=dict)
def record_sale(request: SaleRequest, state: AppState = Depends(get_state)):
    """
    Record a basket.

    Rejected with 400 when no item is in the catalog (the counter should place
    a purchase order instead) or when any item asks for more than is in stock.
    Items for unknown medicines in an otherwise valid basket are skipped.
    """
    with state.lock:
        demand: Dict[str, int] = defaultdict(int)
        for item in request.items:
            if catalog_service.get_medicine(state, item.medicine_id) is not None:
                demand[item.medicine_id] += item.quantity

        if not demand:
            raise BusinessError.bad_request(
                "Medicine not found in inventory. Place a purchase order instead."
            )

        for medicine_id, quantity in demand.items():
            med = catalog_service.get_medicine(state, medicine_id)
            if quantity > med.stock:
                raise BusinessError.bad_request(f"Insufficient stock! Available: {med.stock}")

        try:
            created = ledger_service.record_sale(state, request.items)
        except ClinicError as e:
            raise BusinessError.from_domain(e)

    return {
        "sales": [_view(state, s) for s in created],
        "skipped": len(request.items) - len(created),
    }


@router.put("/{sale_id}", response_model=dict)
def edit_sale(sale_id: str, body: SaleQuantity, state: AppState = Depends(get_state)):
    """Change a sale's quantity. Unknown id changes nothing."""
    try:
        with state.lock:
            sale = ledger_service.edit_sale(state, SaleUpdate(id=sale_id, quantity=body.quantity))
    except ClinicError as e:
        raise BusinessError.from_domain(e)
    if sale is None:
        return {"id": sale_id, "updated": False}
    return {**_view(state, sale), "updated": True}


@router.delete("/{sale_id}", response_model=dict)
def delete_sale(sale_id: str, state: AppState = Depends(get_state)):
    """Void a sale and put its units back in stock. Unknown id changes nothing."""
    with state.lock:
        sale = ledger_service.delete_sale(state, sale_id)
    return {"id": sale_id, "deleted": sale is not None}
