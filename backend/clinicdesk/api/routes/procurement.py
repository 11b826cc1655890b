"""Purchase orders to wholesalers."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from clinicdesk.api.deps import get_state
from clinicdesk.schemas.ledger import PurchaseOrder, PurchaseOrderIn, PurchaseOrderStatus, PurchaseOrderStatusUpdate
from clinicdesk.services import procurement_service
from clinicdesk.services.state import AppState

router = APIRouter()


@router.get("", response_model=List[PurchaseOrder])
def list_orders(
    status: Optional[PurchaseOrderStatus] = Query(None),
    state: AppState = Depends(get_state),
):
    return procurement_service.list_orders(state, status)


@router.post("", response_model=dict)
def place_order(order: PurchaseOrderIn, state: AppState = Depends(get_state)):
    """Order an item that is missing from the catalog."""
    with state.lock:
        created = procurement_service.place_order(state, order.medicine_name, order.quantity, order.supplier)
    return {
        **created.model_dump(mode="json"),
        "message": f"Purchase Order Created! Item: {created.medicine_name}, Qty: {created.quantity}, "
                   f"Supplier: {created.supplier}",
    }


@router.patch("/{order_id}", response_model=dict)
def update_order_status(
    order_id: str,
    body: PurchaseOrderStatusUpdate,
    state: AppState = Depends(get_state),
):
    with state.lock:
        order = procurement_service.update_order_status(state, order_id, body.status)
    if order is None:
        return {"id": order_id, "updated": False}
    return {**order.model_dump(mode="json"), "updated": True}
