"""Purchase orders to wholesalers, raised when a wanted medicine is not in the catalog."""
import logging
from datetime import date
from typing import List, Optional
from uuid import uuid4

from clinicdesk.core.audit import AuditLog
from clinicdesk.core.clock import utc_today
from clinicdesk.schemas.ledger import PurchaseOrder, PurchaseOrderStatus
from clinicdesk.services.state import AppState

logger = logging.getLogger(__name__)

DEFAULT_SUPPLIER = "Generic Wholesaler"


def place_order(
    state: AppState,
    medicine_name: str,
    quantity: int,
    supplier: str = DEFAULT_SUPPLIER,
    today: Optional[date] = None,
) -> PurchaseOrder:
    order = PurchaseOrder(
        id=f"po-{uuid4().hex[:12]}",
        medicine_name=medicine_name.strip(),
        quantity=quantity,
        supplier=supplier.strip() or DEFAULT_SUPPLIER,
        status=PurchaseOrderStatus.PENDING,
        order_date=today or utc_today(),
    )
    state.purchase_orders.append(order)
    AuditLog.log_action(
        "create", "purchase_order", order.id,
        changes={"medicine_name": order.medicine_name, "quantity": quantity, "supplier": order.supplier},
    )
    logger.info(f"Purchase order {order.id} placed: {quantity} x {order.medicine_name} from {order.supplier}")
    state.changed("purchase_orders")
    return order


def list_orders(state: AppState, status: Optional[PurchaseOrderStatus] = None) -> List[PurchaseOrder]:
    if status is None:
        return list(state.purchase_orders)
    return [o for o in state.purchase_orders if o.status == status]


def update_order_status(
    state: AppState,
    order_id: str,
    status: PurchaseOrderStatus,
) -> Optional[PurchaseOrder]:
    """Manual status change by staff. Receiving an order does not touch stock. Unknown id is a no-op."""
    for i, order in enumerate(state.purchase_orders):
        if order.id == order_id:
            state.purchase_orders[i] = order.model_copy(update={"status": status})
            AuditLog.log_action("status", "purchase_order", order_id, changes={"status": status.value})
            state.changed("purchase_orders")
            return state.purchase_orders[i]
    return None
