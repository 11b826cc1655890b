"""
Sale ledger. Keeps catalog stock consistent with the recorded sales.

Every unit sold decrements stock exactly once; edit and delete re-derive the
stock delta from the difference between the old and the new sale, so for any
medicine M, untouched by direct catalog edits:

    stock(M) + sum(quantity of live sales of M) == stock(M) before the first sale

Each operation validates first and mutates after, so a caller never observes
a half-applied basket.
"""
import logging
from collections import defaultdict
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from clinicdesk.core.audit import AuditLog
from clinicdesk.core.clock import utc_today
from clinicdesk.core.config import settings
from clinicdesk.core.exceptions import InsufficientStockError
from clinicdesk.schemas.ledger import Sale, SaleItem, SaleUpdate
from clinicdesk.services import catalog_service
from clinicdesk.services.state import AppState

logger = logging.getLogger(__name__)


class StockPolicy(str, Enum):
    """What the ledger does when a sale asks for more than is in stock."""
    PERMISSIVE = "permissive"  # sell anyway, stock may go negative
    STRICT = "strict"  # raise InsufficientStockError, change nothing


def configured_policy() -> StockPolicy:
    try:
        return StockPolicy(settings.LEDGER_STOCK_POLICY)
    except ValueError:
        logger.warning(f"Unknown LEDGER_STOCK_POLICY '{settings.LEDGER_STOCK_POLICY}', using permissive")
        return StockPolicy.PERMISSIVE


def _new_sale_id() -> str:
    return f"sale-{uuid4().hex[:12]}"


def _index_of(state: AppState, sale_id: str) -> Optional[int]:
    for i, sale in enumerate(state.sales):
        if sale.id == sale_id:
            return i
    return None


def get_sale(state: AppState, sale_id: str) -> Optional[Sale]:
    idx = _index_of(state, sale_id)
    return state.sales[idx] if idx is not None else None


def record_sale(
    state: AppState,
    items: Iterable[SaleItem],
    policy: Optional[StockPolicy] = None,
    now: Optional[datetime] = None,
) -> List[Sale]:
    """
    Record one basket. Returns the sales created, in item order.

    Items whose medicine is not in the catalog are skipped silently; the rest
    of the basket is still recorded. The unit price defaults to the
    medicine's current MRP.

    Raises:
        InsufficientStockError: only under StockPolicy.STRICT, before any change.
    """
    policy = policy or configured_policy()
    now = now or datetime.now(timezone.utc)

    resolved = []
    for item in items:
        med = catalog_service.get_medicine(state, item.medicine_id)
        if med is None:
            logger.info(f"record_sale: medicine {item.medicine_id} not in catalog, skipping item")
            continue
        resolved.append((item, med))

    if policy == StockPolicy.STRICT:
        demand: Dict[str, int] = defaultdict(int)
        for item, med in resolved:
            demand[med.id] += item.quantity
        for item, med in resolved:
            if demand[med.id] > med.stock:
                raise InsufficientStockError(med.id, demand[med.id], med.stock)

    created: List[Sale] = []
    for item, med in resolved:
        unit_price = item.unit_price if item.unit_price is not None else med.mrp
        sale = Sale(
            id=_new_sale_id(),
            medicine_id=med.id,
            quantity=item.quantity,
            unit_price=unit_price,
            total_amount=unit_price * item.quantity,
            timestamp=now,
        )
        state.sales.append(sale)
        catalog_service.adjust_stock(state, med.id, -item.quantity, persist=False)
        AuditLog.log_action(
            "create", "sale", sale.id,
            changes={"medicine_id": med.id, "quantity": sale.quantity, "total_amount": sale.total_amount},
        )
        created.append(sale)

    if created:
        state.changed("sales", "medicines")
    return created


def edit_sale(
    state: AppState,
    updated: SaleUpdate,
    policy: Optional[StockPolicy] = None,
) -> Optional[Sale]:
    """
    Change the quantity of an existing sale. Unknown id is a no-op.

    Stock moves by the quantity difference; the total is recomputed with the
    sale's original unit price. Medicine, price, timestamp and id never change.
    """
    idx = _index_of(state, updated.id)
    if idx is None:
        logger.debug(f"edit_sale: {updated.id} not found, ignoring")
        return None

    original = state.sales[idx]
    quantity_difference = updated.quantity - original.quantity

    policy = policy or configured_policy()
    if policy == StockPolicy.STRICT and quantity_difference > 0:
        med = catalog_service.get_medicine(state, original.medicine_id)
        if med is not None and quantity_difference > med.stock:
            raise InsufficientStockError(med.id, quantity_difference, med.stock)

    catalog_service.adjust_stock(state, original.medicine_id, -quantity_difference, persist=False)
    revised = original.model_copy(
        update={
            "quantity": updated.quantity,
            "total_amount": original.unit_price * updated.quantity,
        }
    )
    state.sales[idx] = revised
    AuditLog.log_action(
        "update", "sale", revised.id,
        changes={"quantity": [original.quantity, revised.quantity], "total_amount": revised.total_amount},
    )
    state.changed("sales", "medicines")
    return revised


def delete_sale(state: AppState, sale_id: str) -> Optional[Sale]:
    """Void a sale: put its quantity back in stock, then drop the record. Unknown id is a no-op."""
    idx = _index_of(state, sale_id)
    if idx is None:
        logger.debug(f"delete_sale: {sale_id} not found, ignoring")
        return None

    sale = state.sales[idx]
    catalog_service.adjust_stock(state, sale.medicine_id, sale.quantity, persist=False)
    del state.sales[idx]
    AuditLog.log_action("delete", "sale", sale.id, changes={"medicine_id": sale.medicine_id, "quantity": sale.quantity})
    state.changed("sales", "medicines")
    return sale


def list_sales(
    state: AppState,
    day: Optional[date] = None,
    search: Optional[str] = None,
) -> List[Sale]:
    """Filter by calendar day of the timestamp and by resolved medicine name."""
    sales = state.sales
    if day is not None:
        sales = [s for s in sales if s.timestamp.date() == day]
    if search:
        needle = search.lower()
        sales = [s for s in sales if needle in catalog_service.medicine_name(state, s.medicine_id).lower()]
    return list(sales)


def todays_sales(state: AppState, today: Optional[date] = None) -> List[Sale]:
    return list_sales(state, day=today or utc_today())


def recent_sales(state: AppState, limit: int = 50) -> List[Sale]:
    """Newest first."""
    return sorted(state.sales, key=lambda s: s.timestamp, reverse=True)[:limit]


def sales_total(sales: Iterable[Sale]) -> Decimal:
    return sum((s.total_amount for s in sales), Decimal("0"))
