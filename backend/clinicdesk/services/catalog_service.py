"""Catalog read/update. adjust_stock is called only by the ledger service."""
import logging
from datetime import date, timedelta
from typing import List, Optional

from clinicdesk.core.audit import AuditLog
from clinicdesk.core.clock import utc_today
from clinicdesk.schemas.catalog import CatalogEntry, ExpiringMedicine, Medicine
from clinicdesk.services.state import AppState

logger = logging.getLogger(__name__)

UNKNOWN_ITEM = "Unknown"
EXPIRY_WINDOW_DAYS = 90


def _index_of(state: AppState, medicine_id: str) -> Optional[int]:
    for i, med in enumerate(state.medicines):
        if med.id == medicine_id:
            return i
    return None


def get_medicine(state: AppState, medicine_id: str) -> Optional[Medicine]:
    idx = _index_of(state, medicine_id)
    return state.medicines[idx] if idx is not None else None


def medicine_name(state: AppState, medicine_id: str) -> str:
    """Resolve a weak reference; deleted medicines read as "Unknown"."""
    med = get_medicine(state, medicine_id)
    return med.name if med else UNKNOWN_ITEM


def list_medicines(state: AppState, search: Optional[str] = None) -> List[Medicine]:
    if not search:
        return list(state.medicines)
    needle = search.lower()
    return [m for m in state.medicines if needle in m.name.lower()]


def add_medicine(state: AppState, record: Medicine) -> Medicine:
    """Insert a record. The id is caller-supplied and is not checked for uniqueness."""
    state.medicines.append(record)
    AuditLog.log_action("create", "medicine", record.id, changes={"name": record.name, "stock": record.stock})
    state.changed("medicines")
    return record


def edit_medicine(state: AppState, medicine_id: str, record: Medicine) -> Optional[Medicine]:
    """Replace the record wholesale. Unknown id is a no-op."""
    idx = _index_of(state, medicine_id)
    if idx is None:
        logger.debug(f"edit_medicine: {medicine_id} not found, ignoring")
        return None
    if record.id != medicine_id:
        record = record.model_copy(update={"id": medicine_id})
    state.medicines[idx] = record
    AuditLog.log_action("update", "medicine", medicine_id, changes={"stock": record.stock})
    state.changed("medicines")
    return record


def delete_medicine(state: AppState, medicine_id: str) -> bool:
    """Remove the record. Historical sales keep their dangling reference."""
    idx = _index_of(state, medicine_id)
    if idx is None:
        logger.debug(f"delete_medicine: {medicine_id} not found, ignoring")
        return False
    removed = state.medicines.pop(idx)
    AuditLog.log_action("delete", "medicine", medicine_id, changes={"name": removed.name})
    state.changed("medicines")
    return True


def adjust_stock(state: AppState, medicine_id: str, delta: int, persist: bool = True) -> Optional[Medicine]:
    """
    Add delta (may be negative) to the medicine's stock. Unknown id is a no-op.

    No floor is applied here: the caller decides whether the result may go
    below zero.
    """
    med = get_medicine(state, medicine_id)
    if med is None:
        return None
    med.stock = med.stock + delta
    AuditLog.log_action("adjust_stock", "medicine", medicine_id, changes={"delta": delta, "stock": med.stock})
    if persist:
        state.changed("medicines")
    return med


def low_stock(state: AppState) -> List[Medicine]:
    return [m for m in state.medicines if m.stock <= m.threshold]


def out_of_stock(state: AppState) -> List[Medicine]:
    return [m for m in state.medicines if m.stock <= 0]


def expiring_soon(
    state: AppState,
    days: int = EXPIRY_WINDOW_DAYS,
    today: Optional[date] = None,
) -> List[ExpiringMedicine]:
    """Medicines expiring before today + days, already-expired ones included, soonest first."""
    today = today or utc_today()
    cutoff = today + timedelta(days=days)
    items = sorted(
        (m for m in state.medicines if m.expiry_date < cutoff),
        key=lambda m: m.expiry_date,
    )
    return [
        ExpiringMedicine(
            id=m.id,
            name=m.name,
            expiry_date=m.expiry_date,
            days_until_expiry=(m.expiry_date - today).days,
            stock=m.stock,
        )
        for m in items
    ]


def catalog_projection(state: AppState) -> List[CatalogEntry]:
    """Name, stock and expiry only; what the insight provider is allowed to see."""
    return [CatalogEntry(name=m.name, stock=m.stock, expiry=m.expiry_date) for m in state.medicines]
