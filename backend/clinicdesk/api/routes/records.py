"""Records: medicine catalog CRUD and stock alerts for the inventory screen."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from clinicdesk.api.deps import get_state
from clinicdesk.core.exceptions import BusinessError
from clinicdesk.schemas.catalog import ExpiringMedicine, Medicine, MedicineIn
from clinicdesk.services import catalog_service
from clinicdesk.services.state import AppState

router = APIRouter()


def _with_status(med: Medicine) -> dict:
    data = med.model_dump(mode="json")
    if med.stock <= 0:
        data["status"] = "Out of Stock"
    elif med.stock <= med.threshold:
        data["status"] = "Low Stock"
    else:
        data["status"] = "In Stock"
    return data


@router.get("/medicines", response_model=list)
def list_medicines(
    search: Optional[str] = Query(None),
    state: AppState = Depends(get_state),
):
    """Catalog with stock status, optional name search."""
    return [_with_status(m) for m in catalog_service.list_medicines(state, search)]


# ==============================================================================
# STOCK ALERTS
# ==============================================================================

@router.get("/medicines/low-stock", response_model=list)
def get_low_stock(state: AppState = Depends(get_state)):
    """Medicines at or below their reorder threshold."""
    items = sorted(catalog_service.low_stock(state), key=lambda m: m.stock)
    return [_with_status(m) for m in items]


@router.get("/medicines/expiring", response_model=List[ExpiringMedicine])
def get_expiring(
    days: int = Query(catalog_service.EXPIRY_WINDOW_DAYS, ge=0, description="Alert for items expiring within N days"),
    state: AppState = Depends(get_state),
):
    return catalog_service.expiring_soon(state, days=days)


@router.get("/medicines/{medicine_id}", response_model=dict)
def get_medicine(medicine_id: str, state: AppState = Depends(get_state)):
    med = catalog_service.get_medicine(state, medicine_id)
    if med is None:
        raise BusinessError.not_found("Medicine")
    return _with_status(med)


# ==============================================================================
# CATALOG CRUD
# ==============================================================================

@router.post("/medicines", response_model=dict)
def create_medicine(item: MedicineIn, state: AppState = Depends(get_state)):
    """Add a new medicine. Prices, stock and threshold are validated non-negative."""
    with state.lock:
        med = catalog_service.add_medicine(state, item.to_record())
    return {**_with_status(med), "message": f"Added {med.name} to inventory"}


@router.put("/medicines/{medicine_id}", response_model=dict)
def replace_medicine(medicine_id: str, item: MedicineIn, state: AppState = Depends(get_state)):
    """Replace a medicine wholesale. Unknown id changes nothing."""
    with state.lock:
        med = catalog_service.edit_medicine(state, medicine_id, item.to_record())
    if med is None:
        return {"id": medicine_id, "updated": False}
    return {**_with_status(med), "updated": True, "message": f"Updated {med.name}"}


@router.delete("/medicines/{medicine_id}", response_model=dict)
def delete_medicine(medicine_id: str, state: AppState = Depends(get_state)):
    """Delete a medicine. Past sales keep pointing at it and read as "Unknown"."""
    with state.lock:
        deleted = catalog_service.delete_medicine(state, medicine_id)
    return {"id": medicine_id, "deleted": deleted}
