"""
State repository: one JSON document per collection in the app_state table.

Each key is loaded independently. A missing row, bad JSON or a schema
mismatch resets only that key to its default and never stops startup.
Writes are fire-and-forget: a failed save is logged and not retried.
"""
import json
import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clinicdesk.db import seed_data
from clinicdesk.models.state_entry import StateEntry
from clinicdesk.schemas.auth import AdminCredentials
from clinicdesk.schemas.catalog import Medicine
from clinicdesk.schemas.ledger import PurchaseOrder, Sale
from clinicdesk.schemas.scheduling import Appointment, Doctor, Pharmacist
from clinicdesk.services.state import STATE_KEYS, AppState

logger = logging.getLogger(__name__)

_ADAPTERS: Dict[str, TypeAdapter] = {
    "medicines": TypeAdapter(List[Medicine]),
    "doctors": TypeAdapter(List[Doctor]),
    "pharmacists": TypeAdapter(List[Pharmacist]),
    "sales": TypeAdapter(List[Sale]),
    "appointments": TypeAdapter(List[Appointment]),
    "purchase_orders": TypeAdapter(List[PurchaseOrder]),
    "admin_credentials": TypeAdapter(AdminCredentials),
}

_DEFAULTS: Dict[str, Callable[[], Any]] = {
    "medicines": seed_data.default_medicines,
    "doctors": seed_data.default_doctors,
    "pharmacists": seed_data.default_pharmacists,
    "sales": seed_data.default_sales,
    "appointments": seed_data.default_appointments,
    "purchase_orders": seed_data.default_purchase_orders,
    "admin_credentials": seed_data.default_admin_credentials,
}


class StateRepository:
    """Loads and saves AppState collections through a SQLAlchemy session factory."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def load_key(self, key: str, default: Optional[Callable[[], Any]] = None) -> Any:
        """Read one collection, falling back to its default on any problem."""
        adapter = _ADAPTERS[key]
        default = default or _DEFAULTS[key]
        db = self.session_factory()
        try:
            row = db.get(StateEntry, key)
            if row is None:
                logger.info(f"No stored value for '{key}', using default")
                return default()
            return adapter.validate_python(json.loads(row.value))
        except (SQLAlchemyError, json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning(f"Stored value for '{key}' unreadable ({type(e).__name__}), using default")
            return default()
        finally:
            db.close()

    def load_state(self) -> AppState:
        """Build an AppState from storage and attach the save hook to it."""
        values: Dict[str, Any] = {}
        generated: List[bool] = []

        def demo_sales() -> List[Sale]:
            # Drawn from the catalog just loaded, whose stock they reduce
            sales = seed_data.default_sales(values["medicines"])
            generated.append(bool(sales))
            return sales

        for key in STATE_KEYS:
            values[key] = self.load_key(key, demo_sales if key == "sales" else None)

        state = AppState(**values)
        self.attach(state)
        if any(generated):
            state.changed("medicines", "sales")
        return state

    def attach(self, state: AppState) -> None:
        state.on_change = lambda key: self.save(state, key)

    def save(self, state: AppState, key: str) -> bool:
        """Upsert one collection. Returns False (after logging) if the write failed."""
        adapter = _ADAPTERS[key]
        db = self.session_factory()
        try:
            payload = json.dumps(adapter.dump_python(getattr(state, key), mode="json"))
            row = db.get(StateEntry, key)
            if row is None:
                db.add(StateEntry(key=key, value=payload))
            else:
                row.value = payload
            db.commit()
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to persist '{key}': {e}")
            return False
        finally:
            db.close()

    def save_all(self, state: AppState) -> None:
        for key in STATE_KEYS:
            self.save(state, key)
