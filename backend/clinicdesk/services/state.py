"""Process-wide application state, owned by the stores that mutate it."""
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from clinicdesk.db.seed_data import default_admin_credentials
from clinicdesk.schemas.auth import AdminCredentials
from clinicdesk.schemas.catalog import Medicine
from clinicdesk.schemas.ledger import PurchaseOrder, Sale
from clinicdesk.schemas.scheduling import Appointment, Doctor, Pharmacist

# Persistence keys; each matches an AppState attribute
STATE_KEYS = (
    "medicines",
    "doctors",
    "pharmacists",
    "sales",
    "appointments",
    "purchase_orders",
    "admin_credentials",
)


@dataclass
class AppState:
    """
    All collections of the clinic in one container.

    Single writer: the stores mutate it synchronously, one operation at a time;
    request handlers serialise their mutations with `lock`.
    After each mutation they call changed() with the affected keys so the
    persistence hook can write them out.
    """
    medicines: List[Medicine] = field(default_factory=list)
    doctors: List[Doctor] = field(default_factory=list)
    pharmacists: List[Pharmacist] = field(default_factory=list)
    sales: List[Sale] = field(default_factory=list)
    appointments: List[Appointment] = field(default_factory=list)
    purchase_orders: List[PurchaseOrder] = field(default_factory=list)
    admin_credentials: AdminCredentials = field(default_factory=default_admin_credentials)
    on_change: Optional[Callable[[str], None]] = field(default=None, repr=False, compare=False)
    # Held by the API around check-then-mutate sequences
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def changed(self, *keys: str) -> None:
        if self.on_change is None:
            return
        for key in keys:
            self.on_change(key)
