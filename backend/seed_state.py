"""Reset the stored clinic state to the demo catalog, optionally with a week of sales."""
import sys

from clinicdesk.db import seed_data
from clinicdesk.db.base import Base
from clinicdesk.db.session import SessionLocal, engine
from clinicdesk.models import state_entry  # noqa: F401 - register models
from clinicdesk.services.persistence import StateRepository
from clinicdesk.services.state import AppState


def seed_state(with_sales: bool = False):
    Base.metadata.create_all(bind=engine)
    repository = StateRepository(SessionLocal)

    medicines = seed_data.default_medicines()
    state = AppState(
        medicines=medicines,
        doctors=seed_data.default_doctors(),
        pharmacists=seed_data.default_pharmacists(),
        sales=seed_data.generate_demo_sales(medicines) if with_sales else [],
        appointments=seed_data.default_appointments(),
        purchase_orders=seed_data.default_purchase_orders(),
        admin_credentials=seed_data.default_admin_credentials(),
    )
    repository.save_all(state)

    print(f"[OK] Stored {len(state.medicines)} medicines, {len(state.doctors)} doctors, "
          f"{len(state.pharmacists)} pharmacists, {len(state.sales)} sales")
    print("=" * 80)
    for med in state.medicines:
        print(f"  {med.id:<4} {med.name:<22} MRP: {med.mrp:>6} | Stock: {med.stock} units")


if __name__ == "__main__":
    seed_state(with_sales="--with-sales" in sys.argv)
