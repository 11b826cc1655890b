"""Create all tables and load the persisted state. Run on app startup."""
import logging

from clinicdesk.db.base import Base
from clinicdesk.models import state_entry  # noqa: F401 - register models
from clinicdesk.services.persistence import StateRepository
from clinicdesk.services.state import AppState

logger = logging.getLogger(__name__)


def init_db(engine, session_factory) -> AppState:
    Base.metadata.create_all(bind=engine)

    repository = StateRepository(session_factory)
    state = repository.load_state()
    logger.info(
        f"State loaded: {len(state.medicines)} medicines, {len(state.sales)} sales, "
        f"{len(state.appointments)} appointments, {len(state.purchase_orders)} purchase orders"
    )
    return state
