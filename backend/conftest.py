"""Shared fixtures: a small in-memory clinic and an in-memory SQLite repository."""
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker

from clinicdesk.core.config import settings
from clinicdesk.db.base import Base
from clinicdesk.db.session import build_engine
from clinicdesk.models import state_entry  # noqa: F401 - register models
from clinicdesk.schemas.catalog import Medicine
from clinicdesk.schemas.scheduling import Doctor, Pharmacist
from clinicdesk.services.persistence import StateRepository
from clinicdesk.services.state import AppState


def make_medicine(mid="m1", name="Dolo 650mg", stock=100, mrp="32", cost="18",
                  threshold=10, category="Analgesic", expiry=date(2030, 1, 1)):
    return Medicine(
        id=mid,
        name=name,
        category=category,
        manufacturer="Micro Labs",
        batch_number=f"B-{mid}",
        expiry_date=expiry,
        purchase_price=Decimal(cost),
        mrp=Decimal(mrp),
        stock=stock,
        threshold=threshold,
    )


@pytest.fixture(autouse=True)
def default_policies(monkeypatch):
    """Tests start from the permissive defaults regardless of the local .env."""
    monkeypatch.setattr(settings, "LEDGER_STOCK_POLICY", "permissive")
    monkeypatch.setattr(settings, "ENFORCE_APPOINTMENT_TRANSITIONS", False)
    monkeypatch.setattr(settings, "SEED_DEMO_SALES", False)


@pytest.fixture
def state():
    return AppState(
        medicines=[
            make_medicine(),
            make_medicine("m2", "Pan 40", stock=20, mrp="155", cost="85", threshold=50, category="Antacid"),
        ],
        doctors=[
            Doctor(id="d1", name="Dr. Aarav Sharma", specialization="Cardiology",
                   availability="Mon-Fri", opd_hours="09:00 AM - 01:00 PM"),
        ],
        pharmacists=[
            Pharmacist(id="ph1", name="Ramesh Gupta", contact="9876543210",
                       shift="Morning (8AM - 4PM)", license_number="DL-PH-1001",
                       username="ramesh", password="counter-1"),
        ],
    )


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def repository(session_factory):
    return StateRepository(session_factory)
