"""End-to-end through the HTTP API with an in-memory state and a fake insight provider."""
import pytest
from fastapi.testclient import TestClient

from clinic_ai.insight_schema import Insight
from clinicdesk.main import create_app
from clinicdesk.services.insight_service import InsightGateway


class StaticSummarizer:
    def __init__(self, insights=None, error=None):
        self.insights = insights or []
        self.error = error

    def is_available(self):
        return True

    def summarize(self, payload):
        if self.error:
            raise self.error
        return self.insights


@pytest.fixture
def client(state):
    gateway = InsightGateway(summarizer=StaticSummarizer([
        Insight(title="Stock up on Dolo", description="Fever season.", type="OPPORTUNITY", confidence=0.7),
    ]))
    with TestClient(create_app(state=state, gateway=gateway)) as c:
        yield c


def _stock(client, mid):
    return client.get(f"/records/medicines/{mid}").json()["stock"]


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_sale_lifecycle(client):
    resp = client.post("/sales", json={"items": [{"medicine_id": "m1", "quantity": 10}]})
    assert resp.status_code == 200
    sale = resp.json()["sales"][0]
    assert sale["medicine_name"] == "Dolo 650mg"
    assert float(sale["total_amount"]) == 320
    assert _stock(client, "m1") == 90

    resp = client.put(f"/sales/{sale['id']}", json={"quantity": 15})
    assert resp.json()["updated"] is True
    assert float(resp.json()["total_amount"]) == 480
    assert _stock(client, "m1") == 85

    assert client.delete(f"/sales/{sale['id']}").json()["deleted"] is True
    assert client.delete(f"/sales/{sale['id']}").json()["deleted"] is False
    assert _stock(client, "m1") == 100
    assert client.get(f"/sales/{sale['id']}").status_code == 404


def test_sale_blocked_when_stock_insufficient(client):
    resp = client.post("/sales", json={"items": [{"medicine_id": "m2", "quantity": 21}]})

    assert resp.status_code == 400
    assert "Available: 20" in resp.json()["detail"]
    assert _stock(client, "m2") == 20


def test_sale_of_uncatalogued_medicine_suggests_order(client):
    resp = client.post("/sales", json={"items": [{"medicine_id": "ghost", "quantity": 1}]})
    assert resp.status_code == 400
    assert "purchase order" in resp.json()["detail"]

    order = client.post("/purchase-orders", json={"medicine_name": "Ghost 10mg", "quantity": 50})
    assert order.json()["status"] == "PENDING"
    assert order.json()["supplier"] == "Generic Wholesaler"

    patched = client.patch(f"/purchase-orders/{order.json()['id']}", json={"status": "ORDERED"})
    assert patched.json()["status"] == "ORDERED"
    assert len(client.get("/purchase-orders", params={"status": "ORDERED"}).json()) == 1


def test_invalid_quantity_rejected(client):
    assert client.post("/sales", json={"items": [{"medicine_id": "m1", "quantity": 0}]}).status_code == 422
    assert client.post("/sales", json={"items": []}).status_code == 422


def test_medicine_crud(client):
    body = {
        "id": "m9", "name": "Ascoril LS Syrup", "category": "Cough Syrup",
        "expiry_date": "2027-02-28", "purchase_price": "90", "mrp": "135",
        "stock": 75, "threshold": 15,
    }
    assert client.post("/records/medicines", json=body).status_code == 200
    assert client.post("/records/medicines", json={**body, "stock": -1}).status_code == 422

    resp = client.put("/records/medicines/m9", json={**body, "stock": 10})
    assert resp.json()["status"] == "Low Stock"

    assert client.put("/records/medicines/missing", json=body).json()["updated"] is False
    assert client.delete("/records/medicines/m9").json()["deleted"] is True
    assert client.get("/records/medicines/m9").status_code == 404


def test_deleted_medicine_reads_unknown_in_history(client):
    client.post("/sales", json={"items": [{"medicine_id": "m2", "quantity": 1}]})
    client.delete("/records/medicines/m2")

    history = client.get("/sales").json()
    assert history["sales"][0]["medicine_name"] == "Unknown"
    assert history["total_revenue"] == 155.0


def test_appointments(client):
    appt = client.post("/scheduling/appointments", json={
        "patient_id": "Rajesh Kumar", "doctor_id": "d1", "date": "2026-10-19", "time": "10:30 AM",
    }).json()
    assert appt["status"] == "BOOKED"
    assert appt["doctor_name"] == "Dr. Aarav Sharma"

    resp = client.patch(f"/scheduling/appointments/{appt['id']}", json={"status": "CHECKED_IN"})
    assert resp.json()["status"] == "CHECKED_IN"

    listed = client.get("/scheduling/appointments", params={"status": "CHECKED_IN"}).json()
    assert [a["id"] for a in listed] == [appt["id"]]
    assert client.get("/scheduling/doctors/d1/slots").json()[0] == "10:00 AM"
    assert client.get("/scheduling/doctors/zz/slots").status_code == 404


def test_enforced_transition_returns_conflict(client, monkeypatch):
    from clinicdesk.core.config import settings

    monkeypatch.setattr(settings, "ENFORCE_APPOINTMENT_TRANSITIONS", True)
    appt = client.post("/scheduling/appointments", json={"doctor_id": "d1", "date": "2026-10-19"}).json()
    assert appt["patient_id"] == "Unknown"

    resp = client.patch(f"/scheduling/appointments/{appt['id']}", json={"status": "COMPLETED"})
    assert resp.status_code == 409


def test_pharmacist_listing_hides_password(client):
    listed = client.get("/scheduling/pharmacists").json()
    assert listed[0]["username"] == "ramesh"
    assert "password" not in listed[0]


def test_login_gate(client):
    ok = client.post("/auth/login", json={"username": "admin", "password": "admin123", "role": "ADMIN"})
    assert ok.status_code == 200
    assert ok.json()["role"] == "ADMIN"

    assert client.post("/auth/login", json={"username": "admin", "password": "nope"}).status_code == 401

    ph = client.post("/auth/login", json={"username": "ramesh", "password": "counter-1", "role": "PHARMACIST"})
    assert ph.json()["name"] == "Ramesh Gupta"
    assert client.post(
        "/auth/login", json={"username": "ramesh", "password": "x", "role": "PHARMACIST"}
    ).status_code == 401


def test_analytics_endpoints(client):
    client.post("/sales", json={"items": [{"medicine_id": "m1", "quantity": 2}]})

    summary = client.get("/analytics/summary").json()
    assert summary["total_revenue"] == 64.0
    assert summary["today_revenue"] == 64.0
    assert len(client.get("/analytics/revenue-trend").json()) == 7
    assert client.get("/analytics/categories").json()[0]["name"] == "Analgesic"


def test_insights(client):
    insights = client.get("/insights").json()
    assert insights[0]["type"] == "OPPORTUNITY"


def test_insights_failure_is_empty(state):
    gateway = InsightGateway(summarizer=StaticSummarizer(error=RuntimeError("provider down")))
    with TestClient(create_app(state=state, gateway=gateway)) as c:
        resp = c.get("/insights")
    assert resp.status_code == 200
    assert resp.json() == []
