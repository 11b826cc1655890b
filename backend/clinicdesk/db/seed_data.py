"""
Default collections used when a persisted key is missing or unreadable.

The catalog, doctors and pharmacists mirror the demo clinic. Demo sales are
only generated when SEED_DEMO_SALES is on, so that a fresh ledger starts empty
and stock stays consistent with the recorded sales.
"""
import random
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import List, Optional

from clinicdesk.core.clock import utc_today
from clinicdesk.core.config import settings
from clinicdesk.schemas.auth import AdminCredentials
from clinicdesk.schemas.catalog import Medicine
from clinicdesk.schemas.ledger import PurchaseOrder, Sale
from clinicdesk.schemas.scheduling import Appointment, AppointmentStatus, Doctor, Pharmacist

# (id, name, category, manufacturer, batch, expiry, purchase price, MRP, stock, threshold)
SEED_MEDICINES = [
    ("m1", "Dolo 650mg", "Analgesic", "Micro Labs", "DL-2024-X1", "2025-12-31", 18, 32, 850, 100),
    ("m2", "Pan 40", "Antacid", "Alkem", "PN-4022", "2024-10-15", 85, 155, 320, 50),
    ("m3", "Azithral 500", "Antibiotic", "Alembic", "AZ-5001", "2025-05-20", 65, 119, 150, 30),
    ("m4", "Telma 40", "Cardiac", "Glenmark", "TL-9901", "2025-06-20", 180, 245, 90, 20),
    ("m5", "Augmentin 625 Duo", "Antibiotic", "GSK", "AG-8821", "2024-08-10", 160, 224, 110, 25),
    ("m6", "Shelcal 500", "Supplements", "Torrent", "SH-1122", "2026-01-05", 95, 135, 400, 60),
    ("m7", "Montair LC", "Antihistamine", "Cipla", "MN-7721", "2025-03-12", 120, 210, 45, 20),
    ("m8", "Glycomet GP 1", "Antidiabetic", "USV", "GL-2201", "2024-11-30", 50, 102, 500, 80),
    ("m9", "Ascoril LS Syrup", "Cough Syrup", "Glenmark", "AS-9988", "2025-02-28", 90, 135, 75, 15),
    ("m10", "Becosules Capsules", "Supplements", "Pfizer", "BC-1102", "2025-09-15", 35, 55, 600, 100),
    ("m11", "Thyronorm 50mcg", "Thyroid", "Abbott", "TH-5022", "2025-07-20", 110, 168, 200, 40),
    ("m12", "Combiflam", "Analgesic", "Sanofi", "CF-2023", "2024-12-10", 25, 48, 350, 50),
    ("m13", "Allegra 120mg", "Antihistamine", "Sanofi", "AL-1201", "2026-03-01", 140, 215, 80, 20),
    ("m14", "Omez 20mg", "Antacid", "Dr. Reddy's", "OM-2021", "2025-04-15", 40, 72, 450, 60),
    ("m15", "Sinarest", "Cold & Flu", "Centaur", "SN-9090", "2025-01-30", 45, 85, 250, 50),
    ("m16", "Volini Gel", "Pain Relief", "Sun Pharma", "VL-50GM", "2026-06-30", 95, 145, 120, 25),
    ("m17", "Neurobion Forte", "Supplements", "P&G Health", "NB-2233", "2025-11-20", 28, 45, 400, 80),
    ("m18", "Betadine Ointment", "Antiseptic", "Win-Medicare", "BT-20GM", "2025-08-05", 70, 110, 90, 20),
    ("m19", "Cetzine 10mg", "Antihistamine", "GSK", "CT-1022", "2024-09-25", 12, 22, 600, 100),
    ("m20", "Ecosprin 75", "Cardiac", "USV", "EC-7521", "2025-10-10", 3, 6, 1000, 150),
]

# (id, name, specialization, availability, OPD hours)
SEED_DOCTORS = [
    ("d1", "Dr. Aarav Sharma", "Cardiology", "Mon-Fri", "09:00 AM - 01:00 PM"),
    ("d2", "Dr. Priya Patel", "Dermatology", "Tue-Sat", "10:00 AM - 02:00 PM"),
    ("d3", "Dr. Vihaan Gupta", "Pediatrics", "Mon-Sat", "04:00 PM - 08:00 PM"),
    ("d4", "Dr. Ananya Reddy", "Gynecology", "Mon-Fri", "11:00 AM - 03:00 PM"),
    ("d5", "Dr. Ishaan Kumar", "General Physician", "Daily", "08:00 AM - 09:00 PM"),
    ("d6", "Dr. Aditi Verma", "Dentist", "Mon-Sat", "02:00 PM - 07:00 PM"),
    ("d7", "Dr. Arjun Singh", "Orthopedics", "Tue-Sun", "05:00 PM - 09:00 PM"),
    ("d8", "Dr. Kavita Nair", "ENT Specialist", "Mon-Fri", "10:30 AM - 02:30 PM"),
    ("d9", "Dr. Rohan Mehta", "Neurology", "Wed-Sat", "11:00 AM - 04:00 PM"),
    ("d10", "Dr. Meera Joshi", "Endocrinology", "Mon-Thu", "09:00 AM - 12:00 PM"),
    ("d11", "Dr. Suresh Patil", "Psychiatry", "Fri-Sun", "10:00 AM - 02:00 PM"),
    ("d12", "Dr. Neha Kapoor", "Ophthalmology", "Mon-Sat", "03:00 PM - 07:00 PM"),
]

# (id, name, contact, shift, license number)
SEED_PHARMACISTS = [
    ("ph1", "Ramesh Gupta", "9876543210", "Morning (8AM - 4PM)", "DL-PH-1001"),
    ("ph2", "Sita Verma", "8765432109", "Evening (2PM - 10PM)", "DL-PH-1045"),
    ("ph3", "Vikram Singh", "7654321098", "Night (10PM - 8AM)", "DL-PH-2022"),
]


def default_medicines() -> List[Medicine]:
    return [
        Medicine(
            id=mid,
            name=name,
            category=category,
            manufacturer=manufacturer,
            batch_number=batch,
            expiry_date=date.fromisoformat(expiry),
            purchase_price=Decimal(str(cost)),
            mrp=Decimal(str(mrp)),
            stock=stock,
            threshold=threshold,
        )
        for mid, name, category, manufacturer, batch, expiry, cost, mrp, stock, threshold in SEED_MEDICINES
    ]


def default_doctors() -> List[Doctor]:
    return [
        Doctor(id=did, name=name, specialization=spec, availability=avail, opd_hours=hours)
        for did, name, spec, avail, hours in SEED_DOCTORS
    ]


def default_pharmacists() -> List[Pharmacist]:
    return [
        Pharmacist(id=pid, name=name, contact=contact, shift=shift, license_number=lic)
        for pid, name, contact, shift, lic in SEED_PHARMACISTS
    ]


def default_appointments(today: Optional[date] = None) -> List[Appointment]:
    today = today or utc_today()
    return [
        Appointment(id="a1", patient_id="Rajesh Kumar", doctor_id="d1", date=today,
                    time="10:30 AM", status=AppointmentStatus.BOOKED),
        Appointment(id="a2", patient_id="Anita Desai", doctor_id="d2", date=today,
                    time="11:15 AM", status=AppointmentStatus.CHECKED_IN),
    ]


def default_purchase_orders() -> List[PurchaseOrder]:
    return []


def default_admin_credentials() -> AdminCredentials:
    return AdminCredentials(username=settings.ADMIN_USERNAME, password=settings.ADMIN_PASSWORD)


def generate_demo_sales(
    medicines: List[Medicine],
    days: int = 7,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> List[Sale]:
    """
    5-12 random sales of 1-3 units per day at MRP, for a populated dashboard.

    Each sold quantity is taken out of the given medicines' stock, so the
    catalog and the generated history obey the same rule as the ledger.
    Medicines with no stock left are not sold.
    """
    rng = rng or random.Random()
    today = today or utc_today()
    sales: List[Sale] = []
    if not medicines:
        return sales

    for offset in range(days):
        day = today - timedelta(days=offset)
        stamp = datetime.combine(day, time(12, 0), tzinfo=timezone.utc)
        for j in range(rng.randint(5, 12)):
            med = rng.choice(medicines)
            qty = min(rng.randint(1, 3), med.stock)
            if qty <= 0:
                continue
            med.stock -= qty
            sales.append(
                Sale(
                    id=f"sale-{day.isoformat()}-{j}",
                    medicine_id=med.id,
                    quantity=qty,
                    unit_price=med.mrp,
                    total_amount=med.mrp * qty,
                    timestamp=stamp,
                )
            )
    return sales


def default_sales(medicines: Optional[List[Medicine]] = None) -> List[Sale]:
    """Empty unless SEED_DEMO_SALES is on; demo sales draw down `medicines` in place."""
    if settings.SEED_DEMO_SALES:
        return generate_demo_sales(medicines if medicines is not None else default_medicines())
    return []
