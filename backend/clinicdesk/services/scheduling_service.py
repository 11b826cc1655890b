"""Appointments, doctors and pharmacists. Plain CRUD with linear lookups."""
import logging
from datetime import date
from typing import Dict, FrozenSet, List, Optional
from uuid import uuid4

from clinicdesk.core.audit import AuditLog
from clinicdesk.core.config import settings
from clinicdesk.core.exceptions import InvalidTransitionError
from clinicdesk.schemas.scheduling import Appointment, AppointmentStatus, Doctor, Pharmacist
from clinicdesk.services.state import AppState

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

# Static OPD slots; no slot-conflict logic
DEFAULT_SLOTS = [
    "10:00 AM", "10:15 AM", "10:30 AM", "10:45 AM",
    "11:00 AM", "11:15 AM", "11:30 AM",
    "05:00 PM", "05:15 PM", "05:30 PM",
]

ALLOWED_TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    AppointmentStatus.BOOKED: frozenset({AppointmentStatus.CHECKED_IN, AppointmentStatus.CANCELLED}),
    AppointmentStatus.CHECKED_IN: frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}


def can_transition(current: AppointmentStatus, new: AppointmentStatus) -> bool:
    return current == new or new in ALLOWED_TRANSITIONS[current]


# ==============================================================================
# APPOINTMENTS
# ==============================================================================

def book_appointment(
    state: AppState,
    patient: Optional[str],
    doctor_id: str,
    day: date,
    time: str,
) -> Appointment:
    appointment = Appointment(
        id=f"apt-{uuid4().hex[:12]}",
        patient_id=(patient or "").strip() or UNKNOWN,
        doctor_id=doctor_id or "",
        date=day,
        time=time or "",
        status=AppointmentStatus.BOOKED,
    )
    state.appointments.append(appointment)
    AuditLog.log_action("create", "appointment", appointment.id, changes={"doctor_id": doctor_id, "date": day})
    state.changed("appointments")
    return appointment


def get_appointment(state: AppState, appointment_id: str) -> Optional[Appointment]:
    return next((a for a in state.appointments if a.id == appointment_id), None)


def update_appointment_status(
    state: AppState,
    appointment_id: str,
    status: AppointmentStatus,
    enforce_transitions: Optional[bool] = None,
) -> Optional[Appointment]:
    """
    Write the new status. Unknown id is a no-op.

    By default the write is unconditional. With enforce_transitions (or the
    ENFORCE_APPOINTMENT_TRANSITIONS setting) the state machine applies:
    BOOKED -> CHECKED_IN -> COMPLETED, CANCELLED from BOOKED or CHECKED_IN.
    """
    if enforce_transitions is None:
        enforce_transitions = settings.ENFORCE_APPOINTMENT_TRANSITIONS

    for i, appt in enumerate(state.appointments):
        if appt.id != appointment_id:
            continue
        if enforce_transitions and not can_transition(appt.status, status):
            raise InvalidTransitionError(appointment_id, appt.status.value, status.value)
        state.appointments[i] = appt.model_copy(update={"status": status})
        AuditLog.log_action(
            "status", "appointment", appointment_id,
            changes={"status": [appt.status.value, status.value]},
        )
        state.changed("appointments")
        return state.appointments[i]

    logger.debug(f"update_appointment_status: {appointment_id} not found, ignoring")
    return None


def list_appointments(
    state: AppState,
    status: Optional[AppointmentStatus] = None,
    day: Optional[date] = None,
) -> List[Appointment]:
    return [
        a for a in state.appointments
        if (status is None or a.status == status) and (day is None or a.date == day)
    ]


def available_slots(state: AppState, doctor_id: str) -> List[str]:
    """Static slot list for a known doctor, empty for an unknown one."""
    if get_doctor(state, doctor_id) is None:
        return []
    return list(DEFAULT_SLOTS)


# ==============================================================================
# DOCTORS
# ==============================================================================

def get_doctor(state: AppState, doctor_id: str) -> Optional[Doctor]:
    return next((d for d in state.doctors if d.id == doctor_id), None)


def doctor_name(state: AppState, doctor_id: str) -> str:
    doc = get_doctor(state, doctor_id)
    return doc.name if doc else UNKNOWN


def add_doctor(state: AppState, doctor: Doctor) -> Doctor:
    state.doctors.append(doctor)
    AuditLog.log_action("create", "doctor", doctor.id)
    state.changed("doctors")
    return doctor


def edit_doctor(state: AppState, doctor_id: str, doctor: Doctor) -> Optional[Doctor]:
    for i, existing in enumerate(state.doctors):
        if existing.id == doctor_id:
            state.doctors[i] = doctor.model_copy(update={"id": doctor_id})
            AuditLog.log_action("update", "doctor", doctor_id)
            state.changed("doctors")
            return state.doctors[i]
    return None


def delete_doctor(state: AppState, doctor_id: str) -> bool:
    before = len(state.doctors)
    state.doctors[:] = [d for d in state.doctors if d.id != doctor_id]
    if len(state.doctors) == before:
        return False
    AuditLog.log_action("delete", "doctor", doctor_id)
    state.changed("doctors")
    return True


# ==============================================================================
# PHARMACISTS
# ==============================================================================

def get_pharmacist(state: AppState, pharmacist_id: str) -> Optional[Pharmacist]:
    return next((p for p in state.pharmacists if p.id == pharmacist_id), None)


def find_pharmacist_login(state: AppState, username: str) -> Optional[Pharmacist]:
    return next((p for p in state.pharmacists if p.username and p.username == username), None)


def add_pharmacist(state: AppState, pharmacist: Pharmacist) -> Pharmacist:
    state.pharmacists.append(pharmacist)
    AuditLog.log_action("create", "pharmacist", pharmacist.id)
    state.changed("pharmacists")
    return pharmacist


def edit_pharmacist(state: AppState, pharmacist_id: str, pharmacist: Pharmacist) -> Optional[Pharmacist]:
    for i, existing in enumerate(state.pharmacists):
        if existing.id == pharmacist_id:
            state.pharmacists[i] = pharmacist.model_copy(update={"id": pharmacist_id})
            AuditLog.log_action("update", "pharmacist", pharmacist_id)
            state.changed("pharmacists")
            return state.pharmacists[i]
    return None


def delete_pharmacist(state: AppState, pharmacist_id: str) -> bool:
    before = len(state.pharmacists)
    state.pharmacists[:] = [p for p in state.pharmacists if p.id != pharmacist_id]
    if len(state.pharmacists) == before:
        return False
    AuditLog.log_action("delete", "pharmacist", pharmacist_id)
    state.changed("pharmacists")
    return True
