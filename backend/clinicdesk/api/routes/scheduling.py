"""Scheduling: appointments, doctor directory and pharmacist directory."""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from clinicdesk.api.deps import get_state
from clinicdesk.core.exceptions import BusinessError, ClinicError
from clinicdesk.schemas.scheduling import (
    Appointment,
    AppointmentIn,
    AppointmentStatus,
    AppointmentStatusUpdate,
    Doctor,
    Pharmacist,
    PharmacistOut,
)
from clinicdesk.services import scheduling_service
from clinicdesk.services.state import AppState

router = APIRouter()


def _appointment_view(state: AppState, appt: Appointment) -> dict:
    data = appt.model_dump(mode="json")
    data["doctor_name"] = scheduling_service.doctor_name(state, appt.doctor_id)
    return data


# ==============================================================================
# APPOINTMENTS
# ==============================================================================

@router.get("/appointments", response_model=list)
def list_appointments(
    status: Optional[AppointmentStatus] = Query(None),
    day: Optional[date] = Query(None),
    state: AppState = Depends(get_state),
):
    return [
        _appointment_view(state, a)
        for a in scheduling_service.list_appointments(state, status=status, day=day)
    ]


@router.post("/appointments", response_model=dict)
def book_appointment(body: AppointmentIn, state: AppState = Depends(get_state)):
    """Book from the patient portal. Always starts as BOOKED."""
    with state.lock:
        appt = scheduling_service.book_appointment(state, body.patient_id, body.doctor_id, body.date, body.time)
    return _appointment_view(state, appt)


@router.patch("/appointments/{appointment_id}", response_model=dict)
def update_appointment_status(
    appointment_id: str,
    body: AppointmentStatusUpdate,
    state: AppState = Depends(get_state),
):
    try:
        with state.lock:
            appt = scheduling_service.update_appointment_status(state, appointment_id, body.status)
    except ClinicError as e:
        raise BusinessError.from_domain(e)
    if appt is None:
        return {"id": appointment_id, "updated": False}
    return {**_appointment_view(state, appt), "updated": True}


# ==============================================================================
# DOCTORS
# ==============================================================================

@router.get("/doctors", response_model=List[Doctor])
def list_doctors(state: AppState = Depends(get_state)):
    return state.doctors


@router.get("/doctors/{doctor_id}/slots", response_model=List[str])
def get_slots(doctor_id: str, state: AppState = Depends(get_state)):
    if scheduling_service.get_doctor(state, doctor_id) is None:
        raise BusinessError.not_found("Doctor")
    return scheduling_service.available_slots(state, doctor_id)


@router.post("/doctors", response_model=Doctor)
def add_doctor(doctor: Doctor, state: AppState = Depends(get_state)):
    with state.lock:
        return scheduling_service.add_doctor(state, doctor)


@router.put("/doctors/{doctor_id}", response_model=dict)
def edit_doctor(doctor_id: str, doctor: Doctor, state: AppState = Depends(get_state)):
    with state.lock:
        updated = scheduling_service.edit_doctor(state, doctor_id, doctor)
    if updated is None:
        return {"id": doctor_id, "updated": False}
    return {**updated.model_dump(), "updated": True}


@router.delete("/doctors/{doctor_id}", response_model=dict)
def delete_doctor(doctor_id: str, state: AppState = Depends(get_state)):
    with state.lock:
        deleted = scheduling_service.delete_doctor(state, doctor_id)
    return {"id": doctor_id, "deleted": deleted}


# ==============================================================================
# PHARMACISTS
# ==============================================================================

@router.get("/pharmacists", response_model=List[PharmacistOut])
def list_pharmacists(state: AppState = Depends(get_state)):
    return [PharmacistOut(**p.model_dump(exclude={"password"})) for p in state.pharmacists]


@router.post("/pharmacists", response_model=PharmacistOut)
def add_pharmacist(pharmacist: Pharmacist, state: AppState = Depends(get_state)):
    with state.lock:
        created = scheduling_service.add_pharmacist(state, pharmacist)
    return PharmacistOut(**created.model_dump(exclude={"password"}))


@router.put("/pharmacists/{pharmacist_id}", response_model=dict)
def edit_pharmacist(pharmacist_id: str, pharmacist: Pharmacist, state: AppState = Depends(get_state)):
    with state.lock:
        updated = scheduling_service.edit_pharmacist(state, pharmacist_id, pharmacist)
    if updated is None:
        return {"id": pharmacist_id, "updated": False}
    return {**updated.model_dump(exclude={"password"}), "updated": True}


@router.delete("/pharmacists/{pharmacist_id}", response_model=dict)
def delete_pharmacist(pharmacist_id: str, state: AppState = Depends(get_state)):
    with state.lock:
        deleted = scheduling_service.delete_pharmacist(state, pharmacist_id)
    return {"id": pharmacist_id, "deleted": deleted}
