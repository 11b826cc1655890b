from datetime import date as date_type
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AppointmentStatus(str, Enum):
    BOOKED = "BOOKED"
    CHECKED_IN = "CHECKED_IN"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Appointment(BaseModel):
    """patient_id is the patient's free-text name; doctor_id is a weak reference."""
    id: str
    patient_id: str
    doctor_id: str
    date: date_type
    time: str
    status: AppointmentStatus = AppointmentStatus.BOOKED


class AppointmentIn(BaseModel):
    patient_id: Optional[str] = None
    doctor_id: str = ""
    date: date_type
    time: str = ""


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class Doctor(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    specialization: str = ""
    availability: str = ""
    opd_hours: str = ""


class Pharmacist(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    contact: str = ""
    shift: str = ""
    license_number: str = ""
    username: Optional[str] = None
    password: Optional[str] = None


class PharmacistOut(BaseModel):
    """Pharmacist without the login password."""
    id: str
    name: str
    contact: str = ""
    shift: str = ""
    license_number: str = ""
    username: Optional[str] = None
