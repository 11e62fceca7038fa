"""Record schemas for doctors, queue entries and appointments.

Records are pydantic models so the API can serialise them directly.
Managers hand out copies, never the stored instances.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from clinic_desk.state import AppointmentStatus, QueueStatus


class Doctor(BaseModel):
    """Doctor directory record."""
    id: int = Field(..., description="Unique doctor id, never reused")
    name: str
    specialization: str
    gender: str = ""
    location: str
    phone: str
    email: str
    available_slots: List[str] = Field(
        default_factory=list,
        description="Time labels in display order, e.g. '09:00 AM'"
    )
    is_active: bool = True


class QueueEntry(BaseModel):
    """Walk-in patient waiting to be seen."""
    id: int
    queue_number: int
    patient_name: str
    phone: str = ""
    status: QueueStatus = QueueStatus.WAITING
    created_at: datetime


class Appointment(BaseModel):
    """Booked appointment.

    doctor_name and specialization are copied from the doctor when the
    appointment is booked or reassigned; later doctor edits don't touch them.
    """
    id: int
    patient_name: str
    phone: str = ""
    doctor_id: int
    doctor_name: str
    specialization: str
    date: date
    time_slot: str
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
