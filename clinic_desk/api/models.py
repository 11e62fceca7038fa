"""Pydantic models for API request/response validation.

Emptiness of required strings is checked by the core so it answers with the
same VALIDATION_ERROR envelope whether the caller is the API or Python code.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiResponse(BaseModel):
    """Uniform envelope returned by every endpoint."""
    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable outcome")
    data: Any = Field(None, description="Affected record(s) or figures")
    code: Optional[str] = Field(None, description="Error code when success is false")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Doctor retrieved successfully",
                "data": {"id": 1, "name": "Dr. John Smith"},
                "code": None
            }
        }
    )


class DoctorCreateRequest(BaseModel):
    """Request schema for POST /api/v1/doctors."""
    name: str = Field(..., examples=["Dr. John Smith"])
    specialization: str = Field(..., examples=["Cardiology"])
    location: str = Field(..., examples=["Floor 1, Room 101"])
    phone: str
    email: str
    gender: str = ""
    available_slots: List[str] = Field(
        default_factory=list,
        description="Slot labels; a default set is used when empty",
        examples=[["09:00 AM", "10:00 AM"]]
    )


class DoctorUpdateRequest(BaseModel):
    """Request schema for PATCH /api/v1/doctors/{id}; only sent fields change."""
    name: Optional[str] = None
    specialization: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    gender: Optional[str] = None
    available_slots: Optional[List[str]] = None

    model_config = ConfigDict(extra="forbid")


class QueueEnqueueRequest(BaseModel):
    """Request schema for POST /api/v1/queue."""
    patient_name: str = Field(..., examples=["John Doe"])
    phone: Optional[str] = None


class QueueStatusRequest(BaseModel):
    """Request schema for PATCH /api/v1/queue/{id}/status."""
    status: str = Field(..., examples=["with-doctor"])


class AppointmentCreateRequest(BaseModel):
    """Request schema for POST /api/v1/appointments."""
    patient_name: str = Field(..., examples=["Alice Johnson"])
    doctor_id: int
    date: str = Field(..., description="YYYY-MM-DD", examples=["2025-09-01"])
    time_slot: str = Field(..., examples=["09:00 AM"])
    phone: Optional[str] = None


class AppointmentUpdateRequest(BaseModel):
    """Request schema for PATCH /api/v1/appointments/{id}."""
    patient_name: Optional[str] = None
    phone: Optional[str] = None
    doctor_id: Optional[int] = None
    date: Optional[str] = None
    time_slot: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class RescheduleRequest(BaseModel):
    """Request schema for PUT /api/v1/appointments/{id}/reschedule."""
    date: str = Field(..., description="YYYY-MM-DD")
    time_slot: str
