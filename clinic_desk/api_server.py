"""FastAPI server for the clinic front desk.

Features:
- Uniform {success, message, data, code} envelope on every response
- Core errors mapped to HTTP status codes by exception handlers
- Request ids and structured logging; unexpected errors become 500 envelopes
  inside the request-id middleware so they keep their id
- CORS for the dashboard front-end

Usage:
    uvicorn clinic_desk.api_server:app --port 8000
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clinic_desk import __version__, config
from clinic_desk.api.dependencies import get_front_desk
from clinic_desk.api.models import (
    ApiResponse,
    AppointmentCreateRequest,
    AppointmentUpdateRequest,
    DoctorCreateRequest,
    DoctorUpdateRequest,
    QueueEnqueueRequest,
    QueueStatusRequest,
    RescheduleRequest,
)
from clinic_desk.appointments import AppointmentFilter
from clinic_desk.doctors import DoctorFilter
from clinic_desk.errors import ClinicError
from clinic_desk.front_desk import FrontDesk
from clinic_desk.logging_config import RequestIDMiddleware, get_logger, setup_structured_logging
from clinic_desk.state import AppointmentStatus

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown logic."""
    setup_structured_logging(config.LOG_LEVEL)
    logger.info("server_starting", version=__version__, seed_demo_data=config.SEED_DEMO_DATA)
    yield
    logger.info("server_stopping")


app = FastAPI(
    title="Clinic Front Desk API",
    description="Doctors, walk-in queue, appointments and dashboard figures",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(RequestIDMiddleware)


def ok(data=None, message: str = "Success") -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data)


# Global exception handlers
@app.exception_handler(ClinicError)
async def clinic_error_handler(request: Request, exc: ClinicError):
    """Turn core errors into error envelopes."""
    logger.warning("request_rejected", code=exc.code, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse(success=False, message=exc.message, code=exc.code).model_dump()
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors consistently."""
    logger.warning("request_invalid", errors=str(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ApiResponse(
            success=False,
            message="Validation Error",
            data=str(exc.errors()),
            code="VALIDATION_ERROR"
        ).model_dump()
    )


@app.get("/health", tags=["Health"])
def health_check(desk: FrontDesk = Depends(get_front_desk)):
    """Health check endpoint for load balancers."""
    return {
        "status": "healthy",
        "service": "clinic-front-desk-api",
        "version": __version__,
        "doctors": len(desk.store.doctors),
        "queue_entries": len(desk.store.queue),
        "appointments": len(desk.store.appointments),
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API info."""
    return {
        "message": "Clinic Front Desk API",
        "docs": "/docs",
        "health": "/health"
    }


# ----------------------------- Doctors -----------------------------
@app.get("/api/v1/doctors", tags=["Doctors"], response_model=ApiResponse)
def list_doctors(
    search: Optional[str] = None,
    specialization: Optional[str] = None,
    location: Optional[str] = None,
    desk: FrontDesk = Depends(get_front_desk),
):
    doctors = desk.doctors.list(
        DoctorFilter(specialization=specialization, location=location, search=search)
    )
    return ok(doctors, "Doctors retrieved successfully")


@app.get("/api/v1/doctors/{doctor_id}", tags=["Doctors"], response_model=ApiResponse)
def get_doctor(doctor_id: int, desk: FrontDesk = Depends(get_front_desk)):
    return ok(desk.doctors.get(doctor_id), "Doctor retrieved successfully")


@app.get("/api/v1/doctors/{doctor_id}/slots", tags=["Doctors"], response_model=ApiResponse)
def get_doctor_slots(doctor_id: int, desk: FrontDesk = Depends(get_front_desk)):
    return ok(desk.doctors.available_slots(doctor_id), "Available slots retrieved successfully")


@app.post(
    "/api/v1/doctors",
    tags=["Doctors"],
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_doctor(request: DoctorCreateRequest, desk: FrontDesk = Depends(get_front_desk)):
    doctor = desk.doctors.create(**request.model_dump())
    return ok(doctor, "Doctor created successfully")


@app.patch("/api/v1/doctors/{doctor_id}", tags=["Doctors"], response_model=ApiResponse)
def update_doctor(
    doctor_id: int,
    request: DoctorUpdateRequest,
    desk: FrontDesk = Depends(get_front_desk),
):
    doctor = desk.doctors.update(doctor_id, **request.model_dump(exclude_unset=True))
    return ok(doctor, "Doctor updated successfully")


@app.delete("/api/v1/doctors/{doctor_id}", tags=["Doctors"], response_model=ApiResponse)
def delete_doctor(doctor_id: int, desk: FrontDesk = Depends(get_front_desk)):
    """Soft delete: the doctor stays listed with is_active false."""
    return ok(desk.doctors.soft_delete(doctor_id), "Doctor deleted successfully")


# ----------------------------- Walk-in queue -----------------------------
@app.get("/api/v1/queue", tags=["Queue"], response_model=ApiResponse)
def get_current_queue(desk: FrontDesk = Depends(get_front_desk)):
    return ok(desk.queue.list_current(), "Current queue retrieved successfully")


@app.get("/api/v1/queue/stats", tags=["Queue"], response_model=ApiResponse)
def get_queue_stats(desk: FrontDesk = Depends(get_front_desk)):
    return ok(desk.stats.queue_stats(), "Queue stats retrieved successfully")


@app.post(
    "/api/v1/queue",
    tags=["Queue"],
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_to_queue(request: QueueEnqueueRequest, desk: FrontDesk = Depends(get_front_desk)):
    entry = desk.queue.enqueue(request.patient_name, request.phone)
    return ok(entry, "Patient added to queue successfully")


@app.patch("/api/v1/queue/{entry_id}/status", tags=["Queue"], response_model=ApiResponse)
def update_queue_status(
    entry_id: int,
    request: QueueStatusRequest,
    desk: FrontDesk = Depends(get_front_desk),
):
    entry = desk.queue.advance(entry_id, request.status)
    return ok(entry, "Queue status updated successfully")


@app.delete("/api/v1/queue/{entry_id}", tags=["Queue"], response_model=ApiResponse)
def remove_from_queue(entry_id: int, desk: FrontDesk = Depends(get_front_desk)):
    desk.queue.remove(entry_id)
    return ok(None, "Patient removed from queue successfully")


# ----------------------------- Appointments -----------------------------
@app.get("/api/v1/appointments", tags=["Appointments"], response_model=ApiResponse)
def list_appointments(
    search: Optional[str] = None,
    doctor_id: Optional[int] = None,
    date: Optional[str] = None,
    status: Optional[AppointmentStatus] = None,
    desk: FrontDesk = Depends(get_front_desk),
):
    appointments = desk.appointments.list(
        AppointmentFilter(search=search, doctor_id=doctor_id, date=date, status=status)
    )
    return ok(appointments, "Appointments retrieved successfully")


@app.get("/api/v1/appointments/today", tags=["Appointments"], response_model=ApiResponse)
def list_todays_appointments(desk: FrontDesk = Depends(get_front_desk)):
    return ok(desk.appointments.today(), "Today's appointments retrieved successfully")


@app.get("/api/v1/appointments/stats", tags=["Appointments"], response_model=ApiResponse)
def get_appointment_stats(desk: FrontDesk = Depends(get_front_desk)):
    return ok(desk.stats.appointment_stats(), "Appointment stats retrieved successfully")


@app.get("/api/v1/appointments/{appointment_id}", tags=["Appointments"], response_model=ApiResponse)
def get_appointment(appointment_id: int, desk: FrontDesk = Depends(get_front_desk)):
    return ok(desk.appointments.get(appointment_id), "Appointment retrieved successfully")


@app.post(
    "/api/v1/appointments",
    tags=["Appointments"],
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
)
def book_appointment(request: AppointmentCreateRequest, desk: FrontDesk = Depends(get_front_desk)):
    appointment = desk.appointments.book(
        patient_name=request.patient_name,
        doctor_id=request.doctor_id,
        date=request.date,
        time_slot=request.time_slot,
        phone=request.phone,
    )
    return ok(appointment, "Appointment created successfully")


@app.patch("/api/v1/appointments/{appointment_id}", tags=["Appointments"], response_model=ApiResponse)
def update_appointment(
    appointment_id: int,
    request: AppointmentUpdateRequest,
    desk: FrontDesk = Depends(get_front_desk),
):
    appointment = desk.appointments.update(appointment_id, **request.model_dump(exclude_unset=True))
    return ok(appointment, "Appointment updated successfully")


@app.put(
    "/api/v1/appointments/{appointment_id}/reschedule",
    tags=["Appointments"],
    response_model=ApiResponse,
)
def reschedule_appointment(
    appointment_id: int,
    request: RescheduleRequest,
    desk: FrontDesk = Depends(get_front_desk),
):
    appointment = desk.appointments.reschedule(appointment_id, request.date, request.time_slot)
    return ok(appointment, f"Appointment {appointment_id} has been rescheduled")


@app.post(
    "/api/v1/appointments/{appointment_id}/complete",
    tags=["Appointments"],
    response_model=ApiResponse,
)
def complete_appointment(appointment_id: int, desk: FrontDesk = Depends(get_front_desk)):
    appointment = desk.appointments.complete(appointment_id)
    return ok(appointment, f"Appointment {appointment_id} has been completed")


@app.patch(
    "/api/v1/appointments/{appointment_id}/cancel",
    tags=["Appointments"],
    response_model=ApiResponse,
)
def cancel_appointment(appointment_id: int, desk: FrontDesk = Depends(get_front_desk)):
    """Cancel: changes status to cancelled, doesn't delete."""
    appointment = desk.appointments.cancel(appointment_id)
    return ok(appointment, f"Appointment {appointment_id} has been cancelled")


# ----------------------------- Dashboard -----------------------------
@app.get("/api/v1/dashboard/stats", tags=["Dashboard"], response_model=ApiResponse)
def get_dashboard_stats(desk: FrontDesk = Depends(get_front_desk)):
    return ok(desk.stats.dashboard_stats(), "Dashboard stats retrieved successfully")


def main():
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    main()
