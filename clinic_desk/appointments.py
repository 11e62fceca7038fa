"""Appointment book: booking, rescheduling, completion and cancellation.

Doctor name and specialization are snapshotted onto the appointment when it
is booked (or reassigned to another doctor). Cancelling keeps the record
with status cancelled so the history stays countable.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Union

from clinic_desk.doctors import DoctorDirectory
from clinic_desk.errors import (
    InvalidReferenceError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from clinic_desk.logging_config import get_logger
from clinic_desk.records import Appointment
from clinic_desk.state import AppointmentStatus, is_terminal, validate_appointment_transition
from clinic_desk.store import ClinicStore

logger = get_logger(__name__)

DateLike = Union[date, str]

UPDATABLE_FIELDS = ("patient_name", "phone", "doctor_id", "date", "time_slot")


def parse_date(value: Optional[DateLike], field: str = "date") -> date:
    """
    Accept a date or an ISO ``YYYY-MM-DD`` string.

    Raises:
        ValidationError: If the value is empty or not a calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", field=field)
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid {field} format. Use YYYY-MM-DD", field=field)


def _require(field: str, value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", field=field)
    return str(value).strip()


@dataclass
class AppointmentFilter:
    """
    Optional conjunction of predicates for ``AppointmentBook.list``.

    search is a case-insensitive substring of patient or doctor name.
    """
    search: Optional[str] = None
    doctor_id: Optional[int] = None
    date: Optional[DateLike] = None
    status: Optional[AppointmentStatus] = None

    def __post_init__(self):
        # Parsed once; matches() only compares
        self.date = parse_date(self.date) if self.date else None
        if self.status:
            try:
                self.status = AppointmentStatus(self.status)
            except ValueError:
                raise ValidationError(f"Invalid status: {self.status}", field="status")
        else:
            self.status = None

    def matches(self, appointment: Appointment) -> bool:
        if self.search:
            needle = self.search.lower()
            if (needle not in appointment.patient_name.lower()
                    and needle not in appointment.doctor_name.lower()):
                return False
        if self.doctor_id is not None and appointment.doctor_id != self.doctor_id:
            return False
        if self.date and appointment.date != self.date:
            return False
        if self.status and appointment.status != self.status:
            return False
        return True


class AppointmentBook:
    """Scheduled appointments, linked to doctors by snapshot."""

    def __init__(
        self,
        store: ClinicStore,
        doctors: DoctorDirectory,
        today: Callable[[], date] = date.today,
    ):
        self._appointments = store.appointments
        self._doctors = doctors
        self._today = today

    def list(self, appointment_filter: Optional[AppointmentFilter] = None) -> List[Appointment]:
        """List appointments in booking order, optionally filtered."""
        with self._appointments.lock:
            appointments = self._appointments.values()
        if appointment_filter:
            appointments = [a for a in appointments if appointment_filter.matches(a)]
        return [a.model_copy() for a in appointments]

    def get(self, appointment_id: int) -> Appointment:
        with self._appointments.lock:
            return self._get_locked(appointment_id).model_copy()

    def today(self) -> List[Appointment]:
        """Appointments dated today, any status."""
        return self.list(AppointmentFilter(date=self._today()))

    def book(
        self,
        patient_name: str,
        doctor_id: int,
        date: DateLike,
        time_slot: str,
        phone: Optional[str] = None,
    ) -> Appointment:
        """
        Book an appointment with a doctor.

        The slot is not checked against the doctor's available_slots and no
        overlap detection is done.

        Args:
            patient_name: Required
            doctor_id: Must resolve to an existing doctor (active or not)
            date: Calendar date or YYYY-MM-DD string
            time_slot: Slot label, e.g. "09:00 AM"
            phone: Optional contact number

        Returns:
            The appointment, status scheduled

        Raises:
            ValidationError: If a required field is missing
            InvalidReferenceError: If doctor_id does not resolve
        """
        patient_name = _require("patient_name", patient_name)
        appointment_date = parse_date(date)
        time_slot = _require("time_slot", time_slot)
        doctor_name, specialization = self._snapshot_doctor(doctor_id)

        now = datetime.now()
        with self._appointments.lock:
            appointment = Appointment(
                id=self._appointments.next_id(),
                patient_name=patient_name,
                phone=(phone or "").strip(),
                doctor_id=doctor_id,
                doctor_name=doctor_name,
                specialization=specialization,
                date=appointment_date,
                time_slot=time_slot,
                status=AppointmentStatus.SCHEDULED,
                created_at=now,
                updated_at=now,
            )
            self._appointments.add(appointment.id, appointment)

        logger.info(
            "appointment_booked",
            appointment_id=appointment.id,
            doctor_id=doctor_id,
            date=appointment_date.isoformat(),
            time_slot=time_slot,
        )
        return appointment.model_copy()

    def update(self, appointment_id: int, **changes) -> Appointment:
        """
        Edit a scheduled appointment.

        Changing doctor_id re-snapshots the doctor's name and specialization.

        Raises:
            NotFoundError: If the appointment does not exist
            ValidationError: On an unknown field or an emptied required field
            InvalidReferenceError: If a new doctor_id does not resolve
            InvalidStateError: If the appointment is completed or cancelled
        """
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        cleaned: Dict[str, object] = {}
        if "patient_name" in changes:
            cleaned["patient_name"] = _require("patient_name", changes["patient_name"])
        if "phone" in changes:
            cleaned["phone"] = (changes["phone"] or "").strip()
        if "date" in changes:
            cleaned["date"] = parse_date(changes["date"])
        if "time_slot" in changes:
            cleaned["time_slot"] = _require("time_slot", changes["time_slot"])
        if "doctor_id" in changes:
            doctor_name, specialization = self._snapshot_doctor(changes["doctor_id"])
            cleaned.update(
                doctor_id=changes["doctor_id"],
                doctor_name=doctor_name,
                specialization=specialization,
            )

        updated = self._modify_scheduled(appointment_id, "update", cleaned)
        logger.info("appointment_updated", appointment_id=appointment_id, fields=sorted(changes))
        return updated

    def reschedule(self, appointment_id: int, new_date: DateLike, new_time_slot: str) -> Appointment:
        """
        Move a scheduled appointment to another date and slot.

        Raises:
            NotFoundError: If the appointment does not exist
            ValidationError: If the new date or slot is missing
            InvalidStateError: If the appointment is completed or cancelled
        """
        changes = {
            "date": parse_date(new_date),
            "time_slot": _require("time_slot", new_time_slot),
        }
        updated = self._modify_scheduled(appointment_id, "reschedule", changes)
        logger.info(
            "appointment_rescheduled",
            appointment_id=appointment_id,
            date=updated.date.isoformat(),
            time_slot=updated.time_slot,
        )
        return updated

    def complete(self, appointment_id: int) -> Appointment:
        """Mark a scheduled appointment as completed."""
        return self._finish(appointment_id, AppointmentStatus.COMPLETED)

    def cancel(self, appointment_id: int) -> Appointment:
        """
        Cancel a scheduled appointment.

        The record is kept with status cancelled and a cancelled_at stamp.
        """
        return self._finish(appointment_id, AppointmentStatus.CANCELLED)

    def stats(self) -> Dict[str, int]:
        """Total, today's count and per-status counts, computed fresh."""
        appointments = self.list()
        today = self._today()
        stats = {
            "total": len(appointments),
            "today": sum(1 for a in appointments if a.date == today),
        }
        for status in AppointmentStatus:
            stats[status.value] = sum(1 for a in appointments if a.status == status)
        return stats

    # ------------------------------------------------------------------ #
    #  Helpers
    # ------------------------------------------------------------------ #
    def _get_locked(self, appointment_id: int) -> Appointment:
        appointment = self._appointments.get(appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment", appointment_id)
        return appointment

    def _snapshot_doctor(self, doctor_id: int):
        if doctor_id is None:
            raise ValidationError("doctor_id is required", field="doctor_id")
        try:
            doctor = self._doctors.get(doctor_id)
        except NotFoundError:
            logger.warning("appointment_doctor_unresolved", doctor_id=doctor_id)
            raise InvalidReferenceError(f"Doctor {doctor_id} does not exist")
        return doctor.name, doctor.specialization

    def _modify_scheduled(self, appointment_id: int, action: str, changes: Dict[str, object]) -> Appointment:
        with self._appointments.lock:
            appointment = self._get_locked(appointment_id)
            if is_terminal(appointment.status):
                logger.warning(
                    "appointment_change_rejected",
                    appointment_id=appointment_id,
                    action=action,
                    status=appointment.status.value,
                )
                raise InvalidStateError(
                    f"Cannot {action} appointment {appointment_id}: it is {appointment.status.value}"
                )
            changes = dict(changes, updated_at=datetime.now())
            updated = appointment.model_copy(update=changes)
            self._appointments.replace(appointment_id, updated)
        return updated.model_copy()

    def _finish(self, appointment_id: int, status: AppointmentStatus) -> Appointment:
        with self._appointments.lock:
            appointment = self._get_locked(appointment_id)
            if not validate_appointment_transition(appointment.status, status):
                logger.warning(
                    "appointment_transition_rejected",
                    appointment_id=appointment_id,
                    current=appointment.status.value,
                    intended=status.value,
                )
                raise InvalidStateError(
                    f"Appointment {appointment_id} is already {appointment.status.value}"
                )
            now = datetime.now()
            stamp = "completed_at" if status == AppointmentStatus.COMPLETED else "cancelled_at"
            updated = appointment.model_copy(update={"status": status, "updated_at": now, stamp: now})
            self._appointments.replace(appointment_id, updated)

        logger.info(f"appointment_{status.value}", appointment_id=appointment_id)
        return updated.model_copy()
