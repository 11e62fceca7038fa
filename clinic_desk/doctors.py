"""Doctor directory: create, look up, edit and soft-delete doctors."""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from clinic_desk import config
from clinic_desk.errors import NotFoundError, ValidationError
from clinic_desk.logging_config import get_logger
from clinic_desk.records import Doctor
from clinic_desk.store import ClinicStore

logger = get_logger(__name__)

REQUIRED_FIELDS = ("name", "specialization", "location", "phone", "email")
UPDATABLE_FIELDS = REQUIRED_FIELDS + ("gender", "available_slots")


@dataclass
class DoctorFilter:
    """
    Optional conjunction of predicates for ``DoctorDirectory.list``.

    All matches are case-insensitive:
        specialization: exact match
        location: substring
        search: substring of name or specialization
    """
    specialization: Optional[str] = None
    location: Optional[str] = None
    search: Optional[str] = None

    def matches(self, doctor: Doctor) -> bool:
        if self.specialization and doctor.specialization.lower() != self.specialization.lower():
            return False
        if self.location and self.location.lower() not in doctor.location.lower():
            return False
        if self.search:
            needle = self.search.lower()
            if needle not in doctor.name.lower() and needle not in doctor.specialization.lower():
                return False
        return True


def normalize_slots(slots: Iterable[str]) -> List[str]:
    """Strip labels and drop blanks and duplicates, keeping first-seen order."""
    seen = []
    for slot in slots:
        label = slot.strip()
        if label and label not in seen:
            seen.append(label)
    return seen


def _require(field: str, value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", field=field)
    return str(value).strip()


class DoctorDirectory:
    """Doctors and their declared time slots."""

    def __init__(self, store: ClinicStore):
        self._doctors = store.doctors

    def list(self, doctor_filter: Optional[DoctorFilter] = None) -> List[Doctor]:
        """
        List doctors in insertion order, inactive ones included.

        Args:
            doctor_filter: Optional predicates; all given ones must match

        Returns:
            Matching doctors (copies)
        """
        with self._doctors.lock:
            doctors = self._doctors.values()
        if doctor_filter:
            doctors = [d for d in doctors if doctor_filter.matches(d)]
        return [d.model_copy(deep=True) for d in doctors]

    def get(self, doctor_id: int) -> Doctor:
        """
        Get a doctor by id, active or not.

        Raises:
            NotFoundError: If no doctor has this id
        """
        with self._doctors.lock:
            doctor = self._doctors.get(doctor_id)
            if doctor is None:
                raise NotFoundError("Doctor", doctor_id)
            return doctor.model_copy(deep=True)

    def available_slots(self, doctor_id: int) -> List[str]:
        """Return the doctor's slot labels in display order."""
        return self.get(doctor_id).available_slots

    def create(
        self,
        name: str,
        specialization: str,
        location: str,
        phone: str,
        email: str,
        gender: str = "",
        available_slots: Optional[List[str]] = None,
    ) -> Doctor:
        """
        Add a doctor to the directory.

        Args:
            name, specialization, location, phone, email: Required, non-empty
            gender: Optional free text
            available_slots: Slot labels; the default set is used when empty

        Returns:
            The created doctor, active

        Raises:
            ValidationError: If a required field is missing or empty
        """
        values = {
            "name": _require("name", name),
            "specialization": _require("specialization", specialization),
            "location": _require("location", location),
            "phone": _require("phone", phone),
            "email": _require("email", email),
        }
        slots = normalize_slots(available_slots or [])
        if not slots:
            slots = list(config.DEFAULT_AVAILABLE_SLOTS)

        with self._doctors.lock:
            doctor = Doctor(
                id=self._doctors.next_id(),
                gender=(gender or "").strip(),
                available_slots=slots,
                is_active=True,
                **values,
            )
            self._doctors.add(doctor.id, doctor)

        logger.info("doctor_created", doctor_id=doctor.id, specialization=doctor.specialization)
        return doctor.model_copy(deep=True)

    def update(self, doctor_id: int, **changes) -> Doctor:
        """
        Replace any subset of a doctor's editable fields.

        Replacement is shallow: passing available_slots replaces the whole list.

        Raises:
            NotFoundError: If no doctor has this id
            ValidationError: On an unknown field or an emptied required field
        """
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        cleaned = {}
        for field, value in changes.items():
            if field in REQUIRED_FIELDS:
                cleaned[field] = _require(field, value)
            elif field == "available_slots":
                cleaned[field] = normalize_slots(value or [])
            else:
                cleaned[field] = (value or "").strip()

        with self._doctors.lock:
            doctor = self._doctors.get(doctor_id)
            if doctor is None:
                raise NotFoundError("Doctor", doctor_id)
            updated = doctor.model_copy(update=cleaned)
            self._doctors.replace(doctor_id, updated)

        logger.info("doctor_updated", doctor_id=doctor_id, fields=sorted(cleaned))
        return updated.model_copy(deep=True)

    def soft_delete(self, doctor_id: int) -> Doctor:
        """
        Deactivate a doctor. The record stays in the directory.

        Raises:
            NotFoundError: If no doctor has this id
        """
        with self._doctors.lock:
            doctor = self._doctors.get(doctor_id)
            if doctor is None:
                raise NotFoundError("Doctor", doctor_id)
            updated = doctor.model_copy(update={"is_active": False})
            self._doctors.replace(doctor_id, updated)

        logger.info("doctor_deactivated", doctor_id=doctor_id)
        return updated.model_copy(deep=True)
