"""Demo data for a freshly started front desk.

Loaded through the public manager operations so ids, queue numbers and
doctor snapshots follow the same rules as live data.
"""
from datetime import date, timedelta
from typing import Callable, TYPE_CHECKING

from clinic_desk.logging_config import get_logger
from clinic_desk.state import QueueStatus

if TYPE_CHECKING:
    from clinic_desk.front_desk import FrontDesk

logger = get_logger(__name__)

DEMO_DOCTORS = [
    {
        "name": "Dr. John Smith",
        "specialization": "Cardiology",
        "gender": "male",
        "location": "Floor 1, Room 101",
        "phone": "+1 234-567-8900",
        "email": "john.smith@clinic.com",
        "available_slots": ["09:00 AM", "10:00 AM", "02:00 PM", "03:00 PM"],
    },
    {
        "name": "Dr. Sarah Johnson",
        "specialization": "Dermatology",
        "gender": "female",
        "location": "Floor 2, Room 205",
        "phone": "+1 234-567-8901",
        "email": "sarah.johnson@clinic.com",
        "available_slots": ["09:30 AM", "11:00 AM", "02:30 PM", "04:00 PM"],
    },
    {
        "name": "Dr. Mike Wilson",
        "specialization": "Orthopedics",
        "gender": "male",
        "location": "Floor 1, Room 103",
        "phone": "+1 234-567-8902",
        "email": "mike.wilson@clinic.com",
        "available_slots": ["10:30 AM", "02:00 PM", "03:30 PM", "04:30 PM"],
    },
    {
        "name": "Dr. Emily Brown",
        "specialization": "Pediatrics",
        "gender": "female",
        "location": "Floor 3, Room 301",
        "phone": "+1 234-567-8903",
        "email": "emily.brown@clinic.com",
        "available_slots": ["09:00 AM", "11:30 AM", "02:00 PM", "03:30 PM"],
    },
]

# (patient_name, phone, status to advance to)
DEMO_QUEUE = [
    ("John Doe", "+1 555-0101", QueueStatus.WAITING),
    ("Jane Smith", "+1 555-0102", QueueStatus.WITH_DOCTOR),
    ("Bob Johnson", "+1 555-0103", QueueStatus.WAITING),
]

# (patient_name, phone, doctor index, days from today, slot)
DEMO_APPOINTMENTS = [
    ("Alice Johnson", "+1 555-0201", 0, 0, "09:00 AM"),
    ("Bob Wilson", "+1 555-0202", 1, 0, "11:00 AM"),
    ("Carol Davis", "+1 555-0203", 2, 1, "02:00 PM"),
]


def seed_demo_data(desk: "FrontDesk", today: Callable[[], date] = date.today) -> None:
    """Fill an empty front desk with demo doctors, walk-ins and appointments."""
    doctors = [desk.doctors.create(**fields) for fields in DEMO_DOCTORS]

    for patient_name, phone, status in DEMO_QUEUE:
        entry = desk.queue.enqueue(patient_name, phone)
        if status == QueueStatus.WITH_DOCTOR:
            desk.queue.advance(entry.id, QueueStatus.WITH_DOCTOR)

    base = today()
    for patient_name, phone, doctor_index, offset, slot in DEMO_APPOINTMENTS:
        desk.appointments.book(
            patient_name=patient_name,
            doctor_id=doctors[doctor_index].id,
            date=base + timedelta(days=offset),
            time_slot=slot,
            phone=phone,
        )

    logger.info(
        "demo_data_seeded",
        doctors=len(DEMO_DOCTORS),
        queue_entries=len(DEMO_QUEUE),
        appointments=len(DEMO_APPOINTMENTS),
    )
