"""Wiring for one front-desk instance: a store and the managers that share it."""
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from clinic_desk.appointments import AppointmentBook
from clinic_desk.doctors import DoctorDirectory
from clinic_desk.seed import seed_demo_data
from clinic_desk.stats import StatsAggregator
from clinic_desk.store import ClinicStore
from clinic_desk.walk_in_queue import QueueManager


@dataclass
class FrontDesk:
    store: ClinicStore
    doctors: DoctorDirectory
    queue: QueueManager
    appointments: AppointmentBook
    stats: StatsAggregator


def create_front_desk(
    seed_demo: bool = False,
    today: Callable[[], date] = date.today,
    store: Optional[ClinicStore] = None,
) -> FrontDesk:
    """
    Build a front desk over a fresh (or given) store.

    Args:
        seed_demo: Load the demo doctors, walk-ins and appointments
        today: Clock used for "today" figures; tests pin it
        store: Existing store to wrap instead of a new one

    Returns:
        FrontDesk with all managers sharing one store
    """
    if store is None:
        store = ClinicStore()
    doctors = DoctorDirectory(store)
    queue = QueueManager(store)
    appointments = AppointmentBook(store, doctors, today=today)
    desk = FrontDesk(
        store=store,
        doctors=doctors,
        queue=queue,
        appointments=appointments,
        stats=StatsAggregator(doctors, queue, appointments, today=today),
    )
    if seed_demo:
        seed_demo_data(desk, today=today)
    return desk
