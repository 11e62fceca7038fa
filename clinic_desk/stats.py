"""Read-only summaries over the doctor directory, queue and appointment book."""
from datetime import date
from typing import Callable, Dict

from clinic_desk.appointments import AppointmentBook
from clinic_desk.doctors import DoctorDirectory
from clinic_desk.state import AppointmentStatus, QueueStatus
from clinic_desk.walk_in_queue import QueueManager


class StatsAggregator:
    """Recomputes every figure from the managers on each call; nothing is cached."""

    def __init__(
        self,
        doctors: DoctorDirectory,
        queue: QueueManager,
        appointments: AppointmentBook,
        today: Callable[[], date] = date.today,
    ):
        self._doctors = doctors
        self._queue = queue
        self._appointments = appointments
        self._today = today

    def dashboard_stats(self) -> Dict[str, int]:
        """
        Headline figures for the front-desk dashboard.

        Returns:
            total_doctors: active doctors
            today_appointments: appointments dated today, any status
            patients_in_queue: walk-ins still waiting
            completed_today: today's appointments marked completed
        """
        today = self._today()
        todays = [a for a in self._appointments.list() if a.date == today]
        return {
            "total_doctors": sum(1 for d in self._doctors.list() if d.is_active),
            "today_appointments": len(todays),
            "patients_in_queue": sum(
                1 for e in self._queue.list_all() if e.status == QueueStatus.WAITING
            ),
            "completed_today": sum(
                1 for a in todays if a.status == AppointmentStatus.COMPLETED
            ),
        }

    def appointment_stats(self) -> Dict[str, int]:
        return self._appointments.stats()

    def queue_stats(self) -> Dict[str, int]:
        return self._queue.stats()
