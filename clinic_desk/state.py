"""Status state machines for queue entries and appointments.

Queue entries move strictly forward one step at a time:
    waiting -> with-doctor -> completed

Appointments start scheduled and end in exactly one terminal state:
    scheduled -> completed
    scheduled -> cancelled
"""
from enum import Enum
from typing import Dict, List


class QueueStatus(str, Enum):
    """Walk-in patient status."""
    WAITING = "waiting"
    WITH_DOCTOR = "with-doctor"
    COMPLETED = "completed"


class AppointmentStatus(str, Enum):
    """Appointment lifecycle status."""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


QUEUE_TRANSITIONS: Dict[QueueStatus, List[QueueStatus]] = {
    QueueStatus.WAITING: [QueueStatus.WITH_DOCTOR],
    QueueStatus.WITH_DOCTOR: [QueueStatus.COMPLETED],
    QueueStatus.COMPLETED: [],
}

APPOINTMENT_TRANSITIONS: Dict[AppointmentStatus, List[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: [
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELLED,
    ],
    AppointmentStatus.COMPLETED: [],
    AppointmentStatus.CANCELLED: [],
}


def validate_queue_transition(current: QueueStatus, intended: QueueStatus) -> bool:
    """
    Validate a queue status change.

    Only the immediate successor is allowed, so no skipping and no going back.

    Example:
        >>> validate_queue_transition(QueueStatus.WAITING, QueueStatus.WITH_DOCTOR)
        True
        >>> validate_queue_transition(QueueStatus.WAITING, QueueStatus.COMPLETED)
        False
    """
    return intended in QUEUE_TRANSITIONS.get(current, [])


def validate_appointment_transition(
    current: AppointmentStatus,
    intended: AppointmentStatus
) -> bool:
    """Validate an appointment status change (terminal states have no exits)."""
    return intended in APPOINTMENT_TRANSITIONS.get(current, [])


def is_terminal(status: AppointmentStatus) -> bool:
    """True when no transition leaves this appointment status."""
    return not APPOINTMENT_TRANSITIONS.get(status)
