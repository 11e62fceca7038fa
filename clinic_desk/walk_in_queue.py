"""Walk-in patient queue.

Queue numbers come from a monotonic counter kept in the store: removing
an entry never frees its number, so a later patient always gets a number
greater than every number issued before.
"""
from datetime import datetime
from typing import Dict, List, Optional

from clinic_desk.errors import InvalidTransitionError, NotFoundError, ValidationError
from clinic_desk.logging_config import get_logger
from clinic_desk.records import QueueEntry
from clinic_desk.state import QueueStatus, validate_queue_transition
from clinic_desk.store import ClinicStore

logger = get_logger(__name__)


def count_by_status(entries: List[QueueEntry]) -> Dict[str, int]:
    """Count entries per status value; every status is present, zero or not."""
    counts = {status.value: 0 for status in QueueStatus}
    for entry in entries:
        counts[entry.status.value] += 1
    return counts


def _coerce_status(value) -> Optional[QueueStatus]:
    try:
        return QueueStatus(value)
    except ValueError:
        return None


class QueueManager:
    """Walk-in queue with a forward-only status per patient."""

    def __init__(self, store: ClinicStore):
        self._queue = store.queue
        self._numbers = store.queue_numbers

    def list_all(self) -> List[QueueEntry]:
        """Entries in arrival order."""
        with self._queue.lock:
            return [e.model_copy() for e in self._queue]

    def list_current(self) -> Dict[str, object]:
        """
        Entries in arrival order with per-status counts.

        Returns:
            {"queue": [...], "stats": {"waiting": n, "with-doctor": n, "completed": n}}
        """
        entries = self.list_all()
        return {"queue": entries, "stats": count_by_status(entries)}

    def get(self, entry_id: int) -> QueueEntry:
        with self._queue.lock:
            entry = self._queue.get(entry_id)
            if entry is None:
                raise NotFoundError("Queue entry", entry_id)
            return entry.model_copy()

    def enqueue(self, patient_name: str, phone: Optional[str] = None) -> QueueEntry:
        """
        Add a walk-in patient at the back of the queue, status waiting.

        Raises:
            ValidationError: If patient_name is empty
        """
        if not patient_name or not patient_name.strip():
            raise ValidationError("patient_name is required", field="patient_name")

        with self._queue.lock:
            entry = QueueEntry(
                id=self._queue.next_id(),
                queue_number=next(self._numbers),
                patient_name=patient_name.strip(),
                phone=(phone or "").strip(),
                status=QueueStatus.WAITING,
                created_at=datetime.now(),
            )
            self._queue.add(entry.id, entry)

        logger.info("queue_entry_added", entry_id=entry.id, queue_number=entry.queue_number)
        return entry.model_copy()

    def advance(self, entry_id: int, target_status: QueueStatus) -> QueueEntry:
        """
        Move an entry to the next status.

        Args:
            entry_id: Queue entry id
            target_status: Must be the immediate successor of the current status

        Raises:
            NotFoundError: If the entry does not exist
            InvalidTransitionError: If target_status skips or reverses a step
        """
        with self._queue.lock:
            entry = self._queue.get(entry_id)
            if entry is None:
                raise NotFoundError("Queue entry", entry_id)
            intended = _coerce_status(target_status)
            if intended is None or not validate_queue_transition(entry.status, intended):
                requested = str(getattr(target_status, "value", target_status))
                logger.warning(
                    "queue_transition_rejected",
                    entry_id=entry_id,
                    current=entry.status.value,
                    intended=requested,
                )
                raise InvalidTransitionError(entry.status.value, requested)
            updated = entry.model_copy(update={"status": intended})
            self._queue.replace(entry_id, updated)

        logger.info("queue_entry_advanced", entry_id=entry_id, status=intended.value)
        return updated.model_copy()

    def remove(self, entry_id: int) -> QueueEntry:
        """
        Take an entry out of the queue whatever its status.

        Remaining entries keep their numbers.

        Returns:
            The removed entry
        """
        with self._queue.lock:
            entry = self._queue.get(entry_id)
            if entry is None:
                raise NotFoundError("Queue entry", entry_id)
            self._queue.delete(entry_id)

        logger.info("queue_entry_removed", entry_id=entry_id, queue_number=entry.queue_number)
        return entry.model_copy()

    def stats(self) -> Dict[str, int]:
        """Per-status counts plus total, computed fresh."""
        entries = self.list_all()
        stats = count_by_status(entries)
        stats["total"] = len(entries)
        return stats
