"""In-memory storage owned by one front-desk instance.

Pattern: one collection per record type, each with its own lock and its own
monotonic id counter. Nothing here is module-level, so every test (and every
app instance) gets an isolated store.
"""
import itertools
import threading
from typing import Dict, Generic, Iterator, List, Optional, TypeVar

from clinic_desk.records import Appointment, Doctor, QueueEntry

RecordT = TypeVar("RecordT")


class Collection(Generic[RecordT]):
    """
    Insertion-ordered records keyed by id.

    Callers hold ``lock`` around any read-modify-write sequence.
    """

    def __init__(self):
        self._records: Dict[int, RecordT] = {}
        self._ids = itertools.count(1)
        self.lock = threading.Lock()

    def next_id(self) -> int:
        """Hand out the next id. Ids are never reused, even after deletes."""
        return next(self._ids)

    def add(self, record_id: int, record: RecordT) -> None:
        self._records[record_id] = record

    def get(self, record_id: int) -> Optional[RecordT]:
        return self._records.get(record_id)

    def replace(self, record_id: int, record: RecordT) -> None:
        # dict keeps the first insertion position on reassignment
        self._records[record_id] = record

    def delete(self, record_id: int) -> None:
        del self._records[record_id]

    def values(self) -> List[RecordT]:
        return list(self._records.values())

    def __iter__(self) -> Iterator[RecordT]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)


class ClinicStore:
    """The three front-desk collections."""

    def __init__(self):
        self.doctors: Collection[Doctor] = Collection()
        self.queue: Collection[QueueEntry] = Collection()
        self.appointments: Collection[Appointment] = Collection()
        # walk-in numbers, guarded by queue.lock
        self.queue_numbers = itertools.count(1)
