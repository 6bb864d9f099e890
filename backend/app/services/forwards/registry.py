"""
In-memory registry of tracked forwards plus the pending-error slot.

Pure bookkeeping under one read/write lock: nothing in here spawns, signals,
waits or writes to the event log.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from app.core.locks import ReadWriteLock
from .schemas import ForwardRecord


class ForwardRegistry:
    def __init__(self):
        self._forwards: Dict[str, ForwardRecord] = {}
        self._error = ""
        self._lock = ReadWriteLock()

    def add(self, record: ForwardRecord) -> None:
        with self._lock.write():
            if record.id in self._forwards:
                raise KeyError(f"Duplicate forward id {record.id}")
            self._forwards[record.id] = record

    def get(self, forward_id: str) -> Optional[ForwardRecord]:
        with self._lock.read():
            return self._forwards.get(forward_id)

    def pop(self, forward_id: str) -> Optional[ForwardRecord]:
        """Remove and return a record; None if it was already gone."""
        with self._lock.write():
            return self._forwards.pop(forward_id, None)

    def pop_many(self, forward_ids: Iterable[str]) -> List[ForwardRecord]:
        """Remove several records in one batch, returning those that were present."""
        removed = []
        with self._lock.write():
            for forward_id in forward_ids:
                record = self._forwards.pop(forward_id, None)
                if record is not None:
                    removed.append(record)
        return removed

    def records(self) -> List[ForwardRecord]:
        with self._lock.read():
            return list(self._forwards.values())

    def set_error(self, message: str) -> None:
        with self._lock.write():
            self._error = message

    def snapshot(self) -> Tuple[List[ForwardRecord], str]:
        """Records plus the pending error, which is cleared (read once)."""
        with self._lock.write():
            error, self._error = self._error, ""
            return list(self._forwards.values()), error

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._forwards)

    def __contains__(self, forward_id: str) -> bool:
        with self._lock.read():
            return forward_id in self._forwards
