"""
Bounded, newest-first log of forward lifecycle events.
"""

import threading
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Union

from .enums import EventKind
from .schemas import LogEntry


class EventLog:
    """
    Append-only ring of LogEntry objects.

    Has its own lock, separate from the registry lock. Callers must not append
    while holding the registry lock.
    """

    def __init__(self, max_entries: int = 100):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: Deque[LogEntry] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def append(self, kind: Union[EventKind, str], details: str) -> LogEntry:
        """Timestamp and prepend an entry, dropping the oldest past the cap."""
        kind = EventKind(kind)
        with self._lock:
            entry = LogEntry(
                timestamp=datetime.now(timezone.utc),
                kind=kind,
                details=details,
            )
            self._entries.appendleft(entry)
        return entry

    def snapshot(self) -> List[LogEntry]:
        """Copy of the entries, newest first."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
