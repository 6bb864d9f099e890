"""
Forward Supervisor

The single object that owns every forward: the registry, the event log, the
process manager and the liveness checker. Built once at startup and handed to
the HTTP layer through a dependency.

Lock discipline: the registry lock and the event log lock are never held at
the same time. Registry mutations happen first; the log entry is appended
after the registry lock has been released. Signalling and waiting on a child
happen with no lock held.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from app.core.config import Settings
from app.core.logging import escape, forward_logger
from .enums import EventKind, Liveness
from .errors import ForwardNotFoundError
from .event_log import EventLog
from .liveness import LivenessChecker, build_liveness_checker
from .process_manager import ProcessManager
from .registry import ForwardRegistry
from .schemas import ForwardRecord, LogEntry, StatusSnapshot
from .validation import validate_endpoints

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class ForwardSupervisor:
    """
    Start, stop and reconcile socat forwards.

    Thread safe: FastAPI calls it from its worker threads concurrently.
    """

    def __init__(
        self,
        process_manager: Optional[ProcessManager] = None,
        liveness_checker: Optional[LivenessChecker] = None,
        event_log: Optional[EventLog] = None,
        registry: Optional[ForwardRegistry] = None,
    ):
        # EventLog and ForwardRegistry define __len__; an empty one is falsy
        if process_manager is None:
            process_manager = ProcessManager()
        if liveness_checker is None:
            liveness_checker = build_liveness_checker("procfs")
        if event_log is None:
            event_log = EventLog()
        if registry is None:
            registry = ForwardRegistry()

        self.process_manager = process_manager
        self.liveness_checker = liveness_checker
        self.event_log = event_log
        self.registry = registry

    @classmethod
    def from_settings(cls, settings: Settings) -> "ForwardSupervisor":
        return cls(
            process_manager=ProcessManager(
                socat_binary=settings.SOCAT_BINARY,
                spawn_grace_seconds=settings.SPAWN_GRACE_SECONDS,
                stop_wait_timeout=settings.STOP_WAIT_TIMEOUT,
            ),
            liveness_checker=build_liveness_checker(
                settings.LIVENESS_CHECKER, settings.PROC_ROOT
            ),
            event_log=EventLog(max_entries=settings.MAX_LOG_ENTRIES),
        )

    def start_forward(
        self, base_ip: str, base_port: str, remote_ip: str, remote_port: str
    ) -> str:
        """
        Validate the raw form values and start socat for them.

        Returns:
            The new forward's id

        Raises:
            ForwardValidationError: bad address or port, nothing was spawned
            SpawnError: socat could not be started
        """
        endpoints = validate_endpoints(base_ip, base_port, remote_ip, remote_port)
        process = self.process_manager.spawn(endpoints)

        record = ForwardRecord(
            id=str(uuid.uuid4()),
            endpoints=endpoints,
            process=process,
            started_at=datetime.now(timezone.utc),
        )
        self.registry.add(record)

        forward_logger.info(
            f"Started socat forward (ID: {record.id}): PID {record.pid} - "
            f"{escape(endpoints.listen_spec)} -> {escape(endpoints.target_spec)}"
        )
        self.event_log.append(EventKind.START, record.details)
        return record.id

    def stop_forward(self, forward_id: str) -> None:
        """
        Stop a forward by id.

        The record leaves the registry before the process is signalled, so a
        second stop for the same id raises ForwardNotFoundError and touches
        nothing.
        """
        record = self.registry.pop(forward_id)
        if record is None:
            raise ForwardNotFoundError(forward_id)

        self.event_log.append(EventKind.STOP, record.details)
        self.process_manager.terminate(record.process, record.id)

    def stop_all(self) -> int:
        """Stop every tracked forward; returns how many were stopped."""
        stopped = 0
        for record in self.registry.records():
            try:
                self.stop_forward(record.id)
            except ForwardNotFoundError:
                continue
            stopped += 1

        forward_logger.info(f"Stopped {stopped} forwards")
        return stopped

    def sweep(self) -> List[ForwardRecord]:
        """
        Drop forwards whose process is gone.

        Returns:
            The records removed by this sweep
        """
        dead_ids = []
        for record in self.registry.records():
            forward_logger.debug(f"Checking PID: {record.pid}")
            state = self.liveness_checker.check(record.pid)
            # UNKNOWN keeps the record; the checker has already warned
            if state is Liveness.DEAD:
                dead_ids.append(record.id)

        if not dead_ids:
            return []

        # A concurrent stop may have won the race; only log what we removed
        removed = self.registry.pop_many(dead_ids)
        for record in removed:
            forward_logger.info(
                f"Detected dead process: PID {record.pid} (ID: {record.id}). Removed."
            )
            self.event_log.append(EventKind.DIED, record.details)
            self.process_manager.reap_if_exited(record.process)
        return removed

    def set_error(self, message: str) -> None:
        self.registry.set_error(message)

    def snapshot(self) -> Tuple[List[ForwardRecord], str]:
        """Tracked forwards and the pending error (cleared by this call)."""
        return self.registry.snapshot()

    def forwards(self) -> List[ForwardRecord]:
        """Tracked forwards, oldest first."""
        return sorted(self.registry.records(), key=lambda r: r.started_at or _EPOCH)

    def events(self) -> List[LogEntry]:
        return self.event_log.snapshot()

    def status(self) -> StatusSnapshot:
        """Sweep, then read everything the status page shows."""
        self.sweep()
        forwards, error = self.snapshot()
        forwards.sort(key=lambda r: r.started_at or _EPOCH)
        return StatusSnapshot(forwards=forwards, events=self.events(), error=error)
