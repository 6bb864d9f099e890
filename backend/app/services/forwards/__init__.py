"""
socat Forward Management Package

Starts, stops and supervises socat port-forwarding processes.
"""

from .supervisor import ForwardSupervisor
from .process_manager import ProcessManager
from .registry import ForwardRegistry
from .event_log import EventLog
from .liveness import (
    LivenessChecker,
    ProcFsLivenessChecker,
    PsutilLivenessChecker,
    build_liveness_checker,
)
from .enums import EventKind, Liveness
from .schemas import Endpoints, ForwardRecord, LogEntry, StatusSnapshot
from .errors import (
    ForwardError,
    ForwardValidationError,
    InvalidAddressError,
    InvalidPortError,
    SpawnError,
    ToolNotFoundError,
    SpawnFailedError,
    ForwardNotFoundError,
)

__all__ = [
    'ForwardSupervisor',
    'ProcessManager',
    'ForwardRegistry',
    'EventLog',
    'LivenessChecker',
    'ProcFsLivenessChecker',
    'PsutilLivenessChecker',
    'build_liveness_checker',
    'EventKind',
    'Liveness',
    'Endpoints',
    'ForwardRecord',
    'LogEntry',
    'StatusSnapshot',
    'ForwardError',
    'ForwardValidationError',
    'InvalidAddressError',
    'InvalidPortError',
    'SpawnError',
    'ToolNotFoundError',
    'SpawnFailedError',
    'ForwardNotFoundError',
]
