"""
Enums for socat Forward Management

Defines event and liveness enumerations used throughout the forward system.
"""

from enum import Enum


class EventKind(str, Enum):
    """Lifecycle transition recorded in the event log."""
    START = "Start"
    STOP = "Stop"
    DIED = "Died"


class Liveness(Enum):
    """Outcome of a single liveness probe."""
    ALIVE = "ALIVE"
    DEAD = "DEAD"
    UNKNOWN = "UNKNOWN"


class AddressFamily(Enum):
    """socat address family for the listen and target specifications."""
    TCP4 = "tcp4"
    TCP6 = "tcp6"
