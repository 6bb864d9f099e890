"""
Schemas for socat Forward Management

Data classes for forward records, event log entries and status snapshots.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional
from .enums import AddressFamily, EventKind


def address_family(ip: str) -> AddressFamily:
    """Canonical IPv6 literals always contain a colon, IPv4 never does."""
    return AddressFamily.TCP6 if ":" in ip else AddressFamily.TCP4


def socat_host(ip: str) -> str:
    return f"[{ip}]" if address_family(ip) is AddressFamily.TCP6 else ip


@dataclass(frozen=True)
class Endpoints:
    """Validated base and remote endpoints of a forward."""
    base_ip: str
    base_port: int
    remote_ip: str
    remote_port: int

    @property
    def listen_spec(self) -> str:
        family = address_family(self.base_ip).value
        return (
            f"{family}-listen:{self.base_port},reuseaddr,"
            f"bind={socat_host(self.base_ip)},fork"
        )

    @property
    def target_spec(self) -> str:
        family = address_family(self.remote_ip).value
        return f"{family}:{socat_host(self.remote_ip)}:{self.remote_port}"


@dataclass(frozen=True)
class ForwardRecord:
    """A tracked socat process relaying base -> remote."""
    id: str
    endpoints: Endpoints
    process: Any = field(repr=False, compare=False)
    started_at: Optional[datetime] = None

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def base_ip(self) -> str:
        return self.endpoints.base_ip

    @property
    def base_port(self) -> int:
        return self.endpoints.base_port

    @property
    def remote_ip(self) -> str:
        return self.endpoints.remote_ip

    @property
    def remote_port(self) -> int:
        return self.endpoints.remote_port

    @property
    def details(self) -> str:
        return (
            f"PID {self.pid} (Base: {self.base_ip}:{self.base_port}, "
            f"Remote: {self.remote_ip}:{self.remote_port})"
        )


@dataclass(frozen=True)
class LogEntry:
    """One lifecycle transition in the event log."""
    timestamp: datetime
    kind: EventKind
    details: str


@dataclass
class StatusSnapshot:
    """Everything the status page renders, read in one pass."""
    forwards: List[ForwardRecord]
    events: List[LogEntry]
    error: str = ""
