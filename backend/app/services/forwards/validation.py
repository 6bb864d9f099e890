"""
Form input validation for new forwards.

The values end up as socat arguments, so only literal IP addresses and plain
decimal ports are accepted; hostnames and anything with socat option syntax
are rejected here.
"""

import ipaddress
import re

from .errors import InvalidAddressError, InvalidPortError
from .schemas import Endpoints

MIN_PORT = 1
MAX_PORT = 65535

_PORT_RE = re.compile(r"[+-]?[0-9]+")


def parse_ip(raw: str, label: str) -> str:
    """Return the canonical text form of an IPv4/IPv6 literal."""
    try:
        address = ipaddress.ip_address(raw)
    except ValueError:
        raise InvalidAddressError(label, raw) from None
    # Zone ids ("fe80::1%eth0") are not plain literals
    if getattr(address, "scope_id", None):
        raise InvalidAddressError(label, raw)
    return str(address)


def parse_port(raw: str, label: str) -> int:
    if not _PORT_RE.fullmatch(raw):
        raise InvalidPortError.not_a_number(label, raw)
    try:
        port = int(raw)
    except ValueError:
        # Digit strings past the interpreter's int conversion limit
        raise InvalidPortError.not_a_number(label, raw) from None
    if port < MIN_PORT or port > MAX_PORT:
        raise InvalidPortError.out_of_range(label, port)
    return port


def validate_endpoints(
    base_ip: str, base_port: str, remote_ip: str, remote_port: str
) -> Endpoints:
    """
    Validate raw form values in order; the first failure is raised.

    Args:
        base_ip: Address socat binds to
        base_port: Port socat listens on
        remote_ip: Address connections are relayed to
        remote_port: Port connections are relayed to

    Returns:
        Canonicalized Endpoints

    Raises:
        InvalidAddressError, InvalidPortError
    """
    return Endpoints(
        base_ip=parse_ip(base_ip, "Base"),
        base_port=parse_port(base_port, "Base"),
        remote_ip=parse_ip(remote_ip, "Remote"),
        remote_port=parse_port(remote_port, "Remote"),
    )
