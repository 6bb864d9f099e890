"""
Errors raised by forward operations.

Every error here carries a message that is safe to show to the user; the
HTTP layer puts it into the pending-error slot unchanged.
"""


class ForwardError(Exception):
    """Base class for user-facing forward failures."""


class ForwardValidationError(ForwardError, ValueError):
    """Form input rejected before anything was spawned."""


class InvalidAddressError(ForwardValidationError):
    def __init__(self, label: str, value: str):
        self.label = label
        self.value = value
        super().__init__(f"Invalid {label} IP address format: {value}")


class InvalidPortError(ForwardValidationError):
    def __init__(self, message: str, label: str, value: str):
        self.label = label
        self.value = value
        super().__init__(message)

    @classmethod
    def not_a_number(cls, label: str, value: str) -> "InvalidPortError":
        return cls(f"{label} Port must be a number: {value}", label, value)

    @classmethod
    def out_of_range(cls, label: str, port: int) -> "InvalidPortError":
        return cls(
            f"{label} Port must be between 1 and 65535, got: {port}",
            label,
            str(port),
        )


class SpawnError(ForwardError):
    """The forwarding executable could not be started."""


class ToolNotFoundError(SpawnError):
    def __init__(self, binary: str):
        self.binary = binary
        super().__init__(
            f"Failed to start socat: '{binary}' command not found in PATH. "
            "Please ensure socat is installed."
        )


class SpawnFailedError(SpawnError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            "Failed to start socat (check if address/port is already in use "
            f"or socat permissions): {reason}"
        )


class ForwardNotFoundError(ForwardError):
    def __init__(self, forward_id: str):
        self.forward_id = forward_id
        super().__init__(f"Process with ID {forward_id} not found.")
