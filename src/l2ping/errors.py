from __future__ import annotations


class L2pingError(Exception):
    """Base class for failures that end a ping session."""


class ArgumentError(L2pingError, ValueError):
    pass


class TransportError(L2pingError):
    """An operating-system level socket call failed."""

    def __init__(self, operation: str, cause: OSError | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {cause}" if cause is not None else operation)


class ProtocolViolation(L2pingError):
    pass


class EchoRejected(ProtocolViolation):
    def __init__(self) -> None:
        super().__init__("Peer doesn't support Echo packets")


class PeerDisconnected(ProtocolViolation):
    def __init__(self) -> None:
        super().__init__("Disconnected")


class SessionInterrupted(Exception):
    """Raised from the signal handler once the summary has been printed."""

    def __init__(self, signum: int):
        self.signum = signum
        super().__init__(f"interrupted by signal {signum}")
