from __future__ import annotations

from dataclasses import dataclass

from .address import BDAddress
from .constants import (
    DEFAULT_COUNT,
    DEFAULT_DELAY_S,
    DEFAULT_SIZE,
    DEFAULT_TIMEOUT_S,
    IDENT_BASE,
    IDENT_MAX,
    UNBOUNDED,
)
from .errors import ArgumentError


@dataclass(frozen=True, slots=True)
class SessionConfig:
    peer: BDAddress
    size: int = DEFAULT_SIZE
    count: int = DEFAULT_COUNT
    timeout: int = DEFAULT_TIMEOUT_S
    delay: int = DEFAULT_DELAY_S

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ArgumentError(f"size must be >= 0, got {self.size}")
        if self.count < 0 and self.count != UNBOUNDED:
            raise ArgumentError(f"count must be >= 0 or {UNBOUNDED} for unbounded, got {self.count}")
        if self.timeout < 0:
            raise ArgumentError(f"timeout must be >= 0, got {self.timeout}")
        if self.delay < 0:
            raise ArgumentError(f"delay must be >= 0, got {self.delay}")

    @property
    def bounded(self) -> bool:
        return self.count != UNBOUNDED

    @property
    def timeout_ms(self) -> int:
        return self.timeout * 1000


def next_identifier(ident: int) -> int:
    ident += 1
    if ident > IDENT_MAX:
        ident = IDENT_BASE
    return ident


@dataclass(slots=True)
class SessionState:
    sent: int = 0
    received: int = 0
    identifier: int = IDENT_BASE

    @property
    def offset(self) -> int:
        return self.identifier - IDENT_BASE

    def advance(self) -> None:
        self.identifier = next_identifier(self.identifier)
