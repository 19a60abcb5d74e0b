from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO

from .address import BDAddress
from .session import SessionState


def loss_percent(sent: int, received: int) -> int:
    if sent == 0:
        return 0
    return round((sent - received) / sent * 100)


@dataclass(slots=True)
class StatsCollector:
    """Renders the ping output lines for one peer.

    ``finish`` is the termination report shared by the engine and the signal
    listener; it prints the summary at most once.
    """

    peer: BDAddress
    out: TextIO = field(default_factory=lambda: sys.stdout)
    finished: bool = False

    def _emit(self, line: str) -> None:
        print(line, file=self.out, flush=True)

    def banner(self, local: BDAddress, size: int) -> None:
        self._emit(f"Ping: {self.peer} from {local} (data size {size}) ...")

    def record_success(self, nbytes: int, offset: int, elapsed_ms: int) -> None:
        self._emit(f"{nbytes} bytes from {self.peer} id {offset} time {elapsed_ms:02d}ms")

    def record_loss(self, offset: int) -> None:
        self._emit(f"no response from {self.peer}: id {offset}")

    @staticmethod
    def summary(sent: int, received: int) -> str:
        return f"{sent} sent, {received} received, {loss_percent(sent, received)}% loss"

    def finish(self, state: SessionState) -> bool:
        if self.finished:
            return False
        self.finished = True
        self._emit(self.summary(state.sent, state.received))
        return True
