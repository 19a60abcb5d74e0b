from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .constants import CMD_HEADER_SIZE
from .errors import EchoRejected, PeerDisconnected
from .net import L2capEndpoint
from .packet import EchoFrame
from .session import SessionConfig, SessionState
from .stats import StatsCollector

log = logging.getLogger(__name__)


class Outcome(enum.Enum):
    MATCHED = "matched"
    TIMED_OUT = "timed_out"


@dataclass(slots=True)
class EchoPinger:
    """Stop-and-wait echo loop: one request outstanding at a time.

    A reply carrying another identifier is dropped and the wait starts over
    with the full timeout, so stray packets never turn into a false loss.
    Command-reject and a closed connection end the session with a
    ``ProtocolViolation``; transport failures propagate as ``TransportError``.
    """

    endpoint: L2capEndpoint
    config: SessionConfig
    state: SessionState
    stats: StatsCollector
    clock: Callable[[], float] = time.monotonic
    sleep: Callable[[float], None] = time.sleep

    def run(self) -> SessionState:
        remaining = self.config.count
        while True:
            if self.config.bounded:
                if remaining <= 0:
                    break
                remaining -= 1
            self.cycle()
        return self.state

    def cycle(self) -> Outcome:
        ident = self.state.identifier
        frame = EchoFrame.request(ident, self.config.size)

        sent_at = self.clock()
        self.endpoint.write(frame.to_bytes())
        log.debug("echo request id=%d len=%d", ident, self.config.size)

        outcome, reply = self._await_reply(ident)
        self.state.sent += 1

        if outcome is Outcome.MATCHED:
            assert reply is not None
            self.state.received += 1
            elapsed_ms = int((self.clock() - sent_at) * 1000)
            self.stats.record_success(reply.length, self.state.offset, elapsed_ms)
            if self.config.delay > 0:
                self.sleep(self.config.delay)
        else:
            self.stats.record_loss(self.state.offset)

        self.state.advance()
        return outcome

    def _await_reply(self, ident: int) -> Tuple[Outcome, Optional[EchoFrame]]:
        bufsize = CMD_HEADER_SIZE + self.config.size
        while True:
            if not self.endpoint.wait_readable(self.config.timeout_ms):
                return Outcome.TIMED_OUT, None

            raw = self.endpoint.read(bufsize)
            if not raw:
                raise PeerDisconnected()

            try:
                reply = EchoFrame.from_bytes(raw)
            except ValueError as exc:
                log.debug("ignoring %s", exc)
                continue

            if reply.identifier != ident:
                log.debug("ignoring frame id=%d while waiting for id=%d", reply.identifier, ident)
                continue

            if reply.is_response:
                return Outcome.MATCHED, reply

            if reply.is_reject:
                raise EchoRejected()

            log.debug("ignoring opcode 0x%02x for id=%d", reply.opcode, ident)
