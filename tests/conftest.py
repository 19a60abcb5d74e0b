from __future__ import annotations

from typing import Callable, List, Optional, Union

import pytest

from l2ping.address import BDAddress, parse_address
from l2ping.packet import EchoFrame

Event = Union[None, bytes, Callable[[EchoFrame], bytes]]

PEER = "01:02:03:04:05:06"
LOCAL = "00:11:22:33:44:55"


def echo(req: EchoFrame) -> bytes:
    return EchoFrame.response(req.identifier, req.payload).to_bytes()


def reject(req: EchoFrame) -> bytes:
    return bytes([0x01, req.identifier, 2, 0, 0, 0])


class ScriptedEndpoint:
    """In-memory stand-in for L2capEndpoint.

    Each wait consumes one scripted event: None times out, bytes are read
    as-is, a callable builds the reply from the last request written.
    An exhausted script keeps timing out.
    """

    def __init__(self, events: List[Event], local: str = LOCAL):
        self.events = list(events)
        self.local = parse_address(local)
        self.writes: List[EchoFrame] = []
        self.waits: List[int] = []
        self.reads: List[int] = []
        self.closed = False
        self._pending: Optional[bytes] = None

    def local_address(self) -> BDAddress:
        return self.local

    def write(self, data: bytes) -> None:
        self.writes.append(EchoFrame.from_bytes(data))

    def wait_readable(self, timeout_ms: int) -> bool:
        self.waits.append(timeout_ms)
        if not self.events:
            return False
        event = self.events.pop(0)
        if event is None:
            return False
        if callable(event):
            event = event(self.writes[-1])
        self._pending = event
        return True

    def read(self, bufsize: int) -> bytes:
        self.reads.append(bufsize)
        data, self._pending = self._pending, None
        return data[:bufsize]

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "ScriptedEndpoint":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class StepClock:
    def __init__(self, step: float = 0.125):
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        t = self.now
        self.now += self.step
        return t


@pytest.fixture
def peer() -> BDAddress:
    return parse_address(PEER)
