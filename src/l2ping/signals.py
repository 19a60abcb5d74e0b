from __future__ import annotations

import logging
import signal
from typing import Callable, Dict, Iterable

from .errors import SessionInterrupted

log = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class InterruptListener:
    """Routes SIGINT/SIGTERM to the session's termination action.

    ``action(signum)`` returns True when it produced the final report; the
    handler then raises ``SessionInterrupted`` to abandon whatever blocking
    call the main loop is in. A False return means the report is already
    under way elsewhere and the signal is dropped.
    """

    def __init__(self, action: Callable[[int], bool], signals: Iterable[int] = DEFAULT_SIGNALS):
        self.action = action
        self.signals = tuple(signals)
        self._previous: Dict[int, object] = {}

    def _handle(self, signum: int, frame) -> None:
        log.debug("received signal %d", signum)
        if self.action(signum):
            raise SessionInterrupted(signum)

    def install(self) -> None:
        for sig in self.signals:
            self._previous[sig] = signal.signal(sig, self._handle)

    def restore(self) -> None:
        for sig, handler in self._previous.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
        self._previous.clear()

    def __enter__(self) -> "InterruptListener":
        self.install()
        return self

    def __exit__(self, *exc_info) -> None:
        self.restore()
