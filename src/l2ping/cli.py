from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, TextIO

from .address import parse_address
from .constants import DEFAULT_COUNT, DEFAULT_DELAY_S, DEFAULT_SIZE, DEFAULT_TIMEOUT_S
from .errors import ArgumentError, L2pingError, SessionInterrupted
from .net import L2capEndpoint
from .pinger import EchoPinger
from .session import SessionConfig, SessionState
from .signals import InterruptListener
from .stats import StatsCollector

log = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    # usage errors exit 1 like every other failure
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(prog="l2ping", description="Send L2CAP echo requests to a Bluetooth device.")
    p.add_argument("addr", help="remote device address, e.g. 01:02:03:04:05:06")
    p.add_argument("-s", "--size", type=int, default=DEFAULT_SIZE, help="the size of the data packets to be sent")
    p.add_argument("-c", "--count", type=int, default=DEFAULT_COUNT, help="send count number of packets then exit")
    p.add_argument("-t", "--timeout", type=int, default=DEFAULT_TIMEOUT_S, help="wait timeout seconds for the response")
    p.add_argument("-d", "--delay", type=int, default=DEFAULT_DELAY_S, help="wait delay seconds between pings")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    return p


def config_from_args(args: argparse.Namespace) -> SessionConfig:
    return SessionConfig(
        peer=parse_address(args.addr),
        size=args.size,
        count=args.count,
        timeout=args.timeout,
        delay=args.delay,
    )


def ping(config: SessionConfig, out: Optional[TextIO] = None) -> int:
    state = SessionState()
    stats = StatsCollector(config.peer, out=out if out is not None else sys.stdout)

    try:
        with InterruptListener(lambda signum: stats.finish(state)):
            with L2capEndpoint.connected(config.peer) as endpoint:
                stats.banner(endpoint.local_address(), config.size)
                EchoPinger(endpoint, config, state, stats).run()
            stats.finish(state)
    except SessionInterrupted as exc:
        log.info("%s", exc)
    except L2pingError as exc:
        log.error("%s", exc)
        return 1

    log.info("session done; sent=%d received=%d", state.sent, state.received)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s [%(levelname)s] %(message)s")

    try:
        config = config_from_args(args)
    except ArgumentError as exc:
        parser.print_usage(sys.stderr)
        log.error("%s", exc)
        return 1

    return ping(config)


if __name__ == "__main__":
    raise SystemExit(main())
