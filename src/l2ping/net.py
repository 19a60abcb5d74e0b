from __future__ import annotations

import logging
import select
import socket

from .address import BDADDR_ANY, BDAddress, parse_address
from .constants import L2CAP_PSM
from .errors import ArgumentError, TransportError

log = logging.getLogger(__name__)


class L2capEndpoint:
    """Raw L2CAP signalling socket.

    Each method maps one socket call and re-raises its ``OSError`` as a
    ``TransportError``; nothing is retried here.
    """

    def __init__(self, sock: socket.socket):
        self.sock = sock
        self._poller = select.poll()
        self._poller.register(sock, select.POLLIN)

    @classmethod
    def open(cls) -> "L2capEndpoint":
        if not hasattr(socket, "AF_BLUETOOTH") or not hasattr(socket, "BTPROTO_L2CAP"):
            raise TransportError("Can't create socket: Bluetooth sockets are not supported on this platform")
        try:
            sock = socket.socket(socket.AF_BLUETOOTH, socket.SOCK_RAW, socket.BTPROTO_L2CAP)
        except OSError as exc:
            raise TransportError("Can't create socket", exc) from exc
        return cls(sock)

    @classmethod
    def connected(cls, peer: BDAddress, local: BDAddress = BDADDR_ANY) -> "L2capEndpoint":
        ep = cls.open()
        try:
            ep.bind(local)
            ep.connect(peer)
        except BaseException:
            ep.close()
            raise
        return ep

    def bind(self, local: BDAddress) -> None:
        try:
            self.sock.bind((str(local), 0))
        except OSError as exc:
            raise TransportError("Can't bind socket", exc) from exc

    def connect(self, peer: BDAddress) -> None:
        log.info("connecting to %s", peer)
        try:
            self.sock.connect((str(peer), L2CAP_PSM))
        except OSError as exc:
            raise TransportError("Can't connect", exc) from exc

    def local_address(self) -> BDAddress:
        try:
            name = self.sock.getsockname()
        except OSError as exc:
            raise TransportError("Can't get local address", exc) from exc
        try:
            return parse_address(name[0])
        except ArgumentError as exc:
            raise TransportError(f"Can't get local address: {exc}") from exc

    def write(self, data: bytes) -> None:
        try:
            self.sock.send(data)
        except OSError as exc:
            raise TransportError("Write failed", exc) from exc

    def wait_readable(self, timeout_ms: int) -> bool:
        """Block until a frame can be read; ``False`` means the wait timed out."""
        try:
            events = self._poller.poll(timeout_ms)
        except OSError as exc:
            raise TransportError("Poll failed", exc) from exc
        return bool(events)

    def read(self, bufsize: int) -> bytes:
        try:
            return self.sock.recv(bufsize, socket.MSG_WAITALL)
        except OSError as exc:
            raise TransportError("Recvfrom failed", exc) from exc

    def close(self) -> None:
        self.sock.close()

    def __enter__(self) -> "L2capEndpoint":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
