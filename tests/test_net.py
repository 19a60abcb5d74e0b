from __future__ import annotations

import select
import socket

import pytest

from l2ping.address import BDADDR_ANY, parse_address
from l2ping.errors import TransportError
from l2ping.net import L2capEndpoint

pytestmark = pytest.mark.skipif(
    not hasattr(socket, "AF_UNIX") or not hasattr(select, "poll"), reason="needs AF_UNIX socketpair and poll"
)


@pytest.fixture
def pair():
    a, b = socket.socketpair(socket.AF_UNIX, socket.SOCK_SEQPACKET)
    ep = L2capEndpoint(a)
    yield ep, b
    ep.close()
    b.close()


def test_write_and_read(pair):
    ep, peer = pair
    ep.write(b"\x08\xc8\x02\x00AB")
    assert peer.recv(64) == b"\x08\xc8\x02\x00AB"

    peer.send(b"\x09\xc8\x02\x00AB")
    assert ep.wait_readable(1000) is True
    assert ep.read(6) == b"\x09\xc8\x02\x00AB"


def test_wait_times_out(pair):
    ep, _ = pair
    assert ep.wait_readable(0) is False


def test_read_after_peer_close(pair):
    ep, peer = pair
    peer.close()
    assert ep.wait_readable(1000) is True
    assert ep.read(48) == b""


def test_write_on_closed_socket(pair):
    ep, _ = pair
    ep.close()
    with pytest.raises(TransportError, match="Write failed") as exc:
        ep.write(b"\x08")
    assert exc.value.operation == "Write failed"
    assert isinstance(exc.value.cause, OSError)


def test_context_manager_closes(pair):
    ep, _ = pair
    with ep:
        pass
    assert ep.sock.fileno() == -1


def test_open_without_bluetooth_support(monkeypatch):
    monkeypatch.delattr(socket, "AF_BLUETOOTH", raising=False)
    with pytest.raises(TransportError, match="Can't create socket"):
        L2capEndpoint.open()


def test_connected_closes_on_connect_failure(monkeypatch, pair):
    ep, _ = pair
    calls = []

    def fake_connect(peer):
        calls.append(peer)
        raise TransportError("Can't connect", OSError(112, "Host is down"))

    monkeypatch.setattr(L2capEndpoint, "open", classmethod(lambda cls: ep))
    monkeypatch.setattr(ep, "bind", lambda local: calls.append(local))
    monkeypatch.setattr(ep, "connect", fake_connect)

    peer = parse_address("01:02:03:04:05:06")
    with pytest.raises(TransportError, match="Can't connect"):
        L2capEndpoint.connected(peer)
    assert calls == [BDADDR_ANY, peer]
    assert ep.sock.fileno() == -1
