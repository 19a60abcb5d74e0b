from __future__ import annotations

import re
from dataclasses import dataclass

from .constants import BDADDR_LEN
from .errors import ArgumentError

_OCTET = re.compile(r"^[0-9A-Fa-f]{1,2}$")


@dataclass(frozen=True, slots=True)
class BDAddress:
    """48-bit device address.

    ``octets`` is kept in protocol order, least significant octet first, which
    is the reverse of the colon separated text form.
    """

    octets: bytes

    def __post_init__(self) -> None:
        if len(self.octets) != BDADDR_LEN:
            raise ValueError(f"device address must be {BDADDR_LEN} bytes, got {len(self.octets)}")

    def __str__(self) -> str:
        return format_address(self)

    @staticmethod
    def from_string(text: str) -> "BDAddress":
        return parse_address(text)


def parse_address(text: str) -> BDAddress:
    parts = text.split(":")
    if len(parts) != BDADDR_LEN:
        raise ArgumentError(f"invalid device address {text!r}: expected {BDADDR_LEN} groups")
    for part in parts:
        if not _OCTET.match(part):
            raise ArgumentError(f"invalid device address {text!r}: bad group {part!r}")
    return BDAddress(bytes(int(part, 16) for part in reversed(parts)))


def format_address(addr: BDAddress) -> str:
    return ":".join(f"{b:02X}" for b in reversed(addr.octets))


BDADDR_ANY = BDAddress(bytes(BDADDR_LEN))
