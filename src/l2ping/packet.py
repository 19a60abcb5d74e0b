from __future__ import annotations

import enum
import struct
from dataclasses import dataclass

from .constants import (
    CMD_HEADER_FORMAT,
    CMD_HEADER_SIZE,
    COMMAND_REJECT,
    ECHO_REQUEST,
    ECHO_RESPONSE,
    FILLER_PERIOD,
)


class Opcode(enum.IntEnum):
    COMMAND_REJECT = COMMAND_REJECT
    ECHO_REQUEST = ECHO_REQUEST
    ECHO_RESPONSE = ECHO_RESPONSE


def filler(size: int) -> bytes:
    return bytes(i % FILLER_PERIOD + ord("A") for i in range(size))


@dataclass(frozen=True, slots=True)
class EchoFrame:
    # opcode stays a plain int: peers may answer with codes we don't model
    opcode: int
    identifier: int
    length: int
    payload: bytes = b""

    @property
    def is_response(self) -> bool:
        return self.opcode == Opcode.ECHO_RESPONSE

    @property
    def is_reject(self) -> bool:
        return self.opcode == Opcode.COMMAND_REJECT

    def to_bytes(self) -> bytes:
        header = struct.pack(CMD_HEADER_FORMAT, self.opcode, self.identifier, self.length & 0xFF, 0)
        return header + self.payload

    @staticmethod
    def from_bytes(raw: bytes) -> "EchoFrame":
        if len(raw) < CMD_HEADER_SIZE:
            raise ValueError(f"frame too short: {len(raw)} bytes")
        opcode, identifier, length, _reserved = struct.unpack_from(CMD_HEADER_FORMAT, raw)
        return EchoFrame(opcode=opcode, identifier=identifier, length=length, payload=raw[CMD_HEADER_SIZE:])

    @staticmethod
    def request(identifier: int, size: int) -> "EchoFrame":
        return EchoFrame(
            opcode=Opcode.ECHO_REQUEST,
            identifier=identifier,
            length=size & 0xFF,
            payload=filler(size),
        )

    @staticmethod
    def response(identifier: int, payload: bytes) -> "EchoFrame":
        return EchoFrame(
            opcode=Opcode.ECHO_RESPONSE,
            identifier=identifier,
            length=len(payload) & 0xFF,
            payload=payload,
        )
