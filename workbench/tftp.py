"""TFTP packets and the lock-step sender and receiver state machines."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Optional, Union

BLOCK_SIZE = 512
_U16 = struct.Struct(">H")
_HEADER = struct.Struct(">HH")


class OpCode(IntEnum):
    RRQ = 1
    WRQ = 2
    DATA = 3
    ACK = 4
    ERROR = 5


class ErrorCode(IntEnum):
    NOT_DEFINED = 0
    FILE_NOT_FOUND = 1
    ACCESS_VIOLATION = 2
    DISK_FULL = 3
    ILLEGAL_OP = 4
    UNKNOWN_TID = 5
    FILE_ALREADY_EXISTS = 6
    NO_SUCH_USER = 7


def _cstr(text: str) -> bytes:
    return text.encode("utf-8") + b"\0"


@dataclass(frozen=True)
class ReadRequest:
    filename: str
    mode: str

    def to_bytes(self) -> bytes:
        return _U16.pack(OpCode.RRQ) + _cstr(self.filename) + _cstr(self.mode)


@dataclass(frozen=True)
class WriteRequest:
    filename: str
    mode: str

    def to_bytes(self) -> bytes:
        return _U16.pack(OpCode.WRQ) + _cstr(self.filename) + _cstr(self.mode)


@dataclass(frozen=True)
class DataPacket:
    block_num: int
    data: bytes

    def to_bytes(self) -> bytes:
        return _HEADER.pack(OpCode.DATA, self.block_num) + bytes(self.data)


@dataclass(frozen=True)
class AckPacket:
    block_num: int

    def to_bytes(self) -> bytes:
        return _HEADER.pack(OpCode.ACK, self.block_num)


@dataclass(frozen=True)
class ErrorPacket:
    error_code: int
    error_msg: str

    def to_bytes(self) -> bytes:
        return _HEADER.pack(OpCode.ERROR, self.error_code) + _cstr(self.error_msg)


Packet = Union[ReadRequest, WriteRequest, DataPacket, AckPacket, ErrorPacket]


class _PacketReader:
    def __init__(self, payload: bytes):
        self._data = bytes(payload)
        self._pos = 0

    def u16(self) -> int:
        end = self._pos + _U16.size
        if end > len(self._data):
            raise ValueError("truncated packet")
        (value,) = _U16.unpack_from(self._data, self._pos)
        self._pos = end
        return value

    def cstr(self) -> str:
        end = self._data.find(b"\0", self._pos)
        if end < 0:
            raise ValueError("unterminated string in packet")
        text = self._data[self._pos:end].decode("latin-1")
        self._pos = end + 1
        return text

    def rest(self) -> bytes:
        data = self._data[self._pos:]
        self._pos = len(self._data)
        return data


def parse_packet(payload: bytes) -> Optional[Packet]:
    """Decode a packet; None for an unknown opcode, ValueError if it is truncated."""
    reader = _PacketReader(payload)
    opcode = reader.u16()
    if opcode == OpCode.RRQ:
        return ReadRequest(reader.cstr(), reader.cstr())
    if opcode == OpCode.WRQ:
        return WriteRequest(reader.cstr(), reader.cstr())
    if opcode == OpCode.DATA:
        return DataPacket(reader.u16(), reader.rest())
    if opcode == OpCode.ACK:
        return AckPacket(reader.u16())
    if opcode == OpCode.ERROR:
        return ErrorPacket(reader.u16(), reader.cstr())
    return None


def _following(block: int) -> int:
    return (block + 1) & 0xFFFF


class Receiver:
    """Writes incoming data blocks to a file, acknowledging each in order."""

    def __init__(self, path: Union[str, Path]):
        self._file = open(path, "wb")
        self.current_block = 0
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def process(self, packet: Packet) -> Optional[Packet]:
        """Handle one packet and return the reply, if any."""
        if isinstance(packet, WriteRequest):
            return AckPacket(0)
        if isinstance(packet, DataPacket):
            if packet.block_num != _following(self.current_block):
                return None
            self.current_block = packet.block_num
            try:
                self._file.write(packet.data)
            except OSError:
                pass
            if len(packet.data) < BLOCK_SIZE:
                self._done = True
            return AckPacket(packet.block_num)
        return None

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "Receiver":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class Sender:
    """Reads a file in blocks, sending the next one when the last is acknowledged."""

    def __init__(self, path: Union[str, Path]):
        self._file = open(path, "rb")
        self.current_block = 0
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def next_block(self) -> DataPacket:
        """Read the next block of the file."""
        data = self._file.read(BLOCK_SIZE)
        self.current_block = _following(self.current_block)
        if len(data) < BLOCK_SIZE:
            self._done = True
        return DataPacket(self.current_block, data)

    def _try_next_block(self) -> Optional[DataPacket]:
        try:
            return self.next_block()
        except OSError:
            return None

    def process(self, packet: Packet) -> Optional[Packet]:
        """Handle one packet and return the reply, if any."""
        if isinstance(packet, ReadRequest):
            return self._try_next_block()
        if isinstance(packet, AckPacket) and packet.block_num == self.current_block:
            return self._try_next_block()
        return None

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "Sender":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()