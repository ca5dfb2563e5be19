"""Primitive readers for EBML and the top-level header/segment parser.

Every reader takes a bytes-like object and returns ``(rest, value)``.
"""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass
from typing import Callable, ClassVar, Union

Buffer = Union[bytes, bytearray, memoryview]

EBML_HEADER_ID = bytes([0x1A, 0x45, 0xDF, 0xA3])
SEGMENT_ID = bytes([0x18, 0x53, 0x80, 0x67])

_MASK64 = (1 << 64) - 1


class IncompleteError(ValueError):
    """Raised when the input ends before an element does."""

    def __init__(self, needed: int):
        super().__init__(f"incomplete input: {needed} more byte(s) needed")
        self.needed = needed


def _varint(data: Buffer, keep_marker: bool) -> tuple[memoryview, int]:
    view = memoryview(data)
    if not view:
        raise IncompleteError(1)
    first = view[0]
    zeros = 8 - first.bit_length()
    if zeros == 8 or len(view) <= zeros:
        raise IncompleteError(1)
    value = first if keep_marker else first ^ (1 << (7 - zeros))
    end = zeros + 1
    value = (value << (8 * zeros)) | int.from_bytes(view[1:end], "big")
    return view[end:], value


def _take(data: Buffer, size: int) -> tuple[memoryview, memoryview]:
    view = memoryview(data)
    if len(view) < size:
        raise IncompleteError(size)
    return view[size:], view[:size]


def vint(data: Buffer) -> tuple[memoryview, int]:
    """Read a variable-length integer with its length marker removed."""
    return _varint(data, keep_marker=False)


def vid(data: Buffer) -> tuple[memoryview, int]:
    """Read an element ID, keeping its length marker."""
    return _varint(data, keep_marker=True)


def vsize(data: Buffer) -> tuple[memoryview, int]:
    """Read an element size."""
    return vint(data)


def uint(data: Buffer) -> tuple[memoryview, int]:
    """Read a sized unsigned integer, truncated to 64 bits."""
    rest, size = vsize(data)
    rest, raw = _take(rest, size)
    return rest, int.from_bytes(raw, "big") & _MASK64


def read_bool(data: Buffer) -> tuple[memoryview, bool]:
    """Read a sized unsigned integer as a boolean."""
    rest, value = uint(data)
    return rest, value != 0


def read_float(data: Buffer) -> tuple[memoryview, float]:
    """Read a 4- or 8-byte float; any other size yields 0.0 and consumes only the size."""
    rest, size = vsize(data)
    if size == 4:
        rest, raw = _take(rest, 4)
        return rest, struct.unpack(">f", raw)[0]
    if size == 8:
        rest, raw = _take(rest, 8)
        return rest, struct.unpack(">d", raw)[0]
    return rest, 0.0


def read_string(data: Buffer) -> tuple[memoryview, str]:
    """Read a sized UTF-8 string."""
    rest, size = vsize(data)
    rest, raw = _take(rest, size)
    return rest, bytes(raw).decode("utf-8")


def binary(data: Buffer) -> tuple[memoryview, bytes]:
    """Read a sized run of bytes."""
    rest, size = vsize(data)
    rest, raw = _take(rest, size)
    return rest, bytes(raw)


def skip(data: Buffer) -> tuple[memoryview, int]:
    """Skip a sized element body and return its size."""
    rest, size = vsize(data)
    rest, _ = _take(rest, size)
    return rest, size


def _take_until_and_consume(data: Buffer, marker: bytes) -> memoryview:
    view = memoryview(data)
    index = bytes(view).find(marker)
    if index < 0:
        raise IncompleteError(len(marker))
    return view[index + len(marker):]


Reader = Callable[[Buffer], tuple]


def _fill(body: Buffer, target: object, readers: dict[int, tuple[str, Reader]]) -> None:
    """Read child elements of ``body`` into attributes of ``target``."""
    body = memoryview(body)
    while body:
        body, element_id = vid(body)
        entry = readers.get(element_id)
        if entry is None:
            body, size = skip(body)
            print(f"Ignore element {element_id:x} of {size:x} bytes", file=sys.stderr)
            continue
        name, reader = entry
        body, value = reader(body)
        setattr(target, name, value)


@dataclass
class EBMLHeader:
    """The EBML header with the defaults the format specifies."""

    ID: ClassVar[bytes] = EBML_HEADER_ID

    version: int = 1
    read_version: int = 1
    max_id_length: int = 4
    max_size_length: int = 8
    doc_type: str = "matroska"
    doc_type_version: int = 1
    doc_type_read_version: int = 1

    @classmethod
    def parse(cls, data: Buffer) -> tuple[memoryview, "EBMLHeader"]:
        """Parse a header body that follows its ID."""
        rest, size = vsize(data)
        rest, body = _take(rest, size)
        header = cls()
        _fill(body, header, _HEADER_READERS)
        return rest, header


_HEADER_READERS: dict[int, tuple[str, Reader]] = {
    0x4286: ("version", uint),
    0x42F7: ("read_version", uint),
    0x42F2: ("max_id_length", uint),
    0x42F3: ("max_size_length", uint),
    0x4282: ("doc_type", read_string),
    0x4287: ("doc_type_version", uint),
    0x4285: ("doc_type_read_version", uint),
}


@dataclass
class EBMLSegment:
    """The raw content of a segment."""

    ID: ClassVar[bytes] = SEGMENT_ID

    content: bytes

    @classmethod
    def parse(cls, data: Buffer) -> tuple[memoryview, "EBMLSegment"]:
        """Find the next segment and return its content."""
        rest = _take_until_and_consume(data, SEGMENT_ID)
        rest, size = vint(rest)
        rest, content = _take(rest, size)
        return rest, cls(bytes(content))


def parse(data: Buffer) -> tuple[memoryview, tuple[EBMLHeader, EBMLSegment]]:
    """Find the EBML header and the segment that follows it."""
    rest = _take_until_and_consume(data, EBML_HEADER_ID)
    rest, header = EBMLHeader.parse(rest)
    rest, segment = EBMLSegment.parse(rest)
    return rest, (header, segment)