"""Big-endian fixed-width integers in byte buffers."""

from __future__ import annotations

import struct

_FORMATS = {2: struct.Struct(">H"), 4: struct.Struct(">I"), 8: struct.Struct(">Q")}


def _put(size: int, buffer: bytearray, offset: int, value: int) -> None:
    if offset < 0 or offset + size > len(buffer):
        raise ValueError(f"no room for {size} bytes at offset {offset}")
    _FORMATS[size].pack_into(buffer, offset, value & ((1 << (8 * size)) - 1))


def _get(size: int, data: bytes, offset: int) -> int:
    if offset < 0 or offset + size > len(data):
        raise ValueError(f"need {size} bytes at offset {offset}")
    return _FORMATS[size].unpack_from(data, offset)[0]


def put16(buffer: bytearray, offset: int, value: int) -> None:
    """Store a 16-bit value at ``offset``."""
    _put(2, buffer, offset, value)


def put32(buffer: bytearray, offset: int, value: int) -> None:
    """Store a 32-bit value at ``offset``."""
    _put(4, buffer, offset, value)


def put64(buffer: bytearray, offset: int, value: int) -> None:
    """Store a 64-bit value at ``offset``."""
    _put(8, buffer, offset, value)


def get16(data: bytes, offset: int) -> int:
    """Read a 16-bit value at ``offset``."""
    return _get(2, data, offset)


def get32(data: bytes, offset: int) -> int:
    """Read a 32-bit value at ``offset``."""
    return _get(4, data, offset)


def get64(data: bytes, offset: int) -> int:
    """Read a 64-bit value at ``offset``."""
    return _get(8, data, offset)