"""Reading SFTP message fields from a received packet."""

from __future__ import annotations

import struct
from typing import Callable, Optional, Union

from sftpkit.handles import HandleId
from sftpkit.protocol import SftpError, Status

_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")

_HANDLE_LENGTH = 8


class Parser:
    """Sequential reader over the bytes of one message.

    Every read that runs past the end of the data, or meets a malformed
    field, raises ``SftpError`` with status ``BAD_MESSAGE``.
    """

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(bytes(data))
        self._pos = 0

    @property
    def remaining(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._pos

    def _take(self, count: int) -> memoryview:
        if self.remaining < count:
            raise SftpError(Status.BAD_MESSAGE, "message truncated")
        start = self._pos
        self._pos += count
        return self._data[start:self._pos]

    def _unpack(self, fmt: struct.Struct) -> int:
        return fmt.unpack(self._take(fmt.size))[0]

    def uint8(self) -> int:
        """Read one byte."""
        return self._unpack(_U8)

    def uint16(self) -> int:
        """Read a big-endian 16-bit value."""
        return self._unpack(_U16)

    def uint32(self) -> int:
        """Read a big-endian 32-bit value."""
        return self._unpack(_U32)

    def uint64(self) -> int:
        """Read a big-endian 64-bit value."""
        return self._unpack(_U64)

    def string(self) -> bytes:
        """Read a length-prefixed byte string."""
        length = self.uint32()
        if length == 0xFFFFFFFF:
            raise SftpError(Status.BAD_MESSAGE, "string length overflow")
        if self.remaining < length:
            raise SftpError(Status.BAD_MESSAGE, "string exceeds message")
        return bytes(self._take(length))

    def path(
        self, decode: Optional[Callable[[bytes], str]] = None
    ) -> Union[str, bytes]:
        """Read a path string, converted by ``decode`` when one is given.

        ``decode`` may raise ``SftpError`` to reject the path.
        """
        raw = self.string()
        return decode(raw) if decode is not None else raw

    def handle(self) -> HandleId:
        """Read a handle.  Its validity is not checked."""
        length = self.uint32()
        if length != _HANDLE_LENGTH:
            raise SftpError(Status.BAD_MESSAGE, "bad handle length")
        hid = self.uint32()
        tag = self.uint32()
        return HandleId(hid, tag)