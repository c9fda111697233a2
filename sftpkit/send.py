"""Building and sending SFTP messages."""

from __future__ import annotations

import os
import struct
import threading
from typing import IO, Callable, Optional, Union

from sftpkit.debug import DebugLog
from sftpkit.handles import HandleId

_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")

_MAX_MESSAGE = 0x80000000
_HANDLE_LENGTH = 8

# Serializes output so that concurrent messages are never interleaved.
_output_lock = threading.Lock()


class MessageWriter:
    """Builds one message at a time and writes it, length-prefixed.

    ``output`` is a file descriptor or a binary stream with ``write``.
    """

    def __init__(
        self,
        output: Union[int, IO[bytes]] = 1,
        debug: Optional[DebugLog] = None,
        label: str = "response",
    ) -> None:
        self.output = output
        self.debug = debug
        self.label = label
        self._buffer: Optional[bytearray] = None

    @property
    def message(self) -> bytes:
        """The message built so far, including its length word."""
        return bytes(self._active())

    def _active(self) -> bytearray:
        if self._buffer is None:
            raise RuntimeError("no message in progress; call begin() first")
        return self._buffer

    def begin(self) -> None:
        """Start a new message, discarding any partial one."""
        self._buffer = bytearray()
        self.uint32(0)  # length, filled in by end()

    def end(self) -> None:
        """Fill in the length, write the message and close it."""
        buffer = self._active()
        if len(buffer) >= _MAX_MESSAGE:
            raise ValueError("message too large")
        _U32.pack_into(buffer, 0, len(buffer) - 4)
        with _output_lock:
            if self.debug is not None and self.debug.enabled:
                self.debug.message("%s:", self.label)
                self.debug.hexdump(bytes(buffer[4:]))
            self._write_all(bytes(buffer))
        self._buffer = None

    def _write_all(self, data: bytes) -> None:
        view = memoryview(data)
        written = 0
        while written < len(view):
            if isinstance(self.output, int):
                n = os.write(self.output, view[written:])
            else:
                n = self.output.write(view[written:])
                if n is None:
                    n = len(view) - written
            written += n
        if not isinstance(self.output, int) and hasattr(self.output, "flush"):
            self.output.flush()

    def uint8(self, value: int) -> None:
        """Append one byte."""
        self._active().append(value & 0xFF)

    def uint16(self, value: int) -> None:
        """Append a big-endian 16-bit value."""
        self._active().extend(_U16.pack(value & 0xFFFF))

    def uint32(self, value: int) -> None:
        """Append a big-endian 32-bit value."""
        self._active().extend(_U32.pack(value & 0xFFFFFFFF))

    def uint64(self, value: int) -> None:
        """Append a big-endian 64-bit value."""
        self._active().extend(_U64.pack(value & 0xFFFFFFFFFFFFFFFF))

    def data(self, value: bytes) -> None:
        """Append a length-prefixed byte block."""
        buffer = self._active()
        buffer.extend(_U32.pack(len(value)))
        buffer.extend(value)

    def string(self, value: Union[str, bytes]) -> None:
        """Append a string; text is encoded as UTF-8."""
        if isinstance(value, str):
            value = value.encode("utf-8")
        self.data(value)

    def path(
        self,
        path: Union[str, bytes],
        encode: Optional[Callable[[Union[str, bytes]], Union[str, bytes]]] = None,
    ) -> None:
        """Append a path, converted for the wire by ``encode`` if given."""
        if encode is not None:
            try:
                path = encode(path)
            except (UnicodeError, ValueError) as exc:
                raise ValueError(f"cannot encode local path name {path!r}") from exc
        self.string(path)

    def handle(self, hid: HandleId) -> None:
        """Append a handle."""
        buffer = self._active()
        buffer.extend(_U32.pack(_HANDLE_LENGTH))
        buffer.extend(_U32.pack(hid.id & 0xFFFFFFFF))
        buffer.extend(_U32.pack(hid.tag & 0xFFFFFFFF))

    def sub_begin(self) -> int:
        """Start a sub-message with its own length word; return its offset."""
        buffer = self._active()
        buffer.extend(b"\x00\x00\x00\x00")
        return len(buffer)

    def sub_end(self, offset: int) -> None:
        """Fill in the length word of the sub-message started at ``offset``."""
        buffer = self._active()
        _U32.pack_into(buffer, offset - 4, len(buffer) - offset)