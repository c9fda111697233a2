"""Debug output: formatted messages and hex dumps."""

from __future__ import annotations

import os
import sys
import threading
from typing import IO, Optional

_BYTES_PER_LINE = 16


def _printable(byte: int) -> str:
    return chr(byte) if 0x20 <= byte < 0x7F else "."


def format_hexdump(data: bytes) -> str:
    """Render ``data`` as hex-dump lines of 16 bytes each."""
    lines = []
    for offset in range(0, len(data), _BYTES_PER_LINE):
        chunk = data[offset:offset + _BYTES_PER_LINE]
        hex_part = "".join(f" {b:02x}" for b in chunk)
        hex_part += "   " * (_BYTES_PER_LINE - len(chunk))
        text_part = "".join(_printable(b) for b in chunk)
        lines.append(f"{offset:4x} {hex_part}  {text_part}\n")
    return "".join(lines)


class DebugLog:
    """Debug sink, opened on first use.

    If ``path`` is given, output goes to that file (created with mode 0600
    and truncated).  If it cannot be opened, an error is reported on standard
    error and output falls back to ``stream``, or standard error if no stream
    was given.  When ``enabled`` is false, nothing is written.
    """

    def __init__(
        self,
        enabled: bool = False,
        path: Optional[str] = None,
        stream: Optional[IO[str]] = None,
    ) -> None:
        self.enabled = enabled
        self.path = path
        self._stream = stream
        self._output: Optional[IO[str]] = None
        self._owned = False
        self._lock = threading.Lock()

    def _open(self) -> IO[str]:
        if self._output is None:
            if self.path is not None:
                try:
                    fd = os.open(
                        self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600
                    )
                except OSError as exc:
                    print(f"{self.path}: {exc.strerror}", file=sys.stderr)
                else:
                    self._output = os.fdopen(fd, "w")
                    self._owned = True
            if self._output is None:
                self._output = self._stream if self._stream is not None else sys.stderr
        return self._output

    def hexdump(self, data: bytes) -> None:
        """Write a hex dump of ``data``."""
        if not self.enabled:
            return
        with self._lock:
            out = self._open()
            out.write(format_hexdump(bytes(data)))
            out.flush()

    def message(self, fmt: str, *args: object) -> None:
        """Write one line, formatted printf-style when arguments are given."""
        if not self.enabled:
            return
        text = fmt % args if args else fmt
        with self._lock:
            out = self._open()
            out.write(text)
            out.write("\n")
            out.flush()

    def close(self) -> None:
        """Close the debug file if this log opened one."""
        with self._lock:
            if self._owned and self._output is not None:
                self._output.close()
            self._output = None
            self._owned = False