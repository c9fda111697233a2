"""Character set conversion."""

from __future__ import annotations

import codecs
import locale
from typing import Optional


def decode_multibyte(data: bytes, encoding: Optional[str] = None) -> str:
    """Decode ``data`` from ``encoding`` (default: the locale's) to text.

    Raises UnicodeDecodeError if ``data`` is not valid in that encoding.
    """
    if encoding is None:
        encoding = locale.getpreferredencoding(False)
    return bytes(data).decode(encoding)


class Converter:
    """Converts byte strings from one encoding to another.

    Unknown encodings raise LookupError when the converter is created.
    """

    def __init__(self, from_encoding: str, to_encoding: str) -> None:
        self.from_encoding = codecs.lookup(from_encoding).name
        self.to_encoding = codecs.lookup(to_encoding).name

    def convert(self, data: bytes) -> bytes:
        """Return ``data`` re-encoded; raises UnicodeError if impossible."""
        return bytes(data).decode(self.from_encoding).encode(self.to_encoding)