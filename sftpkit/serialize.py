"""Ordering of concurrently executed requests.

Reads and writes may be reordered with respect to each other, within
limits. Every other request is executed strictly in the order it was
received. Reads on the same handle are never reordered, because some
clients assume that responses come back in request order. Requests on
text-mode or append-mode handles are never reordered. A write is never
reordered with an overlapping read or write on the same handle.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, List, Optional

from sftpkit.handles import HandleFlag, HandleId, HandleTable
from sftpkit.parse import Parser
from sftpkit.protocol import MessageType, SftpError

_U64_MASK = 0xFFFFFFFFFFFFFFFF
_NO_HANDLE = HandleId(0, 0)
_IO_TYPES = (MessageType.READ, MessageType.WRITE)


@dataclass
class _Entry:
    job: Any
    type: int
    hid: HandleId
    flags: int
    offset: int
    length: int


def _ranges_overlap(first: Any, second: Any) -> bool:
    if first.length and second.length:
        first_end = (first.offset + first.length - 1) & _U64_MASK
        second_end = (second.offset + second.length - 1) & _U64_MASK
        if second.offset <= first_end <= second_end:
            return True
        if first.offset <= second_end <= first_end:
            return True
    return False


def reorderable(first: Any, second: Any, flags: int) -> bool:
    """Return True if the two requests may be executed in either order.

    ``first`` and ``second`` need ``type``, ``hid``, ``offset`` and
    ``length`` attributes; ``flags`` are the handle flags of ``first``.
    """
    if first.type not in _IO_TYPES or second.type not in _IO_TYPES:
        return False
    if first.hid != second.hid:
        return True
    if first.type == MessageType.READ and second.type == MessageType.READ:
        return False
    if flags & (HandleFlag.TEXT | HandleFlag.APPEND):
        return False
    if MessageType.WRITE in (first.type, second.type) and _ranges_overlap(
        first, second
    ):
        return False
    return True


class Serializer:
    """Queue of outstanding requests that enforces the ordering rules."""

    def __init__(self, handles: Optional[HandleTable] = None) -> None:
        self.handles = handles
        self._entries: List[_Entry] = []  # oldest first
        self._cond = threading.Condition()

    def __len__(self) -> int:
        with self._cond:
            return len(self._entries)

    def _describe(self, job: Any, data: bytes) -> _Entry:
        parser = Parser(data)
        msg_type = 0
        try:
            msg_type = parser.uint8()
            if msg_type in _IO_TYPES:
                parser.uint32()  # request id
                hid = parser.handle()
                offset = parser.uint64()
                length = parser.uint32()
                flags = (
                    int(self.handles.flags(hid)) if self.handles is not None else 0
                )
                return _Entry(job, msg_type, hid, flags, offset, length)
        except SftpError:
            pass
        return _Entry(job, msg_type, _NO_HANDLE, 0, 0, _U64_MASK)

    def enqueue(self, job: Any, data: bytes) -> None:
        """Record ``job``, whose request message is ``data``, as the newest."""
        entry = self._describe(job, data)
        with self._cond:
            self._entries.append(entry)

    def _find(self, job: Any) -> Optional[int]:
        return next(
            (n for n, entry in enumerate(self._entries) if entry.job is job), None
        )

    def _blocked(self, job: Any) -> bool:
        position = self._find(job)
        if position is None:
            return False
        entry = self._entries[position]
        return any(
            not reorderable(entry, older, entry.flags)
            for older in self._entries[:position]
        )

    def wait(self, job: Any) -> None:
        """Block until no older conflicting request remains queued.

        A job that was never enqueued proceeds at once.
        """
        with self._cond:
            self._cond.wait_for(lambda: not self._blocked(job))

    def remove(self, job: Any) -> None:
        """Remove a completed job and wake any waiters."""
        with self._cond:
            position = self._find(job)
            if position is not None:
                del self._entries[position]
                self._cond.notify_all()