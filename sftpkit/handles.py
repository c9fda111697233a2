"""Table of open file and directory handles."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from enum import IntFlag
from typing import Any, List, Optional, Tuple

from sftpkit.protocol import MessageType, SftpError, Status

_TAG_MASK = 0xFFFFFFFF
_INITIAL_SIZE = 16


@dataclass(frozen=True)
class HandleId:
    """A handle as sent on the wire: a slot index and a sequence tag."""

    id: int
    tag: int


class HandleFlag(IntFlag):
    """Flags attached to file handles."""

    NONE = 0
    TEXT = 0x0001
    APPEND = 0x0002


@dataclass
class _Slot:
    type: MessageType
    tag: int
    resource: Any
    path: str
    flags: HandleFlag = HandleFlag.NONE


class HandleTable:
    """Thread-safe table mapping handle IDs to open files and directories."""

    def __init__(self, max_handles: int = 128) -> None:
        self.max_handles = max_handles
        self._slots: List[Optional[_Slot]] = []
        self._sequence = 0
        self._lock = threading.Lock()

    def _allocate(self, slot_type: MessageType, resource: Any, path: str,
                  flags: HandleFlag) -> HandleId:
        index = next(
            (n for n, slot in enumerate(self._slots) if slot is None), None
        )
        if index is None:
            size = len(self._slots)
            if size >= self.max_handles:
                raise SftpError(Status.FAILURE, "too many open handles")
            new_size = 2 * size if size else _INITIAL_SIZE
            self._slots.extend([None] * (new_size - size))
            index = size
        while not self._sequence:
            self._sequence = (self._sequence + 1) & _TAG_MASK
        tag = self._sequence
        self._sequence = (self._sequence + 1) & _TAG_MASK
        self._slots[index] = _Slot(slot_type, tag, resource, path, flags)
        return HandleId(index, tag)

    def _lookup(self, hid: HandleId) -> Optional[_Slot]:
        if 0 <= hid.id < len(self._slots):
            slot = self._slots[hid.id]
            if slot is not None and slot.tag == hid.tag:
                return slot
        return None

    def new_file(self, fd: int, path: str, flags: int = 0) -> HandleId:
        """Register an open file descriptor and return its handle."""
        with self._lock:
            return self._allocate(MessageType.OPEN, fd, path, HandleFlag(flags))

    def new_dir(self, directory: Any, path: str) -> HandleId:
        """Register an open directory stream (anything with ``close()``)."""
        with self._lock:
            return self._allocate(
                MessageType.OPENDIR, directory, path, HandleFlag.NONE
            )

    def get_fd(self, hid: HandleId) -> Tuple[int, HandleFlag]:
        """Return the file descriptor and flags of a file handle."""
        with self._lock:
            slot = self._lookup(hid)
            if slot is None or slot.type != MessageType.OPEN:
                raise SftpError(Status.INVALID_HANDLE)
            return slot.resource, slot.flags

    def get_dir(self, hid: HandleId) -> Tuple[Any, str]:
        """Return the directory stream and path of a directory handle."""
        with self._lock:
            slot = self._lookup(hid)
            if slot is None or slot.type != MessageType.OPENDIR:
                raise SftpError(Status.INVALID_HANDLE)
            return slot.resource, slot.path

    def close(self, hid: HandleId) -> None:
        """Release a handle and close what it refers to.

        Raises SftpError for an unknown handle and OSError if closing fails.
        """
        if not hid.tag:
            raise SftpError(Status.INVALID_HANDLE)
        with self._lock:
            slot = self._lookup(hid)
            if slot is None:
                raise SftpError(Status.INVALID_HANDLE)
            self._slots[hid.id] = None
            if slot.type == MessageType.OPEN:
                os.close(slot.resource)
            else:
                slot.resource.close()

    def flags(self, hid: HandleId) -> HandleFlag:
        """Return a handle's flags, or no flags if the handle is invalid."""
        with self._lock:
            slot = self._lookup(hid)
            return slot.flags if slot is not None else HandleFlag.NONE