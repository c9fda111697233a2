"""Path helpers: dirname, current directory, symlinks and canonical paths."""

from __future__ import annotations

import errno
import os
from enum import IntFlag
from typing import List

_MAX_LINK_TARGET = 65536
_MAX_LINK_DEPTH = 40


class RealpathFlag(IntFlag):
    """Options for :func:`find_realpath`."""

    NONE = 0
    READLINK = 0x0001
    MUST_EXIST = 0x0002


def dirname(path: str) -> str:
    """Return the directory part of ``path``.

    A path without a slash gives ``"."``. A path whose only slash is the
    first character gives ``"/"``.
    """
    last = path.rfind("/")
    if last < 0:
        return "."
    if last == 0:
        return "/"
    return path[:last]


def getcwd() -> str:
    """Return the current working directory; raises OSError on failure."""
    return os.getcwd()


def readlink(path: str) -> str:
    """Return the target of the symbolic link ``path``.

    Raises OSError if ``path`` is not a link or cannot be read, and OSError
    with ``E2BIG`` if the target is unreasonably long.
    """
    target = os.readlink(path)
    if len(os.fsencode(target)) >= _MAX_LINK_TARGET:
        raise OSError(errno.E2BIG, os.strerror(errno.E2BIG), path)
    return target


def _joined(parts: List[str]) -> str:
    return "/" + "/".join(parts)


def _process(parts: List[str], path: str, flags: RealpathFlag, depth: int) -> None:
    if depth > _MAX_LINK_DEPTH:
        raise OSError(errno.ELOOP, os.strerror(errno.ELOOP), path)
    for element in path.split("/"):
        if not element or element == ".":
            continue
        if element == "..":
            if parts:
                parts.pop()
            continue
        parts.append(element)
        if not flags & RealpathFlag.READLINK:
            continue
        current = _joined(parts)
        try:
            target = readlink(current)
        except OSError as exc:
            if exc.errno == errno.EINVAL:
                continue  # not a link
            if flags & RealpathFlag.MUST_EXIST:
                raise
            continue
        if target.startswith("/"):
            parts.clear()
        else:
            parts.pop()
        _process(parts, target, flags, depth + 1)


def find_realpath(path: str, flags: int = RealpathFlag.NONE) -> str:
    """Return an absolute, normalized form of ``path``.

    ``.`` and ``..`` elements are resolved textually; ``/..`` is ``/``.
    With ``READLINK``, symbolic links are followed; with ``MUST_EXIST`` as
    well, an element that cannot be examined raises OSError.
    """
    flags = RealpathFlag(flags)
    if not path:
        path = "."
    if not path.startswith("/"):
        path = getcwd() + "/" + path
    parts: List[str] = []
    _process(parts, path, flags, 0)
    return _joined(parts)