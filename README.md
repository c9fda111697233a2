# sftpkit

Building blocks for writing an SFTP file server in Python. The package
covers the parts that every SFTP server needs, whatever protocol
versions it supports:

- `sftpkit.protocol`: the protocol's message types, status codes and
  flag values as enums (`MessageType`, `Status`, `AttrFlag`, `FileType`,
  `OpenPFlag`, `RequestFlag` and others). It also has `SftpError`, an
  exception that carries an SFTP status code in its `status` attribute.
- `sftpkit.words`: big-endian 16, 32 and 64-bit integers stored in and
  read from byte buffers (`put16`, `put32`, `put64`, `get16`, `get32`,
  `get64`). A value that does not fit the buffer raises `ValueError`.
- `sftpkit.parse`: `Parser`, which reads integers, strings, paths and
  handles from a request one field after another. Truncated or
  malformed input raises `SftpError` with `Status.BAD_MESSAGE`.
- `sftpkit.send`: `MessageWriter`, which builds length-prefixed
  messages, including nested sub-messages (`sub_begin` and `sub_end`).
  `end()` fills in the length and writes the whole message to a file
  descriptor or binary stream. A lock shared by all writers keeps
  messages from being interleaved.
- `sftpkit.handles`: `HandleTable`, a thread-safe table of open file
  descriptors and directory streams. Each `HandleId` is a slot index
  plus a tag, so a stale handle is never mistaken for a new one. Unknown
  handles raise `SftpError` with `Status.INVALID_HANDLE`. Files can
  carry `HandleFlag.TEXT` or `HandleFlag.APPEND`.
- `sftpkit.serialize`: `Serializer`, which decides when a queued request
  may run, and `reorderable`. Reads and writes on different handles may
  run in any order. On the same handle, a write may pass a read or write
  whose byte range it does not overlap. Reads on the same handle, and
  any requests on text or append handles, keep their order. So does
  every other kind of request.
- `sftpkit.workqueue`: `WorkQueue`, a pool of worker threads that runs
  `worker(job, workerdata)` for each added job, with optional per-thread
  `init` and `cleanup` callbacks. It can be used as a context manager.
  Closing it lets every pending job finish first.
- `sftpkit.paths`: `dirname`, `getcwd`, `readlink` and `find_realpath`
  for turning client-supplied paths into canonical absolute paths.
  `find_realpath` can follow symbolic links (`RealpathFlag.READLINK`).
  With `RealpathFlag.MUST_EXIST` as well, it raises `OSError` for an
  element that cannot be examined.
- `sftpkit.charset`: `decode_multibyte` and `Converter` for converting
  path names between the local encoding and another one, such as UTF-8.
- `sftpkit.debug`: `DebugLog` writes tracing messages and hex dumps to a
  file or stream. `format_hexdump` renders bytes 16 to a line.
- `sftpkit.state`: `SharedValue`, a value read and written under a lock.

## Example

Build a status message:

```python
import io

from sftpkit.protocol import MessageType, Status
from sftpkit.send import MessageWriter

out = io.BytesIO()
writer = MessageWriter(out)
writer.begin()
writer.uint8(MessageType.STATUS)
writer.uint32(1)              # request id
writer.uint32(Status.OK)
writer.string("OK")
writer.end()
```

Read it back, skipping the 4-byte length word:

```python
from sftpkit.parse import Parser

parser = Parser(out.getvalue()[4:])
assert parser.uint8() == MessageType.STATUS
request_id = parser.uint32()
status = parser.uint32()
text = parser.string()        # b"OK"
```

Canonicalize a path and follow symbolic links:

```python
from sftpkit.paths import RealpathFlag, find_realpath

print(find_realpath("some/../dir/./file", RealpathFlag.READLINK))
```

## What it does not do

sftpkit is a library of parts, not a server. It has no command to run.
It does not read requests from a connection or dispatch them, and it
has no implementations of the individual requests (open, read, stat,
rename and so on). It does not encode or decode file attributes or
negotiate protocol versions. Those are left to the program that uses
these parts.

## Running the tests

```
pip install -e ".[test]"
pytest
```