import struct

import pytest

from sftpkit.handles import HandleId
from sftpkit.parse import Parser
from sftpkit.protocol import SftpError, Status


def test_integers_read_in_sequence():
    data = struct.pack(">BHIQ", 7, 0x0102, 0x01020304, 0x0102030405060708)
    p = Parser(data)
    assert p.uint8() == 7
    assert p.uint16() == 0x0102
    assert p.uint32() == 0x01020304
    assert p.uint64() == 0x0102030405060708
    assert p.remaining == 0


def test_short_uint8_is_bad_message():
    p = Parser(b"")
    with pytest.raises(SftpError) as info:
        p.uint8()
    assert info.value.status == Status.BAD_MESSAGE
    assert p.remaining == 0


def test_short_uint16_is_bad_message():
    p = Parser(b"\xff")
    with pytest.raises(SftpError) as info:
        p.uint16()
    assert info.value.status == Status.BAD_MESSAGE
    assert p.remaining == 1


def test_short_uint32_is_bad_message():
    p = Parser(b"\xff" * 3)
    with pytest.raises(SftpError) as info:
        p.uint32()
    assert info.value.status == Status.BAD_MESSAGE
    assert p.remaining == 3


def test_short_uint64_is_bad_message():
    p = Parser(b"\xff" * 7)
    with pytest.raises(SftpError) as info:
        p.uint64()
    assert info.value.status == Status.BAD_MESSAGE
    assert p.remaining == 7


def test_failed_read_consumes_nothing():
    p = Parser(b"\x00\x01\x02")
    with pytest.raises(SftpError):
        p.uint32()
    assert p.remaining == 3
    assert p.uint16() == 1


def test_string_round_trip():
    payload = b"hello\x00world"
    p = Parser(struct.pack(">I", len(payload)) + payload + b"\x09")
    assert p.string() == payload
    assert p.uint8() == 9


def test_empty_string():
    p = Parser(struct.pack(">I", 0))
    assert p.string() == b""
    assert p.remaining == 0


def test_string_length_overflow():
    p = Parser(struct.pack(">I", 0xFFFFFFFF))
    with pytest.raises(SftpError) as info:
        p.string()
    assert info.value.status == Status.BAD_MESSAGE


def test_string_longer_than_message():
    p = Parser(struct.pack(">I", 10) + b"abc")
    with pytest.raises(SftpError) as info:
        p.string()
    assert info.value.status == Status.BAD_MESSAGE


def test_path_without_decoder_is_raw():
    p = Parser(struct.pack(">I", 4) + b"/tmp")
    assert p.path() == b"/tmp"


def test_path_with_decoder():
    raw = "caf\u00e9".encode("utf-8")
    p = Parser(struct.pack(">I", len(raw)) + raw)
    assert p.path(lambda b: b.decode("utf-8")) == "caf\u00e9"


def test_path_decoder_error_propagates():
    def reject(_raw):
        raise SftpError(Status.INVALID_FILENAME)

    p = Parser(struct.pack(">I", 1) + b"x")
    with pytest.raises(SftpError) as info:
        p.path(reject)
    assert info.value.status == Status.INVALID_FILENAME


def test_handle_round_trip():
    p = Parser(struct.pack(">III", 8, 3, 42))
    assert p.handle() == HandleId(3, 42)
    assert p.remaining == 0


def test_handle_wrong_length():
    p = Parser(struct.pack(">III", 4, 3, 42))
    with pytest.raises(SftpError) as info:
        p.handle()
    assert info.value.status == Status.BAD_MESSAGE


def test_handle_truncated():
    p = Parser(struct.pack(">II", 8, 3))
    with pytest.raises(SftpError) as info:
        p.handle()
    assert info.value.status == Status.BAD_MESSAGE