import pytest

from sftpkit.protocol import (
    AceMask,
    AttrFlag,
    FileType,
    MessageType,
    OpenPFlag,
    RequestFlag,
    SftpError,
    Status,
)


def test_message_type_wire_values():
    assert MessageType(5) is MessageType.READ
    assert MessageType(6) is MessageType.WRITE
    assert MessageType(101) is MessageType.STATUS
    assert MessageType(201) is MessageType.EXTENDED_REPLY


def test_message_type_from_wire_byte():
    assert MessageType(17) is MessageType.STAT
    with pytest.raises(ValueError):
        MessageType(99)


def test_status_values():
    assert Status.OK == 0
    assert Status.BAD_MESSAGE == 5
    assert Status.INVALID_HANDLE == 9
    assert Status(31) is Status.NO_MATCHING_BYTE_RANGE_LOCK


def test_attr_flag_aliases_share_value():
    assert AttrFlag(0x00000008) is AttrFlag.ACMODTIME
    assert AttrFlag(0x00000008) is AttrFlag.ACCESSTIME
    assert AttrFlag(0x80000000) is AttrFlag.EXTENDED


def test_attr_flags_combine():
    combined = AttrFlag.SIZE | AttrFlag.PERMISSIONS
    assert AttrFlag.SIZE in combined
    assert AttrFlag.UIDGID not in combined
    assert AttrFlag(int(combined)) == combined


def test_request_flag_disposition_mask():
    flags = RequestFlag(0x0000000B)
    assert flags & RequestFlag.ACCESS_DISPOSITION == RequestFlag.OPEN_OR_CREATE
    assert RequestFlag.APPEND_DATA in flags
    assert RequestFlag(0) == RequestFlag.CREATE_NEW


def test_ace_mask_aliases():
    assert AceMask(0x00000001) is AceMask.LIST_DIRECTORY
    assert AceMask(0x00000001) is AceMask.READ_DATA
    assert AceMask(0x00000002) is AceMask.ADD_FILE


def test_open_pflags_and_file_types():
    assert OpenPFlag.READ | OpenPFlag.WRITE == 3
    assert FileType(9) is FileType.FIFO


def test_sftp_error_carries_status():
    err = SftpError(Status.NO_SUCH_FILE, "missing")
    assert err.status is Status.NO_SUCH_FILE
    assert err.message == "missing"
    assert str(err) == "missing"


def test_sftp_error_converts_int_status():
    err = SftpError(9)
    assert err.status is Status.INVALID_HANDLE
    assert "invalid handle" in str(err)


def test_sftp_error_unknown_status_kept():
    err = SftpError(1000)
    assert err.status == 1000
    assert "1000" in str(err)


def test_sftp_error_is_raisable():
    err = SftpError(Status.PERMISSION_DENIED, "nope")
    assert err.status is Status.PERMISSION_DENIED
    assert str(err) == "nope"
    with pytest.raises(Exception) as info:
        raise err
    assert info.value is err