"""SFTP wire protocol constants and the protocol-level exception."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class MessageType(IntEnum):
    """SFTP packet types."""

    INIT = 1
    VERSION = 2
    OPEN = 3
    CLOSE = 4
    READ = 5
    WRITE = 6
    LSTAT = 7
    FSTAT = 8
    SETSTAT = 9
    FSETSTAT = 10
    OPENDIR = 11
    READDIR = 12
    REMOVE = 13
    MKDIR = 14
    RMDIR = 15
    REALPATH = 16
    STAT = 17
    RENAME = 18
    READLINK = 19
    SYMLINK = 20
    LINK = 21
    BLOCK = 22
    UNBLOCK = 23
    STATUS = 101
    HANDLE = 102
    DATA = 103
    NAME = 104
    ATTRS = 105
    EXTENDED = 200
    EXTENDED_REPLY = 201


class Status(IntEnum):
    """SFTP status and error codes."""

    OK = 0
    EOF = 1
    NO_SUCH_FILE = 2
    PERMISSION_DENIED = 3
    FAILURE = 4
    BAD_MESSAGE = 5
    NO_CONNECTION = 6
    CONNECTION_LOST = 7
    OP_UNSUPPORTED = 8
    INVALID_HANDLE = 9
    NO_SUCH_PATH = 10
    FILE_ALREADY_EXISTS = 11
    WRITE_PROTECT = 12
    NO_MEDIA = 13
    NO_SPACE_ON_FILESYSTEM = 14
    QUOTA_EXCEEDED = 15
    UNKNOWN_PRINCIPAL = 16
    LOCK_CONFLICT = 17
    DIR_NOT_EMPTY = 18
    NOT_A_DIRECTORY = 19
    INVALID_FILENAME = 20
    LINK_LOOP = 21
    CANNOT_DELETE = 22
    INVALID_PARAMETER = 23
    FILE_IS_A_DIRECTORY = 24
    BYTE_RANGE_LOCK_CONFLICT = 25
    BYTE_RANGE_LOCK_REFUSED = 26
    DELETE_PENDING = 27
    FILE_CORRUPT = 28
    OWNER_INVALID = 29
    GROUP_INVALID = 30
    NO_MATCHING_BYTE_RANGE_LOCK = 31


class AttrFlag(IntFlag):
    """Valid-attribute flags of an attribute block."""

    SIZE = 0x00000001
    UIDGID = 0x00000002  # v3 only
    PERMISSIONS = 0x00000004
    ACCESSTIME = 0x00000008  # v4 and later
    ACMODTIME = 0x00000008  # v3 only
    CREATETIME = 0x00000010
    MODIFYTIME = 0x00000020
    ACL = 0x00000040
    OWNERGROUP = 0x00000080
    SUBSECOND_TIMES = 0x00000100
    BITS = 0x00000200
    ALLOCATION_SIZE = 0x00000400
    TEXT_HINT = 0x00000800
    MIME_TYPE = 0x00001000
    LINK_COUNT = 0x00002000
    UNTRANSLATED_NAME = 0x00004000
    CTIME = 0x00008000
    EXTENDED = 0x80000000


class FileType(IntEnum):
    """File types reported in attributes."""

    REGULAR = 1
    DIRECTORY = 2
    SYMLINK = 3
    SPECIAL = 4
    UNKNOWN = 5
    SOCKET = 6
    CHAR_DEVICE = 7
    BLOCK_DEVICE = 8
    FIFO = 9


class AttribBits(IntFlag):
    """The attrib-bits field."""

    READONLY = 0x00000001
    SYSTEM = 0x00000002
    HIDDEN = 0x00000004
    CASE_INSENSITIVE = 0x00000008
    ARCHIVE = 0x00000010
    ENCRYPTED = 0x00000020
    COMPRESSED = 0x00000040
    SPARSE = 0x00000080
    APPEND_ONLY = 0x00000100
    IMMUTABLE = 0x00000200
    SYNC = 0x00000400
    TRANSLATION_ERR = 0x00000800


class TextHint(IntEnum):
    """The text-hint field."""

    KNOWN_TEXT = 0x00
    GUESSED_TEXT = 0x01
    KNOWN_BINARY = 0x02
    GUESSED_BINARY = 0x03


class RequestFlag(IntFlag):
    """Open flags for v5 and later; the low three bits are a disposition."""

    CREATE_NEW = 0x00000000
    CREATE_TRUNCATE = 0x00000001
    OPEN_EXISTING = 0x00000002
    OPEN_OR_CREATE = 0x00000003
    TRUNCATE_EXISTING = 0x00000004
    ACCESS_DISPOSITION = 0x00000007
    APPEND_DATA = 0x00000008
    APPEND_DATA_ATOMIC = 0x00000010
    TEXT_MODE = 0x00000020
    BLOCK_READ = 0x00000040
    BLOCK_WRITE = 0x00000080
    BLOCK_DELETE = 0x00000100
    BLOCK_ADVISORY = 0x00000200
    NOFOLLOW = 0x00000400
    DELETE_ON_CLOSE = 0x00000800
    ACCESS_AUDIT_ALARM_INFO = 0x00001000
    ACCESS_BACKUP = 0x00002000
    BACKUP_STREAM = 0x00004000
    OVERRIDE_OWNER = 0x00008000


class RenameFlag(IntFlag):
    """Rename request flags."""

    OVERWRITE = 0x00000001
    ATOMIC = 0x00000002
    NATIVE = 0x00000004


class RealpathControl(IntEnum):
    """Realpath control byte values."""

    NO_CHECK = 0x00000001
    STAT_IF = 0x00000002
    STAT_ALWAYS = 0x00000003


class OpenPFlag(IntFlag):
    """Open pflags for protocol versions before 5."""

    READ = 0x00000001
    WRITE = 0x00000002
    APPEND = 0x00000004
    CREAT = 0x00000008
    TRUNC = 0x00000010
    EXCL = 0x00000020
    TEXT = 0x00000040


class AclCap(IntFlag):
    """ACL capability bits."""

    ALLOW = 0x00000001
    DENY = 0x00000002
    AUDIT = 0x00000004
    ALARM = 0x00000008
    INHERIT_ACCESS = 0x00000010
    INHERIT_AUDIT_ALARM = 0x00000020


class AceType(IntEnum):
    """ACE types."""

    ACCESS_ALLOWED = 0x00000000
    ACCESS_DENIED = 0x00000001
    SYSTEM_AUDIT = 0x00000002
    SYSTEM_ALARM = 0x00000003


class AceFlag(IntFlag):
    """ACE flag bits."""

    FILE_INHERIT = 0x00000001
    DIRECTORY_INHERIT = 0x00000002
    NO_PROPAGATE_INHERIT = 0x00000004
    INHERIT_ONLY = 0x00000008
    SUCCESSFUL_ACCESS = 0x00000010
    FAILED_ACCESS = 0x00000020
    IDENTIFIER_GROUP = 0x00000040


class AceMask(IntFlag):
    """ACE access mask bits."""

    READ_DATA = 0x00000001
    LIST_DIRECTORY = 0x00000001
    WRITE_DATA = 0x00000002
    ADD_FILE = 0x00000002
    APPEND_DATA = 0x00000004
    ADD_SUBDIRECTORY = 0x00000004
    READ_NAMED_ATTRS = 0x00000008
    WRITE_NAMED_ATTRS = 0x00000010
    EXECUTE = 0x00000020
    DELETE_CHILD = 0x00000040
    READ_ATTRIBUTES = 0x00000080
    WRITE_ATTRIBUTES = 0x00000100
    DELETE = 0x00010000
    READ_ACL = 0x00020000
    WRITE_ACL = 0x00040000
    WRITE_OWNER = 0x00080000
    SYNCHRONIZE = 0x00100000


class AclControl(IntFlag):
    """ACL control bits."""

    CONTROL_INCLUDED = 0x00000001
    CONTROL_PRESENT = 0x00000002
    CONTROL_INHERITED = 0x00000004
    AUDIT_ALARM_INCLUDED = 0x00000010


class SftpError(Exception):
    """An operation failed with an SFTP status code."""

    def __init__(self, status: int, message: str = "") -> None:
        try:
            code: int = Status(status)
        except ValueError:
            code = int(status)
        self.status = code
        self.message = message
        super().__init__(message or self._describe())

    def _describe(self) -> str:
        if isinstance(self.status, Status):
            return self.status.name.lower().replace("_", " ")
        return f"status {self.status}"