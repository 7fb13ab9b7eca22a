"""The package for miscellaneous messages."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from dblib.tds.packet_queue import PacketQueue
from dblib.tds.token import Token


class MsgStatus(enum.IntEnum):
    """Whether a message package has arguments."""

    TDS_MSG_HASNOARGS = 0
    TDS_MSG_HASARGS = 1

    def __str__(self) -> str:
        return self.name


class MsgId(enum.IntEnum):
    """Type of a message package."""

    TDS_MSG_SEC_ENCRYPT = 1
    TDS_MSG_SEC_LOGPWD = 2
    TDS_MSG_SEC_REMPWD = 3
    TDS_MSG_SEC_CHALLENGE = 4
    TDS_MSG_SEC_RESPONSE = 5
    TDS_MSG_SEC_GETLABEL = 6
    TDS_MSG_SEC_LABEL = 7
    TDS_MSG_SQL_TBLNAME = 8
    TDS_MSG_GW_RESERVED = 9
    TDS_MSG_OMNI_CAPABILITIES = 10
    TDS_MSG_SEC_OPAQUE = 11
    TDS_MSG_HAFAILOVER = 12
    TDS_MSG_EMPTY = 13
    TDS_MSG_SEC_ENCRYPT2 = 14
    TDS_MSG_SEC_LOGPWD2 = 15
    TDS_MSG_SEC_SUP_CIPHER2 = 16
    TDS_MSG_MIG_REQ = 17
    TDS_MSG_MIG_SYNC = 18
    TDS_MSG_MIG_CONT = 19
    TDS_MSG_MIG_IGN = 20
    TDS_MSG_MIG_FAIL = 21
    TDS_MSG_SEC_REMPWD2 = 22
    TDS_MSG_MIG_RESUME = 23
    TDS_MSG_HELLO = 24
    TDS_MSG_LOGINPARAMS = 25
    TDS_MSG_GRID_MIGREQ = 26
    TDS_MSG_GRID_QUIESCE = 27
    TDS_MSG_GRID_UNQUIESCE = 28
    TDS_MSG_GRID_EVENT = 29
    TDS_MSG_SEC_ENCRYPT3 = 30
    TDS_MSG_SEC_LOGPWD3 = 31
    TDS_MSG_SEC_REMPWD3 = 32
    TDS_MSG_DR_MAP = 33
    TDS_MSG_SEC_SYMKEY = 34
    TDS_MSG_SEC_ENCRYPT4 = 35

    def __str__(self) -> str:
        return self.name


class OpaqueSecurityToken(enum.IntEnum):
    """Type of a security token."""

    TDS_SEC_SECSESS = 0
    TDS_SEC_FORWARD = 1
    TDS_SEC_SIGN = 2
    TDS_SEC_OTHER = 3

    def __str__(self) -> str:
        return self.name


def _to_enum(enum_type: type[enum.IntEnum], value: int) -> enum.IntEnum | int:
    try:
        return enum_type(value)
    except ValueError:
        return value


def _describe(enum_type: type[enum.IntEnum], value: int) -> str:
    if isinstance(value, enum_type):
        return value.name
    return f"{enum_type.__name__}({int(value)})"


@dataclass
class MsgPackage:
    """Communicates information that does not warrant its own package."""

    status: MsgStatus | int = MsgStatus.TDS_MSG_HASNOARGS
    msg_id: MsgId | int = MsgId.TDS_MSG_EMPTY

    def read_from(self, ch: PacketQueue) -> None:
        """Read the package body that follows the token."""
        ch.uint8()  # length, always 3
        self.status = _to_enum(MsgStatus, ch.uint8())
        self.msg_id = _to_enum(MsgId, ch.uint16())

    def write_to(self, ch: PacketQueue) -> None:
        """Write token and package body."""
        ch.write_byte(Token.TDS_MSG)
        ch.write_uint8(3)
        ch.write_uint8(int(self.status))
        ch.write_uint16(int(self.msg_id))

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}({_describe(MsgStatus, self.status)}, "
            f"{_describe(MsgId, self.msg_id)})"
        )