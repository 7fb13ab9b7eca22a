"""The extended error data package used for messages and errors."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from dblib.tds.packet_queue import STRING_ENCODING, STRING_ERRORS, PacketQueue
from dblib.tds.token import Token

_UINT8_MAX = 0xFF
_UINT16_MAX = 0xFFFF


class EEDStatus(enum.IntEnum):
    """Status of an EED package."""

    TDS_NO_EED = 0x00
    TDS_EED_FOLLOWS = 0x01
    TDS_EED_INFO = 0x02

    def __str__(self) -> str:
        return self.name


def _to_status(value: int) -> EEDStatus | int:
    try:
        return EEDStatus(value)
    except ValueError:
        return value


def _describe_status(status: int) -> str:
    if isinstance(status, EEDStatus):
        return status.name
    return f"EEDStatus({int(status)})"


def _encode(s: str) -> bytes:
    return s.encode(STRING_ENCODING, STRING_ERRORS)


def _check_length(what: str, data: bytes, limit: int) -> None:
    if len(data) > limit:
        raise ValueError(f"{what} is {len(data)} bytes long, at most {limit} bytes fit")


@dataclass
class EEDPackage:
    """Communicates information and error messages."""

    msg_number: int = 0
    state: int = 0
    msg_class: int = 0
    sql_state: bytes = b""
    status: EEDStatus | int = EEDStatus.TDS_NO_EED
    tran_state: int = 0
    msg: str = ""
    server_name: str = ""
    proc_name: str = ""
    line_nr: int = 0

    def read_from(self, ch: PacketQueue) -> None:
        """Read the package body that follows the token."""
        length = ch.uint16()

        self.msg_number = ch.uint32()
        n = 4

        self.state = ch.uint8()
        self.msg_class = ch.uint8()
        n += 2

        sql_state_len = ch.uint8()
        self.sql_state = ch.read_bytes(sql_state_len)
        n += 1 + sql_state_len

        self.status = _to_status(ch.uint8())
        n += 1

        self.tran_state = ch.uint16()
        n += 2

        msg_len = ch.uint16()
        # Some messages carry a trailing newline, but not all.
        self.msg = ch.string(msg_len).removesuffix("\n")
        n += 2 + msg_len

        server_len = ch.uint8()
        self.server_name = ch.string(server_len)
        n += 1 + server_len

        proc_len = ch.uint8()
        self.proc_name = ch.string(proc_len)
        n += 1 + proc_len

        self.line_nr = ch.uint16()
        n += 2

        if n != length:
            raise ValueError(f"expected to read {length} bytes, read {n} bytes instead")

    def write_to(self, ch: PacketQueue) -> None:
        """Write token and package body."""
        sql_state = bytes(self.sql_state)
        msg = _encode(self.msg)
        server = _encode(self.server_name)
        proc = _encode(self.proc_name)

        _check_length("SQL state", sql_state, _UINT8_MAX)
        _check_length("message", msg, _UINT16_MAX)
        _check_length("server name", server, _UINT8_MAX)
        _check_length("proc name", proc, _UINT8_MAX)

        # msgnumber 4, state 1, class 1, sqlstate length 1, status 1,
        # transtate 2, msg length 2, servername length 1, procname length 1,
        # linenr 2
        length = 16 + len(sql_state) + len(msg) + len(server) + len(proc)
        if length > _UINT16_MAX:
            raise ValueError(f"package length {length} does not fit into uint16")

        ch.write_byte(Token.TDS_EED)
        ch.write_uint16(length)
        ch.write_uint32(self.msg_number)
        ch.write_uint8(self.state)
        ch.write_uint8(self.msg_class)
        ch.write_uint8(len(sql_state))
        ch.write_bytes(sql_state)
        ch.write_byte(int(self.status))
        ch.write_uint16(self.tran_state)
        ch.write_uint16(len(msg))
        ch.write_bytes(msg)
        ch.write_uint8(len(server))
        ch.write_bytes(server)
        ch.write_uint8(len(proc))
        ch.write_bytes(proc)
        ch.write_uint16(self.line_nr)

    def __str__(self) -> str:
        return f"{type(self).__name__}({_describe_status(self.status)} - {self.msg_number}: {self.msg})"