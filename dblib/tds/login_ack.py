"""The package that reports the state of the login negotiation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from dblib.tds.packet_queue import STRING_ENCODING, STRING_ERRORS, PacketQueue
from dblib.tds.token import Token
from dblib.tds.version import Version, version_from_bytes

_UINT8_MAX = 0xFF
_UINT16_MAX = 0xFFFF


class LoginAckStatus(enum.IntEnum):
    """State of the login negotiation."""

    TDS_LOG_SUCCEED = 5
    TDS_LOG_FAIL = 6
    TDS_LOG_NEGOTIATE = 7

    def __str__(self) -> str:
        return self.name


def _to_status(value: int) -> LoginAckStatus | int:
    try:
        return LoginAckStatus(value)
    except ValueError:
        return value


def _describe_status(status: int) -> str:
    if isinstance(status, LoginAckStatus):
        return status.name
    return f"LoginAckStatus({int(status)})"


@dataclass
class LoginAckPackage:
    """Communicates the state of the login negotiation."""

    length: int = 0
    status: LoginAckStatus | int = LoginAckStatus.TDS_LOG_SUCCEED
    version: Version = field(default_factory=Version)
    name_length: int = 0
    program_name: str = ""
    program_version: Version = field(default_factory=Version)

    def read_from(self, ch: PacketQueue) -> None:
        """Read the package body that follows the token."""
        self.length = ch.uint16()
        self.status = _to_status(ch.uint8())
        self.version = version_from_bytes(ch.read_bytes(4))
        self.name_length = ch.uint8()
        self.program_name = ch.string(self.name_length)
        self.program_version = version_from_bytes(ch.read_bytes(4))

    def write_to(self, ch: PacketQueue) -> None:
        """Write token and package body as stored in the fields."""
        if not 0 <= self.length <= _UINT16_MAX:
            raise ValueError(f"length {self.length} does not fit into uint16")
        if not 0 <= self.name_length <= _UINT8_MAX:
            raise ValueError(f"name length {self.name_length} does not fit into uint8")

        ch.write_byte(Token.TDS_LOGINACK)
        ch.write_uint16(self.length)
        ch.write_uint8(int(self.status))
        ch.write_bytes(self.version.to_bytes())
        ch.write_uint8(self.name_length)
        ch.write_bytes(self.program_name.encode(STRING_ENCODING, STRING_ERRORS))
        ch.write_bytes(self.program_version.to_bytes())

    def __str__(self) -> str:
        return f"{type(self).__name__}({_describe_status(self.status)})"