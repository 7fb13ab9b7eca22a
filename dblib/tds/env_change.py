"""The package that reports changes of the session environment."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from dblib.tds.packet_queue import STRING_ENCODING, STRING_ERRORS, PacketQueue
from dblib.tds.token import Token

_UINT8_MAX = 0xFF
_UINT16_MAX = 0xFFFF


class EnvChangeType(enum.IntEnum):
    """Which part of the environment was updated."""

    TDS_ENV_DB = 1
    TDS_ENV_LANG = 2
    TDS_ENV_CHARSET = 3
    TDS_ENV_PACKSIZE = 4

    def __str__(self) -> str:
        return self.name


def _to_type(value: int) -> EnvChangeType | int:
    try:
        return EnvChangeType(value)
    except ValueError:
        return value


def _describe_type(change_type: int) -> str:
    if isinstance(change_type, EnvChangeType):
        return change_type.name
    return f"EnvChangeType({int(change_type)})"


def _encode(what: str, s: str) -> bytes:
    data = s.encode(STRING_ENCODING, STRING_ERRORS)
    if len(data) > _UINT8_MAX:
        raise ValueError(f"{what} is {len(data)} bytes long, at most {_UINT8_MAX} bytes fit")
    return data


@dataclass
class EnvChangePackageField:
    """A single environment change."""

    change_type: EnvChangeType | int = EnvChangeType.TDS_ENV_DB
    new_value: str = ""
    old_value: str = ""

    def read_from(self, ch: PacketQueue) -> int:
        """Read the field and return the number of bytes read."""
        self.change_type = _to_type(ch.uint8())
        n = 1

        length = ch.uint8()
        self.new_value = ch.string(length)
        n += 1 + length

        length = ch.uint8()
        self.old_value = ch.string(length)
        n += 1 + length

        return n

    def write_to(self, ch: PacketQueue) -> int:
        """Write the field and return the number of bytes written."""
        new = _encode("new value", self.new_value)
        old = _encode("old value", self.old_value)

        ch.write_uint8(int(self.change_type))
        ch.write_uint8(len(new))
        ch.write_bytes(new)
        ch.write_uint8(len(old))
        ch.write_bytes(old)
        return 3 + len(new) + len(old)

    def byte_length(self) -> int:
        """Return the number of bytes the field takes on the wire."""
        # type byte, then a length byte before each value
        return (
            3
            + len(self.new_value.encode(STRING_ENCODING, STRING_ERRORS))
            + len(self.old_value.encode(STRING_ENCODING, STRING_ERRORS))
        )


@dataclass
class EnvChangePackage:
    """Communicates one or more environment changes."""

    members: list[EnvChangePackageField] = field(default_factory=list)

    def read_from(self, ch: PacketQueue) -> None:
        """Read the package body and append the changes to the members."""
        length = ch.uint16()

        n = 0
        while n < length:
            member = EnvChangePackageField()
            n += member.read_from(ch)
            self.members.append(member)

        if n > length:
            raise ValueError(f"read too many bytes, {n} instead of expected {length}")

    def write_to(self, ch: PacketQueue) -> None:
        """Write token and package body."""
        total = sum(member.byte_length() for member in self.members)
        if total > _UINT16_MAX:
            raise ValueError(f"package length {total} does not fit into uint16")

        ch.write_uint8(Token.TDS_ENVCHANGE)
        ch.write_uint16(total)

        written = sum(member.write_to(ch) for member in self.members)
        if written != total:
            raise ValueError(f"wrote {written} bytes instead of expected {total} bytes")

    def __str__(self) -> str:
        changes = "".join(
            f"{_describe_type(member.change_type)}({member.old_value} -> {member.new_value})"
            for member in self.members
        )
        return f"{type(self).__name__}({changes})"