"""The package that carries an SQL statement to execute."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from dblib.tds.packet_queue import STRING_ENCODING, STRING_ERRORS, PacketQueue
from dblib.tds.token import Token

_UINT32_MAX = 0xFFFFFFFF


class LanguageStatus(enum.IntFlag):
    """Option bits of a language package."""

    TDS_LANGUAGE_NOARGS = 0x0
    TDS_LANGUAGE_HASARGS = 0x1
    TDS_LANG_BATCH_PARAMS = 0x4

    def __str__(self) -> str:
        value = int(self)
        if value == 0:
            return "TDS_LANGUAGE_NOARGS"
        names = []
        known = 0
        for member in type(self):
            bit = int(member)
            if bit and value & bit == bit:
                names.append(member.name)
                known |= bit
        rest = value & ~known
        if rest:
            names.append(f"0x{rest:x}")
        return "|".join(names)


@dataclass
class LanguagePackage:
    """Executes an SQL statement."""

    status: LanguageStatus = LanguageStatus.TDS_LANGUAGE_NOARGS
    cmd: str = ""

    def read_from(self, ch: PacketQueue) -> None:
        """Read the package body that follows the token."""
        total_length = ch.uint32()
        status = ch.byte()
        if total_length < 1:
            raise ValueError(f"language package length {total_length} is too small for the status byte")
        self.status = LanguageStatus(status)
        self.cmd = ch.string(total_length - 1)

    def write_to(self, ch: PacketQueue) -> None:
        """Write token and package body."""
        cmd = self.cmd.encode(STRING_ENCODING, STRING_ERRORS)
        length = 1 + len(cmd)
        if length > _UINT32_MAX:
            raise ValueError(f"package length {length} does not fit into uint32")

        ch.write_byte(Token.TDS_LANGUAGE)
        ch.write_uint32(length)
        ch.write_byte(int(self.status))
        ch.write_bytes(cmd)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.status}): {self.cmd}"