"""The deprecated package used to communicate errors."""

from __future__ import annotations

from dataclasses import dataclass

from dblib.tds.packet_queue import STRING_ENCODING, STRING_ERRORS, PacketQueue
from dblib.tds.token import Token

_UINT8_MAX = 0xFF
_UINT16_MAX = 0xFFFF


def _encode(what: str, s: str, limit: int) -> bytes:
    data = s.encode(STRING_ENCODING, STRING_ERRORS)
    if len(data) > limit:
        raise ValueError(f"{what} is {len(data)} bytes long, at most {limit} bytes fit")
    return data


@dataclass
class ErrorPackage:
    """Communicates an error."""

    error_number: int = 0
    state: int = 0
    msg_class: int = 0
    error_msg: str = ""
    server_name: str = ""
    proc_name: str = ""
    line_nr: int = 0

    def read_from(self, ch: PacketQueue) -> None:
        """Read the package body that follows the token."""
        expect_length = ch.uint16()

        self.error_number = ch.int32()
        n = 4

        self.state = ch.uint8()
        self.msg_class = ch.uint8()
        n += 2

        msg_len = ch.uint16()
        self.error_msg = ch.string(msg_len)
        n += 2 + msg_len

        server_len = ch.uint8()
        self.server_name = ch.string(server_len)
        n += 1 + server_len

        proc_len = ch.uint8()
        self.proc_name = ch.string(proc_len)
        n += 1 + proc_len

        self.line_nr = ch.uint16()
        n += 2

        if n != expect_length:
            raise ValueError(f"expected to read {expect_length} bytes, read {n} bytes instead")

    def write_to(self, ch: PacketQueue) -> None:
        """Write token and package body."""
        msg = _encode("error message", self.error_msg, _UINT16_MAX)
        server = _encode("server name", self.server_name, _UINT8_MAX)
        proc = _encode("proc name", self.proc_name, _UINT8_MAX)

        # errornumber 4, state 1, class 1, msg length 2, servername length 1,
        # procname length 1, linenr 2
        expect_length = 12 + len(msg) + len(server) + len(proc)
        if expect_length > _UINT16_MAX:
            raise ValueError(f"package length {expect_length} does not fit into uint16")

        ch.write_byte(Token.TDS_ERROR)
        ch.write_uint16(expect_length)
        ch.write_int32(self.error_number)
        ch.write_uint8(self.state)
        ch.write_uint8(self.msg_class)
        ch.write_uint16(len(msg))
        ch.write_bytes(msg)
        ch.write_uint8(len(server))
        ch.write_bytes(server)
        ch.write_uint8(len(proc))
        ch.write_bytes(proc)
        ch.write_uint16(self.line_nr)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.error_number}: {self.error_msg})"