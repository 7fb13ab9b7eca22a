"""The eight-byte header in front of every TDS packet."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import BinaryIO

PACKET_HEADER_SIZE = 8

# The header is always big endian.
_HEADER = struct.Struct(">BBHHBB")


class EOFAfterZeroReadError(EOFError):
    """The reader reached end of file without delivering any byte."""

    def __init__(self, message: str = "received end of file after reading 0 bytes") -> None:
        super().__init__(message)


class PacketHeaderType(enum.IntEnum):
    """Type of a packet."""

    TDS_BUF_LANG = 1
    TDS_BUF_LOGIN = 2
    TDS_BUF_RPC = 3
    TDS_BUF_RESPONSE = 4
    TDS_BUF_UNFMT = 5
    TDS_BUF_ATTN = 6
    TDS_BUF_BULK = 7
    TDS_BUF_SETUP = 8
    TDS_BUF_CLOSE = 9
    TDS_BUF_ERROR = 10
    TDS_BUF_PROTACK = 11
    TDS_BUF_ECHO = 12
    TDS_BUF_LOGOUT = 13
    TDS_BUF_ENDPARAM = 14
    TDS_BUF_NORMAL = 15
    TDS_BUF_URGENT = 16
    TDS_BUF_MIGRATE = 17
    TDS_BUF_HELLO = 18
    TDS_BUF_CMDSEQ_NORMAL = 19
    TDS_BUF_CMDSEQ_LOGIN = 20
    TDS_BUF_CMDSEQ_LIVENESS = 21
    TDS_BUF_CMDSEQ_RESERVED1 = 22
    TDS_BUF_CMDSEQ_RESERVED2 = 23

    def __str__(self) -> str:
        return self.name


class PacketHeaderStatus(enum.IntFlag):
    """Status bits of a packet."""

    # Last buffer in a request or response
    TDS_BUFSTAT_EOM = 0x1
    # Acknowledgment of last receiver attention
    TDS_BUFSTAT_ATTNACK = 0x2
    # Attention request
    TDS_BUFSTAT_ATTN = 0x4
    # Event notification
    TDS_BUFSTAT_EVENT = 0x8
    # Buffer is encrypted
    TDS_BUFSTAT_SEAL = 0x10
    # Buffer is encrypted (SQL Anywhere CMDSQ protocol)
    TDS_BUFSTAT_ENCRYPT = 0x20
    # Buffer is encrypted with symmetric key for on demand command encryption
    TDS_BUFSTAT_SYMENCRYPT = 0x40


def describe_status(status: int) -> str:
    """Return the names of the set status bits joined by "|"."""
    names = []
    known = 0
    for member in PacketHeaderStatus:
        known |= member.value
        if status & member.value:
            names.append(member.name)
    rest = int(status) & ~known
    if rest:
        names.append(f"0x{rest:x}")
    return "|".join(names) if names else "no status"


def describe_type(msg_type: int) -> str:
    """Return the name of a packet type, or a numeric form if it is unknown."""
    if isinstance(msg_type, PacketHeaderType):
        return msg_type.name
    return f"PacketHeaderType({int(msg_type)})"


def _to_type(value: int) -> PacketHeaderType | int:
    try:
        return PacketHeaderType(value)
    except ValueError:
        return value


@dataclass
class PacketHeader:
    """Header of a packet."""

    # Message type, e.g. for login or language command
    msg_type: PacketHeaderType | int = 0
    # Status, e.g. encrypted or EOM
    status: PacketHeaderStatus = PacketHeaderStatus(0)
    # Length of the packet in bytes, header included
    length: int = 0
    # Channel the packet belongs to when multiplexing
    channel: int = 0
    # Packet number for ordering when multiplexing
    packet_nr: int = 0
    # Allowed window size before ACK is received
    window: int = 0

    def to_bytes(self) -> bytes:
        """Encode the header into its eight wire bytes."""
        try:
            return _HEADER.pack(
                int(self.msg_type),
                int(self.status),
                self.length,
                self.channel,
                self.packet_nr,
                self.window,
            )
        except struct.error as exc:
            raise ValueError(f"header field out of range: {exc}") from exc

    @classmethod
    def from_bytes(cls, bs: bytes) -> PacketHeader:
        """Decode a header from exactly eight bytes."""
        if len(bs) != PACKET_HEADER_SIZE:
            raise ValueError(
                f"passed buffer has unexpected length, expected {PACKET_HEADER_SIZE} bytes, "
                f"buffer length is {len(bs)}"
            )
        msg_type, status, length, channel, packet_nr, window = _HEADER.unpack(bytes(bs))
        return cls(
            msg_type=_to_type(msg_type),
            status=PacketHeaderStatus(status),
            length=length,
            channel=channel,
            packet_nr=packet_nr,
            window=window,
        )

    @classmethod
    def read_from(cls, reader: BinaryIO) -> PacketHeader:
        """Read one header from a binary reader."""
        bs = reader.read(PACKET_HEADER_SIZE) or b""
        if not bs:
            raise EOFAfterZeroReadError()
        if len(bs) != PACKET_HEADER_SIZE:
            raise EOFError(f"read {len(bs)} of {PACKET_HEADER_SIZE} expected bytes from reader")
        return cls.from_bytes(bs)

    def write_to(self, writer: BinaryIO) -> int:
        """Write the header to a binary writer and return the bytes written."""
        return writer.write(self.to_bytes())

    def __str__(self) -> str:
        return (
            f"MsgType: {describe_type(self.msg_type)}, Status: {describe_status(self.status)}, "
            f"Length: {self.length}, Channel: {self.channel}, "
            f"PacketNr: {self.packet_nr}, Window: {self.window}"
        )