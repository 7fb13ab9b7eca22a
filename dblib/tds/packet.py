"""A single packet of a TDS message."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import BinaryIO

from dblib.tds.packet_header import (
    PACKET_HEADER_SIZE,
    EOFAfterZeroReadError,
    PacketHeader,
    describe_status,
    describe_type,
)

_POLL_INTERVAL = 0.001


@dataclass
class Packet:
    """A packet: a header followed by its payload."""

    header: PacketHeader = field(default_factory=PacketHeader)
    data: bytearray = field(default_factory=bytearray)

    def _payload_size(self) -> int:
        size = self.header.length - PACKET_HEADER_SIZE
        if size < 0:
            raise ValueError(
                f"packet length {self.header.length} is smaller than the header size {PACKET_HEADER_SIZE}"
            )
        return size

    def to_bytes(self) -> bytes:
        """Return header and payload as sent on the wire, sized by the header length."""
        size = self._payload_size()
        body = bytes(self.data[:size])
        return self.header.to_bytes() + body + bytes(size - len(body))

    @classmethod
    def read_from(cls, reader: BinaryIO, timeout: float) -> Packet:
        """Read one packet from a binary reader.

        The payload may arrive in several pieces. The timeout in seconds is
        restarted after every read that delivered data and only fails the
        read once the reader keeps delivering nothing.
        """
        header = PacketHeader.read_from(reader)
        packet = cls(header=header)
        expected = packet._payload_size()
        data = bytearray()

        deadline = time.monotonic() + timeout
        while len(data) < expected:
            chunk = reader.read(expected - len(data))
            if chunk:
                data += chunk
                deadline = time.monotonic() + timeout
                continue
            if time.monotonic() >= deadline:
                raise EOFAfterZeroReadError()
            time.sleep(_POLL_INTERVAL)

        packet.data = data
        return packet

    def write_to(self, writer: BinaryIO) -> int:
        """Write the packet to a binary writer and return the bytes written."""
        return writer.write(self.to_bytes())

    def __str__(self) -> str:
        header = self.header
        return (
            f"Type: {describe_type(header.msg_type)}, Status: {describe_status(header.status)}, "
            f"Length: {header.length}, Channel: {header.channel}, PacketNr: {header.packet_nr}, "
            f"Window: {header.window}, DataLen: {len(self.data)}"
        )


def new_packet(packet_size: int) -> Packet:
    """Return an empty packet of the given total size."""
    if packet_size < PACKET_HEADER_SIZE:
        raise ValueError(f"packet size {packet_size} is smaller than the header size {PACKET_HEADER_SIZE}")
    return Packet(
        header=PacketHeader(length=packet_size),
        data=bytearray(packet_size - PACKET_HEADER_SIZE),
    )