import io

import pytest

from dblib.tds.packet import Packet, new_packet
from dblib.tds.packet_header import (
    PACKET_HEADER_SIZE,
    EOFAfterZeroReadError,
    PacketHeader,
    PacketHeaderStatus,
    PacketHeaderType,
)


class ChunkedReader:
    """Reader that hands out prepared chunks; an empty chunk means no data yet."""

    def __init__(self, *chunks):
        self.chunks = list(chunks)

    def read(self, n):
        if not self.chunks:
            return b""
        chunk = self.chunks.pop(0)
        if len(chunk) > n:
            self.chunks.insert(0, chunk[n:])
            chunk = chunk[:n]
        return chunk


def _filled_packet(size=64):
    packet = new_packet(size)
    packet.header.msg_type = PacketHeaderType.TDS_BUF_RESPONSE
    packet.header.status = PacketHeaderStatus.TDS_BUFSTAT_EOM
    packet.data[:] = bytes(i % 256 for i in range(len(packet.data)))
    return packet


def test_new_packet_sizes():
    packet = new_packet(512)
    assert packet.header.length == 512
    assert len(packet.data) + PACKET_HEADER_SIZE == 512
    assert not any(packet.data)


def test_new_packet_too_small():
    with pytest.raises(ValueError):
        new_packet(PACKET_HEADER_SIZE - 1)


def test_to_bytes_layout():
    packet = _filled_packet()
    encoded = packet.to_bytes()
    assert len(encoded) == packet.header.length
    assert encoded[:PACKET_HEADER_SIZE] == packet.header.to_bytes()
    assert encoded[PACKET_HEADER_SIZE:] == bytes(packet.data)


def test_to_bytes_pads_short_data():
    packet = Packet(header=PacketHeader(length=16), data=bytearray(b"\x07\x08"))
    encoded = packet.to_bytes()
    assert len(encoded) == 16
    assert encoded[PACKET_HEADER_SIZE:] == b"\x07\x08" + bytes(6)


def test_to_bytes_rejects_length_below_header():
    with pytest.raises(ValueError):
        Packet(header=PacketHeader(length=4)).to_bytes()


def test_write_and_read_round_trip():
    packet = _filled_packet()
    buffer = io.BytesIO()
    assert packet.write_to(buffer) == packet.header.length
    buffer.seek(0)
    read_back = Packet.read_from(buffer, timeout=1.0)
    assert read_back.header == packet.header
    assert read_back.data == packet.data


def test_read_over_split_responses():
    packet = _filled_packet()
    encoded = packet.to_bytes()
    reader = ChunkedReader(
        encoded[:PACKET_HEADER_SIZE],
        encoded[PACKET_HEADER_SIZE:20],
        b"",
        encoded[20:40],
        b"",
        b"",
        encoded[40:],
    )
    read_back = Packet.read_from(reader, timeout=1.0)
    assert read_back.to_bytes() == encoded


def test_read_times_out_when_no_payload_arrives():
    header = PacketHeader(msg_type=PacketHeaderType.TDS_BUF_RESPONSE, length=32)
    with pytest.raises(EOFAfterZeroReadError):
        Packet.read_from(io.BytesIO(header.to_bytes()), timeout=0.0)


def test_read_header_only_packet():
    header = PacketHeader(msg_type=PacketHeaderType.TDS_BUF_ATTN, length=PACKET_HEADER_SIZE)
    read_back = Packet.read_from(io.BytesIO(header.to_bytes()), timeout=0.0)
    assert read_back.header == header
    assert read_back.data == bytearray()


def test_read_from_empty_reader():
    with pytest.raises(EOFAfterZeroReadError):
        Packet.read_from(io.BytesIO(), timeout=0.0)


def test_str_reports_data_length():
    packet = _filled_packet()
    text = str(packet)
    assert f"DataLen: {len(packet.data)}" in text
    assert "Type: TDS_BUF_RESPONSE" in text