import pytest

from dblib.tds.packet import Packet
from dblib.tds.packet_header import PacketHeader, PacketHeaderType
from dblib.tds.packet_queue import NotEnoughBytesError, PacketQueue
from dblib.tds.simple_packages import (
    HeaderOnlyPackage,
    LogoutPackage,
    ReturnStatusPackage,
    TokenlessPackage,
)
from dblib.tds.token import Token


def make_queue():
    return PacketQueue(lambda: 512)


def queue_with(data):
    queue = make_queue()
    queue.add_packet(Packet(data=bytearray(data)))
    return queue


def test_logout_round_trip():
    queue = make_queue()
    LogoutPackage().write_to(queue)
    queue.set_position(0, 0)
    assert queue.byte() == Token.TDS_LOGOUT
    pkg = LogoutPackage(options=5)
    pkg.read_from(queue)
    assert pkg.options == 0


def test_logout_rejects_unknown_option():
    with pytest.raises(ValueError):
        LogoutPackage().read_from(queue_with(b"\x01"))


def test_logout_needs_bytes():
    with pytest.raises(NotEnoughBytesError):
        LogoutPackage().read_from(make_queue())


def test_logout_str():
    assert str(LogoutPackage()) == "LogoutPackage(0)"


@pytest.mark.parametrize("value", [0, 1, -5, 2**31 - 1, -(2**31)])
def test_return_status_round_trip(value):
    queue = make_queue()
    ReturnStatusPackage(return_value=value).write_to(queue)
    queue.set_position(0, 0)
    pkg = ReturnStatusPackage()
    pkg.read_from(queue)
    assert pkg.return_value == value


def test_return_status_writes_no_token():
    queue = make_queue()
    ReturnStatusPackage(return_value=1).write_to(queue)
    assert queue.position() == (0, 4)
    queue.set_position(0, 0)
    assert queue.read_bytes(4) == b"\x01\x00\x00\x00"


def test_return_status_needs_four_bytes():
    with pytest.raises(NotEnoughBytesError):
        ReturnStatusPackage().read_from(queue_with(b"\x01\x02"))


def test_header_only_cannot_be_read_or_written():
    pkg = HeaderOnlyPackage(header=PacketHeader(msg_type=PacketHeaderType.TDS_BUF_ATTN, length=8))
    with pytest.raises(TypeError):
        pkg.read_from(make_queue())
    with pytest.raises(TypeError):
        pkg.write_to(make_queue())


def test_header_only_str_shows_header():
    header = PacketHeader(msg_type=PacketHeaderType.TDS_BUF_ATTN, length=8)
    assert str(HeaderOnlyPackage(header=header)) == f"Header: {header}"


def test_tokenless_reads_everything_left():
    queue = make_queue()
    queue.add_packet(Packet(data=bytearray(b"\x01\x02")))
    queue.add_packet(Packet(data=bytearray(b"\x03")))
    pkg = TokenlessPackage()
    pkg.read_from(queue)
    assert bytes(pkg.data) == b"\x01\x02\x03"
    assert queue.all_packets_consumed()


def test_tokenless_write_round_trip():
    queue = make_queue()
    TokenlessPackage(data=bytearray(b"blob")).write_to(queue)
    assert queue.position() == (0, 4)
    queue.set_position(0, 0)
    assert queue.read_bytes(4) == b"blob"


def test_tokenless_str_shows_possible_token():
    assert "possibleToken=e5" in str(TokenlessPackage(data=bytearray([Token.TDS_EED, 0])))