import pytest

from dblib.tds.order_by import OrderBy2Package, OrderByPackage
from dblib.tds.packet import Packet
from dblib.tds.packet_header import PACKET_HEADER_SIZE, PacketHeader
from dblib.tds.packet_queue import NotEnoughBytesError, PacketQueue
from dblib.tds.token import Token


def _queue_with(data: bytes) -> PacketQueue:
    queue = PacketQueue(lambda: 512)
    queue.add_packet(Packet(header=PacketHeader(length=PACKET_HEADER_SIZE + len(data)), data=bytearray(data)))
    return queue


def _written(queue: PacketQueue) -> bytes:
    index_packet, index_data = queue.position()
    assert index_packet == 0
    queue.set_position(0, 0)
    return queue.read_bytes(index_data)


def test_read_from_bytes():
    pkg = OrderByPackage()
    pkg.read_from(_queue_with(bytes([2, 0, 3, 1])))
    assert pkg.column_order == [3, 1]


def test_round_trip():
    pkg = OrderByPackage(column_order=[2, 0, 255, 1])
    queue = PacketQueue(lambda: 512)
    pkg.write_to(queue)
    queue.set_position(0, 0)

    assert queue.byte() == Token.TDS_ORDERBY
    received = OrderByPackage()
    received.read_from(queue)
    assert received == pkg


def test_wire_bytes():
    queue = PacketQueue(lambda: 512)
    OrderByPackage(column_order=[3, 1]).write_to(queue)
    assert _written(queue) == bytes([Token.TDS_ORDERBY, 2, 0, 3, 1])


def test_column_out_of_range_raises():
    with pytest.raises(ValueError):
        OrderByPackage(column_order=[256]).write_to(PacketQueue(lambda: 512))


def test_truncated_raises():
    with pytest.raises(NotEnoughBytesError):
        OrderByPackage().read_from(_queue_with(bytes([3, 0, 1])))


def test_order_by2_read_from_bytes():
    pkg = OrderBy2Package()
    pkg.read_from(_queue_with(bytes([6, 0, 0, 0, 2, 0, 0x2C, 0x01, 1, 0])))
    assert pkg.column_order == [300, 1]


def test_order_by2_round_trip():
    pkg = OrderBy2Package(column_order=[1000, 0, 65535])
    queue = PacketQueue(lambda: 512)
    pkg.write_to(queue)
    queue.set_position(0, 0)

    assert queue.byte() == Token.TDS_ORDERBY2
    received = OrderBy2Package()
    received.read_from(queue)
    assert received == pkg


def test_order_by2_length_mismatch_raises():
    with pytest.raises(ValueError):
        OrderBy2Package().read_from(_queue_with(bytes([9, 0, 0, 0, 1, 0, 1, 0])))


def test_str():
    assert str(OrderByPackage(column_order=[3, 1])) == "OrderByPackage(2): [3, 1]"
    assert str(OrderBy2Package(column_order=[3, 1])) == "OrderBy2Package(2): [3, 1]"