import pytest

from dblib.tds.eed import EEDPackage, EEDStatus
from dblib.tds.packet import Packet
from dblib.tds.packet_queue import NotEnoughBytesError, PacketQueue
from dblib.tds.token import Token


def _wire(pkg):
    queue = PacketQueue(lambda: 512)
    pkg.write_to(queue)
    _, written = queue.position()
    queue.set_position(0, 0)
    return queue.read_bytes(written)


def _reader(raw):
    queue = PacketQueue(lambda: 512)
    queue.add_packet(Packet(data=bytearray(raw)))
    return queue


def _sample():
    return EEDPackage(
        msg_number=5701,
        state=2,
        msg_class=10,
        sql_state=b"ZZZZZ",
        status=EEDStatus.TDS_EED_INFO,
        tran_state=1,
        msg="Changed database context to 'master'.",
        server_name="srv",
        proc_name="proc",
        line_nr=7,
    )


def test_token_byte_comes_first():
    assert _wire(_sample())[0] == Token.TDS_EED


def test_length_field_counts_remaining_bytes():
    wire = _wire(_sample())
    assert int.from_bytes(wire[1:3], "little") == len(wire) - 3


def test_round_trip():
    original = _sample()
    wire = _wire(original)
    read = EEDPackage()
    read.read_from(_reader(wire[1:]))
    assert read == original


def test_trailing_newline_is_stripped():
    original = EEDPackage(msg="hello\n", status=EEDStatus.TDS_NO_EED)
    read = EEDPackage()
    read.read_from(_reader(_wire(original)[1:]))
    assert read.msg == "hello"


def test_unknown_status_kept_as_number():
    original = EEDPackage(status=9, msg="x")
    read = EEDPackage()
    read.read_from(_reader(_wire(original)[1:]))
    assert read.status == 9
    assert not isinstance(read.status, EEDStatus)


def test_length_mismatch_raises():
    wire = bytearray(_wire(_sample())[1:])
    length = int.from_bytes(wire[0:2], "little")
    wire[0:2] = (length + 1).to_bytes(2, "little")
    with pytest.raises(ValueError):
        EEDPackage().read_from(_reader(bytes(wire)))


def test_truncated_input_raises():
    wire = _wire(_sample())[1:]
    with pytest.raises(NotEnoughBytesError):
        EEDPackage().read_from(_reader(wire[:-1]))


def test_too_long_server_name_raises():
    with pytest.raises(ValueError):
        EEDPackage(server_name="s" * 256).write_to(PacketQueue(lambda: 512))


def test_str():
    pkg = EEDPackage(status=EEDStatus.TDS_EED_INFO, msg_number=5, msg="hello")
    assert str(pkg) == "EEDPackage(TDS_EED_INFO - 5: hello)"