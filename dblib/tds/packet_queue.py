"""A byte channel that reads and writes across packet boundaries."""

from __future__ import annotations

import threading
from typing import Callable, Iterator

from dblib.tds.packet import Packet, new_packet
from dblib.tds.packet_header import PacketHeaderStatus

STRING_ENCODING = "utf-8"
STRING_ERRORS = "surrogateescape"


class NotEnoughBytesError(EOFError):
    """The queued packets hold fewer bytes than requested."""

    def __init__(self, message: str = "not enough bytes") -> None:
        super().__init__(message)


class PacketQueue:
    """A queue of packets that behaves like one continuous byte buffer.

    Writes fill the current packet and append new packets as needed;
    reads continue across packet boundaries.
    """

    def __init__(self, packet_size: Callable[[], int], byteorder: str = "little") -> None:
        self._lock = threading.RLock()
        self._packet_size = packet_size
        self._byteorder = byteorder
        self._queue: list[Packet] = []
        self._index_packet = 0
        self._index_data = 0
        self._recv_eom = False

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[Packet]:
        return iter(list(self._queue))

    def reset(self) -> None:
        """Discard all packets and return to the initial state."""
        with self._lock:
            self._queue = []
            self._index_packet = 0
            self._index_data = 0
            self._recv_eom = False

    def add_packet(self, packet: Packet) -> None:
        """Append a received packet to the queue."""
        with self._lock:
            self._queue.append(packet)
            if packet.header.status & PacketHeaderStatus.TDS_BUFSTAT_EOM:
                self._recv_eom = True

    def position(self) -> tuple[int, int]:
        """Return the packet index and the data index within that packet."""
        with self._lock:
            return self._index_packet, self._index_data

    def set_position(self, index_packet: int, index_data: int) -> None:
        """Set the packet index and the data index."""
        with self._lock:
            self._index_packet = index_packet
            self._index_data = index_data

    def discard_until_current_position(self) -> None:
        """Drop all packets that lie entirely before the current position."""
        with self._lock:
            self._queue = self._queue[self._index_packet:]
            self._index_packet = 0

            if not self._queue:
                self._index_data = 0
                return

            if self._index_data >= len(self._queue[0].data):
                self._queue = self._queue[1:]
                self._index_data = 0

    def all_packets_consumed(self) -> bool:
        """Return True if no unread bytes are left in the queue."""
        with self._lock:
            if not self._queue and self._index_packet == 0 and self._index_data == 0:
                return True
            if self._index_packet >= len(self._queue):
                return True
            return (
                self._index_packet == len(self._queue) - 1
                and self._index_data == len(self._queue[self._index_packet].data)
            )

    def is_eom(self) -> bool:
        """Return True if everything was read and the message has ended."""
        with self._lock:
            return self.all_packets_consumed() and self._recv_eom

    def _remaining(self) -> int:
        if self._index_packet >= len(self._queue):
            return 0
        total = sum(len(packet.data) for packet in self._queue[self._index_packet:])
        return max(0, total - self._index_data)

    def read(self, size: int = -1) -> bytes:
        """Read up to size bytes; a negative size reads everything left."""
        with self._lock:
            available = self._remaining()
            if size is None or size < 0 or size > available:
                size = available
            return self.read_bytes(size)

    def write(self, data: bytes) -> int:
        """Write data and return its length."""
        self.write_bytes(data)
        return len(data)

    # Reading

    def read_bytes(self, n: int) -> bytes:
        """Read exactly n bytes, raising NotEnoughBytesError if they are missing."""
        with self._lock:
            if n == 0:
                return b""

            out = bytearray()
            while len(out) < n:
                if self.all_packets_consumed():
                    raise NotEnoughBytesError(f"requested {n} bytes, only {len(out)} available")
                data = self._queue[self._index_packet].data

                start = self._index_data
                end = min(start + (n - len(out)), len(data))
                out += data[start:end]

                self._index_data = end
                if self._index_data == len(data):
                    self._index_packet += 1
                    self._index_data = 0

            return bytes(out)

    def _read_int(self, size: int, signed: bool) -> int:
        return int.from_bytes(self.read_bytes(size), self._byteorder, signed=signed)

    def byte(self) -> int:
        """Read one byte."""
        return self.read_bytes(1)[0]

    def uint8(self) -> int:
        """Read an unsigned 8-bit integer."""
        return self._read_int(1, False)

    def int8(self) -> int:
        """Read a signed 8-bit integer."""
        return self._read_int(1, True)

    def uint16(self) -> int:
        """Read an unsigned 16-bit integer."""
        return self._read_int(2, False)

    def int16(self) -> int:
        """Read a signed 16-bit integer."""
        return self._read_int(2, True)

    def uint32(self) -> int:
        """Read an unsigned 32-bit integer."""
        return self._read_int(4, False)

    def int32(self) -> int:
        """Read a signed 32-bit integer."""
        return self._read_int(4, True)

    def uint64(self) -> int:
        """Read an unsigned 64-bit integer."""
        return self._read_int(8, False)

    def int64(self) -> int:
        """Read a signed 64-bit integer."""
        return self._read_int(8, True)

    def string(self, size: int) -> str:
        """Read a string of size bytes."""
        return self.read_bytes(size).decode(STRING_ENCODING, STRING_ERRORS)

    # Writing

    def write_bytes(self, bs: bytes) -> None:
        """Write bytes, appending new packets as needed."""
        with self._lock:
            offset = 0
            while offset < len(bs):
                if self._index_packet >= len(self._queue):
                    self._queue.append(new_packet(self._packet_size()))

                current = self._queue[self._index_packet]
                free = len(current.data) - self._index_data

                if free <= 0:
                    current = new_packet(self._packet_size())
                    self._queue.append(current)
                    self._index_packet += 1
                    self._index_data = 0
                    free = len(current.data)

                free = min(free, len(bs) - offset)
                current.data[self._index_data:self._index_data + free] = bs[offset:offset + free]
                offset += free
                self._index_data += free

    def _write_int(self, value: int, size: int) -> None:
        mask = (1 << (8 * size)) - 1
        self.write_bytes((value & mask).to_bytes(size, self._byteorder))

    def write_byte(self, b: int) -> None:
        """Write one byte."""
        self._write_int(b, 1)

    def write_uint8(self, i: int) -> None:
        """Write an unsigned 8-bit integer."""
        self._write_int(i, 1)

    def write_int8(self, i: int) -> None:
        """Write a signed 8-bit integer."""
        self._write_int(i, 1)

    def write_uint16(self, i: int) -> None:
        """Write an unsigned 16-bit integer."""
        self._write_int(i, 2)

    def write_int16(self, i: int) -> None:
        """Write a signed 16-bit integer."""
        self._write_int(i, 2)

    def write_uint32(self, i: int) -> None:
        """Write an unsigned 32-bit integer."""
        self._write_int(i, 4)

    def write_int32(self, i: int) -> None:
        """Write a signed 32-bit integer."""
        self._write_int(i, 4)

    def write_uint64(self, i: int) -> None:
        """Write an unsigned 64-bit integer."""
        self._write_int(i, 8)

    def write_int64(self, i: int) -> None:
        """Write a signed 64-bit integer."""
        self._write_int(i, 8)

    def write_string(self, s: str) -> None:
        """Write the bytes of a string."""
        self.write_bytes(s.encode(STRING_ENCODING, STRING_ERRORS))