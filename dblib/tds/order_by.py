"""Packages that tell in which order result columns should be listed."""

from __future__ import annotations

from dataclasses import dataclass, field

from dblib.tds.packet_queue import PacketQueue
from dblib.tds.token import Token

_UINT8_MAX = 0xFF
_UINT16_MAX = 0xFFFF


def _check_columns(columns: list[int], limit: int) -> None:
    if len(columns) > _UINT16_MAX:
        raise ValueError(f"{len(columns)} columns do not fit into uint16")
    for column in columns:
        if not 0 <= column <= limit:
            raise ValueError(f"column number {column} is out of range (max {limit})")


@dataclass
class OrderByPackage:
    """Order in which the columns of the previous row format should be listed."""

    column_order: list[int] = field(default_factory=list)

    def read_from(self, ch: PacketQueue) -> None:
        """Read the package body that follows the token."""
        column_count = ch.uint16()
        self.column_order = [ch.uint8() for _ in range(column_count)]

    def write_to(self, ch: PacketQueue) -> None:
        """Write token and package body."""
        _check_columns(self.column_order, _UINT8_MAX)
        ch.write_byte(Token.TDS_ORDERBY)
        ch.write_uint16(len(self.column_order))
        for column in self.column_order:
            ch.write_uint8(column)

    def __str__(self) -> str:
        return f"{type(self).__name__}({len(self.column_order)}): {self.column_order}"


@dataclass
class OrderBy2Package(OrderByPackage):
    """Column order that supports more than 255 columns."""

    def read_from(self, ch: PacketQueue) -> None:
        """Read the package body that follows the token."""
        total_bytes = ch.uint32()
        column_count = ch.uint16()
        self.column_order = [ch.uint16() for _ in range(column_count)]

        n = 2 + 2 * column_count
        if n != total_bytes:
            raise ValueError(f"expected to read {total_bytes} bytes, read {n} bytes instead")

    def write_to(self, ch: PacketQueue) -> None:
        """Write token and package body."""
        _check_columns(self.column_order, _UINT16_MAX)
        ch.write_byte(Token.TDS_ORDERBY2)
        ch.write_uint32(2 + 2 * len(self.column_order))
        ch.write_uint16(len(self.column_order))
        for column in self.column_order:
            ch.write_uint16(column)