"""Small TDS packages with fixed or trivial layouts."""

from __future__ import annotations

from dataclasses import dataclass, field

from dblib.tds.packet_header import PacketHeader
from dblib.tds.packet_queue import PacketQueue
from dblib.tds.token import Token


@dataclass
class LogoutPackage:
    """Terminates and deallocates a connection."""

    options: int = 0

    def read_from(self, ch: PacketQueue) -> None:
        """Read the logout options; only option 0 is supported."""
        self.options = ch.uint8()
        if self.options != 0:
            raise ValueError(f"unhandled logout option {self.options}")

    def write_to(self, ch: PacketQueue) -> None:
        """Write token and options."""
        ch.write_byte(Token.TDS_LOGOUT)
        ch.write_uint8(self.options)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.options})"


@dataclass
class ReturnStatusPackage:
    """Return status of a stored procedure."""

    return_value: int = 0

    def read_from(self, ch: PacketQueue) -> None:
        """Read the return value."""
        self.return_value = ch.int32()

    def write_to(self, ch: PacketQueue) -> None:
        """Write the return value."""
        ch.write_int32(self.return_value)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.return_value})"


@dataclass
class HeaderOnlyPackage:
    """Carries a header-only packet through the package channels."""

    header: PacketHeader = field(default_factory=PacketHeader)

    def read_from(self, ch: PacketQueue) -> None:
        """Header-only packages have no body to read."""
        raise TypeError("header-only packages cannot be read from a bytes channel")

    def write_to(self, ch: PacketQueue) -> None:
        """Header-only packages have no body to write."""
        raise TypeError("header-only packages cannot be written to a bytes channel")

    def __str__(self) -> str:
        return f"Header: {self.header}"


@dataclass
class TokenlessPackage:
    """A blob of data without a leading token."""

    data: bytearray = field(default_factory=bytearray)

    def read_from(self, ch: PacketQueue) -> None:
        """Append everything left in the channel to the data."""
        self.data += ch.read()

    def write_to(self, ch: PacketQueue) -> None:
        """Write the data as is."""
        ch.write_bytes(bytes(self.data))

    def __str__(self) -> str:
        token = f"{self.data[0]:x}" if self.data else ""
        return f"{type(self).__name__}(possibleToken={token}) {bytes(self.data)!r}"