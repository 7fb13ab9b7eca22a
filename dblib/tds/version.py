"""Four-part TDS version numbers."""

from __future__ import annotations

import re
from dataclasses import dataclass

_NUMBER = re.compile(r"[+-]?[0-9]+")
_PART_NAMES = ("major", "minor", "revision", "patch")
_UINT8_MAX = 0xFF


@dataclass(frozen=True, order=True)
class Version:
    """A version made of major, minor, service pack and patch level."""

    major: int = 0
    minor: int = 0
    sp: int = 0
    patch: int = 0

    def __post_init__(self) -> None:
        for name, value in zip(_PART_NAMES, self._parts()):
            if not 0 <= value <= _UINT8_MAX:
                raise ValueError(f"{name} {value} does not fit into uint8 (max {_UINT8_MAX})")

    def _parts(self) -> tuple[int, int, int, int]:
        return (self.major, self.minor, self.sp, self.patch)

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 as this version is lower, equal or higher than other."""
        mine, theirs = self._parts(), other._parts()
        return (mine > theirs) - (mine < theirs)

    def to_bytes(self) -> bytes:
        """Return the four version bytes."""
        return bytes(self._parts())

    def __str__(self) -> str:
        return ".".join(str(part) for part in self._parts())


def version_from_bytes(bs: bytes) -> Version:
    """Build a version from exactly four bytes."""
    if len(bs) != 4:
        raise ValueError(f"expected 4 byte array, received {len(bs)} byte array: {list(bs)}")
    return Version(*bs)


def version_from_string(s: str) -> Version:
    """Parse a version of the form "major.minor.sp.patch"."""
    parts = s.split(".")
    if len(parts) != 4:
        raise ValueError(f"expected 4 parts, received {len(parts)} part string: {s}")

    values = []
    for name, part in zip(_PART_NAMES, parts):
        if not _NUMBER.fullmatch(part):
            raise ValueError(f"error converting {name} to integer: {part!r}")
        value = int(part)
        if value > _UINT8_MAX:
            raise ValueError(f"{name} {value} is too large for uint8 (max {_UINT8_MAX})")
        if value < 0:
            raise ValueError(f"{name} {value} is negative")
        values.append(value)

    return Version(*values)