import pytest

from dblib.tds.version import Version, version_from_bytes, version_from_string


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0.0.0.0", Version(major=0, minor=0, sp=0, patch=0)),
        ("99.1.0.4", Version(major=99, minor=1, sp=0, patch=4)),
    ],
)
def test_version_from_string(text, expected):
    assert version_from_string(text) == expected


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (Version(0, 1, 2, 3), Version(0, 1, 2, 3), 0),
        (Version(0, 1, 6, 5), Version(1, 5, 3, 6), -1),
        (Version(0, 6, 6, 5), Version(0, 5, 3, 6), 1),
    ],
)
def test_compare(a, b, expected):
    assert a.compare(b) == expected


def test_compare_is_antisymmetric():
    a, b = Version(0, 1, 6, 5), Version(1, 5, 3, 6)
    assert a.compare(b) == -b.compare(a)


@pytest.mark.parametrize("text", ["1.2.3", "1.2.3.4.5", "a.0.0.0", "1.2..4", "256.0.0.0", "0.0.0.300", "-1.0.0.0"])
def test_version_from_string_rejects(text):
    with pytest.raises(ValueError):
        version_from_string(text)


def test_bytes_round_trip():
    version = Version(99, 1, 0, 4)
    assert version_from_bytes(version.to_bytes()) == version
    assert version.to_bytes() == bytes([99, 1, 0, 4])


@pytest.mark.parametrize("bs", [b"", b"\x01\x02\x03", b"\x01\x02\x03\x04\x05"])
def test_version_from_bytes_rejects_wrong_length(bs):
    with pytest.raises(ValueError):
        version_from_bytes(bs)


def test_str_round_trip():
    version = Version(99, 1, 0, 4)
    assert str(version) == "99.1.0.4"
    assert version_from_string(str(version)) == version


def test_out_of_range_part_rejected():
    with pytest.raises(ValueError):
        Version(256, 0, 0, 0)