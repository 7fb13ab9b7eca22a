import pytest

from dblib.values import NamedValue, values_to_named_values


@pytest.mark.parametrize(
    ("values", "expected"),
    [
        pytest.param([], [], id="empty"),
        pytest.param([0], [NamedValue(name="", ordinal=1, value=0)], id="single"),
        pytest.param(
            [0, "string"],
            [
                NamedValue(name="", ordinal=1, value=0),
                NamedValue(name="", ordinal=2, value="string"),
            ],
            id="mixed",
        ),
    ],
)
def test_values_to_named_values(values, expected):
    assert values_to_named_values(values) == expected


def test_values_to_named_values_accepts_generators():
    result = values_to_named_values(v for v in ("a", "b", "c"))
    assert [nv.ordinal for nv in result] == [1, 2, 3]
    assert [nv.value for nv in result] == ["a", "b", "c"]
    assert all(nv.name == "" for nv in result)