import pytest

from pallet_stacker.units import format_float, parse_bool, parse_float


def test_parse_float_accepts_comma():
    assert parse_float("12,5") == 12.5


def test_parse_float_strips_whitespace():
    assert parse_float("  10.0 ") == 10.0


def test_parse_float_rejects_empty():
    with pytest.raises(ValueError):
        parse_float("")


def test_parse_float_rejects_bool():
    with pytest.raises(ValueError):
        parse_float(True)


def test_parse_bool_values():
    assert parse_bool("yes") is True
    assert parse_bool(" False ") is False
    assert parse_bool(0) is False
    with pytest.raises(ValueError):
        parse_bool("sometimes")


def test_format_float():
    assert format_float(12.346) == "12.35"
    assert format_float(80, 1) == "80.0"


@pytest.mark.parametrize("value", ["nan", "inf", "-Infinity", float("nan")])
def test_parse_float_rejects_non_finite(value):
    with pytest.raises(ValueError):
        parse_float(value)
