import math
from datetime import date

import pytest

from fleet_admin.core.enums import UserRole
from fleet_admin.utils.conversion import as_number, coerce_number, parse_float, to_text


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12.5", 12.5),
        ("12.5kg", 12.5),
        ("  -3", -3.0),
        ("1e3", 1000.0),
        ("abc", 0.0),
        ("", 0.0),
        (None, 0.0),
        ("NaN", 0.0),
    ],
)
def test_parse_float(text, expected):
    assert parse_float(text) == expected


def test_parse_float_reads_infinity():
    assert math.isinf(parse_float("Infinity"))
    assert parse_float("-Infinity") < 0


def test_coerce_number():
    assert coerce_number(3) == 3.0
    assert coerce_number(float("nan")) == 0.0
    assert coerce_number("x") == 0.0


def test_as_number_is_strict():
    assert as_number("10") == 10.0
    assert as_number("10a") is None
    assert as_number("inf") is None
    assert as_number("") is None


def test_to_text():
    assert to_text(None) == ""
    assert to_text(UserRole.ADMIN) == "admin"
    assert to_text(342.0) == "342"
    assert to_text(69.6) == "69.6"
    assert to_text(date(2023, 1, 15)) == "2023-01-15"
