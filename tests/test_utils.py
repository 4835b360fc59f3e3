from __future__ import annotations

from decimal import Decimal

import pytest

from loan_rate.utils import clamp_percent, decimal_from_str, parse_amount, parse_percent, to_decimal


def test_parse_amount_variants():
    assert parse_amount("800000") == 800_000
    assert parse_amount("800,000") == 800_000
    assert parse_amount("800k") == 800_000
    assert parse_amount("3.5M") == 3_500_000
    assert parse_amount(" 1,250.50 ") == Decimal("1250.50")


def test_parse_amount_rejects_garbage():
    with pytest.raises(ValueError):
        parse_amount("lots")
    with pytest.raises(ValueError):
        parse_amount("nan")


def test_parse_percent_keeps_percent_units():
    assert parse_percent("25") == 25
    assert parse_percent("2.5%") == Decimal("2.5")
    with pytest.raises(ValueError):
        parse_percent("abc%")


def test_clamp_percent():
    assert clamp_percent(-5) == 0
    assert clamp_percent(150) == 100
    assert clamp_percent("42.5") == Decimal("42.5")
    with pytest.raises(ValueError):
        clamp_percent(float("nan"))


def test_to_decimal_uses_float_repr():
    assert to_decimal(2.5) == Decimal("2.5")
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(7) == Decimal(7)
    value = Decimal("3.25")
    assert to_decimal(value) is value


def test_decimal_from_str_rejects_infinity():
    with pytest.raises(ValueError):
        decimal_from_str("Infinity")
