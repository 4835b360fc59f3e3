"""Utility functions for the loan rate calculator.

This module provides helpers for turning user input (command-line options and
form fields) into ``Decimal`` values, including amounts written with
thousands separators or ``k``/``m`` suffixes, and for clamping the down
payment percentage the way the input controls do.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation, getcontext
from typing import Union

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

Number = Union[int, float, str, Decimal]


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and surrounding whitespace. It raises
    ``ValueError`` if conversion fails or the value is not finite.
    """
    try:
        cleaned = value.replace(",", "").strip()
        result = Decimal(cleaned)
    except (InvalidOperation, AttributeError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return result


def to_decimal(value: Number) -> Decimal:
    """Return ``value`` as a ``Decimal``.

    Floats go through ``str`` so that ``2.5`` becomes ``Decimal("2.5")``
    rather than its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    return decimal_from_str(value)


def parse_amount(value: str) -> Decimal:
    """Parse a money amount with optional suffixes.

    Accepts plain numbers ("800000"), grouped numbers ("800,000") and
    shorthand with ``k``/``m`` suffixes (e.g. "800k" meaning 800 000).
    """
    value = value.strip().lower().replace(",", "")
    factor = Decimal(1)
    if value.endswith("k"):
        factor = Decimal(1_000)
        value = value[:-1]
    elif value.endswith("m"):
        factor = Decimal(1_000_000)
        value = value[:-1]
    try:
        return decimal_from_str(value) * factor
    except ValueError:
        raise ValueError(f"Invalid amount: {value}")


def parse_percent(value: str) -> Decimal:
    """Parse a percentage string such as "25" or "2.5%".

    Unlike a fraction, the number is kept as entered: "25" is 25 %.
    """
    value = value.strip()
    if value.endswith("%"):
        value = value[:-1]
    try:
        return decimal_from_str(value)
    except ValueError:
        raise ValueError(f"Invalid percentage: {value}")


def clamp_percent(value: Number) -> Decimal:
    """Clamp a down payment percentage to the 0-100 range.

    NaN is rejected rather than clamped; the caller keeps its previous value.
    """
    if isinstance(value, float) and math.isnan(value):
        raise ValueError("Percentage is not a number")
    pct = to_decimal(value)
    if pct.is_nan():
        raise ValueError("Percentage is not a number")
    return max(Decimal(0), min(Decimal(100), pct))
