"""Output helpers for the loan rate calculator.

This module formats money the way the page displays it (comma-grouped,
whole baht for totals and two decimals for installments) and renders the
breakdown panel and the term comparison as plain text tables. The breakdown
rows are shared with the web UI so both show the same arithmetic.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Tuple

from .config import CURRENCY_OPTIONS, DEFAULT_CURRENCY
from .data_models import (
    AmortizedInputs,
    AmortizedResult,
    FlatRateInputs,
    FlatRateResult,
    TermComparison,
)
from .utils import Number, to_decimal

Row = Tuple[str, str]


def format_money(value: Number, decimals: int = 0) -> str:
    """Format an amount with thousands separators, e.g. ``1,234,568``.

    Halves round away from zero, so 77,812.5 is shown as 77,813.
    """
    amount = to_decimal(value).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    return f"{amount:,.{decimals}f}"


def format_currency(value: Number, code: str = DEFAULT_CURRENCY, decimals: int = 0) -> str:
    """Format an amount with the prefix/suffix of ``code``."""
    meta = CURRENCY_OPTIONS.get(code, CURRENCY_OPTIONS[DEFAULT_CURRENCY])
    return f"{meta['prefix']}{format_money(value, decimals)}{meta['suffix']}"


def format_rate(value: Number, decimals: int = 2) -> str:
    """Format a percentage, e.g. ``2.50%``."""
    return f"{to_decimal(value):.{decimals}f}%"


def _plain(value: Number) -> str:
    # Inputs are echoed as entered: 2.5 stays "2.5", 25 stays "25"
    d = to_decimal(value)
    return format(d.normalize(), "f") if d == d.to_integral_value() else str(d)


def flat_rate_breakdown_lines(inputs: FlatRateInputs, result: FlatRateResult) -> List[Row]:
    """Return the car loan breakdown as ``(formula, value)`` rows."""
    price = format_money(inputs.price)
    rows: List[Row] = [
        (f"Down payment = {price} x {_plain(inputs.down_percent)}%", format_money(result.down_amount)),
        (
            f"Financed = {price} - {format_money(result.down_amount)}",
            format_money(result.finance_amount),
        ),
        (
            f"Total interest = {format_money(result.finance_amount)} x {_plain(inputs.rate)}% x {inputs.years}",
            format_money(result.total_interest),
        ),
        (
            f"Installment before VAT = {format_money(result.total_debt)} / {result.months}",
            format_money(result.monthly_base, 2),
        ),
    ]
    if inputs.vehicle_type == "used":
        rows.append(("VAT 7% per month", format_money(result.vat_per_month, 2)))
    return rows


def amortized_breakdown_lines(inputs: AmortizedInputs, result: AmortizedResult) -> List[Row]:
    """Return the home loan breakdown as ``(formula, value)`` rows."""
    price = format_money(inputs.price)
    return [
        (f"Down payment = {price} x {_plain(inputs.down_percent)}%", format_money(result.down_amount)),
        (f"Principal = {price} - {format_money(result.down_amount)}", format_money(result.principal)),
        (f"Installments = {inputs.years} x 12", f"{result.months} months"),
        (
            f"r = monthly rate = ({_plain(inputs.rate)}% / 12)",
            format_rate(result.monthly_rate * 100, 4),
        ),
        ("Constant installment (PMT/Annuity)", format_money(result.monthly_payment, 2)),
        (
            f"First month interest = (principal x annual rate x {inputs.first_month_days}) / 365",
            format_money(result.first_month_interest, 2),
        ),
    ]


def flat_rate_headline(result: FlatRateResult, currency: str = DEFAULT_CURRENCY) -> List[Row]:
    """Headline cells of the car loan view."""
    return [
        ("Monthly installment", format_currency(result.monthly_total, currency)),
        ("Financed amount", format_currency(result.finance_amount, currency)),
        ("Total interest", format_currency(result.total_interest, currency)),
        ("Total paid", format_currency(result.total_paid, currency)),
    ]


def amortized_headline(result: AmortizedResult, currency: str = DEFAULT_CURRENCY) -> List[Row]:
    """Headline cells of the home loan view."""
    return [
        ("Monthly installment", format_currency(result.monthly_payment, currency)),
        ("Principal", format_currency(result.principal, currency)),
        ("Total interest", format_currency(result.total_interest, currency)),
        ("Total payment", format_currency(result.total_payment, currency)),
        ("First month interest", format_currency(result.first_month_interest, currency)),
    ]


def _print_rows(rows: Iterable[Row]) -> None:
    for label, value in rows:
        print(f"{label:62s} {value:>16s}")


def print_flat_rate_summary(inputs: FlatRateInputs, result: FlatRateResult, currency: str = DEFAULT_CURRENCY) -> None:
    """Print the car loan headline figures followed by the breakdown."""
    print("Car loan (flat rate)")
    print("-" * 80)
    for label, value in flat_rate_headline(result, currency):
        print(f"{label:20s}: {value}")
    print(f"Installments        : {result.months}")
    print("-" * 80)
    _print_rows(flat_rate_breakdown_lines(inputs, result))
    print("-" * 80)


def print_amortized_summary(inputs: AmortizedInputs, result: AmortizedResult, currency: str = DEFAULT_CURRENCY) -> None:
    """Print the home loan headline figures followed by the breakdown."""
    print("Home loan (reducing balance)")
    print("-" * 80)
    for label, value in amortized_headline(result, currency):
        print(f"{label:20s}: {value}")
    print(f"{'Installments':20s}: {result.months}")
    print("-" * 80)
    _print_rows(amortized_breakdown_lines(inputs, result))
    print("-" * 80)


def print_term_comparison(comparisons: Iterable[TermComparison]) -> None:
    """Print monthly installment and total interest per comparison term.

    The currently selected term is marked with ``*``.
    """
    print("Term comparison")
    print("=" * 80)
    print(f"{'Term':10s} {'Monthly':>20s} {'Total interest':>20s}")
    for item in comparisons:
        marker = "*" if item.selected else " "
        term = f"{item.years} years{marker}"
        print(
            f"{term:10s} {format_money(item.monthly_payment, 2):>20s} "
            f"{format_money(item.total_interest):>20s}"
        )
    print("=" * 80)


def result_to_dict(result: FlatRateResult | AmortizedResult) -> dict:
    """Convert a result into a JSON-serialisable dictionary of floats."""
    data = {}
    for name, value in vars(result).items():
        data[name] = value if isinstance(value, int) else float(value)
    return data
