"""Core calculation engine for the loan rate calculator.

This module implements the two closed-form calculations behind the page: the
flat rate car loan, where interest is charged once on the financed amount
and spread evenly over the term, and the reducing balance home loan, whose
constant installment comes from the annuity (PMT) formula. Both functions
are total over their numeric domain: degenerate input (zero price, zero term,
down payment covering the price, NaN or infinite amounts) yields zero or
floored figures instead of an exception. Results are returned as frozen dataclasses.
"""

from __future__ import annotations

from decimal import Decimal, getcontext
from typing import Iterable, List

from .config import (
    AMORTIZED_COMPARE_TERMS,
    DAYS_IN_YEAR,
    FLAT_RATE_COMPARE_TERMS,
    VAT_RATE,
)
from .data_models import AmortizedResult, FlatRateResult, TermComparison
from .utils import Number, to_decimal

getcontext().prec = 28  # increase precision for financial calculations

ZERO = Decimal(0)
HUNDRED = Decimal(100)


def _calculate_annuity_payment(principal: Decimal, rate_per_month: Decimal, term: int) -> Decimal:
    """Return the annuity (equal installment) monthly payment for a loan.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, the
    payment simplifies to ``P / n``; a zero principal needs no payment.
    """
    if principal <= 0:
        return ZERO
    if rate_per_month == 0:
        return principal / Decimal(term)
    factor = (1 + rate_per_month) ** term
    return principal * (rate_per_month * factor) / (factor - 1)


def _down_payment(price: Decimal, down_percent: Decimal) -> tuple[Decimal, Decimal]:
    """Return ``(down_amount, financed_amount)`` with the latter floored at 0."""
    down_amount = price * (down_percent / HUNDRED)
    return down_amount, max(ZERO, price - down_amount)


def _finite(value: Number) -> Decimal:
    # NaN and infinities count as zero so the calculators stay total.
    amount = to_decimal(value)
    return amount if amount.is_finite() else ZERO


def _whole(value: Number) -> int:
    return int(_finite(value))


def _months(term_years: Number) -> int:
    # At least one installment so that a zero term never divides by zero.
    return max(1, _whole(term_years) * 12)


def compute_flat_rate_loan(
    price: Number,
    down_percent: Number,
    annual_rate_percent: Number,
    term_years: int,
    vehicle_type: str = "new",
) -> FlatRateResult:
    """Compute the installment of a flat rate (car) loan.

    Parameters
    ----------
    price: Number
        Vehicle price.
    down_percent: Number
        Down payment in percent of the price. Not clamped here; values above
        100 simply produce a zero financed amount.
    annual_rate_percent: Number
        Annual flat interest rate in percent.
    term_years: int
        Loan term in years. Zero is tolerated and treated as one installment.
    vehicle_type: str
        ``"used"`` adds a 7 % VAT surcharge to each installment; any other
        value is treated as a new vehicle.

    Returns
    -------
    FlatRateResult
        The down payment, financed amount, simple interest over the whole
        term, installment before and after VAT and the total amount paid.
    """
    price = _finite(price)
    rate = _finite(annual_rate_percent) / HUNDRED
    down_amount, finance_amount = _down_payment(price, _finite(down_percent))

    # Simple interest on the original financed amount, linear in the term
    total_interest = finance_amount * rate * _whole(term_years)
    total_debt = finance_amount + total_interest
    months = _months(term_years)
    monthly_base = total_debt / Decimal(months)
    vat_per_month = monthly_base * VAT_RATE if vehicle_type == "used" else ZERO
    monthly_total = monthly_base + vat_per_month
    total_paid = down_amount + monthly_total * months

    return FlatRateResult(
        down_amount=down_amount,
        finance_amount=finance_amount,
        total_interest=total_interest,
        total_debt=total_debt,
        months=months,
        monthly_base=monthly_base,
        vat_per_month=vat_per_month,
        monthly_total=monthly_total,
        total_paid=total_paid,
    )


def compute_amortized_loan(
    price: Number,
    down_percent: Number,
    annual_rate_percent: Number,
    term_years: int,
    first_month_days: int = 31,
) -> AmortizedResult:
    """Compute the constant installment of a reducing balance (home) loan.

    Parameters
    ----------
    price: Number
        Property price.
    down_percent: Number
        Down payment in percent of the price.
    annual_rate_percent: Number
        Annual nominal interest rate in percent, compounded monthly.
    term_years: int
        Loan term in years. Zero is tolerated and treated as one installment.
    first_month_days: int
        Day count (28, 29, 30 or 31) used for the first month interest. The
        value is not validated here.

    Returns
    -------
    AmortizedResult
        The installment from the annuity formula, totals over the term and
        the first month interest. The latter always divides by a 365-day
        year and is not reconciled with the first installment's interest
        portion.
    """
    price = _finite(price)
    annual_rate = _finite(annual_rate_percent) / HUNDRED
    down_amount, principal = _down_payment(price, _finite(down_percent))
    months = _months(term_years)
    monthly_rate = annual_rate / Decimal(12)

    monthly_payment = _calculate_annuity_payment(principal, monthly_rate, months)
    total_payment = monthly_payment * months
    # Rounding in the annuity factor must not surface as negative interest
    total_interest = max(ZERO, total_payment - principal)
    first_month_interest = principal * annual_rate * _whole(first_month_days) / Decimal(DAYS_IN_YEAR)

    return AmortizedResult(
        down_amount=down_amount,
        principal=principal,
        months=months,
        monthly_rate=monthly_rate,
        monthly_payment=monthly_payment,
        total_payment=total_payment,
        total_interest=total_interest,
        first_month_interest=first_month_interest,
    )


def compare_flat_rate_terms(
    price: Number,
    down_percent: Number,
    annual_rate_percent: Number,
    vehicle_type: str,
    selected_years: int,
    terms: Iterable[int] = FLAT_RATE_COMPARE_TERMS,
) -> List[TermComparison]:
    """Compute the flat rate loan once per comparison term.

    Every other input is held fixed; ``selected_years`` only marks which bar
    group corresponds to the term currently chosen by the user.
    """
    return [
        TermComparison(
            years=term,
            result=compute_flat_rate_loan(price, down_percent, annual_rate_percent, term, vehicle_type),
            selected=term == selected_years,
        )
        for term in terms
    ]


def compare_amortized_terms(
    price: Number,
    down_percent: Number,
    annual_rate_percent: Number,
    first_month_days: int,
    selected_years: int,
    terms: Iterable[int] = AMORTIZED_COMPARE_TERMS,
) -> List[TermComparison]:
    """Compute the annuity loan once per comparison term."""
    return [
        TermComparison(
            years=term,
            result=compute_amortized_loan(price, down_percent, annual_rate_percent, term, first_month_days),
            selected=term == selected_years,
        )
        for term in terms
    ]
