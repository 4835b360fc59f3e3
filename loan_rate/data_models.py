"""Data models for the loan rate calculator.

This module defines dataclasses for the inputs collected from the user and the
results produced by the two calculators: the flat rate car loan and the
reducing balance (annuity) home loan. Results are frozen so that a computed
figure can be shared between the breakdown panel, the charts and the
infographic without being altered along the way.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass
class FlatRateInputs:
    """Inputs of the car loan tab.

    Attributes
    ----------
    price: Decimal
        Vehicle price.
    down_percent: Decimal
        Down payment as a percentage of the price (0-100).
    rate: Decimal
        Annual flat interest rate in percent.
    years: int
        Loan term in years.
    vehicle_type: str
        ``"new"`` or ``"used"``. Used vehicles carry a 7 % VAT surcharge on
        each installment.
    """

    price: Decimal
    down_percent: Decimal
    rate: Decimal
    years: int
    vehicle_type: str = "new"


@dataclass
class AmortizedInputs:
    """Inputs of the home loan tab.

    ``first_month_days`` is the day count (28-31) used to prorate the
    interest of the first month.
    """

    price: Decimal
    down_percent: Decimal
    rate: Decimal
    years: int
    first_month_days: int = 31


@dataclass(frozen=True)
class FlatRateResult:
    """Figures of a flat rate loan.

    Interest is charged once on the financed amount for the whole term and
    spread evenly across the installments.
    """

    down_amount: Decimal
    finance_amount: Decimal
    total_interest: Decimal
    total_debt: Decimal
    months: int
    monthly_base: Decimal  # installment before VAT
    vat_per_month: Decimal
    monthly_total: Decimal
    total_paid: Decimal  # down payment plus every installment


@dataclass(frozen=True)
class AmortizedResult:
    """Figures of an annuity (equal installment) loan."""

    down_amount: Decimal
    principal: Decimal
    months: int
    monthly_rate: Decimal
    monthly_payment: Decimal
    total_payment: Decimal
    total_interest: Decimal
    # Informational only: principal * rate * days / 365, not taken from the
    # amortization schedule.
    first_month_interest: Decimal


LoanResult = Union[FlatRateResult, AmortizedResult]


@dataclass(frozen=True)
class TermComparison:
    """One bar group of the term comparison chart."""

    years: int
    result: LoanResult
    selected: bool

    @property
    def monthly_payment(self) -> Decimal:
        if isinstance(self.result, FlatRateResult):
            return self.result.monthly_total
        return self.result.monthly_payment

    @property
    def total_interest(self) -> Decimal:
        return self.result.total_interest
