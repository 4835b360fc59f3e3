"""Chart payloads for the breakdown and term comparison charts.

The web page draws these with Chart.js, so each function returns a plain
dictionary in Chart.js ``data`` shape (labels plus datasets). The same
payloads feed the matplotlib infographic, which keeps the two renderings in
step.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from .config import (
    AXIS_DARK,
    AXIS_LIGHT,
    COLOR_DOWN,
    COLOR_INTEREST,
    COLOR_INTEREST_FILL,
    COLOR_PRINCIPAL,
    COLOR_SELECTED,
    COLOR_UNSELECTED,
    COLOR_VAT,
    GRID_DARK,
    GRID_LIGHT,
)
from .data_models import AmortizedResult, FlatRateResult, TermComparison

ChartData = Dict[str, Any]


def flat_rate_structure_chart(result: FlatRateResult, vehicle_type: str) -> ChartData:
    """Doughnut of down payment, financed amount, interest and VAT."""
    vat_total = float(result.vat_per_month * result.months) if vehicle_type == "used" else 0.0
    return {
        "labels": ["Down payment", "Financed", "Interest", "VAT"],
        "datasets": [
            {
                "data": [
                    float(result.down_amount),
                    float(result.finance_amount),
                    float(result.total_interest),
                    vat_total,
                ],
                "backgroundColor": [COLOR_DOWN, COLOR_PRINCIPAL, COLOR_INTEREST, COLOR_VAT],
                "borderWidth": 0,
            }
        ],
    }


def amortized_structure_chart(result: AmortizedResult) -> ChartData:
    """Doughnut of down payment, borrowed principal and total interest."""
    return {
        "labels": ["Down payment", "Principal", "Total interest"],
        "datasets": [
            {
                "data": [
                    float(result.down_amount),
                    float(result.principal),
                    float(result.total_interest),
                ],
                "backgroundColor": [COLOR_DOWN, COLOR_PRINCIPAL, COLOR_INTEREST],
                "borderWidth": 0,
            }
        ],
    }


def term_comparison_chart(comparisons: Iterable[TermComparison]) -> ChartData:
    """Grouped bars of monthly installment and total interest per term.

    Installments use the left axis with the selected term highlighted; total
    interest is plotted against the secondary ``y1`` axis.
    """
    items: List[TermComparison] = list(comparisons)
    return {
        "labels": [f"{item.years} years" for item in items],
        "datasets": [
            {
                "type": "bar",
                "label": "Monthly installment",
                "data": [float(item.monthly_payment) for item in items],
                "backgroundColor": [COLOR_SELECTED if item.selected else COLOR_UNSELECTED for item in items],
            },
            {
                "type": "bar",
                "label": "Total interest",
                "data": [float(item.total_interest) for item in items],
                "borderColor": COLOR_INTEREST,
                "backgroundColor": COLOR_INTEREST_FILL,
                "yAxisID": "y1",
                "borderWidth": 1,
            },
        ],
    }


def axis_colors(dark: bool) -> Dict[str, str]:
    """Axis label and grid line colours for the current theme."""
    if dark:
        return {"axis": AXIS_DARK, "grid": GRID_DARK}
    return {"axis": AXIS_LIGHT, "grid": GRID_LIGHT}
