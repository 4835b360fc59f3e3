"""Command‑line interface for the loan rate calculator.

This module uses the ``click`` library to implement a multi‑command
interface. Users can compute the installment of a flat rate car loan or a
reducing balance home loan, compare it against the standard term lengths and
export the figures to JSON/CSV or the whole view to a PNG infographic.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from .config import CAR_DEFAULTS, DAY_COUNT_OPTIONS, HOME_DEFAULTS, VEHICLE_TYPES
from .charts import amortized_structure_chart, flat_rate_structure_chart, term_comparison_chart
from .data_models import AmortizedInputs, FlatRateInputs, TermComparison
from .engine import (
    compare_amortized_terms,
    compare_flat_rate_terms,
    compute_amortized_loan,
    compute_flat_rate_loan,
)
from .formatter import (
    amortized_headline,
    flat_rate_headline,
    print_amortized_summary,
    print_flat_rate_summary,
    print_term_comparison,
    result_to_dict,
)
from .infographic import render_infographic
from .utils import clamp_percent, parse_amount, parse_percent


def _amount_option(value: str, name: str):
    try:
        return parse_amount(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint=name)


def _percent_option(value: str, name: str):
    try:
        return parse_percent(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint=name)


def build_flat_rate_inputs(price: str, down: str, rate: str, years: int, vehicle_type: str) -> FlatRateInputs:
    """Parse the car loan options into ``FlatRateInputs``.

    The down payment is clamped to 0-100 % the way the input field does.
    """
    if years < 0:
        raise click.BadParameter("Term must not be negative", param_hint="--years")
    return FlatRateInputs(
        price=_amount_option(price, "--price"),
        down_percent=clamp_percent(_percent_option(down, "--down")),
        rate=_percent_option(rate, "--rate"),
        years=years,
        vehicle_type=vehicle_type.lower(),
    )


def build_amortized_inputs(price: str, down: str, rate: str, years: int, days: int) -> AmortizedInputs:
    """Parse the home loan options into ``AmortizedInputs``."""
    if years < 0:
        raise click.BadParameter("Term must not be negative", param_hint="--years")
    return AmortizedInputs(
        price=_amount_option(price, "--price"),
        down_percent=clamp_percent(_percent_option(down, "--down")),
        rate=_percent_option(rate, "--rate"),
        years=years,
        first_month_days=days,
    )


def _comparison_rows(comparisons: List[TermComparison]) -> List[Dict[str, Any]]:
    return [
        {
            "years": item.years,
            "selected": item.selected,
            "monthly_payment": float(item.monthly_payment),
            "total_interest": float(item.total_interest),
        }
        for item in comparisons
    ]


def export_to_json(path: Path, inputs: Any, result: Any, comparisons: List[TermComparison]) -> None:
    """Export inputs, result and term comparison to a JSON file."""
    data = {
        "inputs": {k: (v if isinstance(v, (int, str)) else float(v)) for k, v in vars(inputs).items()},
        "result": result_to_dict(result),
        "comparison": _comparison_rows(comparisons),
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, comparisons: List[TermComparison]) -> None:
    """Export the term comparison to a CSV file, one row per term."""
    header = ["Years", "Selected", "Monthly_Payment", "Total_Interest"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for row in _comparison_rows(comparisons):
            writer.writerow([row["years"], row["selected"], row["monthly_payment"], row["total_interest"]])


def _write_output(output: str, inputs: Any, result: Any, comparisons: List[TermComparison]) -> None:
    path = Path(output)
    if path.suffix.lower() == ".json":
        export_to_json(path, inputs, result, comparisons)
    elif path.suffix.lower() == ".csv":
        export_to_csv(path, comparisons)
    else:
        raise click.BadParameter("Unsupported output format; use .json or .csv", param_hint="--output")
    click.echo(f"Results exported to {path}")


def _write_infographic(path: str, tab: str, structure, comparison, headline, dark: bool) -> None:
    png = render_infographic(tab, structure, comparison, headline, dark=dark)
    Path(path).write_bytes(png)
    click.echo(f"Infographic saved to {path}")


@click.group()
def cli() -> None:
    """Installment calculator for flat rate car loans and annuity home loans."""
    pass


@cli.command()
@click.option("--price", "-p", "price", default=str(CAR_DEFAULTS["price"]), show_default=True, help="Vehicle price")
@click.option("--down", "-d", "down", default=str(CAR_DEFAULTS["down_percent"]), show_default=True, help="Down payment (percent)")
@click.option("--rate", "-r", "rate", default=str(CAR_DEFAULTS["rate"]), show_default=True, help="Annual flat interest rate (percent)")
@click.option("--years", "-y", "years", default=CAR_DEFAULTS["years"], show_default=True, type=int, help="Loan term in years")
@click.option("--type", "vehicle_type", type=click.Choice(VEHICLE_TYPES, case_sensitive=False), default=CAR_DEFAULTS["vehicle_type"], show_default=True, help="Vehicle type; used vehicles pay 7% VAT on each installment")
@click.option("--compare/--no-compare", "compare", default=True, help="Show the 4-7 year term comparison")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.option("--infographic", "infographic", type=str, help="Save the view as a PNG image")
@click.option("--dark", is_flag=True, default=False, help="Use the dark palette for the infographic")
def car(
    price: str,
    down: str,
    rate: str,
    years: int,
    vehicle_type: str,
    compare: bool,
    output: Optional[str],
    infographic: Optional[str],
    dark: bool,
) -> None:
    """Compute the installment of a flat rate car loan."""
    inputs = build_flat_rate_inputs(price, down, rate, years, vehicle_type)
    result = compute_flat_rate_loan(inputs.price, inputs.down_percent, inputs.rate, inputs.years, inputs.vehicle_type)
    comparisons = compare_flat_rate_terms(
        inputs.price, inputs.down_percent, inputs.rate, inputs.vehicle_type, inputs.years
    )
    if output:
        _write_output(output, inputs, result, comparisons)
    else:
        print_flat_rate_summary(inputs, result)
        if compare:
            print_term_comparison(comparisons)
    if infographic:
        _write_infographic(
            infographic,
            "car",
            flat_rate_structure_chart(result, inputs.vehicle_type),
            term_comparison_chart(comparisons),
            flat_rate_headline(result),
            dark,
        )


@cli.command()
@click.option("--price", "-p", "price", default=str(HOME_DEFAULTS["price"]), show_default=True, help="Property price")
@click.option("--down", "-d", "down", default=str(HOME_DEFAULTS["down_percent"]), show_default=True, help="Down payment (percent)")
@click.option("--rate", "-r", "rate", default=str(HOME_DEFAULTS["rate"]), show_default=True, help="Annual interest rate (percent)")
@click.option("--years", "-y", "years", default=HOME_DEFAULTS["years"], show_default=True, type=int, help="Loan term in years")
@click.option("--days", "days", type=click.Choice([str(d) for d in DAY_COUNT_OPTIONS]), default=str(HOME_DEFAULTS["first_month_days"]), show_default=True, help="Days in the first month for the first month interest")
@click.option("--compare/--no-compare", "compare", default=True, help="Show the 20-35 year term comparison")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.option("--infographic", "infographic", type=str, help="Save the view as a PNG image")
@click.option("--dark", is_flag=True, default=False, help="Use the dark palette for the infographic")
def home(
    price: str,
    down: str,
    rate: str,
    years: int,
    days: str,
    compare: bool,
    output: Optional[str],
    infographic: Optional[str],
    dark: bool,
) -> None:
    """Compute the constant installment of a reducing balance home loan."""
    inputs = build_amortized_inputs(price, down, rate, years, int(days))
    result = compute_amortized_loan(inputs.price, inputs.down_percent, inputs.rate, inputs.years, inputs.first_month_days)
    comparisons = compare_amortized_terms(
        inputs.price, inputs.down_percent, inputs.rate, inputs.first_month_days, inputs.years
    )
    if output:
        _write_output(output, inputs, result, comparisons)
    else:
        print_amortized_summary(inputs, result)
        if compare:
            print_term_comparison(comparisons)
    if infographic:
        _write_infographic(
            infographic,
            "home",
            amortized_structure_chart(result),
            term_comparison_chart(comparisons),
            amortized_headline(result),
            dark,
        )


if __name__ == "__main__":
    cli()
