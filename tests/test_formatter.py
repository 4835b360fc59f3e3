from __future__ import annotations

from decimal import Decimal

from loan_rate.data_models import AmortizedInputs, FlatRateInputs
from loan_rate.engine import compare_flat_rate_terms, compute_amortized_loan, compute_flat_rate_loan
from loan_rate.formatter import (
    amortized_breakdown_lines,
    amortized_headline,
    flat_rate_breakdown_lines,
    flat_rate_headline,
    format_currency,
    format_money,
    format_rate,
    print_flat_rate_summary,
    print_term_comparison,
    result_to_dict,
)


def _car(vehicle_type="new"):
    inputs = FlatRateInputs(Decimal(800_000), Decimal(25), Decimal("2.5"), 5, vehicle_type)
    return inputs, compute_flat_rate_loan(inputs.price, inputs.down_percent, inputs.rate, inputs.years, vehicle_type)


def _home():
    inputs = AmortizedInputs(Decimal(3_000_000), Decimal(10), Decimal(3), 30, 31)
    result = compute_amortized_loan(inputs.price, inputs.down_percent, inputs.rate, inputs.years, inputs.first_month_days)
    return inputs, result


def test_format_money():
    assert format_money(1_234_567.891) == "1,234,568"
    assert format_money(Decimal("12037.5"), 2) == "12,037.50"
    assert format_money(0) == "0"


def test_format_money_rounds_halves_up():
    assert format_money(Decimal("77812.5")) == "77,813"
    assert format_money(Decimal("0.125"), 2) == "0.13"
    total_interest = compute_flat_rate_loan(830_000, 25, 2.5, 5, "new").total_interest
    assert total_interest == Decimal("77812.5")
    assert format_money(total_interest) == "77,813"


def test_format_currency_and_rate():
    assert format_currency(875_000) == "875,000 บาท"
    assert format_currency(875_000, "USD") == "$875,000"
    assert format_currency(875_000, "XXX") == "875,000 บาท"
    assert format_rate(Decimal("0.25"), 4) == "0.2500%"


def test_flat_rate_breakdown_new_vehicle_has_no_vat_row():
    inputs, result = _car("new")
    rows = flat_rate_breakdown_lines(inputs, result)
    assert len(rows) == 4
    assert rows[0] == ("Down payment = 800,000 x 25%", "200,000")
    assert rows[1] == ("Financed = 800,000 - 200,000", "600,000")
    assert rows[2] == ("Total interest = 600,000 x 2.5% x 5", "75,000")
    assert rows[3] == ("Installment before VAT = 675,000 / 60", "11,250.00")


def test_flat_rate_breakdown_used_vehicle_has_vat_row():
    inputs, result = _car("used")
    rows = flat_rate_breakdown_lines(inputs, result)
    assert rows[-1] == ("VAT 7% per month", "787.50")


def test_amortized_breakdown():
    inputs, result = _home()
    rows = dict(amortized_breakdown_lines(inputs, result))
    assert rows["Installments = 30 x 12"] == "360 months"
    assert rows["r = monthly rate = (3% / 12)"] == "0.2500%"
    assert rows["Constant installment (PMT/Annuity)"] == format_money(result.monthly_payment, 2)
    assert rows["Constant installment (PMT/Annuity)"].startswith("11,38")
    assert rows["First month interest = (principal x annual rate x 31) / 365"] == "6,879.45"


def test_headlines():
    _, car = _car("used")
    assert flat_rate_headline(car)[0] == ("Monthly installment", "12,038 บาท")
    _, home = _home()
    labels = [label for label, _ in amortized_headline(home)]
    assert labels[-1] == "First month interest"


def test_print_summary_and_comparison(capsys):
    inputs, result = _car("used")
    print_flat_rate_summary(inputs, result)
    print_term_comparison(compare_flat_rate_terms(800_000, 25, 2.5, "used", 5))
    out = capsys.readouterr().out
    assert "Car loan (flat rate)" in out
    assert "12,038 บาท" in out
    assert "5 years*" in out
    assert "VAT 7% per month" in out


def test_result_to_dict_is_json_ready():
    _, result = _car()
    data = result_to_dict(result)
    assert data["months"] == 60
    assert isinstance(data["monthly_total"], float)
    assert data["total_paid"] == 875_000.0
