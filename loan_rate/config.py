"""
Constants for the car (flat rate) and home (annuity) loan calculators.

All monetary values in Thai baht. Ranges and defaults mirror the input
controls of the web page so the CLI and the web UI agree.
"""

from decimal import Decimal

# ── Car loan (flat rate) ─────────────────────────────────────────────
VAT_RATE = Decimal("0.07")          # surcharge on used-vehicle installments
VEHICLE_TYPES = ("new", "used")

CAR_PRICE_MIN = 100_000
CAR_PRICE_MAX = 5_000_000
CAR_PRICE_STEP = 10_000
CAR_DOWN_SLIDER_MAX = 50            # slider only; the number field allows 100
CAR_DOWN_SLIDER_STEP = 5
CAR_RATE_MIN = 0.5
CAR_RATE_MAX = 10
CAR_RATE_STEP = 0.1
CAR_TERMS = [2, 3, 4, 5, 6, 7, 8]
FLAT_RATE_COMPARE_TERMS = [4, 5, 6, 7]

CAR_DEFAULTS = {
    "price": 800_000,
    "down_percent": 25,
    "rate": 2.5,
    "years": 5,
    "vehicle_type": "new",
}

# ── Home loan (reducing balance / annuity) ──────────────────────────
DAYS_IN_YEAR = 365                  # first-month interest denominator
DAY_COUNT_OPTIONS = [28, 29, 30, 31]

HOME_PRICE_MIN = 500_000
HOME_PRICE_MAX = 20_000_000
HOME_PRICE_STEP = 50_000
HOME_DOWN_SLIDER_MAX = 60
HOME_DOWN_SLIDER_STEP = 1
HOME_RATE_MIN = 0.1
HOME_RATE_MAX = 10
HOME_RATE_STEP = 0.05
HOME_YEARS_MIN = 5
HOME_YEARS_MAX = 40
AMORTIZED_COMPARE_TERMS = [20, 25, 30, 35]

HOME_DEFAULTS = {
    "price": 3_000_000,
    "down_percent": 10,
    "rate": 3,
    "years": 30,
    "first_month_days": 31,
}

# ── Display ─────────────────────────────────────────────────────────
CURRENCY_OPTIONS = {
    "THB": {"label": "Thai baht", "prefix": "", "suffix": " บาท"},
    "USD": {"label": "US dollar", "prefix": "$", "suffix": ""},
    "EUR": {"label": "Euro", "prefix": "€", "suffix": ""},
}
DEFAULT_CURRENCY = "THB"

COLOR_DOWN = "#d97706"
COLOR_PRINCIPAL = "#0ea5e9"
COLOR_INTEREST = "#ef4444"
COLOR_VAT = "#94a3b8"
COLOR_SELECTED = "#0ea5e9"
COLOR_UNSELECTED = "#94a3b8"
COLOR_INTEREST_FILL = "rgba(239, 68, 68, 0.45)"

BG_LIGHT = "#f4f7fb"
BG_DARK = "#020617"
AXIS_LIGHT = "#475569"
AXIS_DARK = "#cbd5e1"
GRID_LIGHT = "rgba(148,163,184,0.22)"
GRID_DARK = "rgba(148,163,184,0.18)"
