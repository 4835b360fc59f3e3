import io
import logging
import os
from uuid import uuid4

from flask import (
    Blueprint,
    Flask,
    current_app,
    jsonify,
    redirect,
    render_template,
    request,
    send_file,
    session,
    url_for,
)

from loan_rate import config as cfg
from loan_rate.charts import (
    amortized_structure_chart,
    axis_colors,
    flat_rate_structure_chart,
    term_comparison_chart,
)
from loan_rate.data_models import AmortizedInputs, FlatRateInputs
from loan_rate.engine import (
    compare_amortized_terms,
    compare_flat_rate_terms,
    compute_amortized_loan,
    compute_flat_rate_loan,
)
from loan_rate.formatter import (
    amortized_breakdown_lines,
    amortized_headline,
    flat_rate_breakdown_lines,
    flat_rate_headline,
    format_money,
    result_to_dict,
)
from loan_rate.infographic import infographic_filename, render_infographic
from loan_rate.utils import clamp_percent, parse_amount, parse_percent
from loan_rate_web.preference_store import create_store_from_env

logger = logging.getLogger(__name__)

bp = Blueprint("loan_rate", __name__)

TABS = ("car", "home")

# Form fields carried through a theme toggle
INPUT_FIELDS = ("price", "down_percent", "rate", "years", "vehicle_type", "first_month_days", "currency")


def _ensure_user_token() -> str:
    token = session.get("user_token")
    if not token:
        token = uuid4().hex
        session["user_token"] = token
        session.modified = True
    return token


def _store():
    return current_app.extensions["preference_store"]


def _normalized_tab(values) -> str:
    tab = values.get("tab", "car").lower()
    return tab if tab in TABS else "car"


def _normalized_currency(values) -> str:
    code = values.get("currency", cfg.DEFAULT_CURRENCY).upper()
    return code if code in cfg.CURRENCY_OPTIONS else cfg.DEFAULT_CURRENCY


def _field(values, name: str, default) -> str:
    raw = values.get(name, "")
    raw = raw.strip() if raw else ""
    return raw or str(default)


def _parse_years(raw: str) -> int:
    try:
        years = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid term: {raw}") from exc
    if years < 0:
        raise ValueError("Term must not be negative")
    return years


def _parse_days(raw: str) -> int:
    try:
        days = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid day count: {raw}") from exc
    if days not in cfg.DAY_COUNT_OPTIONS:
        raise ValueError(f"Days in month must be one of {cfg.DAY_COUNT_OPTIONS}; got {days}")
    return days


def _form_to_flat_rate_inputs(values) -> FlatRateInputs:
    defaults = cfg.CAR_DEFAULTS
    vehicle_type = _field(values, "vehicle_type", defaults["vehicle_type"]).lower()
    if vehicle_type not in cfg.VEHICLE_TYPES:
        raise ValueError(f"Unknown vehicle type: {vehicle_type}")
    return FlatRateInputs(
        price=parse_amount(_field(values, "price", defaults["price"])),
        down_percent=clamp_percent(parse_percent(_field(values, "down_percent", defaults["down_percent"]))),
        rate=parse_percent(_field(values, "rate", defaults["rate"])),
        years=_parse_years(_field(values, "years", defaults["years"])),
        vehicle_type=vehicle_type,
    )


def _form_to_amortized_inputs(values) -> AmortizedInputs:
    defaults = cfg.HOME_DEFAULTS
    days = _parse_days(_field(values, "first_month_days", defaults["first_month_days"]))
    return AmortizedInputs(
        price=parse_amount(_field(values, "price", defaults["price"])),
        down_percent=clamp_percent(parse_percent(_field(values, "down_percent", defaults["down_percent"]))),
        rate=parse_percent(_field(values, "rate", defaults["rate"])),
        years=_parse_years(_field(values, "years", defaults["years"])),
        first_month_days=days,
    )


def _car_view(values, currency: str) -> dict:
    inputs = _form_to_flat_rate_inputs(values)
    result = compute_flat_rate_loan(inputs.price, inputs.down_percent, inputs.rate, inputs.years, inputs.vehicle_type)
    comparisons = compare_flat_rate_terms(inputs.price, inputs.down_percent, inputs.rate, inputs.vehicle_type, inputs.years)
    return {
        "inputs": inputs,
        "result": result,
        "comparisons": comparisons,
        "headline": flat_rate_headline(result, currency),
        "breakdown": flat_rate_breakdown_lines(inputs, result),
        "structure_chart": flat_rate_structure_chart(result, inputs.vehicle_type),
        "comparison_chart": term_comparison_chart(comparisons),
        "down_note": f"Down payment: {format_money(result.down_amount)}",
        "months_note": f"Installments: {result.months}",
    }


def _home_view(values, currency: str) -> dict:
    inputs = _form_to_amortized_inputs(values)
    result = compute_amortized_loan(inputs.price, inputs.down_percent, inputs.rate, inputs.years, inputs.first_month_days)
    comparisons = compare_amortized_terms(inputs.price, inputs.down_percent, inputs.rate, inputs.first_month_days, inputs.years)
    return {
        "inputs": inputs,
        "result": result,
        "comparisons": comparisons,
        "headline": amortized_headline(result, currency),
        "breakdown": amortized_breakdown_lines(inputs, result),
        "structure_chart": amortized_structure_chart(result),
        "comparison_chart": term_comparison_chart(comparisons),
        "down_note": (
            f"Down payment: {format_money(result.down_amount)} | "
            f"Principal: {format_money(result.principal)}"
        ),
        "months_note": f"Installments: {result.months}",
    }


def _build_view(tab: str, values, currency: str) -> dict:
    return _car_view(values, currency) if tab == "car" else _home_view(values, currency)


@bp.route("/", methods=["GET", "POST"])
def index():
    values = request.form if request.method == "POST" else request.args
    tab = _normalized_tab(values)
    currency_code = _normalized_currency(values)
    user_token = _ensure_user_token()
    dark_mode = _store().get_dark_mode(user_token)

    view = None
    error = None
    try:
        view = _build_view(tab, values, currency_code)
    except ValueError as exc:
        logger.info("Rejected %s input: %s", tab, exc)
        error = str(exc)

    return render_template(
        "index.html",
        tab=tab,
        view=view,
        error=error,
        dark_mode=dark_mode,
        axis=axis_colors(dark_mode),
        currency_code=currency_code,
        currency_options=cfg.CURRENCY_OPTIONS,
        cfg=cfg,
        asset_version=current_app.config["ASSET_VERSION"],
    )


@bp.post("/theme")
def toggle_theme():
    user_token = _ensure_user_token()
    _store().toggle_dark_mode(user_token)
    tab = _normalized_tab(request.form)
    inputs = {name: request.form[name] for name in INPUT_FIELDS if request.form.get(name)}
    return redirect(url_for("loan_rate.index", tab=tab, **inputs))


@bp.get("/infographic.png")
def infographic():
    tab = _normalized_tab(request.args)
    currency_code = _normalized_currency(request.args)
    try:
        view = _build_view(tab, request.args, currency_code)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    dark_mode = _store().get_dark_mode(session.get("user_token"))
    png = render_infographic(
        tab,
        view["structure_chart"],
        view["comparison_chart"],
        view["headline"],
        dark=dark_mode,
    )
    return send_file(
        io.BytesIO(png),
        mimetype="image/png",
        as_attachment=True,
        download_name=infographic_filename(tab),
    )


def _api_response(tab: str):
    try:
        view = _build_view(tab, request.args, cfg.DEFAULT_CURRENCY)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify(
        {
            "result": result_to_dict(view["result"]),
            "comparison": [
                {
                    "years": item.years,
                    "selected": item.selected,
                    "result": result_to_dict(item.result),
                }
                for item in view["comparisons"]
            ],
        }
    )


@bp.get("/api/car")
def api_car():
    return _api_response("car")


@bp.get("/api/home")
def api_home():
    return _api_response("home")


def create_app(config=None) -> Flask:
    app = Flask(__name__)
    app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
    app.config["SECRET_KEY"] = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    app.config["PREFERENCE_DATABASE_URL"] = os.environ.get("PREFERENCE_DATABASE_URL")
    if config:
        app.config.update(config)
    app.extensions["preference_store"] = create_store_from_env(app.config["PREFERENCE_DATABASE_URL"])
    app.register_blueprint(bp)
    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("Starting Loan Rate Calculator web app...")
    create_app().run(host="0.0.0.0", port=8710, debug=True)
