"""
PNG infographic export for the car and home loan views.

Renders one image per tab: the headline figures, the breakdown doughnut and
the term comparison bars, in the light or dark palette of the page. Input is
the same chart payloads the web page hands to Chart.js.
"""

from __future__ import annotations

import io
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter
import numpy as np

from .charts import axis_colors
from .config import BG_DARK, BG_LIGHT

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════
# Style constants
# ═══════════════════════════════════════════════════════════════════

CARD_LIGHT = "#ffffff"
CARD_DARK = "#0f172a"
TEXT_LIGHT = "#0f172a"
TEXT_DARK = "#f1f5f9"

FIG_W, FIG_H = 12, 7.5
EXPORT_DPI = 200  # 2x of the 100 dpi base, as a retina screenshot

TAB_TITLES = {
    "car": "Car loan installment (flat rate)",
    "home": "Home loan installment (reducing balance)",
}

_RGBA_RE = re.compile(r"rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*([\d.]+)\s*\)")


def _mpl_color(value: str):
    """Translate a CSS ``rgba(...)`` string into a matplotlib RGBA tuple."""
    match = _RGBA_RE.fullmatch(value.strip())
    if not match:
        return value
    r, g, b, a = match.groups()
    return (int(r) / 255, int(g) / 255, int(b) / 255, float(a))


def _money_fmt(x, _):
    if abs(x) >= 1e6:
        return f"{x / 1e6:.1f}M"
    if abs(x) >= 1e3:
        return f"{x / 1e3:.0f}k"
    return f"{x:.0f}"


MONEY_FMT = FuncFormatter(_money_fmt)


def _palette(dark: bool) -> Dict[str, Any]:
    colors = axis_colors(dark)
    return {
        "bg": BG_DARK if dark else BG_LIGHT,
        "card": CARD_DARK if dark else CARD_LIGHT,
        "text": TEXT_DARK if dark else TEXT_LIGHT,
        "axis": colors["axis"],
        "grid": _mpl_color(colors["grid"]),
    }


def _style(ax, pal: Dict[str, Any]) -> None:
    ax.set_facecolor(pal["card"])
    ax.tick_params(colors=pal["axis"], labelsize=8)
    ax.xaxis.label.set_color(pal["axis"])
    ax.yaxis.label.set_color(pal["axis"])
    ax.title.set_color(pal["text"])
    for spine in ax.spines.values():
        spine.set_color(pal["grid"])


# ═══════════════════════════════════════════════════════════════════
# Panels
# ═══════════════════════════════════════════════════════════════════

def _draw_headline(fig, tab: str, headline: Sequence[Tuple[str, str]], pal: Dict[str, Any]) -> None:
    fig.text(0.04, 0.93, TAB_TITLES.get(tab, tab), fontsize=18,
             color=pal["text"], fontweight="bold")
    if not headline:
        return
    step = 0.92 / len(headline)
    for i, (label, value) in enumerate(headline):
        x = 0.04 + i * step
        fig.text(x, 0.85, label, fontsize=9, color=pal["axis"])
        fig.text(x, 0.80, value, fontsize=14, color=pal["text"], fontweight="bold")


def _draw_structure(ax, structure: Dict[str, Any], pal: Dict[str, Any]) -> None:
    dataset = structure["datasets"][0]
    values = [max(0.0, float(v)) for v in dataset["data"]]
    labels: List[str] = list(structure["labels"])
    colors = [_mpl_color(c) for c in dataset["backgroundColor"]]
    ax.set_title("Down payment, principal and interest", fontsize=11, pad=10, color=pal["text"])
    if sum(values) <= 0:
        ax.text(0.5, 0.5, "Nothing financed", ha="center", va="center",
                color=pal["axis"], transform=ax.transAxes)
        ax.axis("off")
        return
    # Zero-sized segments keep their legend entry but draw no wedge
    wedges, _ = ax.pie(values, colors=colors, startangle=90, counterclock=False,
                       wedgeprops={"width": 0.42, "linewidth": 0})
    ax.legend(wedges, labels, loc="upper center", bbox_to_anchor=(0.5, -0.02),
              ncol=len(labels), fontsize=8, frameon=False, labelcolor=pal["axis"])
    ax.set_aspect("equal")


def _draw_comparison(ax, comparison: Dict[str, Any], pal: Dict[str, Any]) -> None:
    payments, interest = comparison["datasets"][0], comparison["datasets"][1]
    x = np.arange(len(comparison["labels"]))
    w = 0.38
    _style(ax, pal)
    ax.bar(x - w / 2, payments["data"], w, label=payments["label"],
           color=[_mpl_color(c) for c in payments["backgroundColor"]])
    ax.set_xticks(x)
    ax.set_xticklabels(comparison["labels"])
    ax.set_ylabel(payments["label"])
    ax.yaxis.set_major_formatter(MONEY_FMT)
    ax.grid(True, axis="y", color=pal["grid"])
    ax.set_title("Term comparison", fontsize=11, pad=10)

    ax2 = ax.twinx()
    ax2.bar(x + w / 2, interest["data"], w, label=interest["label"],
            color=_mpl_color(interest["backgroundColor"]),
            edgecolor=_mpl_color(interest["borderColor"]), linewidth=1)
    ax2.set_ylabel(interest["label"], color=pal["axis"])
    ax2.tick_params(colors=pal["axis"], labelsize=8)
    ax2.yaxis.set_major_formatter(MONEY_FMT)
    for spine in ax2.spines.values():
        spine.set_color(pal["grid"])

    handles = ax.get_legend_handles_labels()
    handles2 = ax2.get_legend_handles_labels()
    ax.legend(handles[0] + handles2[0], handles[1] + handles2[1], loc="upper center",
              bbox_to_anchor=(0.5, -0.08), ncol=2, fontsize=8, frameon=False,
              labelcolor=pal["axis"])


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

def render_infographic(
    tab: str,
    structure: Dict[str, Any],
    comparison: Dict[str, Any],
    headline: Sequence[Tuple[str, str]],
    dark: bool = False,
) -> bytes:
    """Render the view of one tab and return it as PNG bytes.

    ``structure`` and ``comparison`` are the payloads produced by
    :mod:`loan_rate.charts`; ``headline`` is a list of ``(label, value)``
    pairs shown above the charts.
    """
    pal = _palette(dark)
    fig = plt.figure(figsize=(FIG_W, FIG_H))
    fig.patch.set_facecolor(pal["bg"])
    try:
        _draw_headline(fig, tab, headline, pal)
        ax_structure = fig.add_axes([0.04, 0.10, 0.38, 0.60])
        ax_structure.set_facecolor(pal["bg"])
        _draw_structure(ax_structure, structure, pal)
        ax_comparison = fig.add_axes([0.52, 0.16, 0.40, 0.54])
        _draw_comparison(ax_comparison, comparison, pal)

        buf = io.BytesIO()
        fig.savefig(buf, format="png", facecolor=fig.get_facecolor(), dpi=EXPORT_DPI)
    finally:
        plt.close(fig)
    data = buf.getvalue()
    buf.close()
    logger.info("Rendered %s infographic (%d bytes, dark=%s)", tab, len(data), dark)
    return data


def infographic_filename(tab: str, now: Optional[datetime] = None) -> str:
    """Download name of an exported view, e.g. ``car-loan-infographic-2024-05-01_09-30-00.png``."""
    now = now or datetime.now()
    return f"{tab}-loan-infographic-{now:%Y-%m-%d}_{now:%H-%M-%S}.png"
