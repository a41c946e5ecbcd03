"""Plotting with matplotlib, saved to PNG files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .errors import NoData

if TYPE_CHECKING:
    from .ground_bearing import GroundBearingAnalysis
    from .load_chart import LoadChart
    from .results import GroundBearingResult

_LOG = logging.getLogger(__name__)

_BG = "#ffffff"
_PANEL = "#ffffff"
_GRID_MAJOR = "#d4d4d4"
_GRID_MINOR = "#eeeeee"
_TEXT = "#1f2937"
_TEXT_MUTED = "#6b7280"
_MODEL_LINE = "#2563eb"
_CRITICAL = "#dc2626"
_COG = "#16a34a"


def _slugify(name: str) -> str:
    return name.lower().replace(" ", "_").replace("/", "_")


def _savefig(fig, name: str, suffix: str, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{_slugify(name)}_{suffix}.png"
    fig.savefig(path, dpi=170, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    _LOG.info("Saved: %s", path)
    return path


def _style_axes(ax, title: str, *, xlabel: str, ylabel: str) -> None:
    fig = ax.figure
    fig.patch.set_facecolor(_BG)
    ax.set_facecolor(_PANEL)
    ax.set_title(title, color=_TEXT, fontsize=12, pad=6)
    ax.set_xlabel(xlabel, color=_TEXT_MUTED)
    ax.set_ylabel(ylabel, color=_TEXT_MUTED)
    ax.tick_params(colors=_TEXT_MUTED)
    for spine in ax.spines.values():
        spine.set_color(_GRID_MAJOR)
    ax.grid(True, color=_GRID_MAJOR, alpha=0.6, linewidth=0.8)
    ax.minorticks_on()
    ax.grid(which="minor", color=_GRID_MINOR, alpha=0.6, linewidth=0.5)


def plot_support_layout(
    analysis: GroundBearingAnalysis,
    result: GroundBearingResult,
    output_dir: str | Path = "output",
    name: str = "ground_bearing",
) -> Path:
    """Plan view (X right, Z forward) of supports sized by reaction."""
    fig, ax = plt.subplots(figsize=(7, 7))
    _style_axes(ax, "Support reactions (plan)", xlabel="X (ft)", ylabel="Z (ft)")

    peak = max(result.max_reaction_lbf, 1.0)
    for i, (sup, r) in enumerate(zip(analysis.supports, result.reactions)):
        color = _CRITICAL if i == result.critical_support_index else _MODEL_LINE
        size = 80 + 900 * r.force_lbf / peak
        ax.scatter([sup.x], [sup.z], s=size, color=color, alpha=0.7, zorder=3)
        ax.annotate(
            f"{sup.name}\n{r.force_lbf:,.0f} lbf\n{r.pressure_psi:.1f} psi",
            (sup.x, sup.z),
            textcoords="offset points",
            xytext=(10, 10),
            fontsize=8,
            color=_TEXT,
        )

    cx, _, cz = result.combined_cog
    ax.scatter([cx], [cz], marker="x", s=120, color=_COG, zorder=4, label="Combined COG")
    lx, _, lz = analysis.load_position
    ax.scatter([lx], [lz], marker="v", s=90, color=_TEXT_MUTED, zorder=4, label="Load")

    ax.set_aspect("equal", adjustable="datalim")
    ax.legend(loc="best", fontsize=8)
    return _savefig(fig, name, "supports", Path(output_dir))


def plot_load_chart(chart: LoadChart, output_dir: str | Path = "output") -> Path:
    """Capacity vs radius, one curve per boom length."""
    fig, ax = plt.subplots(figsize=(8, 5))
    _style_axes(ax, chart.description or chart.id, xlabel="Radius (ft)", ylabel="Capacity (lb)")

    for idx, boom in enumerate(chart.boom_lengths()):
        try:
            points = chart.capacity_data.capacity_points(idx)
        except NoData:
            _LOG.warning("%s: no capacity row for %s, skipped", chart.id, boom)
            continue
        if not points:
            continue
        radii = [r.value for r, _ in points]
        caps = [w.value for _, w in points]
        ax.plot(radii, caps, marker="o", markersize=3, linewidth=1.5, label=f"{boom.value:.1f} ft")

    ax.legend(title="Boom", loc="best", fontsize=8)
    return _savefig(fig, chart.id, "chart", Path(output_dir))
