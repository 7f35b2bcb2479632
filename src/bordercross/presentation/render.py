"""Matplotlib rendering of chart specifications."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

import matplotlib

matplotlib.use("Agg")

import matplotlib.dates as mdates  # noqa: E402
import matplotlib.pyplot as plt  # noqa: E402

from ..records.dates import MONTH_ABBREVIATIONS  # noqa: E402
from .series import ChartSpec  # noqa: E402


logger = logging.getLogger(__name__)


def render_chart(
    spec: ChartSpec,
    path: Path,
    *,
    figsize: tuple[float, float] = (12.0, 6.0),
    dpi: int = 100,
) -> Path:
    """Draw *spec* and save it as an image at *path*."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig, ax = plt.subplots(figsize=figsize)
    try:
        if spec.is_empty:
            logger.warning("chart %s has no data", spec.name)
            ax.text(
                0.5,
                0.5,
                "No data",
                ha="center",
                va="center",
                fontsize=14,
                transform=ax.transAxes,
            )
            ax.set_xticks([])
            ax.set_yticks([])
        elif spec.kind == "bar":
            _draw_bars(ax, spec)
        else:
            _draw_lines(ax, spec)

        ax.set_title(spec.title)
        ax.set_xlabel(spec.x_label)
        ax.set_ylabel(spec.y_label)
        fig.tight_layout()
        fig.savefig(path, dpi=dpi)
    finally:
        plt.close(fig)
    return path


def _draw_lines(ax: Any, spec: ChartSpec) -> None:
    for series in spec.series:
        ax.plot(series.x, series.y, label=series.name)

    xs = [x for series in spec.series for x in series.x]
    low, high = min(xs), max(xs)
    for marker in spec.markers:
        # markers outside the plotted range are clipped
        if not low <= marker.when <= high:
            continue
        ax.axvline(marker.when, color="red", linestyle="--", linewidth=1)
        ax.text(
            mdates.date2num(marker.when),
            0.98,
            f" {marker.label}",
            transform=ax.get_xaxis_transform(),
            va="top",
            color="red",
        )
    ax.legend(loc="upper left", fontsize="small")
    for label in ax.get_xticklabels():
        label.set_rotation(45)


def _draw_bars(ax: Any, spec: ChartSpec) -> None:
    categories: List[Any] = sorted(
        {x for series in spec.series for x in series.x}, key=_category_order
    )
    width = 0.8 / len(spec.series)
    for index, series in enumerate(spec.series):
        offset = (index - (len(spec.series) - 1) / 2) * width
        positions = [categories.index(x) + offset for x in series.x]
        ax.bar(positions, series.y, width=width, label=series.name, edgecolor="black")
    ax.set_xticks(range(len(categories)))
    ax.set_xticklabels([str(category) for category in categories])
    ax.legend(loc="upper left", fontsize="small")


def _category_order(value: Any) -> tuple[int, Any]:
    if value in MONTH_ABBREVIATIONS:
        return (0, MONTH_ABBREVIATIONS.index(value))
    return (1, str(value))
