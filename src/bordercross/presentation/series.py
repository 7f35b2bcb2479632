"""Chart specifications built from aggregate rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Sequence, Tuple

import pandas as pd

from ..aggregate import AggregateRow
from ..records.models import TypeGroup
from .markers import EventMarker, event_markers


ChartKind = Literal["line", "bar"]


@dataclass(frozen=True)
class ChartSeries:
    name: str
    x: Tuple[Any, ...]
    y: Tuple[float, ...]


@dataclass(frozen=True)
class ChartSpec:
    """Everything a chart plots, independent of any rendering backend."""

    name: str
    title: str
    kind: ChartKind
    x_label: str
    y_label: str
    series: Tuple[ChartSeries, ...] = ()
    markers: Tuple[EventMarker, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not any(series.x for series in self.series)

    def get_series(self, name: str) -> ChartSeries:
        for series in self.series:
            if series.name == name:
                return series
        raise KeyError(name)


def _label(value: Any) -> str:
    if isinstance(value, TypeGroup):
        return value.value
    return str(value)


def _build_series(
    rows: Sequence[AggregateRow], x_field: str, series_fields: Sequence[str]
) -> Tuple[ChartSeries, ...]:
    points: Dict[str, Tuple[List[Any], List[float]]] = {}
    for row in rows:
        name = ": ".join(_label(row.get(field_name)) for field_name in series_fields)
        xs, ys = points.setdefault(name, ([], []))
        xs.append(row.get(x_field))
        ys.append(row.value)
    return tuple(
        ChartSeries(name=name, x=tuple(xs), y=tuple(ys))
        for name, (xs, ys) in sorted(points.items())
    )


def border_measure_chart(rows: Sequence[AggregateRow]) -> ChartSpec:
    return ChartSpec(
        name="border_measure_trend",
        title="Monthly Crossings by Border and Measure",
        kind="line",
        x_label="Date",
        y_label="Crossings",
        series=_build_series(rows, "date", ("border", "measure")),
    )


def border_trend_chart(rows: Sequence[AggregateRow]) -> ChartSpec:
    return ChartSpec(
        name="border_trend",
        title="Monthly Crossings by Border",
        kind="line",
        x_label="Date",
        y_label="Crossings",
        series=_build_series(rows, "date", ("border",)),
        markers=tuple(event_markers()),
    )


def type_group_chart(rows: Sequence[AggregateRow]) -> ChartSpec:
    return ChartSpec(
        name="commercial_vs_personal",
        title="Commercial vs Personal Crossings",
        kind="line",
        x_label="Date",
        y_label="Crossings",
        series=_build_series(rows, "date", ("type_group",)),
        markers=tuple(event_markers()),
    )


def seasonal_chart(rows: Sequence[AggregateRow]) -> ChartSpec:
    return ChartSpec(
        name="seasonal_by_border",
        title="Average Crossings by Month of Year",
        kind="bar",
        x_label="Month",
        y_label="Average crossings",
        series=_build_series(rows, "month", ("border",)),
    )


def chart_frame(spec: ChartSpec) -> pd.DataFrame:
    """Tabular form of a chart: one row per plotted point."""

    records = [
        {"series": series.name, "x": x, "y": y}
        for series in spec.series
        for x, y in zip(series.x, series.y)
    ]
    return pd.DataFrame(records, columns=["series", "x", "y"])


def export_chart(spec: ChartSpec, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    chart_frame(spec).to_csv(path, index=False)
    return path
