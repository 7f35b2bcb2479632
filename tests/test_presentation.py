"""Tests for chart specifications, markers and rendering."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd

from bordercross.aggregate import by_border, by_border_measure, seasonal_by_border
from bordercross.presentation import (
    ChartSpec,
    border_measure_chart,
    border_trend_chart,
    chart_frame,
    event_markers,
    export_chart,
    render_chart,
    seasonal_chart,
)
from bordercross.records import CleanedRecord


def _cleaned(when: date, border: str, measure: str, value: int) -> CleanedRecord:
    return CleanedRecord(
        row_number=2,
        port_name="Detroit",
        state="Michigan",
        port_code="3801",
        border=border,
        date=when,
        measure=measure,
        value=value,
    )


RECORDS = [
    _cleaned(date(2019, 12, 1), "US-Canada Border", "Trucks", 10),
    _cleaned(date(2020, 1, 1), "US-Canada Border", "Trucks", 20),
    _cleaned(date(2020, 1, 1), "US-Canada Border", "Pedestrians", 5),
    _cleaned(date(2020, 1, 1), "US-Mexico Border", "Trucks", 30),
    _cleaned(date(2020, 6, 1), "US-Mexico Border", "Trucks", 40),
]


def test_event_markers_are_fixed() -> None:
    markers = [marker.as_tuple() for marker in event_markers()]
    assert markers == [(date(2001, 9, 11), "9/11"), (date(2020, 3, 1), "COVID-19")]


def test_border_trend_chart_exposes_series() -> None:
    spec = border_trend_chart(by_border(RECORDS))

    assert spec.kind == "line"
    assert [series.name for series in spec.series] == ["US-Canada Border", "US-Mexico Border"]
    canada = spec.get_series("US-Canada Border")
    assert canada.x == (date(2019, 12, 1), date(2020, 1, 1))
    assert canada.y == (10, 25)
    assert len(spec.markers) == 2


def test_markers_returned_outside_data_range() -> None:
    spec = border_trend_chart(by_border(RECORDS[:1]))
    assert [marker.label for marker in spec.markers] == ["9/11", "COVID-19"]


def test_border_measure_chart_series_names() -> None:
    spec = border_measure_chart(by_border_measure(RECORDS))
    assert [series.name for series in spec.series] == [
        "US-Canada Border: Pedestrians",
        "US-Canada Border: Trucks",
        "US-Mexico Border: Trucks",
    ]


def test_seasonal_chart_is_bar() -> None:
    spec = seasonal_chart(seasonal_by_border(RECORDS))
    assert spec.kind == "bar"
    assert spec.get_series("US-Mexico Border").x == ("Jan", "Jun")


def test_chart_frame_and_export(tmp_path: Path) -> None:
    spec = border_trend_chart(by_border(RECORDS))
    frame = chart_frame(spec)

    assert list(frame.columns) == ["series", "x", "y"]
    assert len(frame) == 4
    path = export_chart(spec, tmp_path / "out" / "border_trend.csv")
    exported = pd.read_csv(path)
    assert exported["y"].tolist() == [10, 25, 30, 40]


def test_empty_chart_frame_has_columns() -> None:
    spec = border_trend_chart([])
    assert spec.is_empty
    assert list(chart_frame(spec).columns) == ["series", "x", "y"]


def test_render_line_chart(tmp_path: Path) -> None:
    spec = border_trend_chart(by_border(RECORDS))
    path = render_chart(spec, tmp_path / "trend.png", figsize=(6, 4), dpi=50)
    assert path.is_file()
    assert path.stat().st_size > 0


def test_render_bar_chart(tmp_path: Path) -> None:
    spec = seasonal_chart(seasonal_by_border(RECORDS))
    path = render_chart(spec, tmp_path / "seasonal.png", figsize=(6, 4), dpi=50)
    assert path.is_file()


def test_render_empty_chart_shows_placeholder(tmp_path: Path) -> None:
    spec = ChartSpec(
        name="empty",
        title="Nothing",
        kind="line",
        x_label="Date",
        y_label="Crossings",
    )
    path = render_chart(spec, tmp_path / "empty.png", figsize=(4, 3), dpi=50)
    assert path.is_file()
