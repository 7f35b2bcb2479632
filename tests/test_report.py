"""Tests for the end-to-end report pipeline."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from bordercross.config import AnalysisConfig
from bordercross.engine import build_report, write_report
from bordercross.records import DateParseError


HEADER = "Port Name,State,Port Code,Border,Date,Measure,Value,Latitude,Longitude,Point\n"
ROWS = [
    "Nogales,Arizona,2604,US-Mexico Border,Jan 2020,Trucks,100,31.33,-110.94,POINT (-110.94 31.33)",
    "Nogales,Arizona,2604,US-Mexico Border,Jan 2020,Pedestrians,50,31.33,-110.94,POINT (-110.94 31.33)",
    "Buffalo Niagara Falls,New York,901,US-Canada Border,Jan 2020,Ferry Passengers,5,43.09,-79.05,POINT (-79.05 43.09)",
    "Buffalo Niagara Falls,New York,901,US-Canada Border,Feb 2020,Personal Vehicles,,43.09,-79.05,POINT (-79.05 43.09)",
    "Buffalo Niagara Falls,New York,901,US-Canada Border,Feb 2020,Trucks,abc,43.09,-79.05,POINT (-79.05 43.09)",
    "Buffalo Niagara Falls,New York,901,US-Canada Border,2020-02,Buses,10,43.09,-79.05,POINT (-79.05 43.09)",
]


def _write_csv(tmp_path: Path) -> Path:
    path = tmp_path / "Border_Crossing_Entry_Data.csv"
    path.write_text(HEADER + "\n".join(ROWS) + "\n", encoding="utf-8")
    return path


def test_build_report_summary_counts(tmp_path: Path) -> None:
    result = build_report(_write_csv(tmp_path))
    summary = result.summary

    assert summary.rows_read == 6
    assert summary.rows_loaded == 5
    assert summary.rows_cleaned == 4
    assert summary.rows_classified == 3
    assert summary.rows_other == 1
    assert summary.as_dict()["skipped"] == {"date_parse": 1, "malformed_row": 1}
    assert summary.rows_skipped == 2
    assert summary.empty_charts == []
    assert len(result.issues) == 2


def test_build_report_chart_series(tmp_path: Path) -> None:
    result = build_report(_write_csv(tmp_path))

    trend = result.chart("border_trend")
    assert trend.get_series("US-Mexico Border").y == (150,)
    assert trend.get_series("US-Canada Border").x == (date(2020, 1, 1), date(2020, 2, 1))
    assert trend.get_series("US-Canada Border").y == (5, 0)

    groups = result.chart("commercial_vs_personal")
    assert [series.name for series in groups.series] == ["Commercial", "Personal"]
    assert groups.get_series("Personal").y == (50, 0)

    seasonal = result.chart("seasonal_by_border")
    assert seasonal.get_series("US-Canada Border").x == ("Jan", "Feb")


def test_build_report_with_filters(tmp_path: Path) -> None:
    result = build_report(
        _write_csv(tmp_path), border="US-Canada Border", start=date(2020, 2, 1)
    )
    assert [series.name for series in result.chart("border_trend").series] == [
        "US-Canada Border"
    ]
    assert result.chart("commercial_vs_personal").get_series("Personal").y == (0,)


def test_build_report_empty_selection_is_not_fatal(tmp_path: Path) -> None:
    result = build_report(_write_csv(tmp_path), start=date(2030, 1, 1))
    assert sorted(result.summary.empty_charts) == [
        "border_measure_trend",
        "border_trend",
        "commercial_vs_personal",
        "seasonal_by_border",
    ]


def test_build_report_strict_dates(tmp_path: Path) -> None:
    config = AnalysisConfig(date_policy="strict")
    with pytest.raises(DateParseError):
        build_report(_write_csv(tmp_path), config)


def test_write_report_tables_only(tmp_path: Path) -> None:
    result = build_report(_write_csv(tmp_path))
    written = write_report(result, tmp_path / "out", render=False)

    assert written["images"] == []
    assert len(written["tables"]) == 4
    assert (tmp_path / "out" / "border_trend.csv").is_file()
    payload = json.loads((tmp_path / "out" / "summary.json").read_text(encoding="utf-8"))
    assert payload["summary"]["rows_loaded"] == 5
    assert {chart["name"] for chart in payload["charts"]} == {
        "border_measure_trend",
        "border_trend",
        "commercial_vs_personal",
        "seasonal_by_border",
    }


def test_write_report_renders_images(tmp_path: Path) -> None:
    result = build_report(_write_csv(tmp_path), start=date(2030, 1, 1))
    config = AnalysisConfig.model_validate({"charts": {"figure_width": 4, "figure_height": 3, "dpi": 40}})
    written = write_report(result, tmp_path / "out", config)

    assert len(written["images"]) == 4
    assert all(Path(image).is_file() for image in written["images"])


def test_write_report_exports_aggregate_tables(tmp_path: Path) -> None:
    result = build_report(_write_csv(tmp_path))
    written = write_report(result, tmp_path / "out", render=False)

    assert len(written["aggregates"]) == 4
    seasonal = pd.read_csv(tmp_path / "out" / "aggregates" / "seasonal_by_border.csv")
    assert list(seasonal.columns) == ["month", "border", "avg_crossings"]
    mexico_jan = seasonal[(seasonal["month"] == "Jan") & (seasonal["border"] == "US-Mexico Border")]
    assert mexico_jan["avg_crossings"].tolist() == [75.0]

    by_border = pd.read_csv(tmp_path / "out" / "aggregates" / "by_border.csv")
    assert list(by_border.columns) == ["date", "border", "total"]
    assert result.aggregate("seasonal_by_border").value_name == "avg_crossings"


def test_build_report_counts_filtered_rows(tmp_path: Path) -> None:
    result = build_report(_write_csv(tmp_path), border="US-Canada Border")
    summary = result.summary

    assert summary.rows_cleaned == 4
    assert summary.rows_filtered == 2
    assert summary.rows_cleaned == (
        summary.rows_filtered + summary.rows_classified + summary.rows_other
    )
    assert summary.as_dict()["rows_filtered"] == 2
    assert summary.rows_skipped == 2
