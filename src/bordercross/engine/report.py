"""Run the full analysis pipeline and write its outputs."""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..aggregate import (
    AggregateRow,
    by_border,
    by_border_measure,
    by_type_group,
    seasonal_by_border,
    select_records,
    to_frame,
)
from ..classify import classify_records, commercial_personal_view
from ..config import AnalysisConfig
from ..presentation import (
    ChartSpec,
    border_measure_chart,
    border_trend_chart,
    export_chart,
    render_chart,
    seasonal_chart,
    type_group_chart,
)
from ..records import clean_records, load_records


logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Row counts for one pipeline run, including rows skipped per cause."""

    rows_read: int = 0
    rows_loaded: int = 0
    rows_cleaned: int = 0
    rows_filtered: int = 0
    rows_classified: int = 0
    rows_other: int = 0
    skipped: Counter = field(default_factory=Counter)
    empty_charts: List[str] = field(default_factory=list)

    @property
    def rows_skipped(self) -> int:
        return sum(self.skipped.values())

    def as_dict(self) -> dict:
        return {
            "rows_read": self.rows_read,
            "rows_loaded": self.rows_loaded,
            "rows_cleaned": self.rows_cleaned,
            "rows_filtered": self.rows_filtered,
            "rows_classified": self.rows_classified,
            "rows_other": self.rows_other,
            "rows_skipped": self.rows_skipped,
            "skipped": dict(sorted(self.skipped.items())),
            "empty_charts": list(self.empty_charts),
        }


@dataclass
class AggregateTable:
    """Aggregate rows behind one chart and the name of their value column."""

    name: str
    rows: List[AggregateRow]
    value_name: str = "total"

    def to_frame(self) -> pd.DataFrame:
        return to_frame(self.rows, value_name=self.value_name)


@dataclass
class ReportResult:
    source: Path
    summary: RunSummary
    charts: List[ChartSpec] = field(default_factory=list)
    aggregates: List[AggregateTable] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)

    def aggregate(self, name: str) -> AggregateTable:
        for table in self.aggregates:
            if table.name == name:
                return table
        raise KeyError(name)

    def chart(self, name: str) -> ChartSpec:
        for spec in self.charts:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def as_dict(self) -> dict:
        return {
            "source": str(self.source),
            "summary": self.summary.as_dict(),
            "charts": [
                {
                    "name": spec.name,
                    "title": spec.title,
                    "series": len(spec.series),
                    "points": sum(len(series.x) for series in spec.series),
                }
                for spec in self.charts
            ],
            "issues": list(self.issues),
        }


def build_report(
    csv_path: Path,
    config: Optional[AnalysisConfig] = None,
    *,
    border: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> ReportResult:
    """Load, clean, classify and aggregate *csv_path* into chart specifications."""

    config = config or AnalysisConfig()
    csv_path = Path(csv_path)

    loaded = load_records(csv_path)
    cleaned = clean_records(loaded.records, policy=config.date_policy)
    records = select_records(cleaned.records, border=border, start=start, end=end)
    classified = classify_records(records, config.classification.to_rules())
    view = commercial_personal_view(classified)

    summary = RunSummary(
        rows_read=loaded.rows_read,
        rows_loaded=len(loaded.records),
        rows_cleaned=len(cleaned.records),
        rows_filtered=len(cleaned.records) - len(records),
        rows_classified=len(view),
        rows_other=len(classified) - len(view),
        skipped=loaded.skipped + cleaned.skipped,
    )
    logger.info(
        "pipeline: %d read, %d loaded, %d cleaned, %d classified",
        summary.rows_read,
        summary.rows_loaded,
        summary.rows_cleaned,
        summary.rows_classified,
    )

    aggregates = [
        AggregateTable("by_border_measure", by_border_measure(records)),
        AggregateTable("by_border", by_border(records)),
        AggregateTable("by_type_group", by_type_group(view)),
        AggregateTable("seasonal_by_border", seasonal_by_border(records), "avg_crossings"),
    ]
    charts = [
        border_measure_chart(aggregates[0].rows),
        border_trend_chart(aggregates[1].rows),
        type_group_chart(aggregates[2].rows),
        seasonal_chart(aggregates[3].rows),
    ]
    summary.empty_charts = [spec.name for spec in charts if spec.is_empty]
    for name in summary.empty_charts:
        logger.warning("chart %s has no data", name)

    issues = [str(error) for error in [*loaded.errors, *cleaned.errors]]
    return ReportResult(
        source=csv_path,
        summary=summary,
        charts=charts,
        aggregates=aggregates,
        issues=issues,
    )


def write_report(
    result: ReportResult,
    out_dir: Path,
    config: Optional[AnalysisConfig] = None,
    *,
    render: Optional[bool] = None,
) -> Dict[str, List[str]]:
    """Write aggregate and chart tables, optional images and ``summary.json`` under *out_dir*."""

    config = config or AnalysisConfig()
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    if render is None:
        render = config.charts.render

    written: Dict[str, List[str]] = {"tables": [], "images": [], "aggregates": []}
    aggregates_dir = out_dir / "aggregates"
    aggregates_dir.mkdir(exist_ok=True)
    for table in result.aggregates:
        path = aggregates_dir / f"{table.name}.csv"
        table.to_frame().to_csv(path, index=False)
        written["aggregates"].append(str(path))

    for spec in result.charts:
        table = export_chart(spec, out_dir / f"{spec.name}.csv")
        written["tables"].append(str(table))
        if render:
            image = render_chart(
                spec,
                out_dir / f"{spec.name}.png",
                figsize=(config.charts.figure_width, config.charts.figure_height),
                dpi=config.charts.dpi,
            )
            written["images"].append(str(image))

    summary_path = out_dir / "summary.json"
    summary_path.write_text(
        json.dumps(result.as_dict(), indent=2) + "\n", encoding="utf-8"
    )
    written["summary"] = [str(summary_path)]
    return written
