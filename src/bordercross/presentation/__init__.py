"""Chart specifications, event markers and rendering."""

from .markers import EVENT_MARKERS, EventMarker, event_markers
from .render import render_chart
from .series import (
    ChartSeries,
    ChartSpec,
    border_measure_chart,
    border_trend_chart,
    chart_frame,
    export_chart,
    seasonal_chart,
    type_group_chart,
)

__all__ = [
    "EVENT_MARKERS",
    "EventMarker",
    "event_markers",
    "ChartSeries",
    "ChartSpec",
    "border_measure_chart",
    "border_trend_chart",
    "type_group_chart",
    "seasonal_chart",
    "chart_frame",
    "export_chart",
    "render_chart",
]
