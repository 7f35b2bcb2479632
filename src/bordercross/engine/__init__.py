"""Report orchestration."""

from .report import ReportResult, RunSummary, build_report, write_report

__all__ = [
    "build_report",
    "write_report",
    "ReportResult",
    "RunSummary",
]
