"""Typer CLI entrypoint for bordercross."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

import typer

from .classify import classify_measure
from .config import AnalysisConfig, load_config
from .engine import build_report, write_report
from .exceptions import BordercrossError, ConfigError
from .presentation import event_markers
from .records import (
    DateParseError,
    RecordError,
    RecordFormatError,
    SchemaError,
    parse_month,
)


EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 2
EXIT_IO_ERROR = 4
EXIT_CONFIG_ERROR = 5


app = typer.Typer(help="U.S. border crossing analysis")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for all commands."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config_or_exit(config_path: Optional[Path]) -> AnalysisConfig:
    try:
        return load_config(config_path)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR) from exc


def _parse_month_option(value: Optional[str], name: str) -> Optional[date]:
    if value is None:
        return None
    try:
        return parse_month(value)
    except DateParseError as exc:
        typer.echo(f"Invalid {name}: {exc}", err=True)
        raise typer.Exit(EXIT_VALIDATION_ERROR) from exc


def _build_or_exit(csv_path: Path, config: AnalysisConfig, **filters):
    try:
        return build_report(csv_path, config, **filters)
    except SchemaError as exc:
        typer.echo(f"Schema error: {exc}", err=True)
        raise typer.Exit(EXIT_VALIDATION_ERROR) from exc
    except DateParseError as exc:
        typer.echo(f"Date error: {exc}", err=True)
        raise typer.Exit(EXIT_VALIDATION_ERROR) from exc
    except RecordFormatError as exc:
        typer.echo(f"Input error: {exc}", err=True)
        raise typer.Exit(EXIT_IO_ERROR) from exc
    except RecordError as exc:
        typer.echo(f"Record error: {exc}", err=True)
        raise typer.Exit(EXIT_VALIDATION_ERROR) from exc
    except BordercrossError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(EXIT_IO_ERROR) from exc


@app.command("report")
def report_command(
    csv_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to analysis.toml (defaults are used when omitted)",
    ),
    out_dir: Path = typer.Option(
        Path("report"),
        "--out",
        "-o",
        file_okay=False,
        dir_okay=True,
        writable=True,
        help="Directory for chart tables, images and summary.json",
    ),
    border: Optional[str] = typer.Option(
        None, "--border", help="Restrict to one border, e.g. 'US-Mexico Border'"
    ),
    since: Optional[str] = typer.Option(None, "--since", help="First month, 'Mon YYYY'"),
    until: Optional[str] = typer.Option(None, "--until", help="Last month, 'Mon YYYY'"),
    no_render: bool = typer.Option(
        False, "--no-render", help="Write chart tables only, skip images"
    ),
) -> None:
    """Build all charts for a border crossing CSV export."""

    config = _load_config_or_exit(config_path)
    start = _parse_month_option(since, "--since")
    end = _parse_month_option(until, "--until")
    result = _build_or_exit(csv_path, config, border=border, start=start, end=end)

    try:
        written = write_report(
            result, out_dir, config, render=False if no_render else None
        )
    except OSError as exc:
        typer.echo(f"Failed to write report to {out_dir}: {exc}", err=True)
        raise typer.Exit(EXIT_IO_ERROR) from exc

    payload = result.as_dict()
    payload["written"] = written
    typer.echo(json.dumps(payload, indent=2))


@app.command("summary")
def summary_command(
    csv_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to analysis.toml (defaults are used when omitted)",
    ),
) -> None:
    """Print row counts and skipped rows without writing outputs."""

    config = _load_config_or_exit(config_path)
    result = _build_or_exit(csv_path, config)
    typer.echo(json.dumps(result.summary.as_dict(), indent=2))


@app.command("classify")
def classify_command(
    measures: List[str] = typer.Argument(..., help="Measure labels to classify"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to analysis.toml (defaults are used when omitted)",
    ),
) -> None:
    """Show the type group each measure label falls into."""

    config = _load_config_or_exit(config_path)
    rules = config.classification.to_rules()
    payload = {measure: classify_measure(measure, rules).value for measure in measures}
    typer.echo(json.dumps(payload, indent=2))


@app.command("markers")
def markers_command() -> None:
    """List the event markers overlaid on trend charts."""

    payload = [
        {"date": marker.when.isoformat(), "label": marker.label}
        for marker in event_markers()
    ]
    typer.echo(json.dumps(payload, indent=2))
