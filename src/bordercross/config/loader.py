"""Functions for reading and validating the analysis configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from pydantic import ValidationError

from ..exceptions import ConfigError
from .models import AnalysisConfig


CONFIG_FILENAME = "analysis.toml"


def load_config(path: Optional[Path] = None) -> AnalysisConfig:
    """Load the analysis configuration from *path*, or defaults when omitted."""

    if path is None:
        return AnalysisConfig()

    path = Path(path)
    if path.is_dir():
        path = path / CONFIG_FILENAME
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError as exc:
        raise ConfigError(path, "file not found") from exc
    except (tomllib.TOMLDecodeError, OSError) as exc:
        raise ConfigError(path, f"failed to read TOML: {exc}") from exc

    try:
        return AnalysisConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(path, _format_validation_errors(exc)) from exc


def _format_validation_errors(error: ValidationError) -> str:
    """Flatten pydantic errors to ``charts.dpi: message; ...``."""

    return "; ".join(
        _describe(err.get("loc", ()), err.get("msg", "invalid value"))
        for err in error.errors(include_context=False)
    )


def _describe(loc: tuple[Any, ...], message: str) -> str:
    path = ""
    for entry in loc:
        if isinstance(entry, int):
            path += f"[{entry}]"
        else:
            path += f".{entry}" if path else str(entry)
    return f"{path}: {message}" if path else message
