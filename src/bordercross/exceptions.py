"""Custom exception hierarchy for bordercross."""

from __future__ import annotations

from pathlib import Path


class BordercrossError(Exception):
    """Base error for the bordercross package."""


class ConfigError(BordercrossError):
    """Raised when a configuration file fails validation."""

    def __init__(self, path: Path, message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"{self.path.name}: {self.message}")


class EmptyResultError(BordercrossError):
    """Raised when a strict aggregation receives no rows."""

    def __init__(self, keys: tuple[str, ...]):
        self.keys = keys
        super().__init__(f"no rows to aggregate by ({', '.join(keys)})")
