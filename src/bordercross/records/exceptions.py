"""Record loading and cleaning errors."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..exceptions import BordercrossError


class RecordError(BordercrossError):
    """Base class for record-related issues."""


@dataclass
class RecordFormatError(RecordError):
    path: Path
    message: str

    def __post_init__(self) -> None:
        super().__init__(f"{self.message} ({self.path})")


@dataclass
class SchemaError(RecordError):
    """Raised when the CSV header lacks required columns."""

    path: Path
    missing: List[str]

    def __post_init__(self) -> None:
        super().__init__(
            f"{self.path.name}: missing required columns: {', '.join(self.missing)}"
        )


@dataclass
class MalformedRowError(RecordError):
    """Raised for a row that cannot be loaded; callers skip and count it."""

    path: Path
    row: int
    column: str
    message: str

    def __post_init__(self) -> None:
        location = f"{self.path.name}:row {self.row},col {self.column}"
        super().__init__(f"{location}: {self.message}")


@dataclass
class DateParseError(RecordError):
    value: str
    row: Optional[int] = None

    def __post_init__(self) -> None:
        prefix = f"row {self.row}: " if self.row is not None else ""
        super().__init__(f"{prefix}invalid month '{self.value}' (expected 'Mon YYYY')")
