"""Data models for border crossing records."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple

from .exceptions import RecordError


class TypeGroup(str, Enum):
    COMMERCIAL = "Commercial"
    PERSONAL = "Personal"
    OTHER = "Other"


@dataclass(frozen=True)
class Record:
    row_number: int
    port_name: str
    state: str
    port_code: str
    border: str
    date: str
    measure: str
    value: Optional[int]
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    point: str = ""


@dataclass(frozen=True)
class CleanedRecord:
    """Record whose month text has been parsed to the first day of that month."""

    row_number: int
    port_name: str
    state: str
    port_code: str
    border: str
    date: date
    measure: str
    value: Optional[int]
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    point: str = ""


@dataclass(frozen=True)
class ClassifiedRecord(CleanedRecord):
    type_group: TypeGroup = TypeGroup.OTHER


@dataclass
class LoadResult:
    records: Tuple[Record, ...]
    rows_read: int
    skipped: Counter = field(default_factory=Counter)
    errors: List[RecordError] = field(default_factory=list)


@dataclass
class CleanResult:
    records: Tuple[CleanedRecord, ...]
    skipped: Counter = field(default_factory=Counter)
    errors: List[RecordError] = field(default_factory=list)
