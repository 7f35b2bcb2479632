"""Record loading and cleaning utilities."""

from .dates import (
    MONTH_ABBREVIATIONS,
    DatePolicy,
    clean_records,
    format_month,
    month_abbreviation,
    parse_month,
)
from .exceptions import (
    DateParseError,
    MalformedRowError,
    RecordError,
    RecordFormatError,
    SchemaError,
)
from .loader import REQUIRED_COLUMNS, load_records
from .models import (
    ClassifiedRecord,
    CleanedRecord,
    CleanResult,
    LoadResult,
    Record,
    TypeGroup,
)

__all__ = [
    "RecordError",
    "RecordFormatError",
    "SchemaError",
    "MalformedRowError",
    "DateParseError",
    "Record",
    "CleanedRecord",
    "ClassifiedRecord",
    "TypeGroup",
    "LoadResult",
    "CleanResult",
    "REQUIRED_COLUMNS",
    "MONTH_ABBREVIATIONS",
    "DatePolicy",
    "load_records",
    "clean_records",
    "parse_month",
    "format_month",
    "month_abbreviation",
]
