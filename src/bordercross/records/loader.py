"""Load border crossing CSV exports into records."""

from __future__ import annotations

import csv
import logging
from collections import Counter
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .exceptions import MalformedRowError, RecordError, RecordFormatError, SchemaError
from .models import LoadResult, Record


logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [
    "Port Name",
    "State",
    "Port Code",
    "Border",
    "Date",
    "Measure",
    "Value",
    "Latitude",
    "Longitude",
    "Point",
]

SKIP_MALFORMED = "malformed_row"


def load_records(path: Path) -> LoadResult:
    """Load records from *path*, skipping and counting malformed rows."""

    path = Path(path)
    if not path.is_file():
        raise RecordFormatError(path=path, message="CSV file not found")

    records: List[Record] = []
    errors: List[RecordError] = []
    skipped: Counter = Counter()
    rows_read = 0
    try:
        with path.open("r", newline="", encoding="utf-8-sig") as fh:
            reader = csv.DictReader(fh)
            if reader.fieldnames is None:
                raise RecordFormatError(path=path, message="missing header row")
            _validate_required_columns(path, reader.fieldnames)
            for index, raw in enumerate(reader, start=2):  # row numbers include header
                rows_read += 1
                try:
                    records.append(_build_record(path, index, raw))
                except MalformedRowError as exc:
                    logger.warning("skipping row: %s", exc)
                    skipped[SKIP_MALFORMED] += 1
                    errors.append(exc)
    except (UnicodeDecodeError, csv.Error) as exc:
        raise RecordFormatError(path=path, message=f"cannot decode CSV: {exc}") from exc

    logger.info(
        "loaded %d of %d rows from %s", len(records), rows_read, path.name
    )
    return LoadResult(
        records=tuple(records), rows_read=rows_read, skipped=skipped, errors=errors
    )


def _validate_required_columns(path: Path, columns: Iterable[str]) -> None:
    present = {column.strip() for column in columns}
    missing = [column for column in REQUIRED_COLUMNS if column not in present]
    if missing:
        raise SchemaError(path=path, missing=missing)


def _build_record(path: Path, row_number: int, raw: Dict[str, str]) -> Record:
    # overflow cells land under a None key
    cells = {
        key.strip(): (value or "").strip() for key, value in raw.items() if key is not None
    }

    return Record(
        row_number=row_number,
        port_name=cells.get("Port Name", ""),
        state=cells.get("State", ""),
        port_code=cells.get("Port Code", ""),
        border=cells.get("Border", ""),
        date=cells.get("Date", ""),
        measure=cells.get("Measure", ""),
        value=_parse_value(path, row_number, cells.get("Value", "")),
        latitude=_parse_coordinate(path, row_number, "Latitude", cells.get("Latitude", "")),
        longitude=_parse_coordinate(path, row_number, "Longitude", cells.get("Longitude", "")),
        point=cells.get("Point", ""),
    )


def _parse_value(path: Path, row: int, value: str) -> Optional[int]:
    if value == "":
        return None
    try:
        number = Decimal(value.replace(",", ""))
    except InvalidOperation as exc:
        raise MalformedRowError(
            path=path, row=row, column="Value", message=f"invalid integer '{value}'"
        ) from exc
    if not number.is_finite() or number != number.to_integral_value():
        raise MalformedRowError(
            path=path, row=row, column="Value", message=f"invalid integer '{value}'"
        )
    if number < 0:
        raise MalformedRowError(
            path=path, row=row, column="Value", message=f"negative count '{value}'"
        )
    return int(number)


def _parse_coordinate(path: Path, row: int, column: str, value: str) -> Optional[float]:
    if value == "":
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise MalformedRowError(
            path=path, row=row, column=column, message=f"invalid coordinate '{value}'"
        ) from exc
