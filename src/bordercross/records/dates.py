"""Month parsing and the record cleaning stage."""

from __future__ import annotations

import logging
import re
from collections import Counter
from datetime import date
from typing import Iterable, List, Literal

from .exceptions import DateParseError, RecordError
from .models import CleanedRecord, CleanResult, Record


logger = logging.getLogger(__name__)

DatePolicy = Literal["lenient", "strict"]

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

SKIP_DATE_PARSE = "date_parse"

_MONTH_PATTERN = re.compile(r"^([A-Z][a-z]{2}) ([0-9]{4})$")


def parse_month(text: str) -> date:
    """Parse ``"Mon YYYY"`` into the first day of that month."""

    match = _MONTH_PATTERN.match((text or "").strip())
    if match is None or match.group(1) not in MONTH_ABBREVIATIONS:
        raise DateParseError(value=text)
    year = int(match.group(2))
    if year < 1:
        raise DateParseError(value=text)
    return date(year, MONTH_ABBREVIATIONS.index(match.group(1)) + 1, 1)


def format_month(value: date) -> str:
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.year:04d}"


def month_abbreviation(value: date) -> str:
    return MONTH_ABBREVIATIONS[value.month - 1]


def clean_records(
    records: Iterable[Record], policy: DatePolicy = "lenient"
) -> CleanResult:
    """Parse record dates.

    Under the ``lenient`` policy rows with unparseable dates are dropped and
    counted; under ``strict`` the first one raises :class:`DateParseError`.
    """

    if policy not in ("lenient", "strict"):
        raise ValueError(f"unsupported date policy: {policy}")

    cleaned: List[CleanedRecord] = []
    errors: List[RecordError] = []
    skipped: Counter = Counter()
    for record in records:
        try:
            month = parse_month(record.date)
        except DateParseError as exc:
            error = DateParseError(value=record.date, row=record.row_number)
            if policy == "strict":
                raise error from exc
            logger.warning("dropping row: %s", error)
            skipped[SKIP_DATE_PARSE] += 1
            errors.append(error)
            continue
        cleaned.append(
            CleanedRecord(
                row_number=record.row_number,
                port_name=record.port_name,
                state=record.state,
                port_code=record.port_code,
                border=record.border,
                date=month,
                measure=record.measure,
                value=record.value,
                latitude=record.latitude,
                longitude=record.longitude,
                point=record.point,
            )
        )
    return CleanResult(records=tuple(cleaned), skipped=skipped, errors=errors)
