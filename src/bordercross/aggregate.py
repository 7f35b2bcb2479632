"""Group-by aggregation over cleaned or classified records."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Literal, Optional, Sequence, Tuple, Union

import pandas as pd

from .exceptions import EmptyResultError
from .records.dates import MONTH_ABBREVIATIONS, month_abbreviation
from .records.models import ClassifiedRecord, CleanedRecord, TypeGroup


logger = logging.getLogger(__name__)

Reducer = Literal["sum", "mean"]
KeyValue = Union[str, int, date, TypeGroup]


@dataclass(frozen=True)
class KeyField:
    extract: Callable[[CleanedRecord], Any]
    sort_key: Callable[[Any], Any] = lambda value: value


def _type_group(record: CleanedRecord) -> TypeGroup:
    if not isinstance(record, ClassifiedRecord):
        raise TypeError("type_group requires classified records")
    return record.type_group


KEY_FIELDS: Dict[str, KeyField] = {
    "date": KeyField(lambda record: record.date),
    "border": KeyField(lambda record: record.border),
    "measure": KeyField(lambda record: record.measure),
    "type_group": KeyField(_type_group, lambda group: group.value),
    "month": KeyField(
        lambda record: month_abbreviation(record.date),
        MONTH_ABBREVIATIONS.index,
    ),
    "year": KeyField(lambda record: record.date.year),
    "port_name": KeyField(lambda record: record.port_name),
    "port_code": KeyField(lambda record: record.port_code),
    "state": KeyField(lambda record: record.state),
}


@dataclass(frozen=True)
class AggregateRow:
    key: Tuple[Tuple[str, KeyValue], ...]
    value: float

    def get(self, field: str) -> KeyValue:
        for name, value in self.key:
            if name == field:
                return value
        raise KeyError(field)

    def as_dict(self, value_name: str = "total") -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.key)
        data[value_name] = self.value
        return data


def aggregate(
    records: Iterable[CleanedRecord],
    keys: Sequence[str],
    reducer: Reducer = "sum",
    *,
    strict: bool = False,
) -> List[AggregateRow]:
    """Group *records* by *keys* and reduce their values.

    ``sum`` treats missing values as zero. ``mean`` averages the non-missing
    values of each group; a group with only missing values reduces to ``0.0``.
    Rows are returned sorted by key (months in calendar order) so the output
    does not depend on input order.
    """

    keys = tuple(keys)
    if not keys:
        raise ValueError("at least one grouping key is required")
    unknown = [name for name in keys if name not in KEY_FIELDS]
    if unknown:
        raise ValueError(f"unknown grouping keys: {', '.join(unknown)}")
    if reducer not in ("sum", "mean"):
        raise ValueError(f"unsupported reducer: {reducer}")

    fields = [KEY_FIELDS[name] for name in keys]
    buckets: Dict[Tuple[Any, ...], List[Optional[int]]] = defaultdict(list)
    for record in records:
        bucket = tuple(field.extract(record) for field in fields)
        buckets[bucket].append(record.value)

    if not buckets:
        if strict:
            raise EmptyResultError(keys)
        logger.info("no rows to aggregate by %s", ", ".join(keys))
        return []

    def order(bucket: Tuple[Any, ...]) -> Tuple[Any, ...]:
        return tuple(field.sort_key(value) for field, value in zip(fields, bucket))

    rows = [
        AggregateRow(key=tuple(zip(keys, bucket)), value=_reduce(buckets[bucket], reducer))
        for bucket in sorted(buckets, key=order)
    ]
    logger.debug("aggregated %d groups by %s", len(rows), ", ".join(keys))
    return rows


def _reduce(values: List[Optional[int]], reducer: Reducer) -> float:
    present = [value for value in values if value is not None]
    if reducer == "sum":
        return sum(present)
    if not present:
        return 0.0
    return sum(present) / len(present)


def by_border_measure(records: Iterable[CleanedRecord]) -> List[AggregateRow]:
    return aggregate(records, ("date", "border", "measure"))


def by_border(records: Iterable[CleanedRecord]) -> List[AggregateRow]:
    return aggregate(records, ("date", "border"))


def by_type_group(records: Iterable[ClassifiedRecord]) -> List[AggregateRow]:
    return aggregate(records, ("date", "type_group"))


def seasonal_by_border(records: Iterable[CleanedRecord]) -> List[AggregateRow]:
    """Average monthly crossings per border across all years."""

    return aggregate(records, ("month", "border"), reducer="mean")


def select_records(
    records: Iterable[CleanedRecord],
    *,
    border: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Tuple[CleanedRecord, ...]:
    """Narrow records to one border and an inclusive month window."""

    selected = []
    for record in records:
        if border is not None and record.border != border:
            continue
        if start is not None and record.date < start:
            continue
        if end is not None and record.date > end:
            continue
        selected.append(record)
    return tuple(selected)


def to_frame(rows: Sequence[AggregateRow], value_name: str = "total") -> pd.DataFrame:
    """Flatten aggregate rows into a table, one column per key plus *value_name*."""

    if not rows:
        return pd.DataFrame(columns=[value_name])
    records = []
    for row in rows:
        data = row.as_dict(value_name)
        records.append(
            {
                name: value.value if isinstance(value, TypeGroup) else value
                for name, value in data.items()
            }
        )
    return pd.DataFrame(records)
