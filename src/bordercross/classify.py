"""Coarse crossing-type classification of measure labels."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Sequence, Tuple

from .records.models import ClassifiedRecord, CleanedRecord, TypeGroup


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationRule:
    keywords: FrozenSet[str]
    group: TypeGroup

    def matches(self, measure: str) -> bool:
        lowered = measure.lower()
        return any(keyword.lower() in lowered for keyword in self.keywords)


# Evaluated top to bottom; the first matching rule wins.
DEFAULT_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        keywords=frozenset({"Truck", "Bus", "Train", "Rail"}),
        group=TypeGroup.COMMERCIAL,
    ),
    ClassificationRule(
        keywords=frozenset({"Pedestrian", "Vehicle", "Personal", "Bicycl"}),
        group=TypeGroup.PERSONAL,
    ),
)


def classify_measure(
    measure: str, rules: Sequence[ClassificationRule] = DEFAULT_RULES
) -> TypeGroup:
    for rule in rules:
        if rule.matches(measure or ""):
            return rule.group
    return TypeGroup.OTHER


def classify_records(
    records: Iterable[CleanedRecord],
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
) -> Tuple[ClassifiedRecord, ...]:
    """Attach a :class:`TypeGroup` to every cleaned record."""

    cache: dict[str, TypeGroup] = {}
    classified = []
    for record in records:
        group = cache.get(record.measure)
        if group is None:
            group = classify_measure(record.measure, rules)
            cache[record.measure] = group
        classified.append(
            ClassifiedRecord(
                row_number=record.row_number,
                port_name=record.port_name,
                state=record.state,
                port_code=record.port_code,
                border=record.border,
                date=record.date,
                measure=record.measure,
                value=record.value,
                latitude=record.latitude,
                longitude=record.longitude,
                point=record.point,
                type_group=group,
            )
        )
    for measure, group in sorted(cache.items()):
        logger.debug("measure %r classified as %s", measure, group.value)
    return tuple(classified)


def commercial_personal_view(
    records: Iterable[ClassifiedRecord],
) -> Tuple[ClassifiedRecord, ...]:
    """Drop rows classified as Other."""

    return tuple(record for record in records if record.type_group is not TypeGroup.OTHER)
