"""Static event annotations for trend charts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Tuple


@dataclass(frozen=True)
class EventMarker:
    when: date
    label: str

    def as_tuple(self) -> Tuple[date, str]:
        return (self.when, self.label)


EVENT_MARKERS: Tuple[EventMarker, ...] = (
    EventMarker(when=date(2001, 9, 11), label="9/11"),
    EventMarker(when=date(2020, 3, 1), label="COVID-19"),
)


def event_markers() -> List[EventMarker]:
    """Return the fixed overlay markers; clipping to a data range is up to the renderer."""

    return list(EVENT_MARKERS)
