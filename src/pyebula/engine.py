"""Position engine: in-world clock time to distance along the route.

Two modes are supported, selected by :attr:`Trip.calculation_mode`:

* ``TIME_BASED`` interpolates linearly between timetable anchors.
* ``SPEED_BASED`` extrapolates from the trip's departure time at its
  average speed.

The engine never raises.  Undefined inputs degrade to ``0.0`` km or
``None`` stops; clamping for display is left to :func:`compute_progress`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import time
from itertools import pairwise

from pyebula._constants import ANCHOR_TIME_FIELDS, SECONDS_PER_HOUR
from pyebula.models.route import CalculationMode, TimetableEntry, Trip
from pyebula.timemath import parse_time_of_day, seconds_between


@dataclass(frozen=True)
class Anchor:
    """A ``(km, time)`` control point derived from one timetable entry."""

    km: float
    time: time


def _anchor_time(entry: TimetableEntry) -> time | None:
    for field_name in ANCHOR_TIME_FIELDS:
        value: str = getattr(entry, field_name)
        if value.strip():
            return parse_time_of_day(value)
    return None


def build_anchors(timetable: Iterable[TimetableEntry]) -> list[Anchor]:
    """Build km-sorted anchors, preferring departure over arrival time.

    Entries without a usable time produce no anchor.  Anchors are not
    re-sorted by time: the timetable is trusted to be consistent.
    """
    anchors: list[Anchor] = []
    for entry in timetable:
        anchor_time = _anchor_time(entry)
        if anchor_time is None:
            continue
        anchors.append(Anchor(km=entry.km, time=anchor_time))
    return sorted(anchors, key=lambda anchor: anchor.km)


def _time_based_km(current: time, timetable: Iterable[TimetableEntry]) -> float | None:
    anchors = build_anchors(timetable)
    if not anchors:
        return None

    first, last = anchors[0], anchors[-1]
    if current <= first.time:
        return first.km
    if current >= last.time:
        return last.km

    for a, b in pairwise(anchors):
        if a.time <= current <= b.time:
            total = max(1, seconds_between(a.time, b.time))
            fraction = seconds_between(a.time, current) / total
            return a.km + (b.km - a.km) * fraction
    return last.km


def _speed_based_km(current: time, trip: Trip) -> float | None:
    departure = parse_time_of_day(trip.departure_time)
    if departure is None:
        return None
    elapsed_hours = seconds_between(departure, current) / SECONDS_PER_HOUR
    return elapsed_hours * trip.avg_speed_kmh


def compute_km(time_str: str, trip: Trip, timetable: Sequence[TimetableEntry]) -> float:
    """Return the km for *time_str*, including ``trip.start_km_offset``.

    Returns ``0.0`` when the time does not parse, when a time-based trip
    has no anchors, or when a speed-based trip has no departure time.
    Speed-based results are unbounded and may run past the route end.
    """
    current = parse_time_of_day(time_str)
    if current is None:
        return 0.0

    if trip.calculation_mode is CalculationMode.SPEED_BASED:
        km = _speed_based_km(current, trip)
    else:
        km = _time_based_km(current, timetable)

    if km is None:
        return 0.0
    return km + trip.start_km_offset


def compute_progress(km: float, start_km: float, end_km: float) -> float:
    """Fraction of the route covered at *km*, clamped to ``[0, 1]``."""
    if end_km <= start_km:
        return 0.0
    return min(1.0, max(0.0, (km - start_km) / (end_km - start_km)))


def _by_km(timetable: Iterable[TimetableEntry]) -> list[TimetableEntry]:
    return sorted(timetable, key=lambda entry: entry.km)


def next_stop(km: float, timetable: Iterable[TimetableEntry]) -> TimetableEntry | None:
    """First scheduled stop strictly ahead of *km*."""
    for entry in _by_km(timetable):
        if entry.km > km and entry.is_stop:
            return entry
    return None


def prev_stop(km: float, timetable: Iterable[TimetableEntry]) -> TimetableEntry | None:
    """Last scheduled stop at or behind *km*."""
    found: TimetableEntry | None = None
    for entry in _by_km(timetable):
        if entry.km > km:
            break
        if entry.is_stop:
            found = entry
    return found
