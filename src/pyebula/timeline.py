"""Merge track objects and timetable stops into one display timeline.

:func:`merge_timeline` is a pure function: the same inputs always give
the same ordered output.  Ordering is by km, then by
:class:`TimelineCategory` rank, then track objects ahead of timetable
stops, then by ``sort_order``; remaining ties keep input order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import assert_never

from pyebula._constants import (
    COLOR_GRADIENT,
    COLOR_LEVEL_CROSSING,
    COLOR_SIGNAL,
    COLOR_SLOW_SPEED_ZONE,
    COLOR_SPEED_CHANGE,
    COLOR_STATION,
    COLOR_TUNNEL,
    STATION_DEDUP_KM,
)
from pyebula.models.route import TimetableEntry, TrackObject, TrackObjectKind
from pyebula.models.timeline import TimelineCategory, TimelineItem


def _limit_text(speed_limit: int | None) -> str:
    return str(speed_limit) if speed_limit is not None else "??"


def track_object_item(obj: TrackObject) -> TimelineItem:
    """Map a track object to its timeline row."""
    match obj.kind:
        case TrackObjectKind.STATION:
            return TimelineItem(
                km=obj.km,
                category=TimelineCategory.STATION,
                primary_label=obj.name or "Station",
                secondary_label=obj.notes or None,
                symbol="Bf",
                color_key=COLOR_STATION,
                sort_order=obj.sort_order,
            )
        case TrackObjectKind.SPEED_CHANGE:
            return TimelineItem(
                km=obj.km,
                category=TimelineCategory.SPEED_CHANGE,
                primary_label=f"V {_limit_text(obj.speed_limit)} km/h",
                symbol=_limit_text(obj.speed_limit),
                color_key=COLOR_SPEED_CHANGE,
                sort_order=obj.sort_order,
            )
        case TrackObjectKind.LEVEL_CROSSING:
            return TimelineItem(
                km=obj.km,
                category=TimelineCategory.LEVEL_CROSSING,
                primary_label=f"LC {obj.name}".rstrip(),
                symbol="LC",
                color_key=COLOR_LEVEL_CROSSING,
                sort_order=obj.sort_order,
            )
        case TrackObjectKind.SIGNAL:
            return TimelineItem(
                km=obj.km,
                category=TimelineCategory.SIGNAL,
                primary_label=f"Signal {obj.name}".rstrip(),
                symbol="Sig",
                color_key=COLOR_SIGNAL,
                sort_order=obj.sort_order,
            )
        case TrackObjectKind.TUNNEL_START:
            return TimelineItem(
                km=obj.km,
                category=TimelineCategory.TUNNEL_START,
                primary_label=f"▶ Tunnel {obj.name}".rstrip(),
                symbol="Tu",
                color_key=COLOR_TUNNEL,
                sort_order=obj.sort_order,
            )
        case TrackObjectKind.TUNNEL_END:
            return TimelineItem(
                km=obj.km,
                category=TimelineCategory.TUNNEL_END,
                primary_label="Tunnel end ◀",
                symbol="Tu",
                color_key=COLOR_TUNNEL,
                sort_order=obj.sort_order,
            )
        case TrackObjectKind.GRADIENT:
            gradient = obj.gradient if obj.gradient is not None else 0.0
            arrow = "↗" if gradient >= 0 else "↘"
            return TimelineItem(
                km=obj.km,
                category=TimelineCategory.GRADIENT,
                primary_label=f"{gradient:.1f}‰ {arrow}",
                symbol="‰",
                color_key=COLOR_GRADIENT,
                sort_order=obj.sort_order,
            )
        case TrackObjectKind.SLOW_SPEED_ZONE:
            until = f"until km {obj.speed_limit_end:.1f}" if obj.speed_limit_end is not None else None
            return TimelineItem(
                km=obj.km,
                category=TimelineCategory.SLOW_SPEED_ZONE,
                primary_label=f"La {_limit_text(obj.speed_limit)} km/h",
                secondary_label=until,
                symbol="La",
                color_key=COLOR_SLOW_SPEED_ZONE,
                sort_order=obj.sort_order,
            )
    assert_never(obj.kind)


def stop_times_label(entry: TimetableEntry) -> str:
    """Compose ``"arr: HH:mm  dep: HH:mm"``, omitting empty sides."""
    parts: list[str] = []
    if entry.arrival_time:
        parts.append(f"arr: {entry.arrival_time}")
    if entry.departure_time:
        parts.append(f"dep: {entry.departure_time}")
    return "  ".join(parts).rstrip()


def timetable_stop_item(entry: TimetableEntry) -> TimelineItem:
    """Map a timetable stop to a station row."""
    return TimelineItem(
        km=entry.km,
        category=TimelineCategory.STATION,
        primary_label=entry.station_name,
        secondary_label=stop_times_label(entry) or None,
        symbol="Bf",
        color_key=COLOR_STATION,
        from_timetable=True,
    )


def _covered_by_station(entry: TimetableEntry, station_kms: Sequence[float]) -> bool:
    return any(abs(km - entry.km) < STATION_DEDUP_KM for km in station_kms)


def merge_timeline(
    track_objects: Iterable[TrackObject],
    timetable: Iterable[TimetableEntry],
) -> list[TimelineItem]:
    """Merge track objects and timetable stops into one ordered timeline.

    Timetable pass-throughs are dropped, as are stops lying within
    ``STATION_DEDUP_KM`` of a station track object.
    """
    objects = list(track_objects)
    station_kms = [obj.km for obj in objects if obj.kind is TrackObjectKind.STATION]

    items = [track_object_item(obj) for obj in objects]
    items.extend(
        timetable_stop_item(entry)
        for entry in timetable
        if entry.is_stop and not _covered_by_station(entry, station_kms)
    )
    return sorted(items, key=lambda item: (item.km, item.category, item.from_timetable, item.sort_order))


def scroll_index(items: Sequence[TimelineItem], current_km: float) -> int | None:
    """Index of the last item at or behind *current_km*, or ``None``."""
    for index in range(len(items) - 1, -1, -1):
        if items[index].km <= current_km:
            return index
    return None
