"""Timeline item model produced by :mod:`pyebula.timeline`."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict

from pyebula._constants import DEFAULT_CURRENT_WINDOW_KM


class TimelineCategory(enum.IntEnum):
    """Timeline category; the integer value is the tie-break rank at equal km.

    Timetable stops share :attr:`STATION` with station track objects.
    """

    STATION = 0
    SPEED_CHANGE = 1
    LEVEL_CROSSING = 2
    SIGNAL = 3
    TUNNEL_START = 4
    TUNNEL_END = 5
    GRADIENT = 6
    SLOW_SPEED_ZONE = 7


class ItemRelation(enum.StrEnum):
    """Where a timeline item lies relative to the train."""

    PASSED = "passed"
    CURRENT = "current"
    AHEAD = "ahead"


class TimelineItem(BaseModel):
    """One renderable row of the merged timeline."""

    model_config = ConfigDict(frozen=True)

    km: float
    category: TimelineCategory
    primary_label: str
    secondary_label: str | None = None
    symbol: str | None = None
    color_key: str
    sort_order: int = 0
    from_timetable: bool = False

    def relation_to(self, current_km: float, window_km: float = DEFAULT_CURRENT_WINDOW_KM) -> ItemRelation:
        """Classify this item as passed, current or ahead of *current_km*."""
        if current_km - window_km <= self.km <= current_km + window_km:
            return ItemRelation.CURRENT
        if self.km < current_km:
            return ItemRelation.PASSED
        return ItemRelation.AHEAD
