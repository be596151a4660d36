"""Live tracking state snapshot."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict

from pyebula._constants import DEFAULT_CURRENT_WINDOW_KM
from pyebula.models.route import Route, TimetableEntry, TrackObject, Trip
from pyebula.models.timeline import ItemRelation, TimelineItem


class TrackingPhase(enum.StrEnum):
    """Lifecycle phase of a :class:`~pyebula.tracking.LiveTrackingController`."""

    IDLE = "idle"
    LOADED = "loaded"
    TRACKING = "tracking"
    DISPOSED = "disposed"


class LiveState(BaseModel):
    """Immutable snapshot published by the tracking controller.

    Parameters
    ----------
    current_km : float
        Engine km (already including ``trip.start_km_offset``) plus
        the session ``km_offset``.
    current_time_str : str
        The in-world clock as last set, stored verbatim even when it
        does not parse.
    progress : float
        Fraction of the route covered, clamped to ``[0, 1]``.
    km_offset : float
        Cumulative manual correction for this session.
    current_window_km : float
        Half-width of the band around ``current_km`` in which a
        timeline item counts as current.
    """

    model_config = ConfigDict(frozen=True)

    phase: TrackingPhase = TrackingPhase.IDLE
    route: Route | None = None
    trip: Trip | None = None
    track_objects: tuple[TrackObject, ...] = ()
    timetable: tuple[TimetableEntry, ...] = ()
    current_km: float = 0.0
    current_time_str: str = ""
    progress: float = 0.0
    next_stop: TimetableEntry | None = None
    prev_stop: TimetableEntry | None = None
    is_auto_ticking: bool = False
    auto_scroll_enabled: bool = True
    km_offset: float = 0.0
    current_window_km: float = DEFAULT_CURRENT_WINDOW_KM

    @property
    def total_km_offset(self) -> float:
        """Trip start offset plus the session correction."""
        trip_offset = self.trip.start_km_offset if self.trip is not None else 0.0
        return trip_offset + self.km_offset

    def relation_of(self, item: TimelineItem) -> ItemRelation:
        """Classify *item* against the current position and window."""
        return item.relation_to(self.current_km, self.current_window_km)
