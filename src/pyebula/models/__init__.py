"""Data models for routes, timetables, timelines and live state."""

from pyebula.models._base import EbulaBaseModel
from pyebula.models.live import LiveState, TrackingPhase
from pyebula.models.route import (
    CalculationMode,
    Route,
    TimetableEntry,
    TrackObject,
    TrackObjectKind,
    Trip,
)
from pyebula.models.timeline import ItemRelation, TimelineCategory, TimelineItem

__all__ = [
    "CalculationMode",
    "EbulaBaseModel",
    "ItemRelation",
    "LiveState",
    "Route",
    "TimelineCategory",
    "TimelineItem",
    "TimetableEntry",
    "TrackObject",
    "TrackObjectKind",
    "TrackingPhase",
    "Trip",
]
