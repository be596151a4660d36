"""pyebula - Position and timeline engine for simulated train drives."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyebula")
except PackageNotFoundError:
    __version__ = "0+local"
from pyebula.config import EbulaConfig
from pyebula.engine import Anchor, build_anchors, compute_km, compute_progress, next_stop, prev_stop
from pyebula.exceptions import (
    EbulaConfigError,
    EbulaError,
    EbulaNotFoundError,
    EbulaSessionDisposedError,
    EbulaStateError,
)
from pyebula.models import (
    CalculationMode,
    ItemRelation,
    LiveState,
    Route,
    TimelineCategory,
    TimelineItem,
    TimetableEntry,
    TrackingPhase,
    TrackObject,
    TrackObjectKind,
    Trip,
)
from pyebula.observable import Observable, Subscription
from pyebula.store import InMemoryRouteStore, RouteStore
from pyebula.timeline import merge_timeline, scroll_index
from pyebula.timemath import advance_by_seconds, parse_time_of_day, seconds_between
from pyebula.tracking import LiveTrackingController

__all__ = [
    "__version__",
    "Anchor",
    "CalculationMode",
    "EbulaConfig",
    "EbulaConfigError",
    "EbulaError",
    "EbulaNotFoundError",
    "EbulaSessionDisposedError",
    "EbulaStateError",
    "InMemoryRouteStore",
    "ItemRelation",
    "LiveState",
    "LiveTrackingController",
    "Observable",
    "Route",
    "RouteStore",
    "Subscription",
    "TimelineCategory",
    "TimelineItem",
    "TimetableEntry",
    "TrackObject",
    "TrackObjectKind",
    "TrackingPhase",
    "Trip",
    "advance_by_seconds",
    "build_anchors",
    "compute_km",
    "compute_progress",
    "merge_timeline",
    "next_stop",
    "parse_time_of_day",
    "prev_stop",
    "scroll_index",
    "seconds_between",
]
