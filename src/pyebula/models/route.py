"""Route, trip, track-object and timetable records."""

from __future__ import annotations

from enum import StrEnum

from pydantic import AliasChoices, Field

from pyebula._constants import DEFAULT_AVG_SPEED_KMH
from pyebula.models._base import EbulaBaseModel


class CalculationMode(StrEnum):
    """How a trip's position is derived from the in-world clock."""

    TIME_BASED = "TIME_BASED"
    """Interpolate between timetable anchors."""
    SPEED_BASED = "SPEED_BASED"
    """Extrapolate from departure time and average speed."""


# Older exports used the German kind names.
_LEGACY_KIND_NAMES: dict[str, str] = {
    "BAHNUEBERGANG": "LEVEL_CROSSING",
    "SLOW_SPEED": "SLOW_SPEED_ZONE",
}


class TrackObjectKind(StrEnum):
    """Kinds of track features, in timeline rank order."""

    STATION = "STATION"
    SPEED_CHANGE = "SPEED_CHANGE"
    LEVEL_CROSSING = "LEVEL_CROSSING"
    SIGNAL = "SIGNAL"
    TUNNEL_START = "TUNNEL_START"
    TUNNEL_END = "TUNNEL_END"
    GRADIENT = "GRADIENT"
    SLOW_SPEED_ZONE = "SLOW_SPEED_ZONE"

    @classmethod
    def _missing_(cls, value: object) -> TrackObjectKind | None:
        if isinstance(value, str):
            normalized = value.strip().upper()
            normalized = _LEGACY_KIND_NAMES.get(normalized, normalized)
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @property
    def label(self) -> str:
        """Human readable kind name."""
        return _KIND_LABELS[self]


_KIND_LABELS: dict[TrackObjectKind, str] = {
    TrackObjectKind.STATION: "Station / halt",
    TrackObjectKind.SPEED_CHANGE: "Speed change",
    TrackObjectKind.LEVEL_CROSSING: "Level crossing",
    TrackObjectKind.SIGNAL: "Signal",
    TrackObjectKind.TUNNEL_START: "Tunnel start",
    TrackObjectKind.TUNNEL_END: "Tunnel end",
    TrackObjectKind.GRADIENT: "Gradient",
    TrackObjectKind.SLOW_SPEED_ZONE: "Slow speed zone",
}


class Route(EbulaBaseModel):
    """A rail route between two kilometre posts.

    Parameters
    ----------
    id : int
        Store identity.
    name : str
        Display name.
    start_km, end_km : float
        Kilometre posts at both ends. ``end_km`` is nominally larger.
    """

    id: int = 0
    name: str = ""
    description: str = ""
    start_km: float = 0.0
    end_km: float = 100.0


class TrackObject(EbulaBaseModel):
    """A feature at a fixed kilometre: station, signal, speed change, ...

    ``speed_limit_end`` is only meaningful for slow speed zones, and
    ``gradient`` is signed per mille (positive climbs).  ``sort_order``
    orders objects sharing the same ``km``.
    """

    id: int = 0
    route_id: int = 0
    km: float
    kind: TrackObjectKind = Field(validation_alias=AliasChoices("kind", "type"))
    name: str = ""
    speed_limit: int | None = None
    speed_limit_end: float | None = None
    gradient: float | None = None
    notes: str = ""
    sort_order: int = 0


class TimetableEntry(EbulaBaseModel):
    """A scheduled point of a timetable.

    Either time may be empty: the first station usually has no arrival,
    the last one no departure.  ``is_stop=False`` marks a pass-through.
    """

    id: int = 0
    route_id: int = 0
    km: float
    station_name: str = ""
    arrival_time: str = ""
    departure_time: str = ""
    track_number: str = ""
    dwell_time_seconds: int = 0
    is_stop: bool = True


class Trip(EbulaBaseModel):
    """A drive over a route with its position calculation settings."""

    id: int = 0
    route_id: int = 0
    name: str = ""
    calculation_mode: CalculationMode = CalculationMode.TIME_BASED
    avg_speed_kmh: float = DEFAULT_AVG_SPEED_KMH
    departure_time: str = Field(
        default="",
        validation_alias=AliasChoices("departure_time", "departureTime", "departureTimeStr"),
    )
    start_km_offset: float = 0.0
