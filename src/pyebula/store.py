"""Route store collaborator contract and an in-memory implementation.

The tracking core only reads from a store: one-shot fetches for the
route and trip, and live collections for track objects and timetable
entries.  Persistent backends implement :class:`RouteStore`;
:class:`InMemoryRouteStore` backs tests, demos and embedding apps that
keep everything in memory.
"""

from __future__ import annotations

import logging
from typing import Protocol

from pyebula.models.route import Route, TimetableEntry, TrackObject, Trip
from pyebula.observable import Observable

_logger = logging.getLogger(__name__)

TrackObjectList = tuple[TrackObject, ...]
TimetableList = tuple[TimetableEntry, ...]


class RouteStore(Protocol):
    """Read side of a route store as consumed by the tracking controller."""

    async def fetch_route(self, route_id: int) -> Route | None: ...

    async def fetch_trip(self, trip_id: int) -> Trip | None: ...

    def observe_track_objects(self, route_id: int) -> Observable[TrackObjectList]:
        """Live track objects of a route, ordered by km then ``sort_order``."""
        ...

    def observe_timetable(self, route_id: int) -> Observable[TimetableList]:
        """Live timetable entries of a route, ordered by km."""
        ...


class InMemoryRouteStore:
    """Dict-backed :class:`RouteStore` with editing operations.

    Records with ``id == 0`` get the next free id on save; saving a
    record with a known id replaces it.  Every edit republishes the
    affected route's live collection.
    """

    def __init__(self) -> None:
        self._routes: dict[int, Route] = {}
        self._trips: dict[int, Trip] = {}
        self._track_objects: dict[int, TrackObject] = {}
        self._timetable: dict[int, TimetableEntry] = {}
        self._object_streams: dict[int, Observable[TrackObjectList]] = {}
        self._timetable_streams: dict[int, Observable[TimetableList]] = {}
        self._last_id = 0

    def _next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def _assign_id(self, ident: int) -> int:
        if ident == 0:
            return self._next_id()
        self._last_id = max(self._last_id, ident)
        return ident

    # ------------------------------------------------------------------
    # RouteStore
    # ------------------------------------------------------------------

    async def fetch_route(self, route_id: int) -> Route | None:
        return self._routes.get(route_id)

    async def fetch_trip(self, trip_id: int) -> Trip | None:
        return self._trips.get(trip_id)

    def observe_track_objects(self, route_id: int) -> Observable[TrackObjectList]:
        stream = self._object_streams.get(route_id)
        if stream is None:
            stream = Observable(self._objects_for(route_id), name=f"track_objects[{route_id}]")
            self._object_streams[route_id] = stream
        return stream

    def observe_timetable(self, route_id: int) -> Observable[TimetableList]:
        stream = self._timetable_streams.get(route_id)
        if stream is None:
            stream = Observable(self._entries_for(route_id), name=f"timetable[{route_id}]")
            self._timetable_streams[route_id] = stream
        return stream

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def routes(self) -> list[Route]:
        return sorted(self._routes.values(), key=lambda route: route.name)

    def trips_for_route(self, route_id: int) -> list[Trip]:
        trips = [trip for trip in self._trips.values() if trip.route_id == route_id]
        return sorted(trips, key=lambda trip: trip.name)

    def _objects_for(self, route_id: int) -> TrackObjectList:
        objects = [obj for obj in self._track_objects.values() if obj.route_id == route_id]
        return tuple(sorted(objects, key=lambda obj: (obj.km, obj.sort_order)))

    def _entries_for(self, route_id: int) -> TimetableList:
        entries = [entry for entry in self._timetable.values() if entry.route_id == route_id]
        return tuple(sorted(entries, key=lambda entry: entry.km))

    def _republish(self, route_id: int) -> None:
        objects = self._object_streams.get(route_id)
        if objects is not None:
            objects.publish(self._objects_for(route_id))
        entries = self._timetable_streams.get(route_id)
        if entries is not None:
            entries.publish(self._entries_for(route_id))

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def save_route(self, route: Route) -> Route:
        stored = route.model_copy(update={"id": self._assign_id(route.id)})
        self._routes[stored.id] = stored
        _logger.debug("Saved route id=%s name=%s", stored.id, stored.name)
        return stored

    def delete_route(self, route_id: int) -> None:
        """Delete a route together with its track objects, timetable and trips."""
        self._routes.pop(route_id, None)
        self._track_objects = {k: v for k, v in self._track_objects.items() if v.route_id != route_id}
        self._timetable = {k: v for k, v in self._timetable.items() if v.route_id != route_id}
        self._trips = {k: v for k, v in self._trips.items() if v.route_id != route_id}
        _logger.debug("Deleted route id=%s", route_id)
        self._republish(route_id)

    def save_trip(self, trip: Trip) -> Trip:
        stored = trip.model_copy(update={"id": self._assign_id(trip.id)})
        self._trips[stored.id] = stored
        return stored

    def delete_trip(self, trip_id: int) -> None:
        self._trips.pop(trip_id, None)

    def save_track_object(self, obj: TrackObject) -> TrackObject:
        stored = obj.model_copy(update={"id": self._assign_id(obj.id)})
        previous = self._track_objects.get(stored.id)
        self._track_objects[stored.id] = stored
        if previous is not None and previous.route_id != stored.route_id:
            self._republish(previous.route_id)
        self._republish(stored.route_id)
        return stored

    def delete_track_object(self, object_id: int) -> None:
        removed = self._track_objects.pop(object_id, None)
        if removed is not None:
            self._republish(removed.route_id)

    def save_timetable_entry(self, entry: TimetableEntry) -> TimetableEntry:
        stored = entry.model_copy(update={"id": self._assign_id(entry.id)})
        previous = self._timetable.get(stored.id)
        self._timetable[stored.id] = stored
        if previous is not None and previous.route_id != stored.route_id:
            self._republish(previous.route_id)
        self._republish(stored.route_id)
        return stored

    def delete_timetable_entry(self, entry_id: int) -> None:
        removed = self._timetable.pop(entry_id, None)
        if removed is not None:
            self._republish(removed.route_id)
