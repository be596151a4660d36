"""Live tracking session: clock, position and next-stop state for one trip."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from pyebula.config import EbulaConfig
from pyebula.engine import compute_km, compute_progress, next_stop, prev_stop
from pyebula.exceptions import EbulaNotFoundError, EbulaSessionDisposedError, EbulaStateError
from pyebula.models.live import LiveState, TrackingPhase
from pyebula.models.route import TimetableEntry, TrackObject
from pyebula.observable import Observable, Subscription
from pyebula.store import RouteStore
from pyebula.timemath import advance_by_seconds

_logger = logging.getLogger(__name__)


class LiveTrackingController:
    """Stateful tracking session for one route and trip.

    The controller publishes immutable :class:`LiveState` snapshots on
    :attr:`state`.  All writes go through :meth:`_update`, so readers
    never see a partially applied change.

    Usage::

        async with LiveTrackingController(store) as session:
            await session.load(route_id, trip_id)
            session.state.subscribe(render)
            session.set_time("08:15")
            session.start_auto_tick()
    """

    def __init__(self, store: RouteStore, config: EbulaConfig | None = None) -> None:
        self._store = store
        self._config = config or EbulaConfig()
        self._state: Observable[LiveState] = Observable(
            LiveState(
                auto_scroll_enabled=self._config.auto_scroll_default,
                current_window_km=self._config.current_window_km,
            ),
            name="live_state",
        )
        self._subscriptions: list[Subscription] = []
        self._loading = False
        self._tick_task: asyncio.Task[None] | None = None
        # Bumped on every start/stop; a tick loop only fires while it holds the current value.
        self._tick_generation = 0

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> LiveTrackingController:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.dispose()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def config(self) -> EbulaConfig:
        return self._config

    @property
    def state(self) -> Observable[LiveState]:
        """Live sequence of state snapshots."""
        return self._state

    @property
    def snapshot(self) -> LiveState:
        """The most recently published snapshot."""
        return self._state.value

    @property
    def phase(self) -> TrackingPhase:
        return self._state.value.phase

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _update(self, **changes: Any) -> LiveState:
        snapshot = self._state.value.model_copy(update=changes)
        self._state.publish(snapshot)
        return snapshot

    def _ensure_not_disposed(self) -> None:
        if self.phase is TrackingPhase.DISPOSED:
            raise EbulaSessionDisposedError("Tracking session has been disposed")

    def _require_loaded(self) -> LiveState:
        self._ensure_not_disposed()
        snapshot = self._state.value
        if snapshot.phase is TrackingPhase.IDLE or snapshot.trip is None:
            raise EbulaStateError("No trip loaded. Call 'await controller.load(route_id, trip_id)' first")
        return snapshot

    def _apply_time(self, time_str: str, km_offset: float) -> LiveState:
        snapshot = self._require_loaded()
        assert snapshot.trip is not None  # noqa: S101

        km = compute_km(time_str, snapshot.trip, snapshot.timetable) + km_offset
        route = snapshot.route
        progress = compute_progress(km, route.start_km, route.end_km) if route is not None else 0.0
        return self._update(
            phase=TrackingPhase.TRACKING,
            current_time_str=time_str,
            current_km=km,
            km_offset=km_offset,
            progress=progress,
            next_stop=next_stop(km, snapshot.timetable),
            prev_stop=prev_stop(km, snapshot.timetable),
        )

    def _on_track_objects(self, objects: Sequence[TrackObject]) -> None:
        if self.phase is TrackingPhase.DISPOSED:
            return
        _logger.debug("Track objects replaced count=%d", len(objects))
        self._update(track_objects=tuple(objects))

    def _on_timetable(self, entries: Sequence[TimetableEntry]) -> None:
        if self.phase is TrackingPhase.DISPOSED:
            return
        _logger.debug("Timetable replaced count=%d", len(entries))
        self._update(timetable=tuple(entries))

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def load(self, route_id: int, trip_id: int) -> LiveState:
        """Fetch route and trip, then follow the route's live collections.

        Raises :class:`EbulaNotFoundError` when the store has no such
        route or trip, and :class:`EbulaStateError` when a session is
        already loaded.
        """
        self._ensure_not_disposed()
        if self._loading:
            raise EbulaStateError("Session is already loading")
        if self.phase is not TrackingPhase.IDLE:
            raise EbulaStateError(f"Session already loaded (phase={self.phase})")

        self._loading = True
        try:
            route, trip = await asyncio.gather(
                self._store.fetch_route(route_id),
                self._store.fetch_trip(trip_id),
            )
        finally:
            self._loading = False
        self._ensure_not_disposed()
        if route is None:
            raise EbulaNotFoundError(f"Route {route_id} not found", kind="route", ident=route_id)
        if trip is None:
            raise EbulaNotFoundError(f"Trip {trip_id} not found", kind="trip", ident=trip_id)
        if trip.route_id and trip.route_id != route.id:
            _logger.warning("Trip %s belongs to route %s, tracking it on route %s", trip.id, trip.route_id, route.id)

        _logger.debug("Session loaded route=%s trip=%s mode=%s", route.id, trip.id, trip.calculation_mode)
        self._update(phase=TrackingPhase.LOADED, route=route, trip=trip)
        self._subscriptions = [
            self._store.observe_track_objects(route_id).subscribe(self._on_track_objects),
            self._store.observe_timetable(route_id).subscribe(self._on_timetable),
        ]
        return self.snapshot

    def set_time(self, time_str: str) -> LiveState:
        """Set the in-world clock and recompute position.

        A malformed *time_str* is stored as given and yields km
        ``0.0 + km_offset``.
        """
        return self._apply_time(time_str, self._state.value.km_offset)

    def adjust_km_offset(self, delta: float) -> LiveState:
        """Add *delta* km to the session correction and recompute."""
        snapshot = self._require_loaded()
        new_offset = snapshot.km_offset + delta
        _logger.debug("Km offset adjusted delta=%.3f offset=%.3f", delta, new_offset)
        return self._apply_time(snapshot.current_time_str, new_offset)

    def reset_km_offset(self) -> LiveState:
        """Clear the session correction and recompute."""
        snapshot = self._require_loaded()
        _logger.debug("Km offset reset from %.3f", snapshot.km_offset)
        return self._apply_time(snapshot.current_time_str, 0.0)

    def toggle_auto_scroll(self) -> LiveState:
        """Flip the auto-scroll presentation hint."""
        self._ensure_not_disposed()
        return self._update(auto_scroll_enabled=not self._state.value.auto_scroll_enabled)

    # ------------------------------------------------------------------
    # Auto tick
    # ------------------------------------------------------------------

    def start_auto_tick(self) -> None:
        """Advance the clock every ``config.tick_interval`` real seconds.

        Restarts cleanly if a tick is already running.  Must be called
        from within a running event loop.
        """
        self._require_loaded()
        loop = asyncio.get_running_loop()
        self._cancel_tick()
        generation = self._tick_generation
        self._update(is_auto_ticking=True)
        self._tick_task = loop.create_task(self._run_ticks(generation), name="pyebula-auto-tick")
        _logger.debug("Auto tick started interval=%.3fs", self._config.tick_interval)

    def stop_auto_tick(self) -> None:
        """Stop the periodic tick.  No tick fires after this returns."""
        self._ensure_not_disposed()
        self._cancel_tick()
        if self._state.value.is_auto_ticking:
            self._update(is_auto_ticking=False)
            _logger.debug("Auto tick stopped at %s", self._state.value.current_time_str)

    def _cancel_tick(self) -> None:
        self._tick_generation += 1
        task = self._tick_task
        self._tick_task = None
        if task is not None and not task.done():
            task.cancel()

    async def _run_ticks(self, generation: int) -> None:
        while True:
            await asyncio.sleep(self._config.tick_interval)
            if generation != self._tick_generation:
                return
            self._tick()

    def _tick(self) -> None:
        current = self._state.value.current_time_str
        if not current:
            return
        advanced = advance_by_seconds(current, self._config.tick_step_seconds, with_seconds=True)
        self.set_time(advanced)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def dispose(self) -> None:
        """Stop ticking and release store subscriptions.  Idempotent."""
        if self.phase is TrackingPhase.DISPOSED:
            return
        self._cancel_tick()
        subscriptions = self._subscriptions
        self._subscriptions = []
        for subscription in subscriptions:
            subscription.unsubscribe()
        self._update(phase=TrackingPhase.DISPOSED, is_auto_ticking=False)
        _logger.debug("Session disposed")
