#!/usr/bin/env python3
"""Run a short simulated drive against an in-memory route.

Seeds a small branch line with a timetable and a few track objects,
prints the merged timeline, then lets the clock auto-tick and prints
each published position snapshot.

Usage
-----
::

    python scripts/drive_demo.py
    python scripts/drive_demo.py --start 08:20 --seconds 5 --step 30
    python scripts/drive_demo.py --speed-based --avg-speed 90

Options::

    --start HH:MM        In-world start time (default: 08:10)
    --seconds N          Real seconds to run the auto tick (default: 3)
    --step N             Simulated seconds per tick (default: 60)
    --interval S         Real seconds between ticks (default: 0.5)
    --speed-based        Use average-speed extrapolation instead of the timetable
    --avg-speed KMH      Average speed for --speed-based (default: 80)
    -v, --verbose        Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyebula import (  # noqa: E402
    CalculationMode,
    EbulaConfig,
    InMemoryRouteStore,
    ItemRelation,
    LiveState,
    LiveTrackingController,
    Route,
    TimetableEntry,
    TrackObject,
    TrackObjectKind,
    Trip,
    merge_timeline,
)

# ── sample data ──────────────────────────────────────────────


def _seed(store: InMemoryRouteStore, args: argparse.Namespace) -> tuple[Route, Trip]:
    route = store.save_route(Route(name="Talbahn", description="Demo branch line", start_km=0.0, end_km=42.0))
    mode = CalculationMode.SPEED_BASED if args.speed_based else CalculationMode.TIME_BASED
    trip = store.save_trip(
        Trip(
            route_id=route.id,
            name="RB 4711",
            calculation_mode=mode,
            avg_speed_kmh=args.avg_speed,
            departure_time="08:00",
        )
    )

    for obj in (
        TrackObject(km=0.0, kind=TrackObjectKind.STATION, name="Unterdorf", notes="Gleis 1"),
        TrackObject(km=0.6, kind=TrackObjectKind.SPEED_CHANGE, speed_limit=80),
        TrackObject(km=3.2, kind=TrackObjectKind.LEVEL_CROSSING, name="B 27"),
        TrackObject(km=7.9, kind=TrackObjectKind.GRADIENT, gradient=12.5),
        TrackObject(km=9.4, kind=TrackObjectKind.TUNNEL_START, name="Burgberg"),
        TrackObject(km=10.1, kind=TrackObjectKind.TUNNEL_END),
        TrackObject(km=18.0, kind=TrackObjectKind.SLOW_SPEED_ZONE, speed_limit=30, speed_limit_end=18.8),
        TrackObject(km=23.9, kind=TrackObjectKind.SIGNAL, name="E 3"),
        TrackObject(km=42.0, kind=TrackObjectKind.STATION, name="Oberstadt"),
    ):
        store.save_track_object(obj.model_copy(update={"route_id": route.id}))

    for entry in (
        TimetableEntry(km=0.0, station_name="Unterdorf", departure_time="08:00"),
        TimetableEntry(km=12.4, station_name="Mühlental", arrival_time="08:12", departure_time="08:13"),
        TimetableEntry(km=19.0, station_name="Abzw Steinbruch", departure_time="08:19", is_stop=False),
        TimetableEntry(km=24.3, station_name="Mittelberg", arrival_time="08:24", departure_time="08:26"),
        TimetableEntry(km=42.0, station_name="Oberstadt", arrival_time="08:45"),
    ):
        store.save_timetable_entry(entry.model_copy(update={"route_id": route.id}))
    return route, trip


# ── output ───────────────────────────────────────────────────


def _print_timeline(state: LiveState) -> None:
    markers = {ItemRelation.PASSED: "·", ItemRelation.CURRENT: "◀", ItemRelation.AHEAD: ""}
    tracking = bool(state.current_time_str)
    print("Timeline")
    print("-" * 60)
    for item in merge_timeline(state.track_objects, state.timetable):
        secondary = f"  ({item.secondary_label})" if item.secondary_label else ""
        marker = markers[state.relation_of(item)] if tracking else ""
        print(f"  km {item.km:6.1f}  [{item.symbol or '':>3}]  {item.primary_label}{secondary} {marker}".rstrip())
    print()


def _print_state(state: LiveState) -> None:
    next_name = state.next_stop.station_name if state.next_stop else "-"
    prev_name = state.prev_stop.station_name if state.prev_stop else "-"
    print(
        f"{state.current_time_str or '--:--':>8}  km {state.current_km:6.2f}  "
        f"{state.progress * 100:5.1f}%  ◀ {prev_name}  ▶ {next_name}"
    )


# ── main ─────────────────────────────────────────────────────


async def _run(args: argparse.Namespace) -> int:
    store = InMemoryRouteStore()
    route, trip = _seed(store, args)
    config = EbulaConfig(tick_interval=args.interval, tick_step_seconds=args.step)

    async with LiveTrackingController(store, config) as session:
        await session.load(route.id, trip.id)
        _print_timeline(session.snapshot)

        def on_state(state: LiveState) -> None:
            if state.current_time_str:
                _print_state(state)

        subscription = session.state.subscribe(on_state)
        session.set_time(args.start)
        session.start_auto_tick()
        await asyncio.sleep(args.seconds)
        session.stop_auto_tick()
        subscription.unsubscribe()
        print()
        _print_timeline(session.snapshot)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Run a simulated drive on a demo route")
    parser.add_argument("--start", default="08:10", help="In-world start time")
    parser.add_argument("--seconds", type=float, default=3.0, help="Real seconds to run")
    parser.add_argument("--step", type=int, default=60, help="Simulated seconds per tick")
    parser.add_argument("--interval", type=float, default=0.5, help="Real seconds between ticks")
    parser.add_argument("--speed-based", action="store_true", help="Use average speed extrapolation")
    parser.add_argument("--avg-speed", type=float, default=80.0, help="Average speed in km/h")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
