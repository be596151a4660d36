from __future__ import annotations

from pyebula.models.route import TimetableEntry, TrackObject, TrackObjectKind
from pyebula.models.timeline import ItemRelation, TimelineCategory
from pyebula.timeline import merge_timeline, scroll_index, stop_times_label, track_object_item


def _objects() -> list[TrackObject]:
    return [
        TrackObject(km=0.0, kind=TrackObjectKind.STATION, name="Aberg"),
        TrackObject(km=2.4, kind=TrackObjectKind.SPEED_CHANGE, speed_limit=120),
        TrackObject(km=5.0, kind=TrackObjectKind.SIGNAL, name="A 12"),
        TrackObject(km=5.0, kind=TrackObjectKind.LEVEL_CROSSING, name="Feldweg"),
        TrackObject(km=7.5, kind=TrackObjectKind.SLOW_SPEED_ZONE, speed_limit=40, speed_limit_end=8.3),
        TrackObject(km=10.0, kind=TrackObjectKind.STATION, name="Bedorf"),
    ]


def _timetable() -> list[TimetableEntry]:
    return [
        TimetableEntry(km=0.0, station_name="Aberg", departure_time="08:00"),
        TimetableEntry(km=6.0, station_name="Haltepunkt Mitte", arrival_time="08:05", departure_time="08:06"),
        TimetableEntry(km=8.0, station_name="Durchfahrt", departure_time="08:07", is_stop=False),
        TimetableEntry(km=10.02, station_name="Bedorf", arrival_time="08:10"),
    ]


class TestTrackObjectItems:
    def test_station_uses_name_and_notes(self) -> None:
        item = track_object_item(TrackObject(km=1.0, kind=TrackObjectKind.STATION, name="Aberg", notes="Gleis 2"))
        assert item.primary_label == "Aberg"
        assert item.secondary_label == "Gleis 2"
        assert item.symbol == "Bf"
        assert item.category is TimelineCategory.STATION

    def test_station_without_name(self) -> None:
        item = track_object_item(TrackObject(km=1.0, kind=TrackObjectKind.STATION))
        assert item.primary_label == "Station"
        assert item.secondary_label is None

    def test_speed_change_without_limit(self) -> None:
        item = track_object_item(TrackObject(km=1.0, kind=TrackObjectKind.SPEED_CHANGE))
        assert item.primary_label == "V ?? km/h"
        assert item.symbol == "??"

    def test_slow_speed_zone_until_label(self) -> None:
        item = track_object_item(
            TrackObject(km=7.5, kind=TrackObjectKind.SLOW_SPEED_ZONE, speed_limit=40, speed_limit_end=8.3)
        )
        assert item.primary_label == "La 40 km/h"
        assert item.secondary_label == "until km 8.3"

    def test_slow_speed_zone_without_end(self) -> None:
        item = track_object_item(TrackObject(km=7.5, kind=TrackObjectKind.SLOW_SPEED_ZONE, speed_limit=40))
        assert item.secondary_label is None

    def test_gradient_direction(self) -> None:
        up = track_object_item(TrackObject(km=1.0, kind=TrackObjectKind.GRADIENT, gradient=12.5))
        down = track_object_item(TrackObject(km=1.0, kind=TrackObjectKind.GRADIENT, gradient=-4.0))
        assert up.primary_label == "12.5‰ ↗"
        assert down.primary_label == "-4.0‰ ↘"

    def test_tunnel_labels(self) -> None:
        start = track_object_item(TrackObject(km=1.0, kind=TrackObjectKind.TUNNEL_START, name="Kaiser"))
        end = track_object_item(TrackObject(km=2.0, kind=TrackObjectKind.TUNNEL_END))
        assert start.primary_label == "▶ Tunnel Kaiser"
        assert end.primary_label == "Tunnel end ◀"
        assert start.color_key == end.color_key

    def test_unnamed_labels_are_stripped(self) -> None:
        item = track_object_item(TrackObject(km=1.0, kind=TrackObjectKind.SIGNAL))
        assert item.primary_label == "Signal"

    def test_every_kind_is_mapped(self) -> None:
        for kind in TrackObjectKind:
            item = track_object_item(TrackObject(km=1.0, kind=kind))
            assert item.category.name == kind.name


class TestStopTimesLabel:
    def test_both_sides(self) -> None:
        entry = TimetableEntry(km=1.0, station_name="X", arrival_time="08:05", departure_time="08:06")
        assert stop_times_label(entry) == "arr: 08:05  dep: 08:06"

    def test_arrival_only(self) -> None:
        assert stop_times_label(TimetableEntry(km=1.0, station_name="X", arrival_time="08:05")) == "arr: 08:05"

    def test_departure_only(self) -> None:
        assert stop_times_label(TimetableEntry(km=1.0, station_name="X", departure_time="08:06")) == "dep: 08:06"


class TestMergeTimeline:
    def test_ordered_by_km_then_category(self) -> None:
        items = merge_timeline(_objects(), _timetable())
        kms = [item.km for item in items]
        assert kms == sorted(kms)
        at_five = [item.category for item in items if item.km == 5.0]
        assert at_five == [TimelineCategory.LEVEL_CROSSING, TimelineCategory.SIGNAL]

    def test_pass_through_entries_are_dropped(self) -> None:
        items = merge_timeline(_objects(), _timetable())
        assert all(item.primary_label != "Durchfahrt" for item in items)

    def test_stop_near_station_is_deduplicated(self) -> None:
        items = merge_timeline(
            [TrackObject(km=10.0, kind=TrackObjectKind.STATION, name="Bedorf")],
            [TimetableEntry(km=10.02, station_name="Bedorf", arrival_time="08:10")],
        )
        assert len(items) == 1
        assert items[0].km == 10.0
        assert not items[0].from_timetable

    def test_stop_outside_threshold_is_kept(self) -> None:
        items = merge_timeline(
            [TrackObject(km=10.0, kind=TrackObjectKind.STATION, name="Bedorf")],
            [TimetableEntry(km=10.1, station_name="Bedorf Süd", arrival_time="08:11")],
        )
        assert [item.primary_label for item in items] == ["Bedorf", "Bedorf Süd"]

    def test_only_stations_suppress_stops(self) -> None:
        items = merge_timeline(
            [TrackObject(km=6.0, kind=TrackObjectKind.SIGNAL, name="B 3")],
            [TimetableEntry(km=6.0, station_name="Mitte", departure_time="08:06")],
        )
        assert [item.category for item in items] == [TimelineCategory.STATION, TimelineCategory.SIGNAL]

    def test_timetable_stop_item(self) -> None:
        items = merge_timeline(_objects(), _timetable())
        stop = next(item for item in items if item.primary_label == "Haltepunkt Mitte")
        assert stop.from_timetable
        assert stop.secondary_label == "arr: 08:05  dep: 08:06"
        assert stop.category is TimelineCategory.STATION

    def test_sort_order_breaks_ties(self) -> None:
        items = merge_timeline(
            [
                TrackObject(km=3.0, kind=TrackObjectKind.SIGNAL, name="second", sort_order=2),
                TrackObject(km=3.0, kind=TrackObjectKind.SIGNAL, name="first", sort_order=1),
            ],
            [],
        )
        assert [item.primary_label for item in items] == ["Signal first", "Signal second"]

    def test_stop_never_precedes_station_at_same_km(self) -> None:
        items = merge_timeline(
            [
                TrackObject(km=4.0, kind=TrackObjectKind.STATION, name="Cedorf", sort_order=3),
                TrackObject(km=4.0, kind=TrackObjectKind.SIGNAL, name="C 1"),
            ],
            [
                TimetableEntry(km=4.0, station_name="Cedorf", departure_time="08:04"),
                TimetableEntry(km=4.0, station_name="Cedorf Bus", departure_time="08:04"),
            ],
        )
        assert [(item.primary_label, item.from_timetable) for item in items] == [
            ("Cedorf", False),
            ("Signal C 1", False),
        ]

    def test_is_deterministic(self) -> None:
        first = merge_timeline(_objects(), _timetable())
        second = merge_timeline(_objects(), _timetable())
        assert first == second

    def test_empty_inputs(self) -> None:
        assert merge_timeline([], []) == []


def test_scroll_index() -> None:
    items = merge_timeline(_objects(), _timetable())
    index = scroll_index(items, 5.5)
    assert index is not None
    assert items[index].km == 5.0
    assert items[index + 1].km > 5.5
    assert scroll_index(items, -1.0) is None


def test_item_relation() -> None:
    item = track_object_item(TrackObject(km=10.0, kind=TrackObjectKind.SIGNAL))
    assert item.relation_to(12.0) is ItemRelation.PASSED
    assert item.relation_to(10.3) is ItemRelation.CURRENT
    assert item.relation_to(9.5) is ItemRelation.CURRENT
    assert item.relation_to(8.0) is ItemRelation.AHEAD
    assert item.relation_to(10.3, window_km=0.1) is ItemRelation.PASSED
