from __future__ import annotations

from datetime import time

import pytest

from pyebula.timemath import advance_by_seconds, format_time_of_day, parse_time_of_day, seconds_between


class TestParseTimeOfDay:
    def test_hours_minutes(self) -> None:
        assert parse_time_of_day("08:15") == time(8, 15)

    def test_with_seconds(self) -> None:
        assert parse_time_of_day("23:59:30") == time(23, 59, 30)

    def test_surrounding_whitespace_ignored(self) -> None:
        assert parse_time_of_day(" 07:05 ") == time(7, 5)

    @pytest.mark.parametrize("value", ["", "   ", None, "8:15", "24:00", "12:60", "ab:cd", "12:00:61", "12-00"])
    def test_rejects_blank_and_malformed(self, value: str | None) -> None:
        assert parse_time_of_day(value) is None


def test_seconds_between_same_day() -> None:
    assert seconds_between(time(8, 0), time(8, 30)) == 1800


def test_seconds_between_wraps_midnight() -> None:
    assert seconds_between(time(23, 50), time(0, 10)) == 1200


def test_seconds_between_equal_times_is_zero() -> None:
    assert seconds_between(time(12, 0), time(12, 0)) == 0


def test_advance_wraps_to_midnight() -> None:
    assert advance_by_seconds("23:59", 60) == "00:00"


def test_advance_keeps_minute_resolution() -> None:
    assert advance_by_seconds("08:00", 90) == "08:01"
    assert advance_by_seconds("08:00", 1) == "08:00"


def test_advance_keeps_second_resolution() -> None:
    assert advance_by_seconds("08:00:59", 1) == "08:01:00"


def test_advance_can_force_seconds() -> None:
    assert advance_by_seconds("08:00", 1, with_seconds=True) == "08:00:01"


def test_advance_negative_seconds() -> None:
    assert advance_by_seconds("00:00", -60) == "23:59"


def test_advance_malformed_is_unchanged() -> None:
    assert advance_by_seconds("soon", 60) == "soon"
    assert advance_by_seconds("", 60) == ""


def test_format_time_of_day() -> None:
    assert format_time_of_day(time(6, 3, 9)) == "06:03"
    assert format_time_of_day(time(6, 3, 9), with_seconds=True) == "06:03:09"
