"""Time-of-day arithmetic on a 24h clock.

Times are plain ``"HH:mm"`` (optionally ``"HH:mm:ss"``) strings as typed
into the timetable editor.  Nothing here raises on malformed input:
parsing yields ``None`` and advancing returns the input unchanged.
"""

from __future__ import annotations

import re
from datetime import time

from pyebula._constants import SECONDS_PER_DAY

_TIME_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")


def parse_time_of_day(value: str | None) -> time | None:
    """Parse ``"HH:mm"`` or ``"HH:mm:ss"``; ``None`` for blank or malformed input."""
    if value is None:
        return None
    match = _TIME_RE.match(value.strip())
    if match is None:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3)) if match.group(3) is not None else 0
    if hour > 23 or minute > 59 or second > 59:
        return None
    return time(hour, minute, second)


def seconds_of_day(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def seconds_between(start: time, end: time) -> int:
    """Seconds from *start* forward to *end*, crossing midnight if needed.

    The result is always in ``[0, 86400)``.
    """
    diff = seconds_of_day(end) - seconds_of_day(start)
    if diff < 0:
        diff += SECONDS_PER_DAY
    return diff


def format_time_of_day(value: time, *, with_seconds: bool = False) -> str:
    if with_seconds:
        return f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    return f"{value.hour:02d}:{value.minute:02d}"


def advance_by_seconds(time_str: str, seconds: int, *, with_seconds: bool | None = None) -> str:
    """Advance *time_str* by *seconds* (may be negative) modulo one day.

    The output keeps the resolution of the input unless *with_seconds*
    forces it.  A string that does not parse is returned unchanged.
    """
    parsed = parse_time_of_day(time_str)
    if parsed is None:
        return time_str
    if with_seconds is None:
        with_seconds = time_str.strip().count(":") == 2
    total = (seconds_of_day(parsed) + seconds) % SECONDS_PER_DAY
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return format_time_of_day(time(hours, minutes, secs), with_seconds=with_seconds)
