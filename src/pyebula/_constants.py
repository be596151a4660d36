"""Internal constants shared across the library."""

SECONDS_PER_DAY = 86_400
SECONDS_PER_HOUR = 3_600

#: Timetable stops closer than this to a station track object are the same place.
STATION_DEDUP_KM = 0.05

#: Anchor time preference: the first non-empty of these entry fields wins.
ANCHOR_TIME_FIELDS: tuple[str, ...] = ("departure_time", "arrival_time")

DEFAULT_AVG_SPEED_KMH = 80.0
DEFAULT_TICK_INTERVAL_S = 1.0
DEFAULT_TICK_STEP_S = 1
DEFAULT_CURRENT_WINDOW_KM = 0.5

# ------------------------------------------------------------------
# Timeline colour keys (kept in sync with the drive view palette)
# ------------------------------------------------------------------

COLOR_STATION = "#1565C0"
COLOR_SPEED_CHANGE = "#E65100"
COLOR_LEVEL_CROSSING = "#C62828"
COLOR_SIGNAL = "#6A1B9A"
COLOR_TUNNEL = "#37474F"
COLOR_GRADIENT = "#2E7D32"
COLOR_SLOW_SPEED_ZONE = "#BF360C"
