# bikeflow/traffic/time_filter.py
from __future__ import annotations

import pandas as pd

from bikeflow.traffic.types import MINUTES_PER_DAY, NO_FILTER

WINDOW_MINUTES = 60


def check_time_filter(time_filter) -> int:
    if isinstance(time_filter, float) and not time_filter.is_integer():
        raise ValueError(f"time filter must be a whole number of minutes, got {time_filter!r}")
    t = int(time_filter)
    if t == NO_FILTER:
        return t
    if not 0 <= t < MINUTES_PER_DAY:
        raise ValueError(
            f"time filter must be {NO_FILTER} (any time) or 0..{MINUTES_PER_DAY - 1}, got {t}"
        )
    return t


def parse_time_filter(raw) -> int:
    """
    Slider values arrive as strings ("-1", "480", "480.0") or None.
    Fractional, infinite and NaN values are rejected.
    """
    if raw is None:
        return NO_FILTER
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return NO_FILTER
        try:
            raw = float(raw)
        except ValueError as e:
            raise ValueError(f"time filter is not a number: {raw!r}") from e
    return check_time_filter(raw)


def minutes_since_midnight(times: pd.Series) -> pd.Series:
    return times.dt.hour * 60 + times.dt.minute


def filter_trips_by_time(trips: pd.DataFrame, time_filter: int) -> pd.DataFrame:
    """
    Keep trips that start or end within WINDOW_MINUTES (inclusive) of the
    time-of-day `time_filter`, whatever the date.

    The window does not wrap at midnight: a centre of 23:30 does not pick up
    trips at 00:10.
    """
    t = check_time_filter(time_filter)
    if t == NO_FILTER:
        return trips

    started = minutes_since_midnight(trips["started_at"])
    ended = minutes_since_midnight(trips["ended_at"])

    keep = ((started - t).abs() <= WINDOW_MINUTES) | ((ended - t).abs() <= WINDOW_MINUTES)
    return trips.loc[keep].copy()


def format_time(minutes: int) -> str:
    """
    480 -> "8:00 AM", 0 -> "12:00 AM", 1439 -> "11:59 PM"
    """
    minutes = int(minutes) % MINUTES_PER_DAY
    hour, minute = divmod(minutes, 60)
    suffix = "AM" if hour < 12 else "PM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {suffix}"
