from __future__ import annotations

from datetime import datetime

import pandas as pd
import pytest

from bikeflow.traffic.aggregate import compute_station_traffic
from bikeflow.traffic.time_filter import (
    filter_trips_by_time,
    format_time,
    parse_time_filter,
)
from bikeflow.traffic.types import NO_FILTER, Trip
from bikeflow.util.trips import trips_frame


def _trip(start, end, day=1, end_day=None):
    sh, sm = start
    eh, em = end
    return Trip(
        "A",
        "B",
        datetime(2024, 3, day, sh, sm),
        datetime(2024, 3, end_day or day, eh, em),
    )


def test_no_filter_is_identity(example_trips):
    assert filter_trips_by_time(example_trips, NO_FILTER) is example_trips


def test_example_morning_window_keeps_both(stations, example_trips):
    kept = filter_trips_by_time(example_trips, 480)
    assert len(kept) == 2
    assert compute_station_traffic(stations, kept) == compute_station_traffic(stations, example_trips)


def test_example_evening_window_keeps_none(stations, example_trips):
    kept = filter_trips_by_time(example_trips, 1200)
    assert kept.empty
    assert all(s.total_traffic == 0 for s in compute_station_traffic(stations, kept))


@pytest.mark.parametrize("center", [0, 300, 480, 510, 540, 720, 1200, 1439])
def test_filter_is_a_subset(example_trips, center):
    kept = filter_trips_by_time(example_trips, center)
    assert set(kept.index) <= set(example_trips.index)
    for idx in kept.index:
        assert kept.loc[idx].equals(example_trips.loc[idx])


def test_window_is_inclusive_sixty_minutes():
    trips = trips_frame([_trip((9, 0), (9, 30)), _trip((9, 1), (9, 30))])
    kept = filter_trips_by_time(trips, 480)
    assert len(kept) == 1
    assert kept.iloc[0]["started_at"] == pd.Timestamp(2024, 3, 1, 9, 0)


def test_end_time_alone_can_match():
    trips = trips_frame([_trip((6, 0), (7, 30))])
    assert len(filter_trips_by_time(trips, 510)) == 1
    assert filter_trips_by_time(trips, 540).empty


def test_date_is_ignored():
    trips = trips_frame([_trip((8, 0), (8, 10), day=1), _trip((8, 0), (8, 10), day=17)])
    assert len(filter_trips_by_time(trips, 480)) == 2


def test_window_does_not_wrap_past_midnight():
    # 00:10 is 40 minutes after 23:30 on the clock, but the window is a plain
    # absolute difference of minutes since midnight
    trips = trips_frame([_trip((0, 10), (0, 20))])
    assert filter_trips_by_time(trips, 1410).empty
    assert len(filter_trips_by_time(trips, 30)) == 1


def test_order_preserved_and_input_untouched():
    trips = trips_frame([_trip((8, 30), (8, 40)), _trip((20, 0), (20, 5)), _trip((7, 45), (8, 0))])
    before = trips.copy()

    kept = filter_trips_by_time(trips, 480)

    assert list(kept.index) == [0, 2]
    pd.testing.assert_frame_equal(trips, before)


@pytest.mark.parametrize("bad", [-2, 1440, 5000])
def test_out_of_range_center_rejected(example_trips, bad):
    with pytest.raises(ValueError):
        filter_trips_by_time(example_trips, bad)


def test_parse_time_filter():
    assert parse_time_filter(None) == NO_FILTER
    assert parse_time_filter("") == NO_FILTER
    assert parse_time_filter("-1") == NO_FILTER
    assert parse_time_filter("480") == 480
    assert parse_time_filter(" 75 ") == 75
    assert parse_time_filter(1439) == 1439
    with pytest.raises(ValueError):
        parse_time_filter("noon")
    with pytest.raises(ValueError):
        parse_time_filter("1440")


@pytest.mark.parametrize("raw", ["inf", "-inf", "1e400", "nan", "480.9", 480.5])
def test_parse_time_filter_rejects_non_whole_minutes(raw):
    with pytest.raises(ValueError):
        parse_time_filter(raw)


def test_parse_time_filter_accepts_whole_float():
    assert parse_time_filter("480.0") == 480
    assert parse_time_filter(60.0) == 60


def test_format_time():
    assert format_time(0) == "12:00 AM"
    assert format_time(480) == "8:00 AM"
    assert format_time(485) == "8:05 AM"
    assert format_time(725) == "12:05 PM"
    assert format_time(1439) == "11:59 PM"
