# bikeflow/traffic/aggregate.py
from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Sequence

import pandas as pd

from bikeflow.traffic.types import Station


def count_by_station(trips: pd.DataFrame, column: str) -> Dict[str, int]:
    """
    Number of trips per station id in `column` (start_station_id or end_station_id).
    """
    if trips.empty:
        return {}
    counts = trips.groupby(column, sort=False).size()
    return {str(sid): int(n) for sid, n in counts.items()}


def compute_station_traffic(
    stations: Sequence[Station],
    trips: pd.DataFrame,
) -> List[Station]:
    """
    Departures are counted on start_station_id, arrivals on end_station_id,
    so a round trip (start == end) counts once in each.

    Stations without trips get zeros. The result is a new list in the same
    order as `stations`; neither input is modified.
    """
    departures = count_by_station(trips, "start_station_id")
    arrivals = count_by_station(trips, "end_station_id")

    return [
        replace(
            s,
            arrivals=arrivals.get(s.short_name, 0),
            departures=departures.get(s.short_name, 0),
        )
        for s in stations
    ]


def max_total_traffic(stations: Sequence[Station]) -> int:
    return max((s.total_traffic for s in stations), default=0)


def hourly_trip_starts(trips: pd.DataFrame) -> List[int]:
    """
    Trip starts per hour of day (24 values), date ignored.
    """
    if trips.empty:
        return [0] * 24
    hours = trips["started_at"].dt.hour
    counts = hours.value_counts().reindex(range(24), fill_value=0)
    return [int(n) for n in counts.tolist()]
