# bikeflow/traffic/types.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# slider position meaning "any time of day"
NO_FILTER = -1

MINUTES_PER_DAY = 1440


@dataclass(frozen=True)
class Station:
    short_name: str
    lat: float
    lon: float
    name: str | None = None
    arrivals: int = 0
    departures: int = 0

    @property
    def id(self) -> str:
        return self.short_name

    @property
    def total_traffic(self) -> int:
        return self.arrivals + self.departures


@dataclass(frozen=True)
class Trip:
    start_station_id: str
    end_station_id: str
    started_at: datetime
    ended_at: datetime
