# bikeflow/pipeline/barrier.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Sequence

import pandas as pd

from bikeflow.traffic.types import Station


@dataclass(frozen=True)
class LoadedData:
    stations: Sequence[Station]
    trips: pd.DataFrame


class DatasetBarrier:
    """
    Join point for the station and trip loads.

    Callbacks registered with on_ready() run exactly once, after both datasets
    have been provided, whatever order they arrive in. Registering after the
    release runs the callback immediately.
    """

    def __init__(self):
        self._stations: Sequence[Station] | None = None
        self._trips: pd.DataFrame | None = None
        self._waiting: List[Callable[[LoadedData], None]] = []
        self._data: LoadedData | None = None

    @property
    def released(self) -> bool:
        return self._data is not None

    def on_ready(self, callback: Callable[[LoadedData], None]) -> None:
        if self._data is not None:
            callback(self._data)
        else:
            self._waiting.append(callback)

    def provide_stations(self, stations: Sequence[Station]) -> None:
        if self._stations is not None:
            raise RuntimeError("stations were already provided")
        self._stations = list(stations)
        self._try_release()

    def provide_trips(self, trips: pd.DataFrame) -> None:
        if self._trips is not None:
            raise RuntimeError("trips were already provided")
        self._trips = trips
        self._try_release()

    def _try_release(self) -> None:
        if self._stations is None or self._trips is None:
            return
        self._data = LoadedData(stations=self._stations, trips=self._trips)
        waiting, self._waiting = self._waiting, []
        for callback in waiting:
            callback(self._data)
