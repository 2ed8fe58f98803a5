# bikeflow/pipeline/recompute.py
from __future__ import annotations

import sys
from typing import Dict, List

import pandas as pd
from colorama import Fore, Style

from bikeflow.pipeline.barrier import DatasetBarrier, LoadedData
from bikeflow.pipeline.events import EventSource
from bikeflow.pipeline.layer import StationMarkerLayer, traffic_tooltip
from bikeflow.traffic.aggregate import compute_station_traffic
from bikeflow.traffic.scales import RadiusScale, ScaleMapper
from bikeflow.traffic.time_filter import check_time_filter, filter_trips_by_time
from bikeflow.traffic.types import NO_FILTER, Station

VIEWPORT_EVENTS = ("move", "zoom", "resize", "moveend")


class TrafficMapPipeline:
    """
    Owns the map state: loaded stations and trips, the active time filter,
    the scale mapper and the marker layer.

    Two triggers:
      - time filter changed: filter -> aggregate -> rescale -> restyle markers
      - viewport changed: reproject markers with the current radius only
    Nothing runs until the barrier has both datasets.
    """

    def __init__(
        self,
        barrier: DatasetBarrier,
        viewport,
        *,
        layer: StationMarkerLayer | None = None,
        scale_mapper: ScaleMapper | None = None,
    ):
        self.viewport = viewport
        self.layer = layer or StationMarkerLayer()
        self.scales = scale_mapper or ScaleMapper()

        self.time_filter = NO_FILTER
        self.base_stations: List[Station] = []
        self.trips: pd.DataFrame | None = None
        self.stations: List[Station] = []
        self.radius_scale: RadiusScale | None = None
        self.aggregations = 0

        if isinstance(viewport, EventSource):
            for event in VIEWPORT_EVENTS:
                viewport.on(event, self.on_viewport_changed)

        barrier.on_ready(self._on_data_ready)

    @property
    def ready(self) -> bool:
        return self.radius_scale is not None

    def attach_time_control(self, control: EventSource) -> None:
        control.on("input", self.on_time_filter_changed)

    # ----------------------------
    # triggers
    # ----------------------------
    def _on_data_ready(self, data: LoadedData) -> None:
        self.base_stations = list(data.stations)
        self.trips = data.trips

        print(
            f"{Fore.CYAN}Aggregating {len(self.trips):,} trips over "
            f"{len(self.base_stations):,} stations…{Style.RESET_ALL}"
        )
        self.stations = self._aggregate(self.trips)
        self.scales.fit(self.stations)

        self.time_filter = NO_FILTER
        self._restyle()
        self.on_viewport_changed()
        print(f"{Fore.GREEN}Station traffic ready.{Style.RESET_ALL}")

    def on_time_filter_changed(self, value) -> bool:
        """
        Returns False (and leaves the markers alone) when the data has not
        loaded yet.
        """
        time_filter = check_time_filter(value)
        if not self.ready:
            print(
                f"{Fore.RED}Ignoring time filter {time_filter}: station traffic is not loaded yet{Style.RESET_ALL}",
                file=sys.stderr,
            )
            return False

        self.time_filter = time_filter
        self.stations = self._aggregate(filter_trips_by_time(self.trips, time_filter))
        self._restyle()
        return True

    def on_viewport_changed(self, *_args) -> None:
        if not self.ready:
            return
        positions = {}
        for s in self.stations:
            x, y = self.viewport.project(s.lon, s.lat)
            positions[s.id] = (x, y, self.radius_scale(s.total_traffic))
        self.layer.place(positions)

    # ----------------------------
    # stages
    # ----------------------------
    def _aggregate(self, trips: pd.DataFrame) -> List[Station]:
        self.aggregations += 1
        return compute_station_traffic(self.base_stations, trips)

    def _restyle(self) -> None:
        self.radius_scale = self.scales.radius_scale(self.time_filter)
        styles: Dict[str, dict] = {}
        for s in self.stations:
            styles[s.id] = {
                "radius": self.radius_scale(s.total_traffic),
                "ratio_bucket": self.scales.flow_bucket(s),
                "tooltip": traffic_tooltip(s),
            }
        self.layer.bind_styles(styles)

    def station(self, sid: str) -> Station | None:
        for s in self.stations:
            if s.id == sid:
                return s
        return None
