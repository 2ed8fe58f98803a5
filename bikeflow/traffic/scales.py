# bikeflow/traffic/scales.py
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from colorama import Fore, Style

from bikeflow.traffic.aggregate import max_total_traffic
from bikeflow.traffic.types import NO_FILTER, Station

UNFILTERED_RADIUS_RANGE = (0.0, 25.0)
# filtered subsets are sparse, so give them more room at the low end
FILTERED_RADIUS_RANGE = (3.0, 50.0)

FLOW_BUCKETS = (0.0, 0.5, 1.0)
NEUTRAL_FLOW = 0.5


class ScaleNotReadyError(RuntimeError):
    pass


@dataclass(frozen=True)
class RadiusScale:
    """
    Square-root scale: area of the circle grows linearly with traffic.
    """

    domain_max: float
    range: Tuple[float, float] = UNFILTERED_RADIUS_RANGE

    def __call__(self, total_traffic):
        r0, r1 = self.range
        if self.domain_max <= 0:
            t = np.zeros_like(np.asarray(total_traffic, dtype=float))
        else:
            t = np.sqrt(np.asarray(total_traffic, dtype=float)) / np.sqrt(self.domain_max)
        out = r0 + t * (r1 - r0)
        return float(out) if np.ndim(out) == 0 else out

    def with_range(self, new_range: Tuple[float, float]) -> "RadiusScale":
        return RadiusScale(domain_max=self.domain_max, range=tuple(new_range))


@dataclass(frozen=True)
class QuantizeScale:
    """
    Splits [lo, hi] into len(buckets) equal slices; a value on a threshold
    goes to the upper slice.
    """

    buckets: Tuple[float, ...] = FLOW_BUCKETS
    lo: float = 0.0
    hi: float = 1.0

    @property
    def thresholds(self) -> np.ndarray:
        n = len(self.buckets)
        return np.array([self.lo + (i + 1) * (self.hi - self.lo) / n for i in range(n - 1)])

    def __call__(self, value: float) -> float:
        idx = int(np.digitize(value, self.thresholds))
        return self.buckets[idx]


def radius_range_for(time_filter: int) -> Tuple[float, float]:
    return UNFILTERED_RADIUS_RANGE if time_filter == NO_FILTER else FILTERED_RADIUS_RANGE


def departure_ratio(station: Station) -> float | None:
    total = station.total_traffic
    if total == 0:
        return None
    return station.departures / total


class ScaleMapper:
    """
    Holds the radius domain (fixed from the unfiltered aggregation) and hands
    out the encodings for a given filter state.
    """

    def __init__(self, flow_scale: QuantizeScale | None = None):
        self.domain_max: int | None = None
        self._radius: RadiusScale | None = None
        self.flow_scale = flow_scale or QuantizeScale()

    @property
    def ready(self) -> bool:
        return self.domain_max is not None

    def fit(self, unfiltered_stations: Sequence[Station]) -> "ScaleMapper":
        self.domain_max = max_total_traffic(unfiltered_stations)
        self._radius = RadiusScale(domain_max=self.domain_max)
        return self

    def radius_scale(self, time_filter: int) -> RadiusScale:
        if not self.ready:
            print(
                f"{Fore.RED}radius scale requested before any aggregation{Style.RESET_ALL}",
                file=sys.stderr,
            )
            raise ScaleNotReadyError("radius scale is not defined yet: fit() on the unfiltered stations first")
        return self._radius.with_range(radius_range_for(time_filter))

    def flow_bucket(self, station: Station) -> float:
        ratio = departure_ratio(station)
        if ratio is None:
            return NEUTRAL_FLOW
        return self.flow_scale(ratio)
