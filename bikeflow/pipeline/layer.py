# bikeflow/pipeline/layer.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List

from bikeflow.traffic.types import Station


def traffic_tooltip(station: Station) -> str:
    return (
        f"{station.total_traffic} trips "
        f"({station.departures} departures, {station.arrivals} arrivals)"
    )


@dataclass
class StationMarker:
    id: str
    x: float | None = None
    y: float | None = None
    radius: float = 0.0
    ratio_bucket: float = 0.5
    tooltip: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


class StationMarkerLayer:
    """
    Render target: one marker per station id.

    Styles and positions are written separately so a filter change never
    moves a marker and a viewport change never touches its style.
    """

    def __init__(self):
        self._markers: Dict[str, StationMarker] = {}
        self.created = 0

    def __len__(self):
        return len(self._markers)

    def __contains__(self, sid):
        return sid in self._markers

    def get(self, sid: str) -> StationMarker | None:
        return self._markers.get(sid)

    def _marker(self, sid: str) -> StationMarker:
        m = self._markers.get(sid)
        if m is None:
            m = StationMarker(id=sid)
            self._markers[sid] = m
            self.created += 1
        return m

    def bind_styles(self, styles: Dict[str, dict]) -> None:
        """styles: sid -> {"radius", "ratio_bucket", "tooltip"}"""
        for sid, st in styles.items():
            m = self._marker(sid)
            m.radius = float(st["radius"])
            m.ratio_bucket = float(st["ratio_bucket"])
            m.tooltip = st["tooltip"]

    def place(self, positions: Dict[str, tuple]) -> None:
        """positions: sid -> (x, y, radius)"""
        for sid, (x, y, r) in positions.items():
            m = self._marker(sid)
            m.x = float(x)
            m.y = float(y)
            m.radius = float(r)

    def records(self) -> List[dict]:
        return [m.to_dict() for m in self._markers.values()]
