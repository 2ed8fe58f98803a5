# bikeflow/pipeline/viewport.py
from __future__ import annotations

import math
from typing import Tuple

from bikeflow.pipeline.events import EventSource

TILE_SIZE = 256

# Boston / Cambridge
CENTER_LAT = 42.36027
CENTER_LON = -71.09415
DEFAULT_ZOOM = 12
MIN_ZOOM = 5
MAX_ZOOM = 18


def world_pixel(lon: float, lat: float, zoom: float) -> Tuple[float, float]:
    """Web Mercator world pixel coordinates at `zoom` (256 px tiles)."""
    n = TILE_SIZE * 2 ** zoom
    x = (lon + 180.0) / 360.0 * n
    lat_rad = math.radians(lat)
    y = (1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi) / 2.0 * n
    return x, y


class WebMercatorViewport(EventSource):
    """
    Map viewport: projects lon/lat to screen pixels and emits
    "move", "zoom", "resize" and "moveend" when it changes.
    """

    def __init__(
        self,
        *,
        center_lat: float = CENTER_LAT,
        center_lon: float = CENTER_LON,
        zoom: float = DEFAULT_ZOOM,
        width: int = 1024,
        height: int = 768,
    ):
        super().__init__()
        self.center_lat = float(center_lat)
        self.center_lon = float(center_lon)
        self.zoom = self._clamp_zoom(zoom)
        self.width = int(width)
        self.height = int(height)

    @staticmethod
    def _clamp_zoom(zoom: float) -> float:
        return max(MIN_ZOOM, min(MAX_ZOOM, float(zoom)))

    def project(self, lon: float, lat: float) -> Tuple[float, float]:
        px, py = world_pixel(lon, lat, self.zoom)
        cx, cy = world_pixel(self.center_lon, self.center_lat, self.zoom)
        return px - cx + self.width / 2.0, py - cy + self.height / 2.0

    def pan_to(self, lat: float, lon: float) -> None:
        self.center_lat = float(lat)
        self.center_lon = float(lon)
        self.emit("move")
        self.emit("moveend")

    def zoom_to(self, zoom: float) -> None:
        self.zoom = self._clamp_zoom(zoom)
        self.emit("zoom")
        self.emit("moveend")

    def resize(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.emit("resize")
