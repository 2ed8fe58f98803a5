# bikeflow/viz/app/single.py
from __future__ import annotations

from pathlib import Path

from flask import Flask, jsonify, request

from bikeflow.pipeline.barrier import DatasetBarrier
from bikeflow.pipeline.recompute import TrafficMapPipeline
from bikeflow.pipeline.viewport import WebMercatorViewport
from bikeflow.traffic.time_filter import format_time, parse_time_filter
from bikeflow.traffic.types import NO_FILTER
from bikeflow.util.stations import load_stations
from bikeflow.util.trips import load_trips
from bikeflow.viz.maps.render import render_map_document

_LIB_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_STATIONS_FILE = _LIB_ROOT / "bluebikes-stations.json"
DEFAULT_TRIPS_FILE = _LIB_ROOT / "bluebikes-traffic-2024-03.csv"


def build_pipeline(stations_file, trips_file) -> TrafficMapPipeline:
    barrier = DatasetBarrier()
    pipeline = TrafficMapPipeline(barrier, WebMercatorViewport())

    barrier.provide_stations(load_stations(stations_file))
    barrier.provide_trips(load_trips(trips_file))
    return pipeline


def _apply_viewport(pipeline: TrafficMapPipeline) -> None:
    vp = pipeline.viewport
    lat = request.args.get("lat", type=float)
    lon = request.args.get("lon", type=float)
    zoom = request.args.get("zoom", type=float)
    width = request.args.get("width", type=int)
    height = request.args.get("height", type=int)

    if width is not None or height is not None:
        vp.resize(width or vp.width, height or vp.height)
    if zoom is not None and zoom != vp.zoom:
        vp.zoom_to(zoom)
    if lat is not None or lon is not None:
        vp.pan_to(
            lat if lat is not None else vp.center_lat,
            lon if lon is not None else vp.center_lon,
        )


def create_app(pipeline: TrafficMapPipeline, *, title: str | None = None) -> Flask:
    """
    Routes:
      /               map document for ?time=<minutes|-1>
      /api/stations   marker records for ?time= plus optional lat/lon/zoom/width/height
    """
    app = Flask(__name__)

    def _resolve_time():
        try:
            return parse_time_filter(request.args.get("time")), None
        except ValueError as e:
            return None, str(e)

    def _sync_time(t):
        if t != pipeline.time_filter:
            pipeline.on_time_filter_changed(t)

    @app.route("/")
    def _index():
        t, err = _resolve_time()
        if err:
            return err, 400
        _sync_time(t)

        label = "any time" if t == NO_FILTER else format_time(t)
        return render_map_document(
            pipeline,
            title=f"{title} ({label})" if title else None,
        )

    @app.route("/api/stations")
    def _stations():
        if not pipeline.ready:
            return jsonify({"error": "station traffic is not loaded yet"}), 503

        t, err = _resolve_time()
        if err:
            return jsonify({"error": err}), 400
        _sync_time(t)
        _apply_viewport(pipeline)

        return jsonify(
            {
                "time": pipeline.time_filter,
                "stations": pipeline.layer.records(),
            }
        )

    return app


def serve_traffic_map(
    *,
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    stations_file: str | Path = DEFAULT_STATIONS_FILE,
    trips_file: str | Path = DEFAULT_TRIPS_FILE,
    title: str | None = None,
):
    pipeline = build_pipeline(stations_file, trips_file)
    app = create_app(pipeline, title=title)

    # one pipeline, one request at a time
    app.run(host=host, port=int(port), debug=bool(debug), threaded=False)
