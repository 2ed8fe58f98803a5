# main.py
import argparse

from bikeflow.pipeline.barrier import DatasetBarrier
from bikeflow.pipeline.recompute import TrafficMapPipeline
from bikeflow.pipeline.viewport import WebMercatorViewport
from bikeflow.traffic.time_filter import format_time, parse_time_filter
from bikeflow.traffic.types import NO_FILTER
from bikeflow.util.stations import load_stations
from bikeflow.util.trips import load_trips
from bikeflow.viz.app.single import DEFAULT_STATIONS_FILE, DEFAULT_TRIPS_FILE, create_app


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Bike share station traffic by time of day")
    p.add_argument("--stations", default=str(DEFAULT_STATIONS_FILE))
    p.add_argument("--trips", default=str(DEFAULT_TRIPS_FILE))
    p.add_argument("--time", type=parse_time_filter, default=NO_FILTER, help="minutes after midnight, -1 for any time")
    p.add_argument("--top", type=int, default=10)
    p.add_argument("--serve", action="store_true", help="start the map server afterwards")
    p.add_argument("--port", type=int, default=8080)
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    time_filter = args.time

    barrier = DatasetBarrier()
    pipeline = TrafficMapPipeline(barrier, WebMercatorViewport())

    # ---- load (pipeline waits on both) ----
    barrier.provide_trips(load_trips(args.trips))
    barrier.provide_stations(load_stations(args.stations))

    if time_filter != NO_FILTER:
        pipeline.on_time_filter_changed(time_filter)

    # ---- print busiest stations ----
    label = "any time" if time_filter == NO_FILTER else f"{format_time(time_filter)} ±1h"
    busiest = sorted(pipeline.stations, key=lambda s: s.total_traffic, reverse=True)[: args.top]

    print(f"\nBusiest stations ({label}):\n")
    for i, s in enumerate(busiest, 1):
        marker = pipeline.layer.get(s.id)
        print(
            f"{i:02d}. "
            f"{s.short_name:>8} | "
            f"{marker.tooltip} | "
            f"r={marker.radius:5.1f} flow={marker.ratio_bucket:.1f}"
        )

    # ---- UI ----
    if args.serve:
        app = create_app(pipeline, title="Bluebikes Station Traffic")
        app.run(port=args.port, threaded=False)


if __name__ == "__main__":
    main()
