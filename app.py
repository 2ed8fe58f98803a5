import os

from bikeflow.viz.app.single import (
    DEFAULT_STATIONS_FILE,
    DEFAULT_TRIPS_FILE,
    serve_traffic_map,
)

STATIONS = os.environ.get("STATIONS_JSON", str(DEFAULT_STATIONS_FILE))
TRIPS = os.environ.get("TRIPS_CSV", str(DEFAULT_TRIPS_FILE))


def main():
  port = int(os.environ.get("PORT", "8080"))

  serve_traffic_map(
      stations_file=STATIONS,
      trips_file=TRIPS,
      port=port,
      title="Bluebikes Station Traffic",
      host=os.environ.get("HOST", "0.0.0.0"),
  )


if __name__ == "__main__":
  main()
