import json

from colorama import Fore, Style

from bikeflow.traffic.types import Station


class StationDataError(ValueError):
    pass


def stations_from_records(raw):
    """
    Build Station values from GBFS station_information records.
    Only short_name, lat, lon and name are kept.
    """
    stations = []
    seen = set()
    for s in raw:
        try:
            sid = str(s["short_name"]).strip()
            lat = float(s["lat"])
            lon = float(s["lon"])
        except (KeyError, TypeError, ValueError) as e:
            raise StationDataError(f"Bad station record {s!r}: {e}") from e

        if sid in seen:
            raise StationDataError(f"Duplicate station short_name {sid!r}")
        seen.add(sid)

        stations.append(Station(short_name=sid, lat=lat, lon=lon, name=s.get("name")))

    return stations


def load_stations(path):
    """
    Load Bike Share stations from a station_information.json feed.
    """
    print(f"{Fore.CYAN}Loading station registry…{Style.RESET_ALL}")
    with open(path) as f:
        doc = json.load(f)

    try:
        raw = doc["data"]["stations"]
    except (KeyError, TypeError) as e:
        raise StationDataError(f"{path}: expected data.stations in station feed") from e

    return stations_from_records(raw)
