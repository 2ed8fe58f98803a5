# bikeflow/util/trips.py
from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Iterable

import pandas as pd
from colorama import Fore, Style
from tqdm import tqdm

from bikeflow.traffic.types import Trip

TRIP_COLUMNS = ["start_station_id", "end_station_id", "started_at", "ended_at"]
TIME_COLUMNS = ["started_at", "ended_at"]

CHUNK_ROWS = 100_000


class TripDataError(ValueError):
    pass


def empty_trips() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "start_station_id": pd.Series(dtype=str),
            "end_station_id": pd.Series(dtype=str),
            "started_at": pd.Series(dtype="datetime64[ns]"),
            "ended_at": pd.Series(dtype="datetime64[ns]"),
        }
    )


def trips_frame(trips: Iterable[Trip | dict]) -> pd.DataFrame:
    """
    Build a trip table from Trip records (or plain dicts with the same keys).
    """
    rows = [asdict(t) if isinstance(t, Trip) else dict(t) for t in trips]
    if not rows:
        return empty_trips()

    df = pd.DataFrame(rows)
    missing = [c for c in TRIP_COLUMNS if c not in df.columns]
    if missing:
        raise TripDataError(f"Trip records missing fields: {', '.join(missing)}")

    return _clean(df[TRIP_COLUMNS], source="trip records")


def _parse_times(col: pd.Series, *, name: str, source: str) -> pd.Series:
    try:
        parsed = pd.to_datetime(col, errors="raise")
    except (ValueError, TypeError) as e:
        raise TripDataError(f"Malformed '{name}' timestamp in {source}: {e}") from e

    if parsed.isna().any():
        row = int(parsed.isna().to_numpy().nonzero()[0][0])
        raise TripDataError(f"Missing '{name}' timestamp in {source} (row {row})")

    return parsed


def _clean(df: pd.DataFrame, *, source: str) -> pd.DataFrame:
    out = pd.DataFrame()
    out["start_station_id"] = df["start_station_id"].fillna("").astype(str).str.strip()
    out["end_station_id"] = df["end_station_id"].fillna("").astype(str).str.strip()
    for name in TIME_COLUMNS:
        out[name] = _parse_times(df[name], name=name, source=source)
    return out.reset_index(drop=True)


def load_trips(trips_csv: str | Path, *, chunk_rows: int = CHUNK_ROWS) -> pd.DataFrame:
    """
    Loads a Bluebikes-style trips CSV with columns like:

      ride_id, rideable_type, started_at, ended_at, start_station_id, end_station_id, ...

    Returns a trip table with:
      - start_station_id (str)
      - end_station_id (str)
      - started_at (datetime)
      - ended_at (datetime)

    A malformed or missing timestamp raises TripDataError; rows are never dropped
    silently, so aggregation always sees the whole log.
    """
    trips_csv = Path(trips_csv)
    print(f"{Fore.CYAN}Loading trips from {trips_csv}…{Style.RESET_ALL}")

    reader = pd.read_csv(trips_csv, dtype=str, chunksize=int(chunk_rows))

    chunks = []
    for i, chunk in enumerate(tqdm(reader, desc="Reading trips", unit="chunk")):
        # header cells sometimes carry stray spaces
        chunk = chunk.rename(columns=lambda c: c.strip())
        missing = [c for c in TRIP_COLUMNS if c not in chunk.columns]
        if missing:
            raise TripDataError(
                f"Trips CSV missing columns: {', '.join(missing)}"
            )
        chunks.append(_clean(chunk, source=f"{trips_csv.name} chunk {i}"))

    trips = pd.concat(chunks, ignore_index=True) if chunks else empty_trips()

    print(f"{Fore.MAGENTA}Loaded {len(trips):,} trips{Style.RESET_ALL}")
    return trips
