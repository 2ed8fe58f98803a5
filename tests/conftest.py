from __future__ import annotations

from datetime import datetime

import pytest

from bikeflow.traffic.types import Station, Trip
from bikeflow.util.trips import trips_frame


@pytest.fixture
def stations():
    return [
        Station(short_name="A", lat=42.3601, lon=-71.0942, name="Kendall T"),
        Station(short_name="B", lat=42.3736, lon=-71.1190, name="Harvard Square"),
    ]


@pytest.fixture
def example_trips():
    """A->B at 08:05, then a round trip A->A from 08:50 to 09:10."""
    return trips_frame(
        [
            Trip("A", "B", datetime(2024, 3, 1, 8, 5), datetime(2024, 3, 1, 8, 25)),
            Trip("A", "A", datetime(2024, 3, 1, 8, 50), datetime(2024, 3, 1, 9, 10)),
        ]
    )
