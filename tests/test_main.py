from __future__ import annotations

import json

import pytest

from main import main


def test_main_prints_busiest_stations(tmp_path, capsys):
    stations = tmp_path / "stations.json"
    stations.write_text(
        json.dumps(
            {
                "data": {
                    "stations": [
                        {"short_name": "A", "lat": 42.3601, "lon": -71.0942},
                        {"short_name": "B", "lat": 42.3736, "lon": -71.1190},
                    ]
                }
            }
        )
    )
    trips = tmp_path / "trips.csv"
    trips.write_text(
        "started_at,ended_at,start_station_id,end_station_id\n"
        "2024-03-01 08:05:00,2024-03-01 08:25:00,A,B\n"
        "2024-03-01 08:50:00,2024-03-01 09:10:00,A,A\n"
    )

    main(["--stations", str(stations), "--trips", str(trips), "--time", "480", "--top", "1"])

    out = capsys.readouterr().out
    assert "Busiest stations (8:00 AM ±1h)" in out
    assert "3 trips (2 departures, 1 arrivals)" in out
    assert "02." not in out


def test_main_rejects_bad_time(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--time", "inf"])
    assert exc.value.code == 2
    assert "--time" in capsys.readouterr().err
