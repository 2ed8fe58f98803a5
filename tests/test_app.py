from __future__ import annotations

import pytest

from bikeflow.pipeline.barrier import DatasetBarrier
from bikeflow.pipeline.recompute import TrafficMapPipeline
from bikeflow.pipeline.viewport import WebMercatorViewport
from bikeflow.viz.app.single import create_app


@pytest.fixture
def pipeline(stations, example_trips):
    barrier = DatasetBarrier()
    p = TrafficMapPipeline(barrier, WebMercatorViewport())
    barrier.provide_stations(stations)
    barrier.provide_trips(example_trips)
    return p


@pytest.fixture
def client(pipeline):
    return create_app(pipeline, title="Station Traffic").test_client()


def _by_id(payload):
    return {r["id"]: r for r in payload["stations"]}


def test_api_unfiltered(client):
    res = client.get("/api/stations")
    assert res.status_code == 200

    body = res.get_json()
    assert body["time"] == -1
    stations = _by_id(body)
    assert stations["A"]["tooltip"] == "3 trips (2 departures, 1 arrivals)"
    assert stations["A"]["radius"] == pytest.approx(25.0)


def test_api_filtered_to_empty_window(client):
    body = client.get("/api/stations?time=1200").get_json()

    assert body["time"] == 1200
    for r in body["stations"]:
        assert r["radius"] == pytest.approx(3.0)
        assert r["tooltip"].startswith("0 trips")


def test_api_bad_time(client):
    res = client.get("/api/stations?time=1440")
    assert res.status_code == 400
    assert "error" in res.get_json()

    for raw in ("noon", "inf", "-inf", "1e400", "480.9"):
        res = client.get(f"/api/stations?time={raw}")
        assert res.status_code == 400, raw


def test_api_not_loaded():
    pipeline = TrafficMapPipeline(DatasetBarrier(), WebMercatorViewport())
    res = create_app(pipeline).test_client().get("/api/stations")
    assert res.status_code == 503


def test_api_zoom_moves_markers_only(client, pipeline):
    before = _by_id(client.get("/api/stations").get_json())
    aggregations = pipeline.aggregations

    after = _by_id(client.get("/api/stations?zoom=15").get_json())

    assert pipeline.aggregations == aggregations
    assert after["B"]["x"] != pytest.approx(before["B"]["x"])
    assert after["B"]["tooltip"] == before["B"]["tooltip"]


def test_index_renders_map(client):
    res = client.get("/")
    assert res.status_code == 200

    html = res.get_data(as_text=True)
    assert "2 departures" in html
    assert "time-slider" in html
    assert "(any time)" in html
    assert '"Station Traffic (any time)"' in html
    assert "flow-legend" in html


def test_index_with_time(client, pipeline):
    res = client.get("/?time=480")
    assert res.status_code == 200
    assert pipeline.time_filter == 480
    assert "8:00 AM" in res.get_data(as_text=True)


def test_index_bad_time(client):
    assert client.get("/?time=-5").status_code == 400
    for raw in ("inf", "1e400", "480.9"):
        assert client.get(f"/?time={raw}").status_code == 400, raw
