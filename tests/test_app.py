"""Tests for the FastAPI web app."""

import math

import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_snapshot_at_liftoff():
    response = client.get("/api/snapshot", params={"offset": "0"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["clock"] == "T + 00:00:00"
    assert payload["is_t_plus"] is True
    liftoff = next(node for node in payload["nodes"] if node["name"] == "LIFTOFF")
    assert liftoff["angle"] == pytest.approx(-math.pi / 2)
    assert liftoff["angle_degrees"] == pytest.approx(-90)
    assert liftoff["visible"] is True


def test_snapshot_defaults_to_countdown_start():
    payload = client.get("/api/snapshot", params={"layout": "half"}).json()

    assert payload["offset"] == -300
    assert payload["mode"] == "idle"
    assert len(payload["nodes"]) == 10


@pytest.mark.parametrize("params", [{"offset": "soon"}, {"layout": "spiral"}])
def test_snapshot_rejects_bad_input(params):
    response = client.get("/api/snapshot", params=params)
    assert response.status_code == 400


def test_render_svg():
    response = client.get("/api/render", params={"format": "svg", "duration": 1, "fps": 5})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.content.startswith(b"<?xml")


def test_render_rejects_unknown_format():
    response = client.get("/api/render", params={"format": "bmp", "duration": 1})
    assert response.status_code == 400


def test_render_limits_duration():
    response = client.get("/api/render", params={"duration": 600})
    assert response.status_code == 422
