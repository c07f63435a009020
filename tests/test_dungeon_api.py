from dungeonforge import create_app
from dungeonforge.routes.dungeon_api import _coerce_seed

SMALL = {"dungeon_width": 30, "dungeon_height": 30, "min_room_width": 6, "min_room_height": 6}


def test_generate_and_fetch(client):
    r = client.post("/api/dungeon/generate", json={"seed": 7, **SMALL})
    assert r.status_code == 200
    data = r.get_json()
    assert data["seed"] == 7
    assert data["rooms"] and data["floor"] and data["walls"]
    assert data["rooms"][0]["role"] == "spawn"
    r2 = client.get("/api/dungeon")
    assert r2.status_code == 200
    assert r2.get_json()["floor"] == data["floor"]


def test_missing_dungeon_is_404(client):
    assert client.get("/api/dungeon").status_code == 404
    assert client.get("/api/dungeon/metrics").status_code == 404


def test_metrics_endpoint(client):
    client.post("/api/dungeon/generate", json={"seed": 3, **SMALL})
    r = client.get("/api/dungeon/metrics")
    assert r.status_code == 200
    data = r.get_json()
    assert data["seed"] == 3
    for k in ["rooms", "corridors", "tiles_floor", "tiles_wall", "placements_made", "runtime_ms", "phase_ms"]:
        assert k in data["metrics"]


def test_clear_endpoint(client):
    client.post("/api/dungeon/generate", json={"seed": 5, **SMALL})
    r = client.post("/api/dungeon/clear")
    assert r.status_code == 200 and r.get_json() == {"cleared": True}
    assert client.post("/api/dungeon/clear").status_code == 200
    assert client.get("/api/dungeon").status_code == 404


def test_bad_config_is_400(client):
    r = client.post("/api/dungeon/generate", json={"room_offset": 9})
    assert r.status_code == 400
    assert "room_offset" in r.get_json()["error"]
    r = client.post("/api/dungeon/generate", json={"dungeon_depth": 2})
    assert r.status_code == 400
    r = client.post("/api/dungeon/generate", json=[1, 2, 3])
    assert r.status_code == 400


def test_empty_dungeon_is_422_and_clears(client):
    client.post("/api/dungeon/generate", json={"seed": 1, **SMALL})
    r = client.post("/api/dungeon/generate", json={"dungeon_width": 5, "dungeon_height": 5})
    assert r.status_code == 422
    assert "error" in r.get_json()
    assert client.get("/api/dungeon").status_code == 404


def test_string_seed_is_stable(client):
    a = client.post("/api/dungeon/generate", json={"seed": "crypt of bones", **SMALL}).get_json()
    b = client.post("/api/dungeon/generate", json={"seed": "crypt of bones", **SMALL}).get_json()
    assert a["seed"] == b["seed"]
    assert a["floor"] == b["floor"]


def test_app_config_supplies_defaults(tmp_path):
    app = create_app({"TESTING": True, "DUNGEON_USE_RANDOM_WALK": False, "DUNGEON_DUNGEON_WIDTH": 40})
    client = app.test_client()
    data = client.post("/api/dungeon/generate", json={"seed": 2}).get_json()
    assert data["config"]["use_random_walk"] is False
    assert data["config"]["dungeon_width"] == 40
    # Request body wins over app defaults
    data = client.post("/api/dungeon/generate", json={"seed": 2, "dungeon_width": 60}).get_json()
    assert data["config"]["dungeon_width"] == 60


def test_coerce_seed():
    assert _coerce_seed(42) == 42
    assert _coerce_seed(" 17 ") == 17
    assert _coerce_seed("abc") == _coerce_seed("abc")
    assert 0 <= _coerce_seed("abc") < 2**31
    assert 0 <= _coerce_seed(None) < 2**31
    assert 0 <= _coerce_seed(-5) < 2**31


def test_oversized_requests_are_refused(client):
    r = client.post("/api/dungeon/generate", json={"dungeon_width": 1e9})
    assert r.status_code == 400
    assert "cells per side" in r.get_json()["error"]
    r = client.post(
        "/api/dungeon/generate",
        json={"dungeon_width": 400, "dungeon_height": 400, "min_room_width": 5, "min_room_height": 5},
    )
    assert r.status_code == 400
    assert "rooms" in r.get_json()["error"]


def test_request_bounds_come_from_app_config():
    app = create_app({"TESTING": True, "DUNGEON_MAX_SIDE": 40})
    client = app.test_client()
    assert client.post("/api/dungeon/generate", json={"seed": 1, **SMALL}).status_code == 200
    r = client.post("/api/dungeon/generate", json={"seed": 1, "dungeon_width": 41})
    assert r.status_code == 400


def test_app_generator_has_no_write_only_collaborators(test_app):
    generator = test_app.extensions["dungeon_generator"]
    assert generator.renderer is None and generator.spawner is None


def test_app_sets_no_session_secret(test_app, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "from-env")
    assert test_app.config["SECRET_KEY"] is None
    assert create_app({"TESTING": True}).config["SECRET_KEY"] is None
