# tests/test_core/test_health.py

from fastapi.testclient import TestClient

import wildseries.main as main_mod


def test_healthz_ok():
    client = TestClient(main_mod.app)
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"ok": True}
    assert "server" not in r.headers


def test_request_id_is_echoed():
    client = TestClient(main_mod.app)
    rid = "5b1a7f0e-3c2d-4b8a-9e6f-0a1b2c3d4e5f"
    r = client.get("/healthz", headers={"X-Request-ID": rid})
    assert r.headers.get("x-request-id") == rid


def test_readyz_reports_db(monkeypatch):
    async def _down():
        return False

    async def _up():
        return True

    client = TestClient(main_mod.app)

    monkeypatch.setattr(main_mod, "db_healthcheck", _down)
    r = client.get("/readyz")
    assert r.status_code == 503
    assert r.json() == {"ready": False, "checks": {"db": False}}

    monkeypatch.setattr(main_mod, "db_healthcheck", _up)
    r = client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["ready"] is True


def test_routes_are_named_for_redirects():
    app = main_mod.app
    assert app.url_path_for("program_index") == "/programs/"
    assert app.url_path_for("episode_index") == "/episode/"
    assert app.url_path_for(
        "program_episode_show", program_slug="walking-dead", season_id="s1", episode_slug="pilot"
    ) == "/programs/walking-dead/seasons/s1/episodes/pilot"
