# tests/test_catalog/test_seasons_router.py

import uuid

from fastapi.testclient import TestClient

import wildseries.db.models  # noqa: F401  (mappers)
from wildseries.api.v1.routers import seasons as mod
from wildseries.core.csrf import delete_token_for
from wildseries.db.models.episode import Episode
from wildseries.db.models.season import Season
from tests.utils.fakes import FakeDB, FakeUser, mk_app


def _client(db, user=None) -> TestClient:
    return TestClient(mk_app(mod.router, db=db, user=user))


def _season(**kw):
    data = dict(id=uuid.uuid4(), program_id=uuid.uuid4(), number=1, year=2010, description="Première saison")
    data.update(kw)
    return Season(**data)


def test_create_season_for_existing_program():
    program_id = uuid.uuid4()
    db = FakeDB([program_id])
    r = _client(db, FakeUser()).post(
        "/season/new", json={"program_id": str(program_id), "number": 2, "year": 2011}
    )
    assert r.status_code == 201, r.text
    assert r.json()["number"] == 2
    assert db.commit_calls == 1


def test_create_season_unknown_program_is_404():
    db = FakeDB([None])
    r = _client(db, FakeUser()).post("/season/new", json={"program_id": str(uuid.uuid4()), "number": 1})
    assert r.status_code == 404
    assert db.added == []


def test_create_season_rejects_out_of_range_values():
    client = _client(FakeDB(), FakeUser())
    assert client.post("/season/new", json={"program_id": str(uuid.uuid4()), "number": 0}).status_code == 422
    assert (
        client.post("/season/new", json={"program_id": str(uuid.uuid4()), "number": 1, "year": 1800}).status_code
        == 422
    )


def test_show_season_lists_episodes():
    season = _season()
    ep = Episode(id=uuid.uuid4(), season_id=season.id, number=1, title="Pilot", slug="pilot")
    r = _client(FakeDB([season, [ep]])).get(f"/season/{season.id}")
    assert r.status_code == 200
    body = r.json()
    assert body["delete_token"] == delete_token_for(season.id)
    assert [e["title"] for e in body["episodes"]] == ["Pilot"]


def test_edit_season_partial_update():
    season = _season()
    r = _client(FakeDB([season]), FakeUser()).post(f"/season/{season.id}/edit", json={"year": 2012})
    assert r.status_code == 200
    assert r.json()["year"] == 2012
    assert r.json()["number"] == 1


def test_delete_season_redirects_to_index():
    season = _season()
    db = FakeDB([season])
    r = _client(db).request(
        "DELETE", f"/season/{season.id}", data={"_token": delete_token_for(season.id)}, follow_redirects=False
    )
    assert r.status_code == 303
    assert r.headers["location"] == "/season/"
    assert len(db.deletes) == 1

