# tests/test_catalog/test_actors_router.py

import uuid

from fastapi.testclient import TestClient

import wildseries.db.models  # noqa: F401  (mappers)
from wildseries.api.v1.routers import actors as mod
from wildseries.db.models.actor import Actor
from wildseries.db.models.program import Program
from tests.utils.fakes import FakeDB, mk_app


def _client(db) -> TestClient:
    return TestClient(mk_app(mod.router, db=db))


def test_actor_show_lists_programs():
    actor = Actor(id=uuid.uuid4(), name="Andrew Lincoln")
    program = Program(id=uuid.uuid4(), title="Walking Dead", slug="walking-dead", summary="Zombies")
    r = _client(FakeDB([actor, [program]])).get(f"/actor/{actor.id}")
    assert r.status_code == 200
    assert r.json()["name"] == "Andrew Lincoln"
    assert [p["slug"] for p in r.json()["programs"]] == ["walking-dead"]


def test_unknown_actor_is_404():
    r = _client(FakeDB([None])).get(f"/actor/{uuid.uuid4()}")
    assert r.status_code == 404


def test_actor_list_returns_names():
    actors = [Actor(id=uuid.uuid4(), name="Danai Gurira"), Actor(id=uuid.uuid4(), name="Lauren Cohan")]
    r = _client(FakeDB([actors])).get("/actor/", params={"search": "a"})
    assert r.status_code == 200
    assert [a["name"] for a in r.json()] == ["Danai Gurira", "Lauren Cohan"]
