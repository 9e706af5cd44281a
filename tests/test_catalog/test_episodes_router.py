# tests/test_catalog/test_episodes_router.py

import uuid

from fastapi.testclient import TestClient

import wildseries.db.models  # noqa: F401  (mappers)
from wildseries.api.v1.routers import episodes as mod
from wildseries.core.csrf import delete_token_for
from wildseries.db.models.comment import Comment
from wildseries.db.models.episode import Episode
from tests.utils.fakes import FakeDB, FakeUser, mk_app


def _client(db, user=None) -> TestClient:
    return TestClient(mk_app(mod.router, db=db, user=user))


def _episode(**kw):
    data = dict(id=uuid.uuid4(), season_id=uuid.uuid4(), number=1, title="Days Gone Bye", slug="days-gone-bye")
    data.update(kw)
    return Episode(**data)


def test_create_episode_slugs_title_and_sends_email(monkeypatch):
    sent = []

    async def _fake_email(episode):
        sent.append(episode)
        return True

    monkeypatch.setattr(mod, "send_new_episode_email", _fake_email)
    season_id = uuid.uuid4()
    db = FakeDB([season_id])

    r = _client(db, FakeUser()).post(
        "/episode/new",
        json={"season_id": str(season_id), "number": 1, "title": "Days Gone Bye", "synopsis": "Rick se réveille."},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["slug"] == "days-gone-bye"
    assert body["season_id"] == str(season_id)
    assert db.commit_calls == 1
    assert [e["title"] for e in sent] == ["Days Gone Bye"]


def test_create_episode_unknown_season_is_404(monkeypatch):
    sent = []

    async def _fake_email(episode):
        sent.append(episode)

    monkeypatch.setattr(mod, "send_new_episode_email", _fake_email)
    db = FakeDB([None])
    r = _client(db, FakeUser()).post(
        "/episode/new", json={"season_id": str(uuid.uuid4()), "number": 1, "title": "X"}
    )
    assert r.status_code == 404
    assert db.added == []
    assert sent == []


def test_create_episode_number_must_be_positive():
    r = _client(FakeDB(), FakeUser()).post(
        "/episode/new", json={"season_id": str(uuid.uuid4()), "number": 0, "title": "X"}
    )
    assert r.status_code == 422


def test_show_episode_with_comments_and_delete_token():
    ep = _episode()
    c = Comment(id=uuid.uuid4(), episode_id=ep.id, author_id=uuid.uuid4(), comment="Top")
    db = FakeDB([ep, [c]])
    r = _client(db).get(f"/episode/{ep.id}")
    assert r.status_code == 200
    body = r.json()
    assert body["delete_token"] == delete_token_for(ep.id)
    assert [x["comment"] for x in body["comments"]] == ["Top"]


def test_edit_episode_keeps_slug():
    ep = _episode()
    db = FakeDB([ep])
    r = _client(db, FakeUser()).post(f"/episode/{ep.id}/edit", json={"title": "Guts", "synopsis": "Atlanta"})
    assert r.status_code == 200, r.text
    assert r.json()["title"] == "Guts"
    assert r.json()["slug"] == "days-gone-bye"


def test_edit_episode_requires_auth():
    r = _client(FakeDB()).post(f"/episode/{uuid.uuid4()}/edit", json={"title": "Guts"})
    assert r.status_code == 401


def test_delete_episode_valid_token_redirects_to_index():
    ep = _episode()
    db = FakeDB([ep])
    r = _client(db).request(
        "DELETE", f"/episode/{ep.id}", data={"_token": delete_token_for(ep.id)}, follow_redirects=False
    )
    assert r.status_code == 303
    assert r.headers["location"] == "/episode/"
    assert len(db.deletes) == 1


def test_delete_episode_token_of_other_entity_is_ignored():
    ep = _episode()
    db = FakeDB([ep])
    r = _client(db).request(
        "DELETE", f"/episode/{ep.id}", data={"_token": delete_token_for(uuid.uuid4())}, follow_redirects=False
    )
    assert r.status_code == 303
    assert db.deletes == []
    assert db.commit_calls == 0


def test_create_episode_rejects_title_without_letters_or_digits():
    db = FakeDB([uuid.uuid4()])
    r = _client(db, FakeUser()).post(
        "/episode/new", json={"season_id": str(uuid.uuid4()), "number": 1, "title": "???"}
    )
    assert r.status_code == 422
    assert db.added == []
