# tests/test_catalog/test_comments_router.py

import uuid

from fastapi.testclient import TestClient

import wildseries.db.models  # noqa: F401  (mappers)
from wildseries.api.v1.routers import comments as mod
from wildseries.api.v1.routers import programs as programs_mod
from wildseries.core.csrf import delete_token_for
from wildseries.db.models.comment import Comment
from wildseries.db.models.episode import Episode
from tests.utils.fakes import FakeDB, FakeUser, mk_app


def _client(db, user=None) -> TestClient:
    # The programs router owns the nested episode page the comment routes redirect to.
    return TestClient(mk_app(mod.router, programs_mod.router, db=db, user=user))


def _episode():
    return Episode(id=uuid.uuid4(), season_id=uuid.uuid4(), number=1, title="Pilot", slug="pilot")


def _comment(episode, author_id=None):
    return Comment(id=uuid.uuid4(), episode_id=episode.id, author_id=author_id or uuid.uuid4(), comment="Génial")


def _page(episode):
    return f"/programs/walking-dead/seasons/{episode.season_id}/episodes/{episode.slug}"


def test_create_comment_redirects_to_nested_episode_page():
    user = FakeUser()
    ep = _episode()
    db = FakeDB([ep, ("walking-dead", ep.season_id)])

    r = _client(db, user).post(f"/comment/new/{ep.id}", json={"comment": "Trop bien"}, follow_redirects=False)
    assert r.status_code == 303, r.text
    assert r.headers["location"] == _page(ep)

    created = db.added[0]
    assert isinstance(created, Comment)
    assert created.author_id == user.id
    assert created.comment == "Trop bien"
    assert db.commit_calls == 1


def test_create_comment_rejects_blank_body():
    ep = _episode()
    r = _client(FakeDB([ep]), FakeUser()).post(f"/comment/new/{ep.id}", json={"comment": "   "})
    assert r.status_code == 422


def test_create_comment_requires_auth():
    r = _client(FakeDB()).post(f"/comment/new/{uuid.uuid4()}", json={"comment": "x"})
    assert r.status_code == 401


def test_new_comment_form_for_unknown_episode_is_404():
    r = _client(FakeDB([None])).get(f"/comment/new/{uuid.uuid4()}")
    assert r.status_code == 404


def test_only_author_can_edit():
    ep = _episode()
    c = _comment(ep)
    db = FakeDB([c])
    r = _client(db, FakeUser()).post(f"/comment/{c.id}/edit", json={"comment": "hijack"})
    assert r.status_code == 403
    assert r.json()["detail"] == "Only the author can edit the comment!"
    assert c.comment == "Génial"


def test_author_edits_comment():
    user = FakeUser()
    ep = _episode()
    c = _comment(ep, author_id=user.id)
    db = FakeDB([c])
    r = _client(db, user).post(f"/comment/{c.id}/edit", json={"comment": "Finalement bof"})
    assert r.status_code == 200
    assert r.json()["comment"] == "Finalement bof"


def test_show_comment_has_delete_token():
    ep = _episode()
    c = _comment(ep)
    r = _client(FakeDB([c])).get(f"/comment/{c.id}")
    assert r.json()["delete_token"] == delete_token_for(c.id)


def test_delete_with_invalid_token_redirects_without_deleting():
    ep = _episode()
    c = _comment(ep)
    db = FakeDB([c, ep, ("walking-dead", ep.season_id)])
    r = _client(db).request("DELETE", f"/comment/{c.id}", data={"_token": "bad"}, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == _page(ep)
    assert db.deletes == []


def test_delete_with_valid_token_deletes_and_redirects():
    ep = _episode()
    c = _comment(ep)
    db = FakeDB([c, ep, ("walking-dead", ep.season_id)])
    r = _client(db).request(
        "DELETE", f"/comment/{c.id}", data={"_token": delete_token_for(c.id)}, follow_redirects=False
    )
    assert r.status_code == 303
    assert r.headers["location"] == _page(ep)
    assert len(db.deletes) == 1
    assert db.commit_calls == 1
