# tests/test_programs/test_watchlist_toggle.py

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.dialects import postgresql
from sqlalchemy.sql.dml import Delete, Insert

import wildseries.db.models  # noqa: F401  (mappers)
from wildseries.api.v1.routers import programs as mod
from wildseries.db.models.program import Program
from wildseries.services.watchlist_service import toggle_watchlist
from tests.utils.fakes import FakeDB, FakeResult, FakeUser, mk_app


class WatchlistDB(FakeDB):
    """Keeps `(user_id, program_id)` pairs and answers toggle statements against them."""

    def __init__(self, results=None):
        super().__init__(results)
        self.rows = set()

    @staticmethod
    def _pair(query):
        params = query.compile(dialect=postgresql.dialect()).params
        return tuple(v for v in params.values() if isinstance(v, uuid.UUID))

    async def execute(self, query, params=None, *_a, **_k):
        if isinstance(query, Delete):
            self.exec_queries.append(query)
            pair = self._pair(query)
            if pair in self.rows:
                self.rows.discard(pair)
                return FakeResult(pair)
            return FakeResult(None)
        if isinstance(query, Insert):
            self.exec_queries.append(query)
            self.rows.add(self._pair(query))
            return FakeResult(None)
        return await super().execute(query, params)


# ─────────────────────────────────────────────────────────────
# Service
# ─────────────────────────────────────────────────────────────

@pytest.mark.anyio
async def test_toggle_adds_then_removes():
    db = WatchlistDB()
    user_id, program_id = uuid.uuid4(), uuid.uuid4()

    assert await toggle_watchlist(db, user_id=user_id, program_id=program_id) is True
    assert db.rows == {(user_id, program_id)}

    assert await toggle_watchlist(db, user_id=user_id, program_id=program_id) is False
    assert db.rows == set()
    assert db.commit_calls == 2


@pytest.mark.anyio
async def test_toggle_is_per_user():
    db = WatchlistDB()
    program_id = uuid.uuid4()
    alice, bob = uuid.uuid4(), uuid.uuid4()

    assert await toggle_watchlist(db, user_id=alice, program_id=program_id) is True
    assert await toggle_watchlist(db, user_id=bob, program_id=program_id) is True
    assert len(db.rows) == 2


@pytest.mark.anyio
async def test_insert_ignores_conflicts():
    db = WatchlistDB()
    await toggle_watchlist(db, user_id=uuid.uuid4(), program_id=uuid.uuid4())
    sql = str(db.inserts[0].compile(dialect=postgresql.dialect()))
    assert "ON CONFLICT" in sql and "DO NOTHING" in sql


# ─────────────────────────────────────────────────────────────
# Route
# ─────────────────────────────────────────────────────────────

def _program():
    return Program(id=uuid.uuid4(), title="Walking Dead", slug="walking-dead", summary="Zombies")


def test_watchlist_route_toggles_for_current_user():
    program = _program()
    db = WatchlistDB(results=[program, program])
    client = TestClient(mk_app(mod.router, db=db, user=FakeUser()))

    r = client.get(f"/programs/{program.id}/watchlist")
    assert r.status_code == 200
    assert r.json() == {"isInWatchlist": True}

    r = client.post(f"/programs/{program.id}/watchlist")
    assert r.status_code == 200
    assert r.json() == {"isInWatchlist": False}


def test_watchlist_route_requires_auth():
    db = WatchlistDB()
    client = TestClient(mk_app(mod.router, db=db))
    r = client.get(f"/programs/{uuid.uuid4()}/watchlist")
    assert r.status_code == 401
    assert db.rows == set()


def test_watchlist_route_unknown_program_is_404():
    db = WatchlistDB(results=[None])
    client = TestClient(mk_app(mod.router, db=db, user=FakeUser()))
    r = client.get(f"/programs/{uuid.uuid4()}/watchlist")
    assert r.status_code == 404
    assert db.rows == set()
    assert db.commit_calls == 0
