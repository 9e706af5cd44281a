# tests/test_auth/test_auth_router.py

import uuid
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

import wildseries.db.models  # noqa: F401  (mappers)
from wildseries.api.v1.routers import auth as auth_mod
from wildseries.api.v1.routers import me as me_mod
from wildseries.core.jwt import decode_access_token
from wildseries.core.security import create_access_token, get_password_hash
from wildseries.db.models.program import Program
from wildseries.db.models.user import User
from tests.utils.fakes import FakeDB, mk_app


def _client(db) -> TestClient:
    return TestClient(mk_app(auth_mod.router, me_mod.router, db=db))


def _user(password="s3cret-pass", is_active=True):
    return User(
        id=uuid.uuid4(),
        email="rick@example.com",
        username="rick",
        hashed_password=get_password_hash(password),
        is_active=is_active,
    )


# ------------------------ register ------------------------

def test_register_returns_token_and_lowercases_email():
    db = FakeDB([None])
    r = _client(db).post(
        "/auth/register", json={"email": "Rick@Example.com", "password": "s3cret-pass", "username": "rick"}
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["token_type"] == "bearer"
    assert r.headers["cache-control"].startswith("no-store")

    user = db.added[0]
    assert user.email == "rick@example.com"
    assert user.hashed_password != "s3cret-pass"
    assert decode_access_token(body["access_token"])["sub"] == str(user.id)


def test_register_duplicate_email_is_409():
    db = FakeDB([uuid.uuid4()])
    r = _client(db).post("/auth/register", json={"email": "rick@example.com", "password": "s3cret-pass"})
    assert r.status_code == 409
    assert r.json()["detail"] == "Email already registered"
    assert db.added == []


def test_register_taken_username_is_409():
    db = FakeDB([None, uuid.uuid4()])
    r = _client(db).post(
        "/auth/register", json={"email": "new@example.com", "password": "s3cret-pass", "username": "owner"}
    )
    assert r.status_code == 409
    assert r.json()["detail"] == "Username already taken"
    assert db.added == []
    assert db.commit_calls == 0


def test_register_short_password_is_422():
    r = _client(FakeDB()).post("/auth/register", json={"email": "rick@example.com", "password": "short"})
    assert r.status_code == 422


# ------------------------ login ------------------------

def test_login_success():
    user = _user()
    r = _client(FakeDB([user])).post("/auth/login", json={"email": "RICK@example.com", "password": "s3cret-pass"})
    assert r.status_code == 200
    assert decode_access_token(r.json()["access_token"])["sub"] == str(user.id)


@pytest.mark.parametrize("found", [False, True])
def test_login_failure_is_uniform_401(found):
    db = FakeDB([_user() if found else None])
    r = _client(db).post("/auth/login", json={"email": "rick@example.com", "password": "wrong-pass"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid email or password"


def test_login_inactive_user_is_401():
    r = _client(FakeDB([_user(is_active=False)])).post(
        "/auth/login", json={"email": "rick@example.com", "password": "s3cret-pass"}
    )
    assert r.status_code == 401


# ------------------------ /me ------------------------

def test_me_with_bearer_token():
    user = _user()
    token = create_access_token(user.id)
    r = _client(FakeDB([user])).get("/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json()["email"] == "rick@example.com"


def test_me_anonymous_is_401():
    r = _client(FakeDB()).get("/me")
    assert r.status_code == 401


def test_me_expired_token_is_401():
    user = _user()
    token = create_access_token(user.id, expires_delta=timedelta(seconds=-5))
    r = _client(FakeDB([user])).get("/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Token has expired"


def test_my_watchlist_lists_programs():
    user = _user()
    program = Program(id=uuid.uuid4(), title="Walking Dead", slug="walking-dead", summary="Zombies")
    token = create_access_token(user.id)
    r = _client(FakeDB([user, [program]])).get("/me/watchlist", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert [p["slug"] for p in r.json()] == ["walking-dead"]
