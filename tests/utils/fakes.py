# tests/utils/fakes.py
"""
Doubles shared by the router tests.

`FakeDB` is an AsyncSession-ish fake with a queue of values returned from
`.execute(...)`. Each queued value is wrapped in a `FakeResult`, which answers
the access patterns the routers use:

    scalar_one_or_none()   → the value (first item when a list was queued)
    scalars().all()        → the list (or [value])
    first()                → the value (first item when a list was queued)
"""

import uuid
from typing import Any, List, Optional

from fastapi import FastAPI
from sqlalchemy.sql.dml import Delete, Insert


class _Scalars:
    def __init__(self, val): self._val = val
    def all(self):
        if self._val is None:
            return []
        return list(self._val) if isinstance(self._val, list) else [self._val]


class FakeResult:
    def __init__(self, val): self._val = val
    def _one(self):
        if isinstance(self._val, list):
            return self._val[0] if self._val else None
        return self._val
    def scalar_one_or_none(self): return self._one()
    def first(self): return self._one()
    def scalars(self): return _Scalars(self._val)


class FakeDB:
    def __init__(self, results: Optional[List[Any]] = None):
        self._results = list(results or [])
        self.exec_queries: List[Any] = []
        self.exec_params: List[Any] = []
        self.added: List[Any] = []
        self.flush_calls = 0
        self.commit_calls = 0
        self.refresh_calls = 0
        self.rollback_calls = 0

    async def execute(self, query, params=None, *_a, **_k):
        self.exec_queries.append(query)
        self.exec_params.append(params)
        if self._results:
            return FakeResult(self._results.pop(0))
        return FakeResult(None)

    def add(self, obj):
        self.added.append(obj)

    def add_all(self, objs):
        self.added.extend(objs)

    def _assign_ids(self):
        for obj in self.added:
            if getattr(obj, "id", None) is None:
                setattr(obj, "id", uuid.uuid4())

    async def flush(self):
        self.flush_calls += 1
        self._assign_ids()

    async def commit(self):
        self.commit_calls += 1
        self._assign_ids()

    async def refresh(self, _obj):
        self.refresh_calls += 1

    async def rollback(self):
        self.rollback_calls += 1

    # Convenience for assertions
    @property
    def deletes(self) -> List[Any]:
        return [q for q in self.exec_queries if isinstance(q, Delete)]

    @property
    def inserts(self) -> List[Any]:
        return [q for q in self.exec_queries if isinstance(q, Insert)]


class FakeUser:
    def __init__(self, user_id: Optional[uuid.UUID] = None):
        self.id = user_id or uuid.uuid4()
        self.email = "viewer@example.com"
        self.username = "viewer"
        self.is_active = True


def mk_app(*routers, db: FakeDB, user: Optional[FakeUser] = None) -> FastAPI:
    """
    Bare app with the given routers, problem+json handlers and overrides.

    Without `user`, `get_current_user` runs for real (no bearer → 401).
    SlowAPI decorators stay in place; conftest sets `RATE_LIMIT_TEST_BYPASS`.
    """
    from wildseries.core.exception_handlers import install_exception_handlers
    from wildseries.core.security import get_current_user
    from wildseries.db.session import get_async_db

    app = FastAPI()
    for r in routers:
        app.include_router(r)
    install_exception_handlers(app)

    async def _db_override():
        yield db

    app.dependency_overrides[get_async_db] = _db_override
    if user is not None:
        async def _user_override():
            return user
        app.dependency_overrides[get_current_user] = _user_override

    return app
