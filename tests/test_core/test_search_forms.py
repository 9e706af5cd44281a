# tests/test_core/test_search_forms.py

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from wildseries.core.exception_handlers import install_exception_handlers
from wildseries.schemas.program import ProgramUpdate
from wildseries.utils.forms import bind_form
from wildseries.utils.search import contains_pattern


# ─────────────────────────────────────────────────────────────
# contains_pattern
# ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("term", [None, "", "   "])
def test_blank_search_means_no_filter(term):
    assert contains_pattern(term) is None


def test_pattern_wraps_and_trims():
    assert contains_pattern("  Walk ") == "%Walk%"


def test_like_wildcards_are_escaped():
    assert contains_pattern("100%_off\\") == "%100\\%\\_off\\\\%"


# ─────────────────────────────────────────────────────────────
# bind_form
# ─────────────────────────────────────────────────────────────

def _client() -> TestClient:
    app = FastAPI()
    install_exception_handlers(app)

    @app.post("/edit")
    async def edit(request: Request):
        payload = await bind_form(request, ProgramUpdate)
        return payload.model_dump(exclude_unset=True)

    return TestClient(app)


def test_bind_form_returns_only_sent_fields():
    r = _client().post("/edit", json={"title": "  New title  "})
    assert r.status_code == 200
    assert r.json() == {"title": "New title"}


def test_bind_form_empty_body_is_empty_update():
    r = _client().post("/edit", content=b"")
    assert r.status_code == 200
    assert r.json() == {}


def test_bind_form_invalid_json_is_422():
    r = _client().post("/edit", content=b"{nope", headers={"content-type": "application/json"})
    assert r.status_code == 422
    assert r.json()["errors"][0]["type"] == "json_invalid"


def test_bind_form_field_errors_are_prefixed_with_body():
    r = _client().post("/edit", json={"poster": "ftp://x", "extra": 1})
    assert r.status_code == 422
    locs = [tuple(e["loc"]) for e in r.json()["errors"]]
    assert ("body", "poster") in locs
    assert ("body", "extra") in locs
