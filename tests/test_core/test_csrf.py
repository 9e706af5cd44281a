# tests/test_core/test_csrf.py

from uuid import uuid4

from wildseries.core.csrf import (
    delete_intention,
    delete_token_for,
    generate_csrf_token,
    is_csrf_token_valid,
)


def test_token_is_bound_to_entity():
    a, b = uuid4(), uuid4()
    tok = delete_token_for(a)
    assert is_csrf_token_valid(delete_intention(a), tok)
    assert not is_csrf_token_valid(delete_intention(b), tok)


def test_token_is_deterministic_per_intention():
    eid = uuid4()
    assert generate_csrf_token(delete_intention(eid)) == delete_token_for(str(eid))


def test_missing_or_garbage_token_is_invalid():
    eid = uuid4()
    assert not is_csrf_token_valid(delete_intention(eid), None)
    assert not is_csrf_token_valid(delete_intention(eid), "")
    assert not is_csrf_token_valid(delete_intention(eid), "not-a-token")


def test_intention_format():
    eid = uuid4()
    assert delete_intention(eid) == f"delete{eid}"
