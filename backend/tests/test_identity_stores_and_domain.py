"""
Persisted session hints and the domain invariants.

The file store must survive a "reload" (new instance, same path), treat a
corrupt file as empty and keep the two session keys independent.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from identity_access.domain import (
    Principal,
    Role,
    SessionPhase,
    SessionState,
    is_admin_email,
    mask_email,
    parse_admin_emails,
)
from identity_access.stores import (
    PROFILE_COMPLETE_KEY,
    USER_TYPE_KEY,
    FileKeyValueStore,
    InMemoryKeyValueStore,
)


def test_file_store_survives_reload(tmp_path: Path):
    path = tmp_path / "nested" / "state.json"
    FileKeyValueStore(path).set(USER_TYPE_KEY, "tutor")

    reloaded = FileKeyValueStore(path)
    assert reloaded.get(USER_TYPE_KEY) == "tutor"
    assert reloaded.get(PROFILE_COMPLETE_KEY) is None

    reloaded.remove(USER_TYPE_KEY)
    assert FileKeyValueStore(path).get(USER_TYPE_KEY) is None


def test_file_store_ignores_corrupt_content(tmp_path: Path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    store = FileKeyValueStore(path)

    assert store.get(USER_TYPE_KEY) is None
    store.set(PROFILE_COMPLETE_KEY, "true")
    assert store.get(PROFILE_COMPLETE_KEY) == "true"


def test_file_store_ignores_non_object_json(tmp_path: Path):
    path = tmp_path / "state.json"
    path.write_text('["tutor"]', encoding="utf-8")
    assert FileKeyValueStore(path).get(USER_TYPE_KEY) is None


def test_in_memory_store_remove_is_tolerant():
    store = InMemoryKeyValueStore()
    store.remove("missing")
    store.set("k", "v")
    assert store.snapshot() == {"k": "v"}


def test_session_state_invariants():
    with pytest.raises(ValueError):
        SessionState(principal=Principal(id="1"), profile_complete=True)
    with pytest.raises(ValueError):
        SessionState(role=Role.TUTOR)

    assert SessionState().phase is SessionPhase.UNAUTHENTICATED
    ready = SessionState(principal=Principal(id="1"), role=Role.TUTOR, profile_complete=True)
    assert ready.phase is SessionPhase.READY
    assert ready.logged_in is True


def test_role_from_value_is_lenient():
    assert Role.from_value(" Student ") is Role.STUDENT
    assert Role.from_value(Role.TUTOR) is Role.TUTOR
    assert Role.from_value(None) is None
    assert Role.from_value("admin") is None


def test_admin_helpers():
    admins = parse_admin_emails(" A@x.com ,, b@y.org ")
    assert admins == frozenset({"a@x.com", "b@y.org"})
    assert is_admin_email("a@X.COM", admins) is True
    assert is_admin_email(None, admins) is False
    assert is_admin_email("c@x.com", admins) is False


def test_mask_email():
    assert mask_email("ana@x.com") == "***@x.com"
    assert mask_email(None) == "-"
    assert mask_email("nobody") == "***"
