"""
Composition helper: guard, store location and provider subscription.
"""
from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from identity_access.domain import Principal, SessionPhase
from identity_access.stores import USER_TYPE_KEY, FileKeyValueStore
from marketplace.api import MarketplaceClient
from marketplace.wiring import build_app_context

from utils.fakes import FakeIdentityProvider  # type: ignore

pytestmark = pytest.mark.anyio


def _backend(request: httpx.Request) -> httpx.Response:
    if request.url.path.startswith("/api/clients/by-email/"):
        return httpx.Response(200, json={"data": {"id": 1, "name": "Ana", "email": "ana@x.com", "subjects": ["Algebra"]}})
    return httpx.Response(200, json={"data": None})


async def test_context_resolves_returning_student_and_persists(tmp_path: Path):
    provider = FakeIdentityProvider(Principal(id="u1", email="ana@x.com"))
    client = MarketplaceClient("http://backend.test/api", transport=httpx.MockTransport(_backend))

    ctx = build_app_context(provider, client=client, load_env=False)
    try:
        await ctx.auth.login()
        assert ctx.auth.state.phase is SessionPhase.READY
    finally:
        await ctx.aclose()

    assert isinstance(ctx.store, FileKeyValueStore)
    assert ctx.store.path == tmp_path / "state.json"
    assert FileKeyValueStore(tmp_path / "state.json").get(USER_TYPE_KEY) == "student"
    assert provider.callbacks == []


async def test_context_refuses_insecure_production(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TUTORMATCH_ENV", "production")
    monkeypatch.setenv("ADMIN_EMAILS", "boss@x.com")

    with pytest.raises(SystemExit):
        build_app_context(FakeIdentityProvider(), load_env=False)
