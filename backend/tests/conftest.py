"""
Pytest configuration for backend tests.

Why: Force AnyIO to use the asyncio backend and put `backend/` on sys.path so
tests import `identity_access`, `marketplace` and `matching` the same way the
application does.
"""
import logging
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
BACKEND_DIR = REPO_ROOT / "backend"
TESTS_DIR = BACKEND_DIR / "tests"
for p in (str(BACKEND_DIR), str(TESTS_DIR)):
    if p not in sys.path:
        sys.path.insert(0, p)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Clear configuration toggles per test.

    Why:
        Developers may have a `.env` or exported variables pointing at a real
        backend. Tests must never depend on them.
    """
    for var in (
        "TUTORMATCH_ENV",
        "MARKETPLACE_API_BASE_URL",
        "MARKETPLACE_HEALTH_URL",
        "MARKETPLACE_HTTP_TIMEOUT",
        "ADMIN_EMAILS",
        "CONTACT_MAILBOX",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("TUTORMATCH_STATE_PATH", str(tmp_path / "state.json"))
    yield


@pytest.fixture
def caplog_info(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO, logger="tutormatch")
    return caplog
