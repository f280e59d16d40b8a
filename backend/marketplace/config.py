"""
Configuration and startup security checks for the marketplace client.

Why: One place for backend URLs, timeouts and the admin list so the resolver,
the REST client and the view-models never drift apart. Values come from the
environment (optionally seeded from a `.env` file).

Permissions: Pure configuration; reads environment variables only. The guard
raises `SystemExit` on fatal misconfiguration in production-like environments.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional
import os

from dotenv import load_dotenv

from identity_access.domain import parse_admin_emails


API_BASE_URL_DEFAULT = "http://localhost:8080/api"
REQUEST_TIMEOUT_DEFAULT = 10.0
CONTACT_MAILBOX_DEFAULT = "coordinator@tutormatch.example"
STATE_PATH_DEFAULT = Path.home() / ".tutormatch" / "state.json"


def load_env_file(path: str | os.PathLike[str] | None = None) -> bool:
    """Load `.env` values without overriding variables already set."""
    return load_dotenv(dotenv_path=path, override=False)


def _is_prod_like(env: str) -> bool:
    env_l = (env or "").lower()
    return env_l in {"prod", "production", "stage", "staging"}


def get_environment() -> str:
    return (os.getenv("TUTORMATCH_ENV") or "dev").strip().lower()


def get_api_base_url() -> str:
    """Return the REST base URL (without trailing slash).

    Env:
        MARKETPLACE_API_BASE_URL – optional override; defaults to
        API_BASE_URL_DEFAULT.
    """
    return (os.getenv("MARKETPLACE_API_BASE_URL") or API_BASE_URL_DEFAULT).strip().rstrip("/")


def get_health_url() -> str:
    """Health endpoint lives beside the API root, not under it."""
    explicit = (os.getenv("MARKETPLACE_HEALTH_URL") or "").strip()
    if explicit:
        return explicit
    base = get_api_base_url()
    if base.endswith("/api"):
        base = base[: -len("/api")]
    return f"{base}/health"


def get_request_timeout() -> float:
    raw = (os.getenv("MARKETPLACE_HTTP_TIMEOUT") or "").strip()
    if not raw:
        return REQUEST_TIMEOUT_DEFAULT
    try:
        value = float(raw)
    except ValueError:
        return REQUEST_TIMEOUT_DEFAULT
    if value <= 0:
        return REQUEST_TIMEOUT_DEFAULT
    return value


def get_admin_emails() -> frozenset[str]:
    return parse_admin_emails(os.getenv("ADMIN_EMAILS", ""))


def get_contact_mailbox() -> str:
    return (os.getenv("CONTACT_MAILBOX") or CONTACT_MAILBOX_DEFAULT).strip()


def get_state_path() -> Path:
    raw: Optional[str] = os.getenv("TUTORMATCH_STATE_PATH")
    return Path(raw).expanduser() if raw else STATE_PATH_DEFAULT


def ensure_secure_config_on_startup() -> None:
    """Fail fast on insecure production configuration.

    Checks (prod/stage only):
    - API and health URLs must use https.
    - ADMIN_EMAILS must name at least one address.
    """
    if not _is_prod_like(get_environment()):
        return  # dev/test remain permissive

    for var_name, value in (
        ("MARKETPLACE_API_BASE_URL", get_api_base_url()),
        ("MARKETPLACE_HEALTH_URL", get_health_url()),
    ):
        if not value.lower().startswith("https://"):
            raise SystemExit(f"Refusing to start: {var_name} must use https in production.")

    if not get_admin_emails():
        raise SystemExit("Refusing to start: ADMIN_EMAILS is empty in production.")


__all__ = [
    "API_BASE_URL_DEFAULT",
    "CONTACT_MAILBOX_DEFAULT",
    "REQUEST_TIMEOUT_DEFAULT",
    "ensure_secure_config_on_startup",
    "get_admin_emails",
    "get_api_base_url",
    "get_contact_mailbox",
    "get_environment",
    "get_health_url",
    "get_request_timeout",
    "get_state_path",
    "load_env_file",
]
