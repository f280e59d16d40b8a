"""
Application wiring: build the session stack from configuration.

Why:
    UI shells (desktop, notebook, test harness) need the same composition:
    env file, startup guard, REST client, persisted store, resolver and the
    provider adapter. Keeping it in one helper avoids drift between them.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging

from identity_access.auth import AuthSession, IdentityProvider
from identity_access.session import SessionResolver
from identity_access.stores import FileKeyValueStore, KeyValueStore

from .api import MarketplaceClient
from .config import ensure_secure_config_on_startup, get_admin_emails, get_state_path, load_env_file


@dataclass
class AppContext:
    client: MarketplaceClient
    store: KeyValueStore
    resolver: SessionResolver
    auth: AuthSession

    async def aclose(self) -> None:
        self.auth.close()
        await self.client.aclose()


def build_app_context(
    provider: IdentityProvider,
    *,
    client: MarketplaceClient | None = None,
    store: KeyValueStore | None = None,
    load_env: bool = True,
) -> AppContext:
    """Compose and start the session stack.

    Behavior:
        - Loads `.env` (without overriding the environment) when `load_env`.
        - Runs the production guard; raises `SystemExit` when misconfigured.
        - Subscribes the `AuthSession` to provider events before returning.
    """
    logger = logging.getLogger("tutormatch.marketplace")
    if load_env:
        load_env_file()
    ensure_secure_config_on_startup()

    client = client or MarketplaceClient()
    store = store if store is not None else FileKeyValueStore(get_state_path())
    resolver = SessionResolver(client, store)
    auth = AuthSession(provider, resolver, admin_emails=get_admin_emails(), store=store)
    auth.start()
    logger.info("Session stack wired (api=%s)", client.base_url)
    return AppContext(client=client, store=store, resolver=resolver, auth=auth)


__all__ = ["AppContext", "build_app_context"]
