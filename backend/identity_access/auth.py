"""
Authentication session: glue between the identity provider and the resolver.

Why: The identity provider (popup sign-in, token persistence) is an external
capability. This adapter subscribes to its principal-change events, keeps the
admin flag current and drives `SessionResolver` so the UI only reads one
`SessionState`.

Security: Only the e-mail tail is logged; provider errors are re-raised to the
caller unchanged after logging.
"""
from __future__ import annotations

from typing import Awaitable, Callable, Iterable, Optional, Protocol
import logging

from .domain import Principal, Role, SessionState, is_admin_email, mask_email, parse_admin_emails
from .session import SessionResolver
from .stores import REDIRECT_AFTER_LOGIN_KEY, KeyValueStore

logger = logging.getLogger("tutormatch.identity.auth")

PrincipalCallback = Callable[[Optional[Principal]], Awaitable[None]]


class IdentityProvider(Protocol):
    async def sign_in(self) -> Principal: ...

    async def sign_out(self) -> None: ...

    def on_principal_changed(self, callback: PrincipalCallback) -> Callable[[], None]:
        """Register `callback`; return a function that unsubscribes it."""
        ...


class AuthSession:
    def __init__(
        self,
        provider: IdentityProvider,
        resolver: SessionResolver,
        *,
        admin_emails: Iterable[str] | str | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        if admin_emails is None:
            from marketplace.config import get_admin_emails

            admin_emails = get_admin_emails()
        self._provider = provider
        self._resolver = resolver
        self._admin_emails = parse_admin_emails(admin_emails)
        self._store = store
        self._unsubscribe: Optional[Callable[[], None]] = None
        self.loading = True

    @property
    def state(self) -> SessionState:
        return self._resolver.state

    def start(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._provider.on_principal_changed(self.handle_principal_changed)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def handle_principal_changed(self, principal: Optional[Principal]) -> None:
        try:
            if principal is None:
                self._resolver.clear_session()
                return
            admin = is_admin_email(principal.email, self._admin_emails)
            self._resolver.begin(principal, is_admin=admin)
            state = await self._resolver.resolve_session(principal)
            if state.principal != principal:
                return
            if self._store is not None:
                try:
                    self._store.remove(REDIRECT_AFTER_LOGIN_KEY)
                except OSError as exc:
                    logger.warning("Redirect hint not cleared: %s", exc.__class__.__name__)
            logger.info(
                "Session ready for %s phase=%s admin=%s",
                mask_email(principal.email),
                self._resolver.phase.value,
                admin,
            )
        finally:
            self.loading = False

    async def login(self) -> Principal:
        try:
            return await self._provider.sign_in()
        except Exception as exc:
            logger.error("Sign-in failed: %s", exc.__class__.__name__)
            raise

    async def logout(self) -> None:
        try:
            await self._provider.sign_out()
        except Exception as exc:
            logger.error("Sign-out failed: %s", exc.__class__.__name__)
            raise
        self._resolver.clear_session()

    def select_role(self, role: Role | str) -> SessionState:
        return self._resolver.select_role(role)

    def mark_profile_complete(self) -> SessionState:
        return self._resolver.mark_profile_complete()


__all__ = ["AuthSession", "IdentityProvider", "PrincipalCallback"]
