"""
Session/role resolution for a signed-in principal.

Why:
    After sign-in the UI must know whether the user already picked a role and
    submitted a profile. The backend is the source of truth; a local key-value
    store mirrors the answer so the client still reaches a definite state when
    the backend is slow or down (cache-then-reconcile).

Behavior:
    - `resolve_session` asks the backend for a Student (client) record and a
      Tutor record. Both lookups run concurrently but are reconciled in a fixed
      order: Student wins over Tutor.
    - Without a backend record the persisted hints are used.
    - Resolution never raises; failures degrade to the cached state.
    - Answers arriving after sign-out or a user switch are discarded.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol
import asyncio
import logging

from marketplace.errors import NetworkFailure, NotFound

from .domain import EMPTY_SESSION, Principal, Role, SessionPhase, SessionState, mask_email
from .stores import PROFILE_COMPLETE_KEY, USER_TYPE_KEY, KeyValueStore

logger = logging.getLogger("tutormatch.identity.session")


class SessionTransitionError(ValueError):
    """Raised when a state-machine move is not allowed in the current phase."""


class ProfileLookup(Protocol):
    async def get_client_by_email(self, email: str) -> Any: ...

    async def get_tutor_by_email(self, email: str) -> Any: ...


def _record_of(response: Any) -> Any:
    """Unwrap `{data: ...}` envelopes; plain records pass through."""
    if response is None:
        return None
    if isinstance(response, dict):
        return response.get("data")
    return getattr(response, "data", response)


class SessionResolver:
    """Owns the single in-process `SessionState` and its persisted mirror."""

    def __init__(self, lookup: ProfileLookup, store: KeyValueStore) -> None:
        self._lookup = lookup
        self._store = store
        self._state: SessionState = EMPTY_SESSION

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase

    def begin(self, principal: Principal, *, is_admin: bool = False) -> SessionState:
        """Enter `ROLE_UNSET` for a freshly reported principal."""
        self._state = SessionState(principal=principal, is_admin=is_admin)
        return self._state

    async def resolve_session(self, principal: Principal) -> SessionState:
        if self._state.principal != principal:
            self.begin(principal)

        role = await self._lookup_role(principal)
        if self._state.principal != principal:
            # Signed out or switched user while the lookups were in flight.
            logger.info("Discarding stale profile lookup for %s", mask_email(principal.email))
            return self._state
        if role is not None:
            self._state = self._state.evolve(role=role, profile_complete=True)
            self._persist((USER_TYPE_KEY, role.value), (PROFILE_COMPLETE_KEY, "true"))
            logger.info("Found existing %s profile for %s", role.value, mask_email(principal.email))
            return self._state

        cached_role, cached_complete = self._cached()
        self._state = self._state.evolve(role=cached_role, profile_complete=cached_complete)
        return self._state

    async def _lookup_role(self, principal: Principal) -> Optional[Role]:
        email = (principal.email or "").strip()
        if not email:
            return None
        student, tutor = await asyncio.gather(
            self._lookup.get_client_by_email(email),
            self._lookup.get_tutor_by_email(email),
            return_exceptions=True,
        )
        # Student precedence: an unknown Student answer blocks the Tutor answer.
        for role, outcome in ((Role.STUDENT, student), (Role.TUTOR, tutor)):
            if isinstance(outcome, NotFound):
                continue
            if isinstance(outcome, NetworkFailure):
                logger.warning("Profile lookup failed (%s): %s", role.value, outcome.code)
                return None
            if isinstance(outcome, BaseException):
                logger.warning("Profile lookup failed (%s): %s", role.value, outcome.__class__.__name__)
                return None
            if _record_of(outcome):
                return role
        return None

    def _cached(self) -> tuple[Optional[Role], bool]:
        role = Role.from_value(self._store.get(USER_TYPE_KEY))
        complete = self._store.get(PROFILE_COMPLETE_KEY) == "true"
        return role, bool(complete and role is not None)

    def _persist(self, *pairs: tuple[str, str]) -> None:
        """Write `pairs` to the store; OSError is logged, not raised."""
        try:
            for key, value in pairs:
                self._store.set(key, value)
        except OSError as exc:
            logger.warning("Session cache write failed: %s", exc.__class__.__name__)

    def clear_session(self) -> SessionState:
        self._state = EMPTY_SESSION
        try:
            self._store.remove(USER_TYPE_KEY)
            self._store.remove(PROFILE_COMPLETE_KEY)
        except OSError as exc:
            logger.warning("Session cache clear failed: %s", exc.__class__.__name__)
        return self._state

    def select_role(self, role: Role | str) -> SessionState:
        parsed = Role.from_value(role)
        if parsed is None:
            raise ValueError("invalid_role")
        if self._state.principal is None:
            raise SessionTransitionError("not_signed_in")
        if self._state.role == parsed:
            return self._state
        if self._state.phase is SessionPhase.READY:
            raise SessionTransitionError("role_locked")
        self._state = self._state.evolve(role=parsed)
        self._persist((USER_TYPE_KEY, parsed.value))
        return self._state

    def mark_profile_complete(self) -> SessionState:
        if self._state.principal is None:
            raise SessionTransitionError("not_signed_in")
        if self._state.role is None:
            raise SessionTransitionError("role_unset")
        self._state = self._state.evolve(profile_complete=True)
        self._persist((PROFILE_COMPLETE_KEY, "true"))
        return self._state


__all__ = ["ProfileLookup", "SessionResolver", "SessionTransitionError"]
