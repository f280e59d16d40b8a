"""
Identity domain types and simple helpers.

Why:
- Centralize roles and the session shape so the resolver, the provider seam
  and the view-models agree on one vocabulary.
- Keep terms aligned with the glossary (principal, role, profile completion).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional


class Role(str, Enum):
    """Role a user picks once per account. "Unset" is represented by None."""

    TUTOR = "tutor"
    STUDENT = "student"

    @classmethod
    def from_value(cls, value: object) -> Optional["Role"]:
        """Lenient parse for persisted values; unknown strings map to None."""
        if isinstance(value, Role):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


# Immutable to prevent accidental mutation.
ALLOWED_ROLES = frozenset(r.value for r in Role)


class SessionPhase(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    ROLE_UNSET = "role_unset"
    PROFILE_INCOMPLETE = "profile_incomplete"
    READY = "ready"


@dataclass(frozen=True)
class Principal:
    """Identity reported by the external provider (read-only here)."""

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None


@dataclass(frozen=True)
class SessionState:
    principal: Optional[Principal] = None
    role: Optional[Role] = None
    profile_complete: bool = False
    is_admin: bool = False

    def __post_init__(self) -> None:
        if self.profile_complete and self.role is None:
            raise ValueError("profile_complete_requires_role")
        if self.principal is None and (self.role is not None or self.profile_complete or self.is_admin):
            raise ValueError("anonymous_session_must_be_empty")

    @property
    def logged_in(self) -> bool:
        return self.principal is not None

    @property
    def phase(self) -> SessionPhase:
        if self.principal is None:
            return SessionPhase.UNAUTHENTICATED
        if self.role is None:
            return SessionPhase.ROLE_UNSET
        if not self.profile_complete:
            return SessionPhase.PROFILE_INCOMPLETE
        return SessionPhase.READY

    def evolve(self, **changes) -> "SessionState":
        return replace(self, **changes)


EMPTY_SESSION = SessionState()


def parse_admin_emails(raw: str | Iterable[str] | None) -> frozenset[str]:
    """Normalize a comma separated admin list (or an iterable of addresses)."""
    if not raw:
        return frozenset()
    items = raw.split(",") if isinstance(raw, str) else list(raw)
    return frozenset(i.strip().lower() for i in items if isinstance(i, str) and i.strip())


def is_admin_email(email: Optional[str], admin_emails: Iterable[str]) -> bool:
    if not email:
        return False
    return email.strip().lower() in parse_admin_emails(admin_emails)


def mask_email(email: Optional[str]) -> str:
    """Return a log-safe tail of an address, e.g. ``***@x.com``."""
    if not email:
        return "-"
    if "@" not in email:
        return "***"
    return "***@" + email.split("@", 1)[1]


__all__ = [
    "ALLOWED_ROLES",
    "EMPTY_SESSION",
    "Principal",
    "Role",
    "SessionPhase",
    "SessionState",
    "is_admin_email",
    "mask_email",
    "parse_admin_emails",
]
