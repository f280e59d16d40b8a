"""Profile onboarding use cases (student and tutor forms).

Why:
    Normalizes raw form values into backend records, submits them, and moves
    the session to READY on success. Validation lives here so it can be
    unit-tested without a backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Protocol, Sequence
import logging
import math

from identity_access.domain import Principal, Role, SessionState

from .api import MarketplaceClient
from .errors import ApiError
from .models import Client, Tutor

logger = logging.getLogger("tutormatch.marketplace.profiles")


class SessionControl(Protocol):
    @property
    def state(self) -> SessionState: ...

    def mark_profile_complete(self) -> SessionState: ...


@dataclass(frozen=True)
class ProfileSubmission:
    ok: bool
    message: str
    record: Tutor | Client | None = None


def _normalize_name(value: object, principal: Optional[Principal]) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        value = principal.display_name if principal else None
    if not isinstance(value, str) or not value.strip():
        raise ValueError("invalid_name")
    return value.strip()


def _normalize_email(value: object, principal: Optional[Principal]) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        value = principal.email if principal else None
    if not isinstance(value, str) or "@" not in value:
        raise ValueError("invalid_email")
    return value.strip()


def _normalize_subjects(value: object) -> List[str]:
    if isinstance(value, str):
        items: Sequence[Any] = value.split(",")
    elif isinstance(value, Sequence):
        items = value
    else:
        raise ValueError("invalid_subjects")
    normalized: List[str] = []
    for item in items:
        if not isinstance(item, str):
            raise ValueError("invalid_subjects")
        trimmed = item.strip()
        if trimmed and trimmed not in normalized:
            normalized.append(trimmed)
    if not normalized:
        raise ValueError("invalid_subjects")
    return normalized


def _positive_amount(value: object, code: str) -> float:
    try:
        amount = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(code) from exc
    if not math.isfinite(amount) or amount <= 0:
        raise ValueError(code)
    return amount


def _normalize_rating(value: object) -> float:
    if value is None or value == "":
        return 5.0
    try:
        rating = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError("invalid_rating") from exc
    if not 0 <= rating <= 5:
        raise ValueError("invalid_rating")
    return rating


def _text(form: Mapping[str, Any], key: str) -> str:
    value = form.get(key)
    return value.strip() if isinstance(value, str) else ""


def build_student_profile(form: Mapping[str, Any], principal: Optional[Principal]) -> Client:
    return Client(
        name=_normalize_name(form.get("name"), principal),
        email=_normalize_email(form.get("email"), principal),
        subjects=_normalize_subjects(form.get("subjects")),
        budget=_positive_amount(form.get("budget"), "invalid_budget"),
        description=_text(form, "description"),
        language=_text(form, "language"),
        location=_text(form, "location"),
        availability=_text(form, "availability"),
        education=_text(form, "education"),
    )


def build_tutor_profile(form: Mapping[str, Any], principal: Optional[Principal]) -> Tutor:
    return Tutor(
        name=_normalize_name(form.get("name"), principal),
        email=_normalize_email(form.get("email"), principal),
        subjects=_normalize_subjects(form.get("subjects")),
        pay=_positive_amount(form.get("pay"), "invalid_pay"),
        rating=_normalize_rating(form.get("rating")),
        bio=_text(form, "bio"),
        language=_text(form, "language"),
        location=_text(form, "location"),
        availability=_text(form, "availability"),
        experience=_text(form, "experience"),
        education=_text(form, "education"),
        certification=_text(form, "certification"),
    )


async def _submit(session: SessionControl, role: Role, build, create, form: Mapping[str, Any]) -> ProfileSubmission:
    state = session.state
    if state.role is not role:
        return ProfileSubmission(ok=False, message=f"Error: Select the {role.value} role first")
    try:
        record = build(form, state.principal)
    except ValueError as exc:
        return ProfileSubmission(ok=False, message=f"Error: {exc}")
    try:
        response = await create(record)
    except ApiError as exc:
        logger.warning("Profile creation failed (%s): %s", role.value, exc.code)
        return ProfileSubmission(ok=False, message=f"Error: {exc.message}")
    session.mark_profile_complete()
    return ProfileSubmission(ok=True, message=f"Success: {response.message}", record=response.data)


async def submit_student_profile(client: MarketplaceClient, session: SessionControl, form: Mapping[str, Any]) -> ProfileSubmission:
    return await _submit(session, Role.STUDENT, build_student_profile, client.create_client, form)


async def submit_tutor_profile(client: MarketplaceClient, session: SessionControl, form: Mapping[str, Any]) -> ProfileSubmission:
    return await _submit(session, Role.TUTOR, build_tutor_profile, client.create_tutor, form)


__all__ = [
    "ProfileSubmission",
    "SessionControl",
    "build_student_profile",
    "build_tutor_profile",
    "submit_student_profile",
    "submit_tutor_profile",
]
