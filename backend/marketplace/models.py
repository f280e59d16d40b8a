"""Record types exchanged with the marketplace backend."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

_SERVER_FIELDS = ("id", "created_at", "updated_at")


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _subjects(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(s) for s in value if s is not None]


def _int_or_none(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Tutor:
    name: str
    subjects: List[str] = field(default_factory=list)
    pay: float = 0.0
    email: str = ""
    rating: float = 0.0
    bio: str = ""
    language: str = ""
    location: str = ""
    availability: str = ""
    experience: str = ""
    education: str = ""
    certification: str = ""
    id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tutor":
        return cls(
            id=_int_or_none(data.get("id")),
            name=_str(data.get("name")),
            email=_str(data.get("email")),
            subjects=_subjects(data.get("subjects")),
            pay=_float(data.get("pay")),
            rating=_float(data.get("rating")),
            bio=_str(data.get("bio")),
            language=_str(data.get("language")),
            location=_str(data.get("location")),
            availability=_str(data.get("availability")),
            experience=_str(data.get("experience")),
            education=_str(data.get("education")),
            certification=_str(data.get("certification")),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_payload(self) -> Dict[str, Any]:
        return _payload(self)


@dataclass
class Client:
    """A student looking for tutoring (the backend calls them clients)."""

    name: str
    email: str
    subjects: List[str] = field(default_factory=list)
    budget: float = 0.0
    description: str = ""
    language: str = ""
    location: str = ""
    availability: str = ""
    education: str = ""
    id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Client":
        return cls(
            id=_int_or_none(data.get("id")),
            name=_str(data.get("name")),
            email=_str(data.get("email")),
            subjects=_subjects(data.get("subjects")),
            budget=_float(data.get("budget")),
            description=_str(data.get("description")),
            language=_str(data.get("language")),
            location=_str(data.get("location")),
            availability=_str(data.get("availability")),
            education=_str(data.get("education")),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_payload(self) -> Dict[str, Any]:
        return _payload(self)


def _payload(record: Any) -> Dict[str, Any]:
    body = {k: v for k, v in vars(record).items() if k not in _SERVER_FIELDS}
    body["subjects"] = list(body.get("subjects") or [])
    return body


@dataclass(frozen=True)
class AdminStats:
    tutors_count: int = 0
    clients_count: int = 0
    total_users: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdminStats":
        return cls(
            tutors_count=_int_or_none(data.get("tutors_count")) or 0,
            clients_count=_int_or_none(data.get("clients_count")) or 0,
            total_users=_int_or_none(data.get("total_users")) or 0,
        )


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    data: T
    message: str = ""
    status: str = ""


@dataclass(frozen=True)
class HealthStatus:
    status: str
    message: str = ""

    @property
    def healthy(self) -> bool:
        return self.status.lower() in {"ok", "healthy", "success"}


__all__ = ["AdminStats", "ApiResponse", "Client", "HealthStatus", "Tutor"]
