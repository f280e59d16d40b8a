"""
Category classifier for tutor and student listings.

Why:
    Both directory views let users narrow listings by education level or
    purpose. Listings carry free-text subjects (and students an education
    level), so membership is inferred by case-insensitive substring triggers
    from a fixed taxonomy.

Design:
    A static mapping from category tag to trigger tuple, iterated uniformly.
    Categories are not a partition: one listing may match several of them.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, TypeVar

L = TypeVar("L")


class Category(str, Enum):
    ALL = "all"
    ELEMENTARY = "elementary"
    MIDDLE = "middle"
    HIGH = "high"
    COLLEGE = "college"
    MEDICAL_SCHOOL = "medical"
    JOB_APPLICATION = "job"

    @classmethod
    def parse(cls, value: "Category | str") -> "Category":
        if isinstance(value, Category):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            squashed = key.replace("_", "").replace(" ", "").replace("-", "")
            for member in cls:
                if key == member.value or squashed == member.name.replace("_", "").lower():
                    return member
        raise ValueError("invalid_category")


SUBJECT_TRIGGERS: Mapping[Category, tuple[str, ...]] = {
    Category.ELEMENTARY: (
        "elementary", "basic", "kindergarten",
        "grade 1", "grade 2", "grade 3", "grade 4", "grade 5",
    ),
    Category.MIDDLE: ("middle", "grade 6", "grade 7", "grade 8", "intermediate"),
    Category.HIGH: (
        "high school", "grade 9", "grade 10", "grade 11", "grade 12",
        "ap ", "ib ", "sat", "act",
        "algebra", "geometry", "calculus", "physics", "chemistry", "biology",
    ),
    Category.COLLEGE: (
        "college", "university", "admission", "application",
        "essay writing", "personal statement",
    ),
    Category.MEDICAL_SCHOOL: (
        "mcat", "medical", "pre-med", "premed", "med school",
        "anatomy", "physiology", "biochemistry",
    ),
    Category.JOB_APPLICATION: ("job", "career", "interview", "resume", "professional", "workplace"),
}

# Matched against the student education level ("Middle School", "Some College", ...).
EDUCATION_TRIGGERS: Mapping[Category, tuple[str, ...]] = {
    Category.ELEMENTARY: ("elementary",),
    Category.MIDDLE: ("middle school",),
    Category.HIGH: ("high school",),
    Category.COLLEGE: ("college", "associate", "bachelor", "university"),
    Category.MEDICAL_SCHOOL: ("medical", "pre-med", "premed", "med school"),
}


def _contains_any(text: str, triggers: Sequence[str]) -> bool:
    return any(t in text for t in triggers)


def matches(category: Category | str, subjects: Iterable[Any] | None, education: Optional[str] = None) -> bool:
    """Return True when a listing with `subjects`/`education` belongs to `category`."""
    cat = Category.parse(category)
    if cat is Category.ALL:
        return True
    triggers = SUBJECT_TRIGGERS.get(cat, ())
    for subject in subjects or ():
        if isinstance(subject, str) and _contains_any(subject.lower(), triggers):
            return True
    if education:
        return _contains_any(education.lower(), EDUCATION_TRIGGERS.get(cat, ()))
    return False


def _field(listing: Any, name: str) -> Any:
    if isinstance(listing, Mapping):
        return listing.get(name)
    return getattr(listing, name, None)


def listing_matches(category: Category | str, listing: Any) -> bool:
    education = _field(listing, "education")
    return matches(category, _field(listing, "subjects"), education if isinstance(education, str) else None)


def filter_listings(category: Category | str, listings: Iterable[L]) -> Iterator[L]:
    """Lazily yield the listings of `category`, keeping their order."""
    cat = Category.parse(category)
    for listing in listings:
        if listing_matches(cat, listing):
            yield listing


def categories_for(subjects: Iterable[Any] | None, education: Optional[str] = None) -> list[Category]:
    subjects = list(subjects or ())
    return [c for c in Category if c is not Category.ALL and matches(c, subjects, education)]


__all__ = [
    "Category",
    "EDUCATION_TRIGGERS",
    "SUBJECT_TRIGGERS",
    "categories_for",
    "filter_listings",
    "listing_matches",
    "matches",
]
