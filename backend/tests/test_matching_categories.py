"""
Category classifier: trigger table semantics and the lazy filter.
"""
from __future__ import annotations

import pytest

from marketplace.models import Client, Tutor
from matching.categories import Category, categories_for, filter_listings, listing_matches, matches


@pytest.mark.parametrize("subjects", [[], ["Piano"], ["anything at all"], None])
def test_all_matches_everything(subjects):
    assert matches(Category.ALL, subjects) is True


@pytest.mark.parametrize(
    "category, subjects",
    [
        (Category.HIGH, ["AP Calculus"]),
        (Category.HIGH, ["sat prep"]),
        (Category.ELEMENTARY, ["Kindergarten readiness"]),
        (Category.MIDDLE, ["Grade 7 science"]),
        (Category.COLLEGE, ["Personal Statement review"]),
        (Category.MEDICAL_SCHOOL, ["MCAT"]),
        (Category.JOB_APPLICATION, ["Interview Preparation"]),
    ],
)
def test_subject_triggers_are_case_insensitive_substrings(category, subjects):
    assert matches(category, subjects) is True


def test_unrelated_subjects_do_not_match():
    assert matches(Category.JOB_APPLICATION, ["Mathematics"]) is False
    assert matches(Category.MEDICAL_SCHOOL, ["Piano"]) is False
    assert matches(Category.HIGH, []) is False


def test_one_listing_may_sit_in_several_categories():
    assert categories_for(["Biochemistry"]) == [Category.HIGH, Category.MEDICAL_SCHOOL]
    assert categories_for(["College application essay"]) == [Category.COLLEGE]


def test_grade_one_trigger_also_matches_grade_ten():
    assert matches(Category.ELEMENTARY, ["Grade 10 English"]) is True


def test_non_string_subjects_are_ignored():
    assert matches(Category.HIGH, [None, 42, "Physics"]) is True
    assert matches(Category.HIGH, [None, 42]) is False


def test_education_only_counts_for_its_own_category():
    assert matches(Category.MIDDLE, ["Piano"], education="Middle School") is True
    assert matches(Category.HIGH, ["Piano"], education="Middle School") is False
    assert matches(Category.COLLEGE, [], education="Bachelor's degree") is True
    assert matches(Category.JOB_APPLICATION, [], education="College") is False


def test_listing_matches_reads_records_and_mappings():
    assert listing_matches("medical", Tutor(name="C", subjects=["MCAT"])) is True
    assert listing_matches("college", Client(name="S", email="s@x.com", subjects=["Piano"], education="Some College")) is True
    assert listing_matches("high", {"subjects": ["Geometry"]}) is True
    assert listing_matches("high", {"subjects": None, "education": 3}) is False


def test_filter_keeps_order_and_subset():
    tutors = [
        Tutor(name="A", subjects=["SAT Prep"]),
        Tutor(name="B", subjects=["Piano"]),
        Tutor(name="C", subjects=["MCAT"]),
        Tutor(name="D", subjects=["Chemistry"]),
    ]

    assert [t.name for t in filter_listings(Category.MEDICAL_SCHOOL, tutors)] == ["C"]
    assert [t.name for t in filter_listings(Category.HIGH, tutors)] == ["A", "D"]
    assert list(filter_listings(Category.ALL, tutors)) == tutors


def test_filter_is_lazy():
    seen = []

    def source():
        for name in ("A", "B", "C"):
            seen.append(name)
            yield {"name": name, "subjects": ["Algebra"]}

    it = filter_listings(Category.HIGH, source())
    assert seen == []
    assert next(it)["name"] == "A"
    assert seen == ["A"]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("all", Category.ALL),
        (" Medical ", Category.MEDICAL_SCHOOL),
        ("MedicalSchool", Category.MEDICAL_SCHOOL),
        ("job_application", Category.JOB_APPLICATION),
        (Category.HIGH, Category.HIGH),
    ],
)
def test_parse_accepts_values_and_names(raw, expected):
    assert Category.parse(raw) is expected


def test_parse_rejects_unknown_category():
    with pytest.raises(ValueError, match="invalid_category"):
        Category.parse("graduate")
    with pytest.raises(ValueError):
        list(filter_listings("graduate", []))
