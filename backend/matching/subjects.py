"""Subject catalogue offered by the profile forms, with a plain substring search."""
from __future__ import annotations

from typing import Dict, List

SUBJECT_CATEGORIES: Dict[str, List[str]] = {
    "Mathematics": [
        "Mathematics", "Algebra", "Geometry", "Calculus", "Statistics", "Trigonometry",
        "Pre-Calculus", "Linear Algebra", "Differential Equations", "Discrete Mathematics",
        "Number Theory", "Applied Mathematics", "Elementary Math", "Basic Math", "Mathematical Modeling",
    ],
    "Sciences": [
        "Physics", "Chemistry", "Biology", "Biochemistry", "Organic Chemistry", "Inorganic Chemistry",
        "Physical Chemistry", "Analytical Chemistry", "Molecular Biology", "Cell Biology", "Genetics",
        "Microbiology", "Anatomy", "Physiology", "Botany", "Zoology", "Ecology", "Environmental Science",
        "Earth Science", "Geology", "Astronomy",
    ],
    "Computer Science": [
        "Computer Science", "Programming", "Python", "Java", "JavaScript", "C++", "C", "HTML", "CSS",
        "React", "Node.js", "Data Structures", "Algorithms", "Database Design", "SQL", "Web Development",
        "Mobile Development", "Machine Learning", "Artificial Intelligence", "Data Science", "Cybersecurity",
        "Software Engineering", "Computer Networks",
    ],
    "Languages": [
        "English", "Spanish", "French", "German", "Italian", "Portuguese", "Chinese (Mandarin)", "Japanese",
        "Korean", "Arabic", "Russian", "Latin", "Greek", "ESL (English as Second Language)", "English Literature",
        "Creative Writing", "Grammar", "Vocabulary", "Reading Comprehension", "Writing Skills",
    ],
    "Test Preparation": [
        "SAT Preparation", "ACT Preparation", "GRE Preparation", "GMAT Preparation", "LSAT Preparation",
        "MCAT Preparation", "TOEFL Preparation", "IELTS Preparation", "AP Biology", "AP Chemistry", "AP Physics",
        "AP Calculus", "AP Statistics", "AP English Language", "AP English Literature", "AP History",
        "AP Psychology", "AP Computer Science", "IB Biology", "IB Chemistry", "IB Physics", "IB Mathematics",
        "IB English", "IB History",
    ],
    "Elementary & K-12": [
        "Elementary Science", "Elementary Reading", "Elementary Writing", "Kindergarten",
        "Grade 1", "Grade 2", "Grade 3", "Grade 4", "Grade 5", "Grade 6", "Grade 7", "Grade 8",
        "Grade 9", "Grade 10", "Grade 11", "Grade 12", "Middle School Math", "Middle School Science",
        "High School Math", "High School Science", "High School English", "High School History",
    ],
    "Career & Admissions": [
        "College Admissions", "College Application Essays", "Personal Statement", "Essay Writing",
        "Resume Writing", "Interview Preparation", "Career Counseling", "Job Applications",
    ],
}

SUBJECTS: List[str] = sorted({s for group in SUBJECT_CATEGORIES.values() for s in group})


def subjects_by_category(category: str) -> List[str]:
    return list(SUBJECT_CATEGORIES.get(category, []))


def search_subjects(query: str) -> List[str]:
    """Case-insensitive substring search; a blank query returns everything."""
    q = (query or "").strip().lower()
    if not q:
        return list(SUBJECTS)
    return [s for s in SUBJECTS if q in s.lower()]


__all__ = ["SUBJECTS", "SUBJECT_CATEGORIES", "search_subjects", "subjects_by_category"]
