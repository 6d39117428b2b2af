"""
Curated course dataset bundled with the package.
"""

import json
import os
from functools import lru_cache

from golfmatch.models.course import Course

DATA_FILE = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'data', 'courses.json')

@lru_cache(maxsize=1)
def _load(path: str) -> tuple[Course, ...]:
    with open(path, encoding='utf-8') as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError(f"Curated dataset must be a list of courses: {path}")
    return tuple(Course.from_dict(record) for record in records)

def load_curated_courses(path: str = DATA_FILE) -> list[Course]:
    """Return the curated courses, loaded once per path.

    Each call returns fresh copies so callers may modify them.
    """
    return [Course.from_dict(course.to_dict()) for course in _load(path)]

def find_by_id(course_id: str, path: str = DATA_FILE) -> Course | None:
    for course in _load(path):
        if course.id == course_id:
            return Course.from_dict(course.to_dict())
    return None

def find_by_name(name: str, path: str = DATA_FILE) -> Course | None:
    """Exact name match, as used to merge backend rows with curated ones."""
    for course in _load(path):
        if course.name == name:
            return Course.from_dict(course.to_dict())
    return None
