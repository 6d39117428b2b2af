"""
Round model for logged scores.
"""

from dataclasses import asdict, dataclass
from typing import Any

DEFAULT_PAR = 72

@dataclass
class Round:
    """A played round with optional joined course name and par."""
    id: str | None
    user_id: str
    course_id: str
    date: str
    score: int
    stableford_points: int | None = None
    notes: str | None = None
    course_name: str | None = None
    course_par: int | None = None

    @property
    def par(self) -> int:
        return self.course_par or DEFAULT_PAR

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Round':
        """Create a Round from a ``rounds`` row, with ``courses`` joined if selected."""
        course = data.get('courses') or data.get('course') or {}
        stableford = data.get('stableford_points')
        return cls(
            id=str(data['id']) if data.get('id') is not None else None,
            user_id=str(data.get('user_id') or ''),
            course_id=str(data.get('course_id') or ''),
            date=str(data.get('date') or ''),
            score=int(data['score']),
            stableford_points=int(stableford) if stableford is not None else None,
            notes=data.get('notes'),
            course_name=course.get('name'),
            course_par=int(course['par']) if course.get('par') is not None else None
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
