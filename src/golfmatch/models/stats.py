"""
Aggregate statistics over logged rounds.
"""

from dataclasses import asdict, dataclass
from typing import Any

@dataclass(frozen=True)
class RoundStats:
    """Handicap estimate and score summary."""
    handicap: float = 0.0
    average_score: int = 0
    best_score: int = 0
    rounds_played: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
