"""
Score statistics and handicap estimate.
"""

from decimal import ROUND_HALF_UP
from decimal import Decimal
from typing import Any

from golfmatch.config.types import AppConfig
from golfmatch.exceptions import AuthError
from golfmatch.models.round import Round
from golfmatch.models.stats import RoundStats
from golfmatch.services.round_service import RoundService
from golfmatch.utils.logging_utils import EnhancedLoggerMixin

def _round_half_up(value: float, places: str = '1') -> Decimal:
    return Decimal(str(value)).quantize(Decimal(places), rounding=ROUND_HALF_UP)

def compute_stats(rounds: list[Round], previous: RoundStats | None = None) -> RoundStats:
    """Summarize rounds.

    The handicap is the mean strokes over par (par 72 when unknown), one
    decimal, never negative. It is a rough estimate, not a WHS handicap.
    An empty list leaves ``previous`` unchanged.
    """
    if not rounds:
        return previous if previous is not None else RoundStats()

    scores = [r.score for r in rounds]
    count = len(scores)
    over_par = sum(r.score - r.par for r in rounds) / count

    return RoundStats(
        handicap=max(0.0, float(_round_half_up(over_par, '0.1'))),
        average_score=int(_round_half_up(sum(scores) / count)),
        best_score=min(scores),
        rounds_played=count
    )

class StatsService(EnhancedLoggerMixin):
    """Statistics for the signed-in user."""

    def __init__(self, config: AppConfig, rounds: RoundService | None = None):
        super().__init__()
        self.config = config
        self.rounds = rounds or RoundService(config)

    def get_user_stats(self, access_token: str | None) -> dict[str, Any]:
        """Rounds and statistics, zeroed when nobody is signed in."""
        try:
            rounds = self.rounds.list_rounds(access_token)
        except AuthError:
            self.debug("No session, returning empty statistics")
            rounds = []
        return {
            'stats': compute_stats(rounds).to_dict(),
            'rounds': [r.to_dict() for r in rounds]
        }
