"""
Round logging service.
"""

from typing import Any

from golfmatch.api.backend import BackendClient
from golfmatch.config.types import AppConfig
from golfmatch.exceptions import BackendNotConfiguredError
from golfmatch.exceptions import GolfMatchError
from golfmatch.exceptions import ValidationError
from golfmatch.exceptions import handle_errors
from golfmatch.models.round import Round
from golfmatch.services.auth_service import AuthService
from golfmatch.services.booking_service import parse_date
from golfmatch.services.booking_service import parse_int
from golfmatch.utils.logging_utils import EnhancedLoggerMixin

ROUND_COLUMNS = '*,course:courses(name,par)'

class RoundService(EnhancedLoggerMixin):
    """Logs played rounds and lists them."""

    def __init__(
        self,
        config: AppConfig,
        backend: BackendClient | None = None,
        auth: AuthService | None = None
    ):
        super().__init__()
        self.config = config
        self._backend = backend
        self.auth = auth or AuthService(config, backend)
        self.set_log_context(service="rounds")

    @property
    def demo_mode(self) -> bool:
        return self._backend is None and self.config.demo_mode

    @property
    def backend(self) -> BackendClient:
        if self._backend is None:
            self._backend = BackendClient.from_config(self.config)
        return self._backend

    def log_round(
        self,
        access_token: str | None,
        course_id: str | None,
        round_date: Any,
        score: Any,
        stableford_points: Any = None,
        notes: str | None = None
    ) -> Round:
        """Record a played round for the signed-in user.

        Raises:
            ValidationError: On missing or invalid values
            AuthError: If not signed in
            BackendNotConfiguredError: In demo mode
        """
        if not course_id or not round_date or score in (None, ''):
            raise ValidationError("Course, date and score are required")
        parsed_date = parse_date(round_date)
        score_value = parse_int(score, 'score', 1)

        row: dict[str, Any] = {
            'course_id': course_id,
            'date': parsed_date.isoformat(),
            'score': score_value,
        }
        if stableford_points not in (None, ''):
            row['stableford_points'] = parse_int(stableford_points, 'stableford_points', 0)
        if notes:
            row['notes'] = notes

        if self.demo_mode:
            raise BackendNotConfiguredError("log a round")

        with handle_errors(GolfMatchError, "rounds", "log round"):
            user = self.auth.get_user(access_token)
            row['user_id'] = user['id']
            created = self.backend.insert('rounds', row, access_token=access_token)

        self.info("Round logged", course_id=course_id, score=score_value)
        return Round.from_dict({**row, **created})

    def list_rounds(self, access_token: str | None) -> list[Round]:
        """The signed-in user's rounds with course name and par, newest first."""
        if self.demo_mode:
            return []
        user = self.auth.get_user(access_token)
        rows = self.backend.select(
            'rounds',
            columns=ROUND_COLUMNS,
            filters={'user_id': user['id']},
            order=('date', False),
            access_token=access_token
        )
        return [Round.from_dict(row) for row in rows]
