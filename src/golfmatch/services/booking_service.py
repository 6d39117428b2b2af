"""
Tee-time booking service.
"""

from datetime import date as date_type
from typing import Any

from golfmatch.api.backend import BackendClient
from golfmatch.config.types import AppConfig
from golfmatch.exceptions import BackendNotConfiguredError
from golfmatch.exceptions import GolfMatchError
from golfmatch.exceptions import ValidationError
from golfmatch.exceptions import handle_errors
from golfmatch.models.booking import Booking
from golfmatch.models.booking import BookingStatus
from golfmatch.services.auth_service import AuthService
from golfmatch.services.course_service import CourseService
from golfmatch.utils.logging_utils import EnhancedLoggerMixin

TEE_TIME_SLOTS = ('08:00', '09:00', '10:00', '11:00', '14:00', '15:00', '16:00', '17:00')
MIN_PLAYERS = 1
MAX_PLAYERS = 4
DEFAULT_PLAYERS = 2

def parse_date(value: Any, field: str = 'date') -> date_type:
    """Parse an ISO ``YYYY-MM-DD`` date.

    Raises:
        ValidationError: If the value is not a valid date
    """
    if isinstance(value, date_type):
        return value
    try:
        return date_type.fromisoformat(str(value))
    except ValueError as e:
        raise ValidationError(f"Invalid {field}, expected YYYY-MM-DD", {field: value}) from e

def parse_int(value: Any, field: str, minimum: int | None = None) -> int:
    """Accept ints and integral strings, reject bools and fractions."""
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field} must be an integer", {field: value})
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field} must be an integer", {field: value}) from e
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be at least {minimum}", {field: number})
    return number

def validate_booking_request(
    booking_date: Any,
    time: Any,
    players: Any,
    today: date_type | None = None
) -> tuple[date_type, str, int]:
    """Check a booking request, returning the normalized values.

    Raises:
        ValidationError: On missing or out-of-range values
    """
    if not booking_date or not time:
        raise ValidationError("Please select date and time")

    parsed = parse_date(booking_date)
    today = today or date_type.today()
    if parsed < today:
        raise ValidationError("Date cannot be in the past", {"date": parsed.isoformat(), "today": today.isoformat()})

    if time not in TEE_TIME_SLOTS:
        raise ValidationError("Unavailable tee time", {"time": time, "slots": list(TEE_TIME_SLOTS)})

    player_count = parse_int(players, 'players')
    if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
        raise ValidationError(
            f"Players must be between {MIN_PLAYERS} and {MAX_PLAYERS}",
            {"players": player_count}
        )

    return parsed, time, player_count

class BookingService(EnhancedLoggerMixin):
    """Creates and lists a user's tee-time bookings."""

    def __init__(
        self,
        config: AppConfig,
        backend: BackendClient | None = None,
        auth: AuthService | None = None,
        courses: CourseService | None = None
    ):
        super().__init__()
        self.config = config
        self._backend = backend
        self.auth = auth or AuthService(config, backend)
        self.courses = courses or CourseService(config, backend)
        self.set_log_context(service="bookings")

    @property
    def backend(self) -> BackendClient:
        if self._backend is None:
            self._backend = BackendClient.from_config(self.config)
        return self._backend

    def _require_backend(self, operation: str) -> None:
        if self._backend is None and self.config.demo_mode:
            raise BackendNotConfiguredError(operation)

    def _course_price(self, course_id: str) -> float | None:
        try:
            return self.courses.get_course(course_id).price
        except GolfMatchError as e:
            self.debug(f"No price for course: {e.message}", course_id=course_id)
            return None

    def create_booking(
        self,
        access_token: str | None,
        course_id: str | None,
        booking_date: Any,
        time: Any,
        players: Any = DEFAULT_PLAYERS
    ) -> Booking:
        """Book a tee time for the signed-in user.

        Raises:
            ValidationError: On invalid input
            AuthError: If not signed in
            BackendNotConfiguredError: In demo mode
        """
        if not course_id:
            raise ValidationError("Course is required")
        parsed_date, time, player_count = validate_booking_request(booking_date, time, players)
        self._require_backend("book a tee time")

        with handle_errors(GolfMatchError, "bookings", "create booking"):
            user = self.auth.get_user(access_token)
            price = self._course_price(course_id)

            row = {
                'user_id': user['id'],
                'course_id': course_id,
                'date': parsed_date.isoformat(),
                'time': time,
                'players': player_count,
                'status': BookingStatus.CONFIRMED.value,
            }
            if price is not None:
                row['total_price'] = price * player_count

            created = self.backend.insert('bookings', row, access_token=access_token)

        booking = Booking.from_dict({**row, **created})
        self.info("Booking confirmed", course_id=course_id, date=booking.date, time=booking.time)
        return booking

    def list_bookings(self, access_token: str | None) -> list[Booking]:
        """The signed-in user's bookings, newest date first."""
        self._require_backend("list bookings")
        user = self.auth.get_user(access_token)
        rows = self.backend.select(
            'bookings',
            filters={'user_id': user['id']},
            order=('date', False),
            access_token=access_token
        )
        return [Booking.from_dict(row) for row in rows]

    def next_booking(self, access_token: str | None, today: date_type | None = None) -> Booking | None:
        """Earliest booking on or after today that is not cancelled."""
        today = today or date_type.today()
        upcoming = []
        for booking in self.list_bookings(access_token):
            if not booking.is_active:
                continue
            try:
                booking_date = parse_date(booking.date)
            except ValidationError:
                self.warning("Skipping booking with invalid date", booking_id=booking.id, date=booking.date)
                continue
            if booking_date >= today:
                upcoming.append(booking)
        if not upcoming:
            return None
        return min(upcoming, key=lambda b: (b.date, b.time))
