"""Service implementations."""

from .auth_service import AuthService
from .booking_service import BookingService
from .course_service import CourseService
from .round_service import RoundService
from .stats_service import StatsService


__all__ = [
    'AuthService',
    'BookingService',
    'CourseService',
    'RoundService',
    'StatsService',
]
