"""HTTP API blueprints, one per screen."""

from .auth import bp as auth_bp
from .bookings import bp as bookings_bp
from .courses import bp as courses_bp
from .health import bp as health_bp
from .rounds import bp as rounds_bp
from .stats import bp as stats_bp

BLUEPRINTS = [health_bp, courses_bp, auth_bp, bookings_bp, rounds_bp, stats_bp]

__all__ = ['BLUEPRINTS']
