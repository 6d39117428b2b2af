"""
Models package for the golf booking application.
Contains data models for core business objects.
"""

from .booking import Booking, BookingStatus
from .course import Course
from .round import Round
from .stats import RoundStats
from .user import AuthSession, Profile

__all__ = ['AuthSession', 'Booking', 'BookingStatus', 'Course', 'Profile', 'Round', 'RoundStats']
