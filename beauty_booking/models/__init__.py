"""Data models for users, sessions and bookings"""

from .user import User, Session
from .booking import Booking, BookingStatus, DayCapacity

__all__ = [
    "User",
    "Session",
    "Booking",
    "BookingStatus",
    "DayCapacity",
]
