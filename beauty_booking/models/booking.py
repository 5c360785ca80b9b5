"""Booking data models"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict


class BookingStatus(str, Enum):
    """Booking status enumeration"""
    ACTIVE = "active"
    CANCELED = "canceled"


class Booking(BaseModel):
    """Service appointment. Only appt_date and status change after creation."""
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str
    user_id: str
    service: str
    appt_date: date
    note: str = ""
    status: BookingStatus = BookingStatus.ACTIVE
    created_at: str  # ISO format timestamp, compared lexicographically

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE


class DayCapacity(BaseModel):
    """Occupancy of a single calendar date"""

    day: date
    used: int
    capacity: int

    @property
    def is_full(self) -> bool:
        return self.used >= self.capacity

    def label(self) -> str:
        return f"{self.used} / {self.capacity} booked"
