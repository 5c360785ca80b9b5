"""Local appointment booking core for Lisa's Beauty Corner"""

from .app import BookingApp

__all__ = ["BookingApp"]
