"""Custom exceptions for the booking system"""

from typing import Optional


class BookingAppError(Exception):
    """Base exception for Beauty Booking.

    The message is user-facing and is shown verbatim by the UI layer.
    """

    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ConfigError(BookingAppError):
    """Settings file missing or invalid"""
    default_message = "Invalid configuration."


class StorageError(BookingAppError):
    """Persisted state could not be written"""
    default_message = "Could not save your changes."


class ValidationError(BookingAppError):
    """Form input is missing or malformed"""
    default_message = "All fields are required."


class DuplicateEmailError(BookingAppError):
    """Email already belongs to a registered user"""
    default_message = "Email already registered."


class InvalidCredentialsError(BookingAppError):
    """No user matches the email/password pair"""
    default_message = "Invalid email or password."


class NotAuthenticatedError(BookingAppError):
    """Operation requires a logged-in session"""
    default_message = "Please log in first."


class DateFullError(BookingAppError):
    """Target date is at daily capacity"""
    default_message = "Sorry, bookings are full for that day."


class BookingNotFoundError(BookingAppError):
    """No booking with the given id"""
    default_message = "Booking not found."


class BookingNotActiveError(BookingAppError):
    """Booking was canceled and can no longer be changed"""
    default_message = "Only active appointments can be changed."


class PastDateError(BookingAppError):
    """Target date is before today"""
    default_message = "You cannot book for past dates."
