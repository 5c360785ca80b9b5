"""Account, session and booking services"""

from .account_directory import AccountDirectory
from .booking_ledger import BookingLedger
from .session_holder import SessionHolder

__all__ = [
    "AccountDirectory",
    "BookingLedger",
    "SessionHolder",
]
