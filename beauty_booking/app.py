"""Application facade used by the UI layer"""

from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from .core.date_policy import MOVE_PAST_MESSAGE, BOOK_PAST_MESSAGE, DatePolicy
from .models.booking import Booking, DayCapacity
from .models.user import Session
from .services.account_directory import AccountDirectory
from .services.booking_ledger import BookingLedger
from .services.session_holder import SessionHolder
from .storage.kv_store import JsonFileStore
from .utils.config import CONFIG_DIR, Settings, load_settings
from .utils.exceptions import (
    BookingNotActiveError,
    BookingNotFoundError,
    NotAuthenticatedError,
    ValidationError,
)
from .utils.logger import get_logger, setup_logger

logger = get_logger(__name__)

DateInput = Union[date, str]


class BookingApp:
    """
    Wires the store, directory, session holder and ledger together.

    Booking operations take the caller's Session explicitly; the UI obtains
    it from login() or current_session() and passes it back in.
    """

    def __init__(self, settings: Optional[Settings] = None, config_dir: Union[str, Path] = CONFIG_DIR):
        self.config_dir = Path(config_dir)
        self.settings = settings
        self.store: Optional[JsonFileStore] = None
        self.accounts: Optional[AccountDirectory] = None
        self.sessions: Optional[SessionHolder] = None
        self.ledger: Optional[BookingLedger] = None
        self.date_policy = DatePolicy()

    def initialize(self) -> "BookingApp":
        """Load configuration, set up logging and open the store"""
        if self.settings is None:
            self.settings = load_settings(self.config_dir)

        log = self.settings.logging
        setup_logger(
            log_level=log.level,
            log_format=log.format,
            file_path=log.file_path,
            max_bytes=log.max_bytes,
            backup_count=log.backup_count,
        )

        storage = self.settings.storage
        users_key = f"{storage.key_prefix}_users"
        session_key = f"{storage.key_prefix}_session"
        bookings_key = f"{storage.key_prefix}_bookings"

        self.store = JsonFileStore(Path(storage.data_dir))
        self.store.ensure(users_key, [])
        self.store.ensure(bookings_key, [])
        self.store.ensure(session_key, None)

        self.accounts = AccountDirectory(
            self.store, users_key=users_key, bcrypt_rounds=self.settings.auth.bcrypt_rounds
        )
        self.sessions = SessionHolder(self.store, session_key=session_key)
        self.ledger = BookingLedger(
            self.store, bookings_key=bookings_key, max_per_day=self.settings.booking.max_per_day
        )

        logger.info(
            "Booking app initialized",
            app_name=self.settings.app.name,
            version=self.settings.app.version,
            environment=self.settings.app.environment,
            data_dir=storage.data_dir,
            max_per_day=self.settings.booking.max_per_day,
        )
        return self

    # ---- Auth ----

    def register(self, name: str, email: str, password: str) -> None:
        self.accounts.register(name, email, password)

    def login(self, email: str, password: str) -> Session:
        user = self.accounts.authenticate(email, password)
        return self.sessions.start(user)

    def logout(self) -> None:
        self.sessions.end()

    def current_session(self) -> Optional[Session]:
        return self.sessions.current()

    # ---- Bookings ----

    def _require_session(self, session: Optional[Session]) -> Session:
        if session is None:
            raise NotAuthenticatedError("Please log in first.")
        return session

    def book(self, session: Optional[Session], service: str, appt_date: Optional[DateInput], note: str = "") -> Booking:
        session = self._require_session(session)
        service = (service or "").strip()
        if not service or not appt_date:
            raise ValidationError("Please choose a service and a date.")

        day = self.date_policy.parse(appt_date)
        self.date_policy.ensure_not_past(day, BOOK_PAST_MESSAGE)
        return self.ledger.create(session.user_id, service, day, note or "")

    def reschedule(self, session: Optional[Session], booking_id: str, new_date: Optional[DateInput]) -> Booking:
        self._require_session(session)
        if not new_date:
            raise ValidationError("Pick a date.")

        day = self.date_policy.parse(new_date)
        self.date_policy.ensure_not_past(day, MOVE_PAST_MESSAGE)

        booking = self.ledger.find(booking_id)
        if booking is None:
            raise BookingNotFoundError("Booking not found.")
        if not booking.is_active:
            raise BookingNotActiveError("Only active appointments can be changed.")
        return self.ledger.reschedule(booking_id, day)

    def cancel(self, session: Optional[Session], booking_id: str) -> None:
        self._require_session(session)
        self.ledger.cancel(booking_id)

    def my_bookings(self, session: Optional[Session]) -> List[Booking]:
        session = self._require_session(session)
        return self.ledger.list_for_user(session.user_id)

    def capacity_on(self, appt_date: DateInput) -> DayCapacity:
        return self.ledger.capacity_on(self.date_policy.parse(appt_date))
