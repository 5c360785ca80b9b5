"""
Booking ledger: appointment records and the per-day capacity rule.

Bookings are kept as one JSON list. Every operation re-reads the list, and
mutations write the whole list back, so the store is the only state.
"""

from datetime import date, datetime, timezone
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..models.booking import Booking, BookingStatus, DayCapacity
from ..storage.kv_store import JsonFileStore
from ..utils.exceptions import BookingNotFoundError, DateFullError, StorageError
from ..utils.ids import new_id
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_PER_DAY = 50


class BookingLedger:
    """Create, list, reschedule and cancel bookings within daily capacity"""

    def __init__(
        self,
        store: JsonFileStore,
        bookings_key: str = "lbc_bookings",
        max_per_day: int = DEFAULT_MAX_PER_DAY,
    ):
        self.store = store
        self.bookings_key = bookings_key
        self.max_per_day = max_per_day

    def _load_raw(self) -> List[Any]:
        return self.store.get_list(self.bookings_key)

    def _load(self) -> List[Booking]:
        """Parsed bookings for reading; unreadable records are skipped, never dropped"""
        bookings = []
        for i, item in enumerate(self._load_raw()):
            try:
                bookings.append(Booking(**item))
            except (PydanticValidationError, TypeError) as e:
                logger.warning("Skipping invalid booking record", index=i, error=str(e))
        return bookings

    @staticmethod
    def _index_of(records: List[Any], booking_id: str) -> Optional[int]:
        return next(
            (i for i, r in enumerate(records) if isinstance(r, dict) and r.get("id") == booking_id),
            None,
        )

    def active_count_on(self, day: date) -> int:
        """Number of active bookings on exactly this date"""
        # Counted from raw records so partially readable ones still hold their slot
        target = day.isoformat()
        return sum(
            1
            for r in self._load_raw()
            if isinstance(r, dict)
            and r.get("appt_date") == target
            and r.get("status") == BookingStatus.ACTIVE.value
        )

    def capacity_on(self, day: date) -> DayCapacity:
        return DayCapacity(day=day, used=self.active_count_on(day), capacity=self.max_per_day)

    def find(self, booking_id: str) -> Optional[Booking]:
        return next((b for b in self._load() if b.id == booking_id), None)

    def list_for_user(self, user_id: str) -> List[Booking]:
        """A user's bookings, newest created_at first; ties newest-inserted first"""
        mine = [b for b in self._load() if b.user_id == user_id]
        mine.reverse()
        # sorted() is stable, so equal timestamps keep the reversed insertion order
        return sorted(mine, key=lambda b: b.created_at, reverse=True)

    def create(self, user_id: str, service: str, day: date, note: str = "") -> Booking:
        if self.active_count_on(day) >= self.max_per_day:
            logger.info("Booking rejected, date full", date=day.isoformat())
            raise DateFullError("Sorry, bookings are full for that day.")

        records = self._load_raw()
        booking = Booking(
            id=new_id(),
            user_id=user_id,
            service=service,
            appt_date=day,
            note=note or "",
            status=BookingStatus.ACTIVE,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        records.append(booking.model_dump(mode="json"))
        self.store.set(self.bookings_key, records)
        logger.info("Booking created", booking_id=booking.id, user_id=user_id, date=day.isoformat())
        return booking

    def reschedule(self, booking_id: str, new_day: date) -> Booking:
        """
        Move a booking to another date.

        Capacity is checked against the target date's current active count,
        and only when the date actually changes.
        """
        records = self._load_raw()
        idx = self._index_of(records, booking_id)
        if idx is None:
            raise BookingNotFoundError("Booking not found.")

        try:
            booking = Booking(**records[idx])
        except PydanticValidationError as e:
            raise StorageError(f"Booking {booking_id} is unreadable: {e}")

        if booking.appt_date != new_day and self.active_count_on(new_day) >= self.max_per_day:
            logger.info("Reschedule rejected, date full", booking_id=booking_id, date=new_day.isoformat())
            raise DateFullError("That date is fully booked.")

        records[idx] = {**records[idx], "appt_date": new_day.isoformat()}
        self.store.set(self.bookings_key, records)
        logger.info(
            "Booking rescheduled",
            booking_id=booking_id,
            old_date=booking.appt_date.isoformat(),
            new_date=new_day.isoformat(),
        )
        return booking.model_copy(update={"appt_date": new_day})

    def cancel(self, booking_id: str) -> None:
        """Mark a booking canceled. Unknown ids are ignored."""
        records = self._load_raw()
        idx = self._index_of(records, booking_id)
        if idx is None:
            return

        records[idx] = {**records[idx], "status": BookingStatus.CANCELED.value}
        self.store.set(self.bookings_key, records)
        logger.info("Booking canceled", booking_id=booking_id)
