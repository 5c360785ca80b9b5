"""Calendar rules for booking dates"""

from datetime import date, datetime
from typing import Union

from ..utils.exceptions import PastDateError, ValidationError


BOOK_PAST_MESSAGE = "You cannot book for past dates."
MOVE_PAST_MESSAGE = "You cannot move to a past date."
ISO_DATE_FORMAT = "%Y-%m-%d"


class DatePolicy:
    """Normalizes "today" and rejects operations targeting past dates"""

    def today(self) -> date:
        """Current local calendar date"""
        return datetime.now().date()

    def parse(self, value: Union[date, str]) -> date:
        """Accept a date or an ISO YYYY-MM-DD string"""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return datetime.strptime(str(value).strip(), ISO_DATE_FORMAT).date()
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}. Use YYYY-MM-DD.")

    def is_past(self, value: date) -> bool:
        return value < self.today()

    def ensure_not_past(self, value: date, message: str = BOOK_PAST_MESSAGE) -> None:
        """Raise PastDateError when value is strictly before today"""
        if self.is_past(value):
            raise PastDateError(message)
