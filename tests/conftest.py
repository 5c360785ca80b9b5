import pytest

from beauty_booking.services.account_directory import AccountDirectory
from beauty_booking.services.booking_ledger import BookingLedger
from beauty_booking.services.session_holder import SessionHolder
from beauty_booking.storage.kv_store import JsonFileStore


@pytest.fixture
def store(tmp_path):
    """Store rooted in a temp dir so tests don't touch real data."""
    return JsonFileStore(tmp_path / "data")


@pytest.fixture
def directory(store):
    # Minimum bcrypt cost keeps the suite fast
    return AccountDirectory(store, bcrypt_rounds=4)


@pytest.fixture
def sessions(store):
    return SessionHolder(store)


@pytest.fixture
def ledger(store):
    return BookingLedger(store)
