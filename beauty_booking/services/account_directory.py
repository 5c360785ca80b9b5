"""
Account directory: registration and credential checks.
Users live in a single JSON list in the key-value store.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

import bcrypt
from pydantic import ValidationError as PydanticValidationError, validate_email

from ..models.user import User
from ..storage.kv_store import JsonFileStore
from ..utils.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    ValidationError,
)
from ..utils.ids import new_id
from ..utils.logger import get_logger

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password using bcrypt"""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash"""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash on disk
        return False


def normalize_email(email: str) -> str:
    """Canonical stored form: the bare address, trimmed and lowercased.

    Display-name forms like "Ann <a@x.com>" reduce to the address.
    Raises ValueError for anything that is not an email address.
    """
    _, address = validate_email((email or "").strip())
    return address.strip().lower()


class AccountDirectory:
    """Create and look up user accounts"""

    def __init__(self, store: JsonFileStore, users_key: str = "lbc_users", bcrypt_rounds: int = 12):
        self.store = store
        self.users_key = users_key
        self.bcrypt_rounds = bcrypt_rounds

    def _load_raw(self) -> List[Any]:
        return self.store.get_list(self.users_key)

    def list_users(self) -> List[User]:
        """Load all users from storage, skipping unreadable records"""
        users = []
        for i, item in enumerate(self._load_raw()):
            try:
                users.append(User(**item))
            except (PydanticValidationError, TypeError) as e:
                logger.warning("Skipping invalid user record", index=i, error=str(e))
        return users

    def find_by_email(self, email: str) -> Optional[User]:
        try:
            email = normalize_email(email)
        except ValueError:
            return None
        return next((u for u in self.list_users() if u.email == email), None)

    def find_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self.list_users() if u.id == user_id), None)

    def register(self, name: str, email: str, password: str) -> None:
        """
        Create a new user.

        - Name is trimmed; email is reduced to its lowercased address.
        - Email must be unique (case-insensitive).
        - Password is stored only as a bcrypt hash.
        """
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email or not password:
            raise ValidationError("All fields are required.")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError("Password is too long.")
        try:
            email = normalize_email(email)
        except ValueError:
            raise ValidationError("Please enter a valid email address.")

        # Unreadable records are kept on disk and still reserve their email
        raw_users = self._load_raw()
        taken = {
            str(item.get("email", "")).strip().lower()
            for item in raw_users
            if isinstance(item, dict)
        }
        if email in taken:
            raise DuplicateEmailError("Email already registered.")

        user = User(
            id=new_id(),
            name=name,
            email=email,
            password_hash=hash_password(password, self.bcrypt_rounds),
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        raw_users.append(user.model_dump(mode="json"))
        self.store.set(self.users_key, raw_users)
        logger.info("User registered", user_id=user.id)

    def authenticate(self, email: str, password: str) -> User:
        """Return the user matching email and password, else raise InvalidCredentialsError"""
        user = self.find_by_email(email)
        if user is None or not verify_password(password or "", user.password_hash):
            logger.info("Login rejected")
            raise InvalidCredentialsError("Invalid email or password.")
        return user
