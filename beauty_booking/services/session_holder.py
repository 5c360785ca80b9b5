"""Persisted current-session record"""

from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from ..models.user import Session, User
from ..storage.kv_store import JsonFileStore
from ..utils.logger import get_logger

logger = get_logger(__name__)


class SessionHolder:
    """Tracks the single logged-in identity. Sessions never expire."""

    def __init__(self, store: JsonFileStore, session_key: str = "lbc_session"):
        self.store = store
        self.session_key = session_key

    def start(self, user: User) -> Session:
        session = Session(user_id=user.id, name=user.name, email=user.email)
        self.store.set(self.session_key, session.model_dump(mode="json"))
        logger.info("Session started", user_id=user.id)
        return session

    def current(self) -> Optional[Session]:
        data = self.store.get(self.session_key, None)
        if not data:
            return None
        try:
            return Session(**data)
        except (PydanticValidationError, TypeError) as e:
            logger.warning("Ignoring invalid session record", error=str(e))
            return None

    def end(self) -> None:
        self.store.set(self.session_key, None)
        logger.info("Session ended")
