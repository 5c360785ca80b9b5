"""User and session data models"""

from pydantic import BaseModel, ConfigDict, EmailStr


class User(BaseModel):
    """Registered customer account"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: EmailStr  # stored trimmed and lowercased
    password_hash: str  # bcrypt, never the plain password
    created_at: str  # ISO format timestamp


class Session(BaseModel):
    """Currently logged-in identity, denormalized for display"""
    model_config = ConfigDict(frozen=True)

    user_id: str
    name: str
    email: str
