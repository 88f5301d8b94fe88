"""Pydantic model for the user fields notifications need."""

from pydantic import BaseModel, Field

from models.types import Locale, UserID


class UserProfile(BaseModel):
    """User display name, contact email and preferred locale."""

    id: UserID
    name: str | None = None
    email: str | None = Field(None, pattern=r"^[^@]+@[^@]+\.[^@]+$")
    locale: Locale | None = None
