"""Pydantic models for saved delivery alerts."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.types import AlertID, AlertType, UserID

LOCATION_FIELDS = (
    "departure_country",
    "departure_city",
    "destination_country",
    "destination_city",
)


class AlertCreate(BaseModel):
    """Alert data submitted by a user (before ID assignment).

    A missing location field means "match any"; a country without a city
    means "any city in that country".
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    alert_type: AlertType
    departure_country: str | None = None
    departure_city: str | None = None
    destination_country: str | None = None
    destination_city: str | None = None
    email_notifications: bool = True

    @field_validator(*LOCATION_FIELDS, mode="before")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Alert(AlertCreate):
    """Complete alert record from database."""

    id: AlertID
    user_id: UserID
    is_active: bool = True
    created_at: datetime | None = None
