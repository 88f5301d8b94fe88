"""Pydantic models for in-app notifications."""

from pydantic import BaseModel, Field

from models.types import NotificationType, UserID

ALERT_MATCH = "alert_match"
RATING_REMINDER = "rating_reminder"
REVIEW = "review"


class NotificationContent(BaseModel):
    """Localized title/message pair."""

    title: str = Field(..., min_length=1)
    message: str


class NotificationCreate(NotificationContent):
    """Notification row to insert.

    threshold_hours is only set on rating reminders and records which
    reminder step the row was sent for.
    """

    user_id: UserID
    type: NotificationType
    related_id: str | None = None
    is_read: bool = False
    threshold_hours: int | None = Field(None, gt=0)
