"""Shared type definitions for type checking.

Uses NewType for IDs so mypy can tell a DeliveryID from a UserID, and
TypeAlias/Literal for the small closed vocabularies stored in the database.
"""

from typing import Literal, NewType, TypeAlias

DeliveryID = NewType("DeliveryID", str)
UserID = NewType("UserID", str)
AlertID = NewType("AlertID", str)
ConversationID = NewType("ConversationID", str)

DeliveryType: TypeAlias = Literal["request", "offer"]
AlertType: TypeAlias = Literal["requests", "offers", "all"]
Locale: TypeAlias = str  # "en", "fr"
NotificationType: TypeAlias = str  # "alert_match", "rating_reminder", "review"
