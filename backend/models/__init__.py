"""Pydantic models for data validation and type checking."""

from models.alert import Alert, AlertCreate
from models.conversation import Conversation, Message
from models.delivery import DeliveryMatching
from models.notification import NotificationContent, NotificationCreate
from models.review import Review, ReviewCreate
from models.user import UserProfile

__all__ = [
    "Alert",
    "AlertCreate",
    "Conversation",
    "Message",
    "DeliveryMatching",
    "NotificationContent",
    "NotificationCreate",
    "Review",
    "ReviewCreate",
    "UserProfile",
]
