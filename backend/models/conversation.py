"""Pydantic models for delivery conversations."""

from datetime import datetime

from pydantic import BaseModel

from models.types import ConversationID, DeliveryID, UserID

DELIVERY_CONFIRMATION = "deliveryConfirmation"


class Conversation(BaseModel):
    """Chat between the two participants of one delivery."""

    id: ConversationID
    delivery_id: DeliveryID
    participant1_id: UserID
    participant2_id: UserID

    def links(self, user_a: str, user_b: str) -> bool:
        """True if this conversation is between user_a and user_b (either order)."""
        return {self.participant1_id, self.participant2_id} == {user_a, user_b}


class Message(BaseModel):
    id: str
    conversation_id: ConversationID
    sender_id: UserID
    message_type: str = "text"
    created_at: datetime
