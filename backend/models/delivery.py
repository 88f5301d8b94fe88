"""Pydantic models for delivery data."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from models.types import DeliveryID, DeliveryType, UserID

DELIVERED_STATUS = "DELIVERED"


class DeliveryMatching(BaseModel):
    """Delivery data needed for alert matching."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: DeliveryID
    type: DeliveryType
    sender_id: UserID
    from_country: str
    from_city: str
    to_country: str
    to_city: str
    deleted_at: datetime | None = None
