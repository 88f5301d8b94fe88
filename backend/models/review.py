"""Pydantic models for ratings between delivery partners."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from models.types import DeliveryID, UserID


class ReviewCreate(BaseModel):
    """Review submitted by one participant about the other."""

    model_config = ConfigDict(str_strip_whitespace=True)

    delivery_id: DeliveryID = Field(..., min_length=1)
    reviewer_id: UserID = Field(..., min_length=1)
    reviewee_id: UserID = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = None

    @model_validator(mode="after")
    def no_self_review(self) -> "ReviewCreate":
        if self.reviewer_id == self.reviewee_id:
            raise ValueError("Users cannot review themselves")
        return self


class Review(ReviewCreate):
    id: str
    created_at: datetime | None = None
