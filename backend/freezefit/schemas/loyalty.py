"""Loyalty Schemas - points must be positive; source names the earning event."""

from pydantic import BaseModel, Field


class AddPoints(BaseModel):
    user_id: str = Field(min_length=1)
    points: int = Field(gt=0)
    source: str = Field(min_length=1, max_length=50)
    reference_id: str | None = None
    description: str | None = None


class RedeemGift(BaseModel):
    user_id: str = Field(min_length=1)
    gift_id: str = Field(min_length=1)
