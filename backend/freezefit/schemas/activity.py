"""Activity Schemas - institute_id, activity_type and title are required."""

from typing import Any

from pydantic import BaseModel, Field


class ActivityCreate(BaseModel):
    institute_id: str = Field(min_length=1)
    activity_type: str = Field(min_length=1, max_length=50)
    title: str = Field(min_length=1, max_length=255)
    user_id: str | None = None
    description: str | None = None
    reference_id: str | None = None
    metadata: dict[str, Any] | None = None
