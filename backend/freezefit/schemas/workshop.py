"""Workshop Schemas - dates and times use the appointment formats."""

from pydantic import BaseModel, Field

from freezefit.schemas.appointment import DATE_PATTERN, TIME_PATTERN
from freezefit.schemas.common import UpdateSchema


class WorkshopCreate(BaseModel):
    institute_id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=255)
    workshop_date: str = Field(min_length=1, pattern=DATE_PATTERN)
    workshop_time: str = Field(min_length=1, pattern=TIME_PATTERN)
    description: str | None = None
    duration: str | None = None
    price: float | None = Field(None, ge=0)
    max_participants: int | None = Field(None, ge=1)


class WorkshopUpdate(UpdateSchema):
    title: str | None = Field(None, min_length=1, max_length=255)
    workshop_date: str | None = Field(None, pattern=DATE_PATTERN)
    workshop_time: str | None = Field(None, pattern=TIME_PATTERN)
    description: str | None = None
    duration: str | None = None
    price: float | None = Field(None, ge=0)
    max_participants: int | None = Field(None, ge=1)
    is_active: bool | None = None
