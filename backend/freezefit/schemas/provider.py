"""Provider-managed resources - business hours, gallery, therapists, services."""

from pydantic import BaseModel, Field

from freezefit.schemas.appointment import TIME_PATTERN
from freezefit.schemas.common import UpdateSchema


# --- Business hours -----------------------------------------------------------

class BusinessHoursCreate(BaseModel):
    institute_id: str = Field(min_length=1)
    day_of_week: int = Field(ge=0, le=6)
    open_time: str | None = Field(None, pattern=TIME_PATTERN)
    close_time: str | None = Field(None, pattern=TIME_PATTERN)
    is_open: bool = True


class BusinessHoursUpdate(UpdateSchema):
    day_of_week: int | None = Field(None, ge=0, le=6)
    open_time: str | None = Field(None, pattern=TIME_PATTERN)
    close_time: str | None = Field(None, pattern=TIME_PATTERN)
    is_open: bool | None = None


# --- Gallery ------------------------------------------------------------------

class GalleryImageCreate(BaseModel):
    institute_id: str = Field(min_length=1)
    image_url: str = Field(min_length=1)
    category: str = Field(min_length=1, max_length=50)


class GalleryImageUpdate(UpdateSchema):
    image_url: str | None = Field(None, min_length=1)
    category: str | None = Field(None, min_length=1, max_length=50)


# --- Therapists ---------------------------------------------------------------

class TherapistCreate(BaseModel):
    institute_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=255)
    experience: str | None = None
    certification: str | None = None
    additional_certification: str | None = None
    bio: str | None = None
    image_url: str | None = None
    is_active: bool = True


class TherapistUpdate(UpdateSchema):
    name: str | None = Field(None, min_length=1, max_length=255)
    experience: str | None = None
    certification: str | None = None
    additional_certification: str | None = None
    bio: str | None = None
    image_url: str | None = None
    is_active: bool | None = None


# --- Services -----------------------------------------------------------------

class ServiceCreate(BaseModel):
    institute_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=255)
    price: float = Field(ge=0)
    description: str | None = None
    duration: str | None = None


class ServiceUpdate(UpdateSchema):
    name: str | None = Field(None, min_length=1, max_length=255)
    price: float | None = Field(None, ge=0)
    description: str | None = None
    duration: str | None = None
