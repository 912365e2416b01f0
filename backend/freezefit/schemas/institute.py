"""Institute Schemas."""

from pydantic import BaseModel, Field

from freezefit.schemas.common import UpdateSchema


class InstituteCreate(BaseModel):
    institute_name: str = Field(min_length=1, max_length=255)
    owner_id: str | None = None
    address: str | None = None
    service_name: str | None = None
    image_url: str | None = None


class InstituteUpdate(UpdateSchema):
    institute_name: str | None = Field(None, min_length=1, max_length=255)
    owner_id: str | None = None
    address: str | None = None
    service_name: str | None = None
    image_url: str | None = None
