"""Profile Schemas - id may be supplied by the auth provider, else generated."""

from pydantic import BaseModel, Field, field_validator

from freezefit.core.domain_types import Gender, UserRole
from freezefit.schemas.common import UpdateSchema


class ProfileCreate(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    id: str | None = Field(None, min_length=1, max_length=64)
    full_name: str | None = None
    role: UserRole | None = None
    age: int | None = Field(None, ge=0, le=150)
    gender: Gender | None = None
    address: str | None = None
    image_url: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v


class ProfileUpdate(UpdateSchema):
    full_name: str | None = None
    role: UserRole | None = None
    age: int | None = Field(None, ge=0, le=150)
    gender: Gender | None = None
    address: str | None = None
    image_url: str | None = None
    is_active: bool | None = None
