"""Review Schemas - rating bounded 1..5."""

from datetime import date

from pydantic import BaseModel, Field

from freezefit.schemas.common import UpdateSchema


class ReviewCreate(BaseModel):
    user_id: str = Field(min_length=1)
    institute_id: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    content: str = Field(min_length=1)
    review_date: date | None = None


class ReviewUpdate(UpdateSchema):
    rating: int | None = Field(None, ge=1, le=5)
    content: str | None = Field(None, min_length=1)
    review_date: date | None = None

    def updatable(self) -> dict:
        # review_date must reach SQLAlchemy as a date, not its JSON string
        return self.model_dump(exclude_unset=True, exclude_none=True)
