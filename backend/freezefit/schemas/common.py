"""Shared schema bases."""

from typing import Any

from pydantic import BaseModel


class UpdateSchema(BaseModel):
    """Base for partial updates."""

    def updatable(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True, mode="json")
