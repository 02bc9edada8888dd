"""Task schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskCreate(BaseModel):
    """Create a new task."""

    description: str = Field(..., min_length=1, max_length=1000)
    completed: bool = False

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    completed: bool
    owner_id: int
    created_at: datetime
    updated_at: datetime
