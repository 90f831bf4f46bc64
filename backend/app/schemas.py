"""Pydantic schemas shared by the FastAPI endpoints and frontend."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SceneOut(_CamelModel):
    """Scene entry surfaced in API responses."""
    id: str
    scene_number: str
    description: str
    location: str
    slugline: Optional[str] = None
    time_of_day: Optional[str] = None
    cast: Optional[str] = None
    pages: Optional[str] = None


class ShootDayOut(_CamelModel):
    """Shoot day with its ordered scenes."""
    id: str
    day_number: int
    date: str
    title: str
    location: str
    call_time: str
    status: str
    scenes: List[SceneOut]
    notes: Optional[str] = None
    source_file: str
    original_text: str


class ScheduleResponse(_CamelModel):
    """Result of parsing one oneline schedule document."""
    source_file: str
    strategy: str
    day_count: int
    scene_count: int
    days: List[ShootDayOut] = Field(default_factory=list)


class ParseRequest(_CamelModel):
    """Payload accepted by the /parse endpoint."""
    text: str = Field(..., max_length=2_000_000)
    source_file: str = Field(default="Pasted Text", max_length=255)

    @field_validator("text", mode="before")
    @classmethod
    def require_text(cls, value: str) -> str:
        """Reject payloads that carry no schedule text at all."""
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Schedule text cannot be empty.")
        return value

    @field_validator("source_file", mode="before")
    @classmethod
    def sanitize_source_file(cls, value: Optional[str]) -> str:
        """Collapse whitespace, falling back to a generic label."""
        text = " ".join((value or "").split())
        return text or "Pasted Text"
