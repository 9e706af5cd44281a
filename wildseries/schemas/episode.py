# wildseries/schemas/episode.py

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wildseries.utils.slug import has_slug


class EpisodeIn(BaseModel):
    """Episode creation form; the slug is derived from `title`."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    season_id: UUID
    number: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=255)
    synopsis: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_has_slug(cls, v: str) -> str:
        if not has_slug(v):
            raise ValueError("Title must contain at least one letter or digit")
        return v


class EpisodeUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    season_id: Optional[UUID] = None
    number: Optional[int] = Field(None, ge=1)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    synopsis: Optional[str] = None
