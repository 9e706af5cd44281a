# wildseries/schemas/program.py

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wildseries.utils.slug import has_slug

_URL_PATTERN = r"^https?://\S+$"


# ──────────────── Program form ────────────────
class ProgramIn(BaseModel):
    """Program creation form. The slug and owner are set server-side."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: str = Field(..., min_length=1, max_length=255)
    summary: str = Field(..., min_length=1)
    poster: Optional[str] = Field(None, max_length=2048, pattern=_URL_PATTERN, description="Poster image URL")
    category_id: Optional[UUID] = None
    actor_ids: List[UUID] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def _title_has_slug(cls, v: str) -> str:
        if not has_slug(v):
            raise ValueError("Title must contain at least one letter or digit")
        return v


class ProgramUpdate(BaseModel):
    """Partial update; only fields that are sent are applied. Title edits keep the slug."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    summary: Optional[str] = Field(None, min_length=1)
    poster: Optional[str] = Field(None, max_length=2048, pattern=_URL_PATTERN)
    category_id: Optional[UUID] = None
    actor_ids: Optional[List[UUID]] = None

    # Omitted is fine; an explicit null would clear a NOT NULL column.
    @field_validator("title", "summary")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("Field may be omitted but not null")
        return v


class WatchlistStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_in_watchlist: bool = Field(..., alias="isInWatchlist")
