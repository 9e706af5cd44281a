# wildseries/schemas/season.py

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SeasonIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    program_id: UUID
    number: int = Field(..., ge=1, description="1-based season number")
    year: Optional[int] = Field(None, ge=1900, le=2100)
    description: Optional[str] = None


class SeasonUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    number: Optional[int] = Field(None, ge=1)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    description: Optional[str] = None
