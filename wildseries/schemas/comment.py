# wildseries/schemas/comment.py

from pydantic import BaseModel, ConfigDict, Field


class CommentIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    comment: str = Field(..., min_length=1, max_length=5000)


class CommentUpdate(CommentIn):
    pass
