"""Pydantic models for the comment board."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class CommentCreate(BaseModel):
    """A new comment posted by a visitor."""

    name: str = Field(min_length=1, max_length=80)
    message: str = Field(min_length=1, max_length=1000)

    @field_validator("name", "message", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v


class Comment(CommentCreate):
    """A stored comment."""

    id: str
    created_at: datetime
