"""Pydantic models for the contact form."""

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class ContactMessage(BaseModel):
    """Contact form submission."""

    name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=254, pattern=EMAIL_PATTERN)
    message: str = Field(min_length=1, max_length=5000)

    @field_validator("name", "email", "message", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v


class ContactResult(BaseModel):
    """Contact form response body."""

    success: bool
    message: str | None = None
