"""Static blog post model."""

from datetime import date

from pydantic import BaseModel


class BlogPost(BaseModel):
    id: int
    title: str
    summary: str
    published: date
    reading_time: str
    body: str
