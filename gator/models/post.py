"""Post model for ingested feed entries."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from .base import DBModel


class Post(DBModel):
    """One entry ingested from a feed."""

    title: str = Field(..., description="Entry title")
    url: str = Field(..., description="Entry link (unique across all feeds)")
    description: str = Field("", description="Entry description")
    published_at: datetime = Field(..., description="Publication timestamp")
    feed_id: UUID = Field(..., description="Foreign key to feeds table")
