"""Feed models."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .base import DBModel


class Feed(DBModel):
    """RSS feed registered by a user."""

    name: str = Field(..., description="Display name")
    url: str = Field(..., description="Feed URL (unique)")
    user_id: UUID = Field(..., description="Foreign key to the owning user")
    last_fetched_at: Optional[datetime] = Field(None, description="When the poller last picked this feed")


class FeedFollow(DBModel):
    """A user following a feed."""

    user_id: UUID = Field(..., description="Foreign key to users table")
    feed_id: UUID = Field(..., description="Foreign key to feeds table")
    user_name: Optional[str] = Field(None, description="Follower name, when joined")
    feed_name: Optional[str] = Field(None, description="Feed name, when joined")
    feed_url: Optional[str] = Field(None, description="Feed URL, when joined")
