"""Data models for gator."""

from .feed import Feed, FeedFollow
from .post import Post
from .user import User

__all__ = ["Feed", "FeedFollow", "Post", "User"]
