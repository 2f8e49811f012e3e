"""Database management for gator."""

from .connection import close_connection_pool, get_connection, get_connection_pool
from .feeds import FeedManager
from .follows import FollowManager
from .init import init_database, validate_connection
from .posts import PostManager
from .store import Store
from .users import UserManager

__all__ = [
    "FeedManager",
    "FollowManager",
    "PostManager",
    "Store",
    "UserManager",
    "close_connection_pool",
    "get_connection",
    "get_connection_pool",
    "init_database",
    "validate_connection",
]
