"""Narrow data-access adapter used by the poller."""

from datetime import datetime
from typing import Callable, ContextManager, Optional
from uuid import UUID

from psycopg import Connection

from ..models import Feed, Post
from .feeds import FeedManager
from .posts import PostManager

ConnectionFactory = Callable[[], ContextManager[Connection]]


class Store:
    """
    Bind the feed and post managers to a connection factory.

    Every operation borrows its own connection, so a connection that the
    server dropped is given back to the pool and replaced instead of being
    reused for the rest of a long polling run.
    """

    def __init__(self, connect: ConnectionFactory) -> None:
        self.connect = connect
        self.feeds = FeedManager()
        self.posts = PostManager()

    def get_next_feed_to_fetch(self) -> Optional[Feed]:
        with self.connect() as conn:
            return self.feeds.get_next_feed_to_fetch(conn)

    def mark_feed_fetched(self, feed_id: UUID, fetched_at: datetime) -> Feed:
        with self.connect() as conn:
            return self.feeds.mark_feed_fetched(conn, feed_id, fetched_at)

    def create_post(
        self,
        id: UUID,
        created_at: datetime,
        updated_at: datetime,
        title: str,
        url: str,
        description: str,
        published_at: datetime,
        feed_id: UUID,
    ) -> Post:
        with self.connect() as conn:
            return self.posts.create_post(
                conn,
                id=id,
                created_at=created_at,
                updated_at=updated_at,
                title=title,
                url=url,
                description=description,
                published_at=published_at,
                feed_id=feed_id,
            )
