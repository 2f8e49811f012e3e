"""Post storage."""

from datetime import datetime
from typing import List
from uuid import UUID

from psycopg import Connection

from ..errors import StoreError, UniqueViolation
from ..models import Post
from .errors import store_errors

POST_URL_CONSTRAINT = "posts_url_key"


class PostManager:
    """Insert and read ingested posts."""

    def create_post(
        self,
        conn: Connection,
        id: UUID,
        created_at: datetime,
        updated_at: datetime,
        title: str,
        url: str,
        description: str,
        published_at: datetime,
        feed_id: UUID,
    ) -> Post:
        """
        Insert a post.

        Raises:
            UniqueViolation: a post with this URL already exists
            StoreError: any other database failure
        """
        try:
            with store_errors(f"Could not store post '{url}'"):
                with conn.transaction():
                    row = conn.execute(
                        """
                        INSERT INTO posts (
                            id, created_at, updated_at, title, url,
                            description, published_at, feed_id
                        ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                        RETURNING *
                        """,
                        (id, created_at, updated_at, title, url, description, published_at, feed_id),
                    ).fetchone()
        except UniqueViolation as e:
            if e.constraint != POST_URL_CONSTRAINT:
                # e.g. primary key collision, not a re-ingested entry
                raise StoreError(str(e)) from e
            raise
        return Post(**row)

    def get_posts_for_user(
        self,
        conn: Connection,
        user_id: UUID,
        limit: int,
    ) -> List[Post]:
        """Get newest posts from the feeds a user follows."""
        with store_errors("Could not fetch posts"):
            rows = conn.execute(
                """
                SELECT posts.*
                FROM feed_follows
                JOIN posts ON posts.feed_id = feed_follows.feed_id
                WHERE feed_follows.user_id = %s
                ORDER BY posts.published_at DESC
                LIMIT %s
                """,
                (user_id, limit),
            ).fetchall()
        return [Post(**row) for row in rows]
