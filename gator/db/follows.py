"""Feed follow management in database."""

import uuid
from datetime import datetime, timezone
from typing import List
from uuid import UUID

from psycopg import Connection

from ..models import FeedFollow
from .errors import store_errors


class FollowManager:
    """Manage which users follow which feeds."""

    def create_feed_follow(
        self,
        conn: Connection,
        user_id: UUID,
        feed_id: UUID,
    ) -> FeedFollow:
        """Follow a feed; the result carries user and feed names."""
        now = datetime.now(timezone.utc)
        with store_errors("Could not follow feed"):
            with conn.transaction():
                row = conn.execute(
                    """
                    WITH inserted AS (
                        INSERT INTO feed_follows (id, created_at, updated_at, user_id, feed_id)
                        VALUES (%s, %s, %s, %s, %s)
                        RETURNING *
                    )
                    SELECT inserted.*,
                           users.name AS user_name,
                           feeds.name AS feed_name,
                           feeds.url AS feed_url
                    FROM inserted
                    JOIN users ON users.id = inserted.user_id
                    JOIN feeds ON feeds.id = inserted.feed_id
                    """,
                    (uuid.uuid4(), now, now, user_id, feed_id),
                ).fetchone()
        return FeedFollow(**row)

    def get_feed_follows_for_user(
        self,
        conn: Connection,
        user_id: UUID,
    ) -> List[FeedFollow]:
        """Get the feeds a user follows."""
        with store_errors("Could not list followed feeds"):
            rows = conn.execute(
                """
                SELECT feed_follows.*,
                       users.name AS user_name,
                       feeds.name AS feed_name,
                       feeds.url AS feed_url
                FROM feed_follows
                JOIN users ON users.id = feed_follows.user_id
                JOIN feeds ON feeds.id = feed_follows.feed_id
                WHERE feed_follows.user_id = %s
                ORDER BY feed_follows.created_at
                """,
                (user_id,),
            ).fetchall()
        return [FeedFollow(**row) for row in rows]

    def unfollow(self, conn: Connection, user_id: UUID, feed_id: UUID) -> bool:
        """Stop following a feed. Returns False if there was nothing to delete."""
        with store_errors("Could not unfollow feed"):
            with conn.transaction():
                cur = conn.execute(
                    "DELETE FROM feed_follows WHERE user_id = %s AND feed_id = %s",
                    (user_id, feed_id),
                )
        return cur.rowcount > 0
