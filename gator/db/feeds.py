"""Feed management in database."""

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import UUID

from psycopg import Connection

from ..errors import NotFoundError
from ..models import Feed
from .errors import store_errors


class FeedManager:
    """Manage feeds in database."""

    def create_feed(
        self,
        conn: Connection,
        name: str,
        url: str,
        user_id: UUID,
    ) -> Feed:
        """Create a feed owned by a user."""
        now = datetime.now(timezone.utc)
        with store_errors(f"Could not create feed '{name}'"):
            with conn.transaction():
                row = conn.execute(
                    """
                    INSERT INTO feeds (id, created_at, updated_at, name, url, user_id)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    RETURNING *
                    """,
                    (uuid.uuid4(), now, now, name, url, user_id),
                ).fetchone()
        return Feed(**row)

    def get_feeds(self, conn: Connection) -> List[Dict]:
        """Get all feeds with the name of the user who added them."""
        with store_errors("Could not list feeds"):
            return conn.execute(
                """
                SELECT feeds.name, feeds.url, users.name AS user_name
                FROM feeds
                JOIN users ON users.id = feeds.user_id
                ORDER BY feeds.created_at, feeds.id
                """
            ).fetchall()

    def get_feed_by_url(self, conn: Connection, url: str) -> Feed:
        """Get feed by URL."""
        with store_errors(f"Could not look up feed '{url}'"):
            row = conn.execute(
                "SELECT * FROM feeds WHERE url = %s",
                (url,),
            ).fetchone()
        if row is None:
            raise NotFoundError(f"No feed with URL '{url}'")
        return Feed(**row)

    def get_next_feed_to_fetch(self, conn: Connection) -> Optional[Feed]:
        """
        Get the feed that has waited longest since its last fetch.

        Feeds never fetched come first; ties are broken by id.
        """
        with store_errors("Could not select next feed"):
            row = conn.execute(
                """
                SELECT * FROM feeds
                ORDER BY last_fetched_at ASC NULLS FIRST, id ASC
                LIMIT 1
                """
            ).fetchone()
        return Feed(**row) if row else None

    def mark_feed_fetched(
        self,
        conn: Connection,
        feed_id: UUID,
        fetched_at: datetime,
    ) -> Feed:
        """Set last_fetched_at, never moving it backwards."""
        with store_errors(f"Could not mark feed {feed_id} fetched"):
            with conn.transaction():
                row = conn.execute(
                    """
                    UPDATE feeds
                    SET last_fetched_at = GREATEST(last_fetched_at, %s),
                        updated_at = %s
                    WHERE id = %s
                    RETURNING *
                    """,
                    (fetched_at, datetime.now(timezone.utc), feed_id),
                ).fetchone()
        if row is None:
            raise NotFoundError(f"No feed with id {feed_id}")
        return Feed(**row)
