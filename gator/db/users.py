"""User management in database."""

import uuid
from datetime import datetime, timezone
from typing import List

from psycopg import Connection

from ..errors import NotFoundError
from ..models import User
from .errors import store_errors


class UserManager:
    """Manage users in database."""

    def create_user(self, conn: Connection, name: str) -> User:
        """Create a new user."""
        now = datetime.now(timezone.utc)
        with store_errors(f"Could not create user '{name}'"):
            with conn.transaction():
                row = conn.execute(
                    """
                    INSERT INTO users (id, created_at, updated_at, name)
                    VALUES (%s, %s, %s, %s)
                    RETURNING *
                    """,
                    (uuid.uuid4(), now, now, name),
                ).fetchone()
        return User(**row)

    def get_user(self, conn: Connection, name: str) -> User:
        """Get user by name."""
        with store_errors(f"Could not look up user '{name}'"):
            row = conn.execute(
                "SELECT * FROM users WHERE name = %s",
                (name,),
            ).fetchone()
        if row is None:
            raise NotFoundError(f"No such user: '{name}'")
        return User(**row)

    def get_users(self, conn: Connection) -> List[User]:
        """Get all users ordered by name."""
        with store_errors("Could not list users"):
            rows = conn.execute("SELECT * FROM users ORDER BY name").fetchall()
        return [User(**row) for row in rows]

    def reset(self, conn: Connection) -> int:
        """
        Delete all users.

        Feeds, follows and posts go with them through ON DELETE CASCADE.

        Returns:
            Number of users deleted
        """
        with store_errors("Could not reset users"):
            with conn.transaction():
                cur = conn.execute("DELETE FROM users")
        return cur.rowcount
