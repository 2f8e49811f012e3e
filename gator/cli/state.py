"""Shared state for CLI commands."""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

import psycopg
from rich.console import Console

from ..config import Config
from ..db import FeedManager, FollowManager, PostManager, UserManager, get_connection


class AppState:
    """Configuration, managers and console handed to every command handler."""

    def __init__(self, config: Config, console: Optional[Console] = None) -> None:
        self.config = config
        self.console = console or Console()
        self.users = UserManager()
        self.feeds = FeedManager()
        self.follows = FollowManager()
        self.posts = PostManager()

    @classmethod
    def from_path(cls, config_path: Optional[Path] = None) -> "AppState":
        return cls(Config(config_path))

    @contextmanager
    def connect(self) -> Generator[psycopg.Connection, None, None]:
        """Open a pooled database connection for one command."""
        with get_connection(self.config.get_db_config()) as conn:
            yield conn
