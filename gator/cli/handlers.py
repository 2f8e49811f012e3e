"""Command handlers.

Each handler receives the AppState and an open connection; handlers that
need a logged in user also receive the resolved User (see ``dispatch``).
``handle_agg`` is the exception and opens its own connections.
"""

from datetime import timedelta
from typing import Optional

from rich.markup import escape
from rich.table import Table

from ..config import parse_duration
from ..db import Store
from ..errors import NotFoundError
from ..ingestion import FeedFetcher
from ..models import User
from ..pipeline import PollScheduler
from .errors import CommandError


def handle_register(state, conn, name: str) -> User:
    """Create a user and log in as them."""
    user = state.users.create_user(conn, name)
    state.config.set_user(user.name)
    state.console.print(f"[green]✅ User '{escape(user.name)}' created and logged in[/green]")
    state.console.print(f"[dim]id={user.id} created_at={user.created_at.isoformat()}[/dim]")
    return user


def handle_login(state, conn, name: str) -> User:
    """Log in as an existing user."""
    try:
        user = state.users.get_user(conn, name)
    except NotFoundError as e:
        raise CommandError(f"Could not login user {name}: {e}") from e
    state.config.set_user(user.name)
    state.console.print(f"user set to: '{escape(user.name)}'")
    return user


def handle_reset(state, conn) -> int:
    """Delete every user and everything they own."""
    deleted = state.users.reset(conn)
    state.console.print(f"[yellow]Deleted {deleted} user(s)[/yellow]")
    return deleted


def handle_users(state, conn) -> None:
    """List users, marking the logged in one."""
    current = state.config.current_user_name
    for user in state.users.get_users(conn):
        suffix = " [bold](current)[/bold]" if user.name == current else ""
        state.console.print(f"* {escape(user.name)}{suffix}")


def handle_agg(
    state,
    interval: Optional[str] = None,
    cycles: Optional[int] = None,
) -> int:
    """
    Poll feeds until interrupted (or for ``cycles`` cycles).

    Runs without a dispatcher connection: the store borrows one from the
    pool per operation for as long as the loop runs.
    """
    poller_config = state.config.config.poller
    try:
        every: timedelta = parse_duration(interval) if interval else state.config.poll_interval
    except ValueError as e:
        raise CommandError(str(e)) from e

    state.console.print(f"Collecting feeds every {every}")
    with FeedFetcher(
        timeout=poller_config.fetch_timeout,
        user_agent=poller_config.user_agent,
    ) as fetcher:
        scheduler = PollScheduler(Store(state.connect), fetcher, every)
        return scheduler.run(max_cycles=cycles)


def handle_addfeed(state, conn, user: User, name: str, url: str) -> None:
    """Create a feed and follow it."""
    feed = state.feeds.create_feed(conn, name, url, user.id)
    state.console.print(f"[green]✅ Added feed '{escape(feed.name)}'[/green] ({escape(feed.url)})")
    handle_follow(state, conn, user, feed.url)


def handle_feeds(state, conn) -> None:
    """List every feed."""
    feeds = state.feeds.get_feeds(conn)
    if not feeds:
        state.console.print("[yellow]No feeds registered.[/yellow]")
        return

    table = Table(title="Feeds")
    table.add_column("#", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("URL", style="blue")
    table.add_column("User", style="magenta")
    for i, feed in enumerate(feeds, start=1):
        table.add_row(str(i), feed["name"], feed["url"], feed["user_name"])
    state.console.print(table)


def handle_follow(state, conn, user: User, url: str) -> None:
    """Follow an existing feed by URL."""
    try:
        feed = state.feeds.get_feed_by_url(conn, url)
    except NotFoundError as e:
        raise CommandError(f"Error getting feed for URL '{url}': {e}") from e
    follow = state.follows.create_feed_follow(conn, user.id, feed.id)
    state.console.print(
        f"User '{escape(follow.user_name)}' is now following feed '{escape(follow.feed_name)}'"
    )


def handle_following(state, conn, user: User) -> None:
    """List the feeds the current user follows."""
    follows = state.follows.get_feed_follows_for_user(conn, user.id)
    state.console.print(f"Feeds followed by {escape(user.name)}:")
    for follow in follows:
        state.console.print(f"* {escape(follow.feed_name)}")


def handle_unfollow(state, conn, user: User, url: str) -> None:
    """Stop following a feed by URL."""
    follows = state.follows.get_feed_follows_for_user(conn, user.id)
    followed = next((f for f in follows if f.feed_url == url), None)
    if followed is None:
        raise CommandError("you are not following this feed")
    state.follows.unfollow(conn, user.id, followed.feed_id)
    state.console.print(f"Unfollowed '{escape(followed.feed_name)}'")


def handle_browse(state, conn, user: User, limit: int = 2) -> None:
    """Show the newest posts from followed feeds."""
    if limit <= 0:
        raise CommandError("cannot fetch a non-positive number of posts")

    posts = state.posts.get_posts_for_user(conn, user.id, limit)
    if not posts:
        state.console.print("[yellow]No posts yet. Run 'gator agg' to collect some.[/yellow]")
        return

    for i, post in enumerate(posts, start=1):
        state.console.print(f"[bold]Post {i}[/bold] [dim]{post.published_at:%Y-%m-%d %H:%M}[/dim]")
        state.console.print(post.title, markup=False)
        state.console.print(post.description, markup=False)
        state.console.print(post.url, style="blue", markup=False)
        state.console.print()
