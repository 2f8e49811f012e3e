"""
Shared pytest fixtures: an in-memory store and RSS document builders.
"""
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from gator.errors import NotFoundError, UniqueViolation
from gator.models import Feed, Post

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class FakeStore:
    """In-memory stand-in for gator.db.Store with a unique index on post URL."""

    def __init__(self):
        self.feeds = {}
        self.posts = {}
        self.calls = []

    def add_feed(self, name, url, last_fetched_at=None):
        now = datetime.now(timezone.utc)
        feed = Feed(
            id=uuid.uuid4(),
            created_at=now,
            updated_at=now,
            name=name,
            url=url,
            user_id=uuid.uuid4(),
            last_fetched_at=last_fetched_at,
        )
        self.feeds[feed.id] = feed
        return feed

    def get_next_feed_to_fetch(self):
        self.calls.append(("select", None))
        if not self.feeds:
            return None
        return min(
            self.feeds.values(),
            key=lambda f: (f.last_fetched_at is not None, f.last_fetched_at or EPOCH, f.id),
        )

    def mark_feed_fetched(self, feed_id, fetched_at):
        self.calls.append(("mark", feed_id))
        if feed_id not in self.feeds:
            raise NotFoundError(f"No feed with id {feed_id}")
        feed = self.feeds[feed_id]
        if feed.last_fetched_at is not None:
            fetched_at = max(feed.last_fetched_at, fetched_at)
        self.feeds[feed_id] = feed.model_copy(update={"last_fetched_at": fetched_at})
        return self.feeds[feed_id]

    def create_post(self, **fields):
        self.calls.append(("insert", fields["url"]))
        if fields["url"] in self.posts:
            raise UniqueViolation("duplicate key value", constraint="posts_url_key")
        post = Post(**fields)
        self.posts[post.url] = post
        return post


class TickingClock:
    """Clock that advances one second per call."""

    def __init__(self, start=datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


def build_rss(items, title="Test Feed", description="A feed for tests"):
    """Build RSS bytes from (title, link, description, pub_date) tuples."""
    body = "".join(
        f"<item><title>{t}</title><link>{l}</link>"
        f"<description>{d}</description><pubDate>{p}</pubDate></item>"
        for t, l, d, p in items
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel>'
        f"<title>{title}</title><link>https://example.com/</link>"
        f"<description>{description}</description>{body}"
        "</channel></rss>"
    ).encode("utf-8")


GOOD_DATE = "Mon, 02 Jan 2006 15:04:05 -0700"


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def rss():
    return build_rss
