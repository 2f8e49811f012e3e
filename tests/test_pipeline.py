"""Tests for IngestionPipeline."""
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from gator.errors import DateFormatError, StoreError
from gator.ingestion import IngestionPipeline, parse_feed, parse_pub_date

from .conftest import GOOD_DATE


class TestParsePubDate:
    """Tests for the strict publication date format."""

    def test_rfc1123_with_numeric_zone(self):
        parsed = parse_pub_date(GOOD_DATE)

        assert parsed == datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone(timedelta(hours=-7)))

    @pytest.mark.parametrize("value", [
        "",
        "2006-01-02T15:04:05Z",
        "Mon, 02 Jan 2006 15:04:05 GMT",
        "02 Jan 2006 15:04:05 -0700",
        "Mon, 32 Jan 2006 15:04:05 -0700",
        "Mon, 2 Jan 2006 15:04:05 -0700",
        "Mon, 02 Jan 2006 15:04:05 Z",
        "Mon, 02 Jan 2006 15:04:05 +07:00",
        "Mon, 02 Jan 2006 15:4:5 -0700",
    ])
    def test_other_formats_rejected(self, value):
        with pytest.raises(ValueError):
            parse_pub_date(value)


@pytest.fixture
def feed_id():
    return uuid.uuid4()


@pytest.fixture
def pipeline(store, clock):
    return IngestionPipeline(store, clock=clock)


class TestIngest:
    """Tests for IngestionPipeline.ingest."""

    def test_inserts_every_entry(self, pipeline, store, feed_id, rss):
        document = parse_feed(rss([
            ("One", "https://example.com/1", "first", GOOD_DATE),
            ("Two", "https://example.com/2", "second", "Tue, 03 Jan 2006 10:00:00 +0000"),
        ]))

        report = pipeline.ingest(feed_id, document)

        assert (report.total_entries, report.attempted, report.inserted, report.skipped) == (2, 2, 2, 0)
        assert report.complete
        post = store.posts["https://example.com/2"]
        assert post.title == "Two"
        assert post.description == "second"
        assert post.feed_id == feed_id
        assert post.published_at == datetime(2006, 1, 3, 10, tzinfo=timezone.utc)
        assert post.created_at == post.updated_at

    def test_each_post_gets_fresh_id_and_timestamp(self, pipeline, store, feed_id, rss):
        document = parse_feed(rss([
            ("One", "https://example.com/1", "", GOOD_DATE),
            ("Two", "https://example.com/2", "", GOOD_DATE),
        ]))

        pipeline.ingest(feed_id, document)

        first, second = store.posts.values()
        assert first.id != second.id
        assert first.created_at < second.created_at

    def test_second_ingest_is_all_skips(self, pipeline, store, feed_id, rss):
        document = parse_feed(rss([
            ("One", "https://example.com/1", "", GOOD_DATE),
            ("Two", "https://example.com/2", "", GOOD_DATE),
        ]))
        pipeline.ingest(feed_id, document)
        stored = dict(store.posts)

        report = pipeline.ingest(feed_id, document)

        assert (report.attempted, report.inserted, report.skipped) == (2, 0, 2)
        assert report.error is None
        assert store.posts == stored

    def test_duplicate_does_not_overwrite(self, pipeline, store, feed_id, rss):
        pipeline.ingest(feed_id, parse_feed(rss([("Original", "https://example.com/1", "", GOOD_DATE)])))

        pipeline.ingest(feed_id, parse_feed(rss([("Edited", "https://example.com/1", "", GOOD_DATE)])))

        assert store.posts["https://example.com/1"].title == "Original"

    def test_same_link_in_two_feeds_stored_once(self, pipeline, store, rss):
        first_feed, second_feed = uuid.uuid4(), uuid.uuid4()
        document = parse_feed(rss([("Shared", "https://example.com/shared", "", GOOD_DATE)]))

        first = pipeline.ingest(first_feed, document)
        second = pipeline.ingest(second_feed, document)

        assert first.inserted == 1
        assert (second.inserted, second.skipped) == (0, 1)
        assert store.posts["https://example.com/shared"].feed_id == first_feed

    def test_html_entities_stored_unescaped(self, pipeline, store, feed_id, rss):
        pipeline.ingest(feed_id, parse_feed(rss([("A &amp;amp; B", "https://example.com/1", "", GOOD_DATE)])))

        assert store.posts["https://example.com/1"].title == "A & B"

    def test_bad_date_stops_document(self, pipeline, store, feed_id, rss):
        document = parse_feed(rss([
            ("Good", "https://example.com/1", "", GOOD_DATE),
            ("Bad", "https://example.com/2", "", "yesterday"),
            ("Never", "https://example.com/3", "", GOOD_DATE),
        ]))

        with pytest.raises(DateFormatError) as excinfo:
            pipeline.ingest(feed_id, document)

        error = excinfo.value
        assert error.pub_date == "yesterday"
        assert error.entry_title == "Bad"
        assert error.feed_id == feed_id
        assert str(feed_id) in str(error)
        assert (error.report.attempted, error.report.inserted) == (1, 1)
        assert not error.report.complete
        assert list(store.posts) == ["https://example.com/1"]
        assert ("insert", "https://example.com/3") not in store.calls

    def test_utc_letter_zone_is_a_bad_date(self, pipeline, store, feed_id, rss):
        document = parse_feed(rss([
            ("Zulu", "https://example.com/1", "", "Mon, 02 Jan 2006 15:04:05 Z"),
        ]))

        with pytest.raises(DateFormatError) as excinfo:
            pipeline.ingest(feed_id, document)

        assert excinfo.value.pub_date == "Mon, 02 Jan 2006 15:04:05 Z"
        assert store.posts == {}

    def test_empty_document(self, pipeline, store, feed_id, rss):
        report = pipeline.ingest(feed_id, parse_feed(rss([])))

        assert (report.total_entries, report.attempted, report.inserted, report.skipped) == (0, 0, 0, 0)
        assert report.error is None
        assert store.posts == {}

    def test_store_error_propagates_and_keeps_earlier_posts(self, store, clock, feed_id, rss):
        calls = []

        class FailingStore:
            def create_post(self, **fields):
                calls.append(fields["url"])
                if fields["url"].endswith("/2"):
                    raise StoreError("disk full")
                return store.create_post(**fields)

        document = parse_feed(rss([
            ("One", "https://example.com/1", "", GOOD_DATE),
            ("Two", "https://example.com/2", "", GOOD_DATE),
            ("Three", "https://example.com/3", "", GOOD_DATE),
        ]))

        with pytest.raises(StoreError, match="disk full") as excinfo:
            IngestionPipeline(FailingStore(), clock=clock).ingest(feed_id, document)

        assert calls == ["https://example.com/1", "https://example.com/2"]
        assert excinfo.value.report.inserted == 1
        assert "https://example.com/1" in store.posts
