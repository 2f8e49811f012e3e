"""Tests for the RSS parser."""
import pytest

from gator.errors import FormatError
from gator.ingestion import parse_feed

from .conftest import GOOD_DATE


class TestParseFeed:
    """Tests for parse_feed."""

    def test_channel_and_entries_in_order(self, rss):
        data = rss([
            ("First", "https://example.com/1", "one", GOOD_DATE),
            ("Second", "https://example.com/2", "two", GOOD_DATE),
        ])

        document = parse_feed(data)

        assert document.title == "Test Feed"
        assert document.link == "https://example.com/"
        assert document.description == "A feed for tests"
        assert [e.title for e in document.entries] == ["First", "Second"]
        assert document.entries[1].link == "https://example.com/2"
        assert document.entries[0].description == "one"

    def test_pub_date_left_as_string(self, rss):
        document = parse_feed(rss([("T", "https://example.com/1", "d", "not a date")]))

        assert document.entries[0].pub_date == "not a date"

    def test_double_encoded_entities_unescaped(self, rss):
        data = rss(
            [("A &amp;amp; B", "https://example.com/1", "&amp;lt;p&amp;gt;hi", GOOD_DATE)],
            title="News &amp;amp; Views",
            description="Tom&amp;#39;s feed",
        )

        document = parse_feed(data)

        assert document.title == "News & Views"
        assert document.description == "Tom's feed"
        assert document.entries[0].title == "A & B"
        assert document.entries[0].description == "<p>hi"

    def test_unescape_runs_once(self, rss):
        document = parse_feed(rss([("x &amp;amp;lt; y", "https://example.com/1", "", GOOD_DATE)]))

        assert document.entries[0].title == "x &lt; y"

    def test_cdata_content(self):
        data = (
            b"<rss><channel><title>c</title><item>"
            b"<title><![CDATA[A &amp; B]]></title>"
            b"<link>https://example.com/1</link>"
            b"<description><![CDATA[<b>bold</b>]]></description>"
            b"</item></channel></rss>"
        )

        entry = parse_feed(data).entries[0]

        assert entry.title == "A & B"
        assert entry.description == "<b>bold</b>"

    def test_missing_fields_default_to_empty(self):
        entry = parse_feed(b"<rss><channel><item><title>t</title></item></channel></rss>").entries[0]

        assert entry.link == ""
        assert entry.description == ""
        assert entry.pub_date == ""

    def test_empty_channel(self, rss):
        document = parse_feed(rss([]))

        assert document.entries == []

    @pytest.mark.parametrize("data", [
        b"",
        b"not xml at all",
        b"<rss><channel><title>unterminated",
        b"<html><body>404 Not Found</body></html>",
    ])
    def test_malformed_documents_raise_format_error(self, data):
        with pytest.raises(FormatError):
            parse_feed(data)
