"""RSS 2.0 document parser."""

import html
import xml.etree.ElementTree as ET

from ..errors import FormatError
from .models import ParsedDocument, ParsedEntry


def _text(element: ET.Element, tag: str) -> str:
    return (element.findtext(tag) or "").strip()


def parse_feed(data: bytes) -> ParsedDocument:
    """
    Parse an RSS document into a ParsedDocument.

    Titles and descriptions are HTML-unescaped once, after the XML parse, to
    undo the double encoding many feeds use. Publication dates are returned
    untouched.

    Raises:
        FormatError: the bytes are not well-formed XML or have no <channel>
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise FormatError(f"Invalid feed XML: {e}") from e

    channel = root if root.tag == "channel" else root.find("channel")
    if channel is None:
        raise FormatError(f"Expected an RSS <channel>, got <{root.tag}>")

    entries = [
        ParsedEntry(
            title=html.unescape(_text(item, "title")),
            link=_text(item, "link"),
            description=html.unescape(_text(item, "description")),
            pub_date=_text(item, "pubDate"),
        )
        for item in channel.findall("item")
    ]

    return ParsedDocument(
        title=html.unescape(_text(channel, "title")),
        link=_text(channel, "link"),
        description=html.unescape(_text(channel, "description")),
        entries=entries,
    )
