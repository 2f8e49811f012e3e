"""Feed fetching, parsing and ingestion."""

from .fetcher import FeedFetcher
from .models import IngestionReport, ParsedDocument, ParsedEntry
from .parser import parse_feed
from .pipeline import IngestionPipeline, parse_pub_date

__all__ = [
    "FeedFetcher",
    "IngestionPipeline",
    "IngestionReport",
    "ParsedDocument",
    "ParsedEntry",
    "parse_feed",
    "parse_pub_date",
]
