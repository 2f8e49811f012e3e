"""Ingestion of parsed feed documents into the posts table."""

import logging
import re
import uuid
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

import pendulum

from ..errors import DateFormatError, StoreError, UniqueViolation
from .models import IngestionReport, ParsedDocument

logger = logging.getLogger(__name__)

# RFC 1123 with a numeric zone, e.g. "Mon, 02 Jan 2006 15:04:05 -0700"
PUB_DATE_FORMAT = "%a, %d %b %Y %H:%M:%S %z"

# strptime alone accepts one-digit fields, "Z" and "+07:00"
PUB_DATE_PATTERN = re.compile(r"[A-Z][a-z]{2}, \d{2} [A-Z][a-z]{2} \d{4} \d{2}:\d{2}:\d{2} [+-]\d{4}")


def parse_pub_date(value: str) -> datetime:
    """Parse an RSS pubDate. Raises ValueError on any other format."""
    if not PUB_DATE_PATTERN.fullmatch(value):
        raise ValueError(f"pubDate {value!r} does not match {PUB_DATE_FORMAT!r}")
    return datetime.strptime(value, PUB_DATE_FORMAT)


def utc_now() -> datetime:
    return pendulum.now("UTC")


class IngestionPipeline:
    """Store the entries of a parsed document as posts, once each."""

    def __init__(
        self,
        store,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], UUID] = uuid.uuid4,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            store: object with a ``create_post`` method (see ``gator.db.Store``)
            clock: source of created/updated timestamps
            id_factory: source of post ids
        """
        self.store = store
        self.clock = clock
        self.id_factory = id_factory

    def ingest(self, feed_id: UUID, document: ParsedDocument) -> IngestionReport:
        """
        Insert every entry of ``document`` as a post of ``feed_id``.

        Entries whose link is already stored are counted as skipped. Posts
        inserted before a failure stay committed.

        Raises:
            DateFormatError: an entry's pubDate is malformed; later entries
                are not attempted
            StoreError: the store failed for a reason other than a duplicate
        """
        report = IngestionReport(feed_id=feed_id, total_entries=len(document.entries))

        for entry in document.entries:
            try:
                published_at = parse_pub_date(entry.pub_date)
            except ValueError as e:
                error = DateFormatError(entry.pub_date, entry.title, feed_id)
                report.error = str(error)
                error.report = report
                raise error from e

            now = self.clock()
            report.attempted += 1
            try:
                self.store.create_post(
                    id=self.id_factory(),
                    created_at=now,
                    updated_at=now,
                    title=entry.title,
                    url=entry.link,
                    description=entry.description,
                    published_at=published_at,
                    feed_id=feed_id,
                )
            except UniqueViolation:
                report.skipped += 1
                logger.debug("Already stored: %s", entry.link)
                continue
            except StoreError as e:
                report.error = str(e)
                e.report = report
                raise

            report.inserted += 1

        return report


def summarize(report: Optional[IngestionReport]) -> str:
    """One-line description of a report for log messages."""
    if report is None:
        return "nothing ingested"
    return (
        f"{report.inserted} new, {report.skipped} already stored, "
        f"{report.attempted}/{report.total_entries} attempted"
    )
