"""Exception types raised by the polling and ingestion engine."""

from typing import TYPE_CHECKING, Optional
from uuid import UUID

if TYPE_CHECKING:
    from .ingestion.models import IngestionReport


class GatorError(Exception):
    """Base class for gator errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        # Partial ingestion report when the error aborted a document midway
        self.report: Optional["IngestionReport"] = None


class TransportError(GatorError):
    """The feed request could not be completed (DNS, refused, timeout...)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Error fetching '{url}': {reason}")
        self.url = url


class FormatError(GatorError):
    """The response body is not a well-formed RSS document."""


class DateFormatError(GatorError):
    """An entry's publication date does not match the expected format."""

    def __init__(self, pub_date: str, entry_title: str, feed_id: UUID) -> None:
        super().__init__(
            f"Couldn't parse date '{pub_date}' of entry '{entry_title}' in feed {feed_id}"
        )
        self.pub_date = pub_date
        self.entry_title = entry_title
        self.feed_id = feed_id


class StoreError(GatorError):
    """Unexpected persistence failure."""


class UniqueViolation(StoreError):
    """Insert rejected because a row with the same unique key exists."""

    def __init__(self, message: str, constraint: Optional[str] = None) -> None:
        super().__init__(message)
        self.constraint = constraint


class NotFoundError(StoreError):
    """The requested row does not exist."""
