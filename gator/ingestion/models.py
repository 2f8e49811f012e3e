"""Data models for ingestion."""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ParsedEntry(BaseModel):
    """One <item> of a parsed RSS channel."""

    title: str = Field("", description="Entry title (unescaped)")
    link: str = Field("", description="Entry URL")
    description: str = Field("", description="Entry description (unescaped)")
    pub_date: str = Field("", description="Publication date, as written in the feed")


class ParsedDocument(BaseModel):
    """Parsed RSS channel."""

    title: str = Field("", description="Channel title (unescaped)")
    link: str = Field("", description="Channel link")
    description: str = Field("", description="Channel description (unescaped)")
    entries: List[ParsedEntry] = Field(default_factory=list, description="Items in document order")


class IngestionReport(BaseModel):
    """Outcome of ingesting one document."""

    feed_id: UUID = Field(..., description="Feed the document belongs to")
    total_entries: int = Field(0, description="Entries in the document")
    attempted: int = Field(0, description="Inserts attempted")
    inserted: int = Field(0, description="New posts stored")
    skipped: int = Field(0, description="Entries already stored by an earlier poll")
    error: Optional[str] = Field(None, description="Error that stopped ingestion early")

    @property
    def complete(self) -> bool:
        """Whether every entry in the document was processed."""
        return self.error is None and self.attempted == self.total_entries
