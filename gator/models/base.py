"""Base model class for all database models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class DBModel(BaseModel):
    """Base model for all database models."""

    id: UUID = Field(..., description="Primary key")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        """Pydantic config."""

        from_attributes = True
