"""
Base Model Module

This module provides a base class for all SQLAlchemy models with common fields:
- id: Primary key (integer)
- created_at: Timestamp when record was created
- updated_at: Timestamp when record was last updated

The two timestamps are also exposed together as a ``Timestamps`` value
object, so callers deal with one immutable stamp instead of loose columns.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, Integer, func

from taskdesk.db.database import Base


@dataclass(frozen=True)
class Timestamps:
    """Creation and last-modification stamps of an entity."""

    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @property
    def last_changed(self) -> Optional[datetime]:
        return self.updated_at or self.created_at


class BaseModel(Base):
    """
    Abstract base model class that provides common fields for all models.

    Attributes:
        id (int): Primary key, auto-incremented
        created_at (DateTime): Timestamp set automatically when record is created
        updated_at (DateTime): Timestamp updated automatically when record is modified
    """

    # This makes the class abstract - no table will be created for BaseModel itself
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    # Created timestamp - set once when record is created
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    # Updated timestamp - updates every time the record is modified
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    @property
    def timestamps(self) -> Timestamps:
        return Timestamps(created_at=self.created_at, updated_at=self.updated_at)

    def __repr__(self):
        """String representation for debugging."""
        return f"<{self.__class__.__name__}(id={self.id})>"
