"""
Base Repository

Abstract base class for all repositories.
Provides common database operations.
"""

import logging
from typing import Generic, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.db.database import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class RepositoryError(Exception):
    """Raised when a write could not be committed to the database."""
    pass


class BaseRepository(Generic[ModelType]):
    """
    Base repository class with common write operations.

    All repositories should inherit from this class. The session is
    passed in by the caller and shared by every repository of a request,
    so a commit made through one of them also commits whatever the
    others staged.
    """
    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # -----------------------------
    # Commit pending changes
    # -----------------------------
    async def commit(self) -> None:
        """
        Commit the session, rolling back and raising RepositoryError on failure.
        """
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Commit failed for {self.model.__name__}: {e}")
            raise RepositoryError(f"Could not persist {self.model.__name__}") from e

    # -----------------------------
    # Save Single Record
    # -----------------------------
    async def save(self, instance: ModelType) -> ModelType:
        """Add (if new) and commit a record, then reload server-side values."""
        self.db.add(instance)
        await self.commit()
        await self.db.refresh(instance)
        return instance
