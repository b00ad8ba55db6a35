"""
History Repository

Audit log access. Entries are looked up per tracked entity and returned
newest version first.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.models import History
from taskdesk.repositories.base import BaseRepository


class HistoryRepository(BaseRepository[History]):
    """Repository for History model."""

    def __init__(self, db: AsyncSession):
        super().__init__(History, db)

    @staticmethod
    def _identify(entity: Any) -> tuple:
        return str(entity.id), type(entity).__name__

    # =================
    # Log entries query
    # =================
    def get_log_entries_query(self, entity: Any) -> Select:
        """Build the query selecting all log entries of an entity."""
        object_id, object_class = self._identify(entity)
        return (
            select(History)
            .where(
                History.object_id == object_id,
                History.object_class == object_class,
            )
            .order_by(History.version.desc())
        )

    # =================
    # Log entries
    # =================
    async def get_log_entries(self, entity: Any) -> List[History]:
        """Get all log entries of an entity, newest version first."""
        result = await self.db.execute(self.get_log_entries_query(entity))
        return list(result.scalars().all())

    # =================
    # Record a change
    # =================
    async def record(
        self,
        entity: Any,
        action: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> History:
        """
        Stage a log entry for an entity with the next version number.

        The entry is added to the session but not committed; it is
        committed together with the change it describes.

        Args:
            entity: A persisted model instance (must have an id)
            action: "create", "update" or "remove"
            data: Changed fields, with secrets already masked
        """
        object_id, object_class = self._identify(entity)
        result = await self.db.execute(
            select(func.max(History.version)).where(
                History.object_id == object_id,
                History.object_class == object_class,
            )
        )
        version = (result.scalar() or 0) + 1

        entry = History(
            action=action,
            object_id=object_id,
            object_class=object_class,
            version=version,
            data=data,
        )
        self.db.add(entry)
        return entry
