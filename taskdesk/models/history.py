"""
History Model

Audit log of changes made to tracked entities. One row per change,
versioned per (object_class, object_id).
"""

from sqlalchemy import JSON, Column, DateTime, Integer, String, func

from taskdesk.db.database import Base


class History(Base):
    __tablename__ = "history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    action = Column(String(8), nullable=False)
    logged_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    object_id = Column(String(64), nullable=True, index=True)
    object_class = Column(String(191), nullable=False, index=True)
    version = Column(Integer, nullable=False)
    data = Column(JSON, nullable=True)

    def __repr__(self):
        return (
            f"<History({self.object_class}#{self.object_id} "
            f"v{self.version} {self.action})>"
        )
