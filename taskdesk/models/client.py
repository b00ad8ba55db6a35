from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import Boolean, Column, DateTime, String

from .base import BaseModel


class Client(BaseModel):
    """
    A client account of the admin backend.

    ``token`` is the single password-reset slot: issuing a new token
    overwrites it, a successful password change clears it.
    """

    __tablename__ = "clients"

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    token = Column(String(64), unique=True, nullable=True, index=True)
    token_created_at = Column(DateTime(timezone=True), nullable=True)

    def token_issued_at_utc(self) -> Optional[datetime]:
        """Issue time as an aware UTC datetime (some backends return naive values)."""
        if self.token_created_at is None:
            return None
        if self.token_created_at.tzinfo is None:
            return self.token_created_at.replace(tzinfo=timezone.utc)
        return self.token_created_at.astimezone(timezone.utc)

    def is_token_expired(self, ttl: timedelta, now: Optional[datetime] = None) -> bool:
        issued_at = self.token_issued_at_utc()
        if self.token is None or issued_at is None:
            return True
        now = now or datetime.now(timezone.utc)
        return now - issued_at > ttl
