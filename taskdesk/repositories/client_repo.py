"""
Client Repository

Data access layer for Client model.
All client-related database operations, including the reset token slot.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.models import Client
from taskdesk.repositories.base import BaseRepository


class ClientRepository(BaseRepository[Client]):
    """Repository for Client model."""

    def __init__(self, db: AsyncSession):
        super().__init__(Client, db)

    # =================
    # Get by email
    # =================
    async def get_by_email(self, email: str) -> Optional[Client]:
        """Get a client by email address, matched exactly as stored."""
        result = await self.db.execute(
            select(Client).where(Client.email == email)
        )
        return result.scalar_one_or_none()

    # =================
    # Get by reset token
    # =================
    async def get_by_token(self, token: str) -> Optional[Client]:
        """Get the client currently holding a reset token."""
        result = await self.db.execute(
            select(Client).where(Client.token == token)
        )
        return result.scalar_one_or_none()

    # =================
    # Reset token slot
    # =================
    @staticmethod
    def set_reset_token(client: Client, token: str, issued_at: datetime) -> None:
        """
        Overwrite the client's reset token. Not committed here.

        Args:
            client: The client to update
            token: Freshly generated token
            issued_at: Issue time, never in the future
        """
        client.token = token
        client.token_created_at = issued_at

    @staticmethod
    def clear_reset_token(client: Client) -> None:
        """Drop the client's reset token. Not committed here."""
        client.token = None
        client.token_created_at = None
