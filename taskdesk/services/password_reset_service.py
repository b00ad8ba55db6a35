"""
Password Reset Service

Issues password reset tokens for clients, emails them a login link, and
consumes the token when the client picks a new password.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from functools import partial
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.core.config import settings
from taskdesk.core.security import generate_reset_token, get_password_hash
from taskdesk.models import Client
from taskdesk.repositories.client_repo import ClientRepository
from taskdesk.repositories.history_repo import HistoryRepository
from taskdesk.utils.email import EmailSender

logger = logging.getLogger(__name__)

RESET_LINK_PATH = "/token/login/"


class PasswordResetError(Exception):
    """Base exception for password reset errors."""
    pass


class FieldValidationError(PasswordResetError):
    """
    Raised when a request field fails a business check.

    Carries the offending field, a machine code and a human message so
    the HTTP layer can report it next to request validation errors.
    """

    def __init__(self, field: str, code: str, message: str):
        super().__init__(message)
        self.field = field
        self.code = code
        self.message = message


class AccountNotFoundError(FieldValidationError):
    """Raised when no client matches the submitted username."""

    def __init__(self):
        super().__init__("username", "invalid", "User not found")


class InvalidResetTokenError(FieldValidationError):
    """Raised when a reset token is unknown or too old."""

    def __init__(self):
        super().__init__("token", "invalid", "Invalid or expired token")


class PasswordResetService:
    """
    Service class for the client password reminder flow.
    """

    def __init__(
        self,
        db: AsyncSession,
        email_sender: Optional[EmailSender] = None,
        client_url: Optional[str] = None,
        token_ttl: Optional[timedelta] = None,
    ):
        """
        Initialize with database session.

        Args:
            db: AsyncSession instance, committed through the repositories
            email_sender: Notification dispatcher (defaults to SMTP sender)
            client_url: Base URL of the client portal
            token_ttl: Maximum token age accepted by reset_password
        """
        self.db = db
        self.client_repo = ClientRepository(db)
        self.history_repo = HistoryRepository(db)
        self.email_sender = email_sender or EmailSender()
        self.client_url = (client_url or settings.CLIENT_URL).rstrip("/")
        self.token_ttl = token_ttl or timedelta(
            minutes=settings.PASSWORD_RESET_TOKEN_EXPIRE_MINUTES
        )

    # ============================================================
    # Reset link
    # ============================================================

    def build_reset_url(self, token: str) -> str:
        """Link the client follows to log in with a reset token."""
        return f"{self.client_url}{RESET_LINK_PATH}{token}"

    # ============================================================
    # Password Reminder - Issue Token
    # ============================================================

    async def remind_password(self, username: Optional[str]) -> Client:
        """
        Issue a fresh reset token for a client and email the reset link.

        The token is committed before the email goes out. If sending
        fails the token stays valid and the error propagates.

        Args:
            username: The client's email address

        Returns:
            The updated Client

        Raises:
            AccountNotFoundError: If username is missing or unknown
            RepositoryError: If the token could not be persisted
            EmailDeliveryError: If the email could not be sent
        """
        client = None
        if username:
            client = await self.client_repo.get_by_email(username)

        if not client:
            logger.info("Password reminder requested for an unknown account")
            raise AccountNotFoundError()

        token = generate_reset_token()
        issued_at = datetime.now(timezone.utc)

        self.client_repo.set_reset_token(client, token, issued_at)
        await self.history_repo.record(
            client,
            "update",
            {"token": "changed", "token_created_at": issued_at.isoformat()},
        )
        client = await self.client_repo.save(client)

        logger.info(f"Password reset token issued for client {client.id}")

        await self._dispatch(
            client,
            "remind_password",
            {"user": client, "url": self.build_reset_url(token)},
        )

        return client

    # ============================================================
    # Password Reset - Consume Token
    # ============================================================

    async def reset_password(self, token: str, new_password: str) -> Client:
        """
        Set a new password for the client holding a valid reset token.

        The token is cleared in the same commit, so it works only once.

        Raises:
            InvalidResetTokenError: If the token is unknown or expired
            RepositoryError: If the change could not be persisted
        """
        client = await self.client_repo.get_by_token(token)

        if not client or client.is_token_expired(self.token_ttl):
            logger.info("Password reset attempted with an invalid or expired token")
            raise InvalidResetTokenError()

        client.password_hash = get_password_hash(new_password)
        self.client_repo.clear_reset_token(client)
        await self.history_repo.record(
            client,
            "update",
            {"password": "changed", "token": "cleared"},
        )
        client = await self.client_repo.save(client)

        logger.info(f"Password reset completed for client {client.id}")
        return client

    # ============================================================
    # Helper Methods
    # ============================================================

    async def _dispatch(self, client: Client, template: str, parameters: Dict[str, Any]) -> None:
        """Send an email on a worker thread; SMTP itself is blocking."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            partial(self.email_sender.send_email, client, template, parameters),
        )
