import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.db.database import get_db
from taskdesk.services.password_reset_service import PasswordResetService
from taskdesk.utils.email import EmailSender

logger = logging.getLogger(__name__)


# =====================================================
# Email sender
# =====================================================
def get_email_sender() -> EmailSender:
    """Dependency providing the SMTP email sender."""
    return EmailSender()


# =====================================================
# Password reset service
# =====================================================
def get_password_reset_service(
    db: AsyncSession = Depends(get_db),
    email_sender: EmailSender = Depends(get_email_sender),
) -> PasswordResetService:
    """
    Dependency that provides PasswordResetService instance.

    A new service is built for each request with the request's
    database session.
    """
    return PasswordResetService(db, email_sender=email_sender)
