"""
Email Utility

Templated transactional emails sent over SMTP.
"""

import logging
import smtplib
from html import escape
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Callable, Dict, Optional

from taskdesk.core.config import settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when an email could not be handed to the SMTP server."""
    pass


@dataclass(frozen=True)
class EmailTemplate:
    subject: Callable[[Dict[str, Any]], str]
    html: Callable[[Dict[str, Any]], str]
    plain: Callable[[Dict[str, Any]], str]


# ============================================================
# Templates
# ============================================================

def _remind_password_html(params: Dict[str, Any]) -> str:
    user = params["user"]
    url = params["url"]
    return f"""
    <!DOCTYPE html>
    <html lang="en">
    <head>
    <meta charset="UTF-8" />
    <title>Password Reset</title>
    </head>
    <body style="margin: 0; padding: 0; background-color: #f3f4f6;
                 font-family: Arial, Helvetica, sans-serif; color: #111827;">
    <table width="100%" cellpadding="0" cellspacing="0" role="presentation">
        <tr>
        <td align="center" style="padding: 40px 16px;">
            <table width="100%" cellpadding="0" cellspacing="0" style="
            max-width: 600px; background-color: #ffffff; border-radius: 10px;">
            <tr>
                <td style="padding: 32px;">
                <h2 style="margin-top: 0; font-size: 20px;">Reset your password</h2>
                <p style="font-size: 15px; color: #374151;">Hi {escape(user.name)},</p>
                <p style="font-size: 15px; color: #374151; line-height: 1.6;">
                    We received a request to reset the password for your
                    <strong>{settings.PROJECT_NAME}</strong> account.
                    Click the button below to choose a new one.
                </p>
                <p style="margin: 28px 0; text-align: center;">
                    <a href="{url}" style="background-color: #4f46e5; color: #ffffff;
                       padding: 12px 24px; text-decoration: none; border-radius: 6px;">
                        Reset password
                    </a>
                </p>
                <p style="font-size: 13px; color: #6b7280;">
                    Or paste this link into your browser: {url}
                </p>
                <p style="font-size: 14px; color: #6b7280; line-height: 1.6;">
                    If you didn't request this, you can safely ignore this email.
                </p>
                </td>
            </tr>
            </table>
        </td>
        </tr>
    </table>
    </body>
    </html>
    """


def _remind_password_plain(params: Dict[str, Any]) -> str:
    user = params["user"]
    return f"""
    {settings.PROJECT_NAME} - Password Reset Request

    Hi {user.name},

    You have requested to reset your password for your {settings.PROJECT_NAME} account.

    Open this link to choose a new password:
    {params["url"]}

    If you did not request this password reset, please ignore this email.
    """


TEMPLATES: Dict[str, EmailTemplate] = {
    "remind_password": EmailTemplate(
        subject=lambda params: f"Password Reset - {settings.PROJECT_NAME}",
        html=_remind_password_html,
        plain=_remind_password_plain,
    ),
}


# ============================================================
# Sender
# ============================================================

class EmailSender:
    """
    Sends templated emails through the configured SMTP server.

    When SMTP is not configured (local development) messages are logged
    and dropped. Any transport failure raises EmailDeliveryError.
    """

    def __init__(
        self,
        server: Optional[str] = None,
        port: Optional[int] = None,
        sender: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.server = server or settings.SMTP_SERVER
        self.port = port or settings.SMTP_PORT or 587
        self.sender = sender or settings.SMTP_EMAIL
        self.password = password or settings.SMTP_PASSWORD
        self.timeout = timeout or settings.SMTP_TIMEOUT_SECONDS

    @property
    def is_configured(self) -> bool:
        return bool(self.server and self.sender)

    def render(self, template: str, parameters: Dict[str, Any]) -> MIMEMultipart:
        """Build the MIME message for a registered template."""
        try:
            tpl = TEMPLATES[template]
        except KeyError:
            raise ValueError(f"Unknown email template: {template}")

        msg = MIMEMultipart("alternative")
        msg["Subject"] = tpl.subject(parameters)
        if self.sender:
            msg["From"] = str(self.sender)
        # Last alternative is the preferred one
        msg.attach(MIMEText(tpl.plain(parameters), "plain"))
        msg.attach(MIMEText(tpl.html(parameters), "html"))
        return msg

    def send_email(self, recipient: Any, template: str, parameters: Dict[str, Any]) -> None:
        """
        Send a templated email to an account.

        Args:
            recipient: Object with an ``email`` attribute, or an address
            template: Registered template name
            parameters: Values made available to the template

        Raises:
            ValueError: If the template is unknown
            EmailDeliveryError: If the SMTP exchange fails or times out
        """
        address = getattr(recipient, "email", recipient)
        msg = self.render(template, parameters)
        msg["To"] = address

        if not self.is_configured:
            logger.warning(
                f"SMTP settings not configured. Email '{template}' to {address} not sent."
            )
            return

        try:
            with smtplib.SMTP(self.server, self.port, timeout=self.timeout) as server:
                server.starttls()
                if self.password:
                    server.login(str(self.sender), self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send '{template}' email to {address}: {e}")
            raise EmailDeliveryError(f"Could not deliver '{template}' email") from e

        logger.info(f"Email '{template}' sent to {address}")
