"""
Outgoing mail.

Sends account activation e-mails over SMTP with STARTTLS. Sending runs in a
worker thread so the event loop is never blocked by the SMTP dialogue.
"""

from __future__ import annotations

import asyncio
import smtplib
from email.message import EmailMessage

from sassify.core.database.entities.users import User
from sassify.core.logging_config import get_logger
from sassify.server.core.config import MailConfig

logger = get_logger(__name__)

VERIFICATION_SUBJECT = "Activate your Sassify account"


class Mailer:
    def __init__(self, config: MailConfig) -> None:
        self.config = config

    @property
    def is_configured(self) -> bool:
        return bool(self.config.smtp_server)

    def verification_link(self, token: str) -> str:
        return f"{self.config.public_base_url.rstrip('/')}/verify/{token}"

    def build_verification_message(self, user: User, token: str) -> EmailMessage:
        greeting = f"Hello {user.first_name}," if user.first_name else "Hello,"
        msg = EmailMessage()
        msg["From"] = self.config.mail_from
        msg["To"] = user.email
        msg["Subject"] = VERIFICATION_SUBJECT
        msg.set_content(
            f"{greeting}\n\n"
            "Thank you for signing up to Sassify. Please confirm your e-mail address by opening the link below:\n\n"
            f"{self.verification_link(token)}\n\n"
            "The link expires in a few hours. If it has expired, request a new one from your account.\n"
        )
        return msg

    def _send(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.config.smtp_server, self.config.smtp_port) as server:
            server.starttls()
            if self.config.smtp_user and self.config.smtp_password:
                server.login(self.config.smtp_user, self.config.smtp_password)
            server.send_message(msg)

    async def send_verification_email(self, user: User, token: str) -> bool:
        """Send the activation e-mail. Returns False when SMTP is not configured or sending failed."""
        if not self.is_configured:
            logger.info("SMTP is not configured, activation e-mail for user %s not sent", user.id)
            return False
        msg = self.build_verification_message(user, token)
        try:
            await asyncio.to_thread(self._send, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Error sending activation e-mail to %s: %s", user.email, e)
            return False
        logger.info("Activation e-mail sent to user %s", user.id)
        return True
