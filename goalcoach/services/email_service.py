import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from goalcoach.core.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    """Outbound mail. Without SMTP settings messages are only logged."""

    def __init__(self, host: Optional[str] = None):
        self.host = host if host is not None else settings.SMTP_HOST

    @property
    def is_configured(self) -> bool:
        return bool(self.host)

    def _send_sync(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, settings.SMTP_PORT, timeout=15) as smtp:
            if settings.SMTP_USE_TLS:
                smtp.starttls()
            if settings.SMTP_USER:
                smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD or "")
            smtp.send_message(message)

    async def send(self, to: str, subject: str, body: str) -> bool:
        """Send a plain-text mail. Delivery problems are logged, never raised."""
        if not self.is_configured:
            logger.info("SMTP not configured, mail to %s not sent: %s\n%s", to, subject, body)
            return False

        message = EmailMessage()
        message["From"] = settings.SMTP_FROM_EMAIL
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        try:
            await asyncio.to_thread(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Mail delivery to %s failed: %s", to, e)
            return False

        logger.info("Mail sent to %s: %s", to, subject)
        return True

    async def send_password_reset(self, to: str, token: str) -> bool:
        link = f"{settings.FRONTEND_URL.rstrip('/')}/auth/reset-password?token={token}"
        body = (
            "We received a request to reset your password.\n\n"
            f"Open this link within {settings.PASSWORD_RESET_EXPIRE_MINUTES} minutes to choose a new one:\n"
            f"{link}\n\n"
            "If you did not ask for this, you can ignore this message."
        )
        return await self.send(to, "Reset your password", body)

    async def send_password_changed(self, to: str, name: Optional[str]) -> bool:
        body = (
            f"Hi {name or 'there'},\n\n"
            "Your password was just changed. If this was not you, reset it again immediately."
        )
        return await self.send(to, "Your password was changed", body)


email_service = EmailService()
