"""
SMTP notification dispatcher.

Uses smtplib in a thread-pool executor so blocking network I/O doesn't stall
the asyncio event loop. A new SMTP connection is opened per message.
"""
import asyncio
import smtplib
import ssl
from email.message import EmailMessage
from functools import partial

import structlog

from src.application.interfaces.notification_dispatcher import (
    DispatchError,
    NotificationDispatcher,
)
from src.config import settings

logger = structlog.get_logger(__name__)


def _build_message(sender: str, recipient: str, subject: str, html_body: str) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = sender
    msg["To"] = recipient
    msg.set_content("This message requires an HTML-capable mail client.")
    msg.add_alternative(html_body, subtype="html")
    return msg


def _blocking_send(
    host: str,
    port: int,
    username: str,
    password: str,
    msg: EmailMessage,
) -> None:
    ctx = ssl.create_default_context()
    with smtplib.SMTP(host, port, timeout=10) as smtp:
        smtp.starttls(context=ctx)
        smtp.login(username, password)
        smtp.send_message(msg)


class SmtpNotificationDispatcher(NotificationDispatcher):
    """Sends HTML email through an authenticated STARTTLS SMTP relay."""

    def __init__(
        self,
        username: str,
        password: str,
        host: str | None = None,
        port: int | None = None,
    ) -> None:
        self._username = username
        self._password = password
        self._host = host or settings.smtp_host
        self._port = port or settings.smtp_port

    async def send(self, recipient: str, subject: str, html_body: str) -> None:
        msg = _build_message(self._username, recipient, subject, html_body)
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None,
                partial(_blocking_send, self._host, self._port, self._username, self._password, msg),
            )
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(
                "email_send_failed",
                recipient=recipient,
                subject=subject,
                error=str(exc),
            )
            raise DispatchError(f"Failed to send email to {recipient}: {exc}") from exc
        logger.debug("email_sent", recipient=recipient, subject=subject)
