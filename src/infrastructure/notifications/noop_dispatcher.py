"""
No-op notification dispatcher: used in tests and when no mail account is configured.
"""
import structlog

from src.application.interfaces.notification_dispatcher import NotificationDispatcher

logger = structlog.get_logger(__name__)


class NoOpNotificationDispatcher(NotificationDispatcher):
    """Discards all messages. Useful for testing and local development."""

    async def send(self, recipient: str, subject: str, html_body: str) -> None:
        logger.debug("noop_email_discarded", recipient=recipient, subject=subject)
