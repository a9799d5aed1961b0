from abc import ABC, abstractmethod


class DispatchError(Exception):
    """Raised when an email could not be handed to the mail transport."""


class NotificationDispatcher(ABC):
    """Port for delivering HTML emails."""

    @abstractmethod
    async def send(self, recipient: str, subject: str, html_body: str) -> None:
        """Deliver one message. Raises DispatchError on failure."""
        ...
