from collections.abc import Mapping
from dataclasses import dataclass
from html import escape

import structlog

from src.application.exceptions import ListingNotFoundError
from src.application.interfaces.listing_repository import ListingRepository
from src.application.interfaces.notification_dispatcher import (
    DispatchError,
    NotificationDispatcher,
)
from src.domain.enums.listing_category import ListingCategory

logger = structlog.get_logger(__name__)


@dataclass
class NotifyContactViewedInput:
    listing_id: str
    category: str


class NotifyContactViewed:
    """
    Use case: tell the marketplace admin that someone opened a listing's
    contact details.

    Unlike OTP delivery, dispatch failures propagate: the caller has to know
    the notification did not go out.
    """

    def __init__(
        self,
        repositories: Mapping[ListingCategory, ListingRepository],
        dispatcher: NotificationDispatcher,
        recipient: str | None,
    ) -> None:
        self._repositories = repositories
        self._dispatcher = dispatcher
        self._recipient = recipient

    async def execute(self, input_data: NotifyContactViewedInput) -> None:
        try:
            category = ListingCategory(input_data.category)
        except ValueError:
            raise ListingNotFoundError(input_data.listing_id) from None

        listing = await self._repositories[category].find_by_id(input_data.listing_id)
        if listing is None:
            raise ListingNotFoundError(input_data.listing_id)

        if not self._recipient:
            logger.error("contact_view_recipient_missing", listing_id=listing.id)
            raise DispatchError("No recipient configured for contact notifications.")

        item = escape(listing.item_name)
        # May raise DispatchError, let it propagate to the caller
        await self._dispatcher.send(
            self._recipient,
            f"Contact viewed for listing {listing.item_name}",
            f'<p>Someone clicked "View Contact" for item: <b>{item}</b> (ID: {escape(listing.id)})</p>',
        )

        logger.info("contact_view_notified", listing_id=listing.id, category=category.value)
