from dataclasses import dataclass, field
from decimal import Decimal
from uuid import uuid4

from src.domain.enums.listing_category import ListingCategory
from src.domain.enums.listing_state import ListingState
from src.domain.state_machine.lifecycle_state_machine import LifecycleStateMachine

_state_machine = LifecycleStateMachine()


def _new_id() -> str:
    return str(uuid4())


@dataclass
class Listing:
    """
    An item offered for sale or lease on the campus marketplace.

    Created as a draft and published once the submitter has proven control
    of their institutional email address. ``published`` and ``otp_verified``
    always move together.
    """

    # Identity
    id: str = field(default_factory=_new_id)
    category: ListingCategory = ListingCategory.SELL

    # Submitter
    seller_name: str = ""
    email: str = ""
    contact_number: str = ""
    whatsapp_number: str = ""

    # Item
    item_name: str = ""
    item_description: str = ""
    # None only for stored records whose price never parsed.
    price: Decimal | None = Decimal("0")
    price_period: str = ""
    images: list[str] = field(default_factory=list)

    # Publication
    published: bool = False
    otp_verified: bool = False

    # -------------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------------

    @classmethod
    def create_draft(
        cls,
        *,
        category: ListingCategory,
        email: str,
        item_name: str,
        price: Decimal,
        seller_name: str = "",
        contact_number: str = "",
        whatsapp_number: str = "",
        item_description: str = "",
        price_period: str = "",
        images: list[str] | None = None,
    ) -> "Listing":
        return cls(
            category=category,
            seller_name=seller_name,
            email=email,
            contact_number=contact_number,
            whatsapp_number=whatsapp_number,
            item_name=item_name,
            item_description=item_description,
            price=price,
            price_period=price_period,
            images=list(images or []),
        )

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> ListingState:
        return ListingState.PUBLISHED if self.published else ListingState.DRAFT

    def publish(self) -> None:
        """Move the listing from DRAFT to PUBLISHED."""
        _state_machine.validate_transition(self.state, ListingState.PUBLISHED)
        self.published = True
        self.otp_verified = True
