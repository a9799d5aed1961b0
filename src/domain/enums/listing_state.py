from enum import Enum


class ListingState(str, Enum):
    """Lifecycle states of a marketplace listing."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"

    @property
    def is_terminal(self) -> bool:
        """Terminal states cannot be transitioned out of."""
        return self is ListingState.PUBLISHED
