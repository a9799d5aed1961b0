from enum import Enum


class ListingCategory(str, Enum):
    """Marketplace partitions. Each owns its own collection and image area."""

    SELL = "sell"
    LEASE = "lease"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def collection_filename(self) -> str:
        return _COLLECTION_FILES[self]

    @property
    def upload_area(self) -> str:
        """Image sub-folder, relative to the uploads root."""
        return _UPLOAD_AREAS[self]

    @property
    def browse_path(self) -> str:
        """Public page where published listings of this category are browsed."""
        return _BROWSE_PATHS[self]


_COLLECTION_FILES: dict[ListingCategory, str] = {
    ListingCategory.SELL: "listingsforsale.json",
    ListingCategory.LEASE: "listingsforlease.json",
}

_UPLOAD_AREAS: dict[ListingCategory, str] = {
    ListingCategory.SELL: "pending",
    ListingCategory.LEASE: "lease/pending",
}

_BROWSE_PATHS: dict[ListingCategory, str] = {
    ListingCategory.SELL: "/preowned/buy",
    ListingCategory.LEASE: "/preowned/rent",
}
