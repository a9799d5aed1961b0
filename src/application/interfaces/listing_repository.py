import asyncio
from abc import ABC, abstractmethod
from collections.abc import Sequence

from src.domain.entities.listing import Listing
from src.domain.enums.listing_category import ListingCategory


class PersistenceWriteError(Exception):
    """Raised when a collection could not be persisted. Prior contents are kept."""


class ListingRepository(ABC):
    """
    Port for one category's listing collection.

    Storage is whole-collection: callers load, mutate in memory and replace.
    Every read-modify-write sequence must hold ``write_lock`` so concurrent
    writers to the same category cannot lose each other's updates.
    """

    def __init__(self, category: ListingCategory) -> None:
        self.category = category
        self.write_lock = asyncio.Lock()

    @abstractmethod
    async def load(self) -> list[Listing]:
        """Return the full collection in stored order; unreadable storage yields []."""
        ...

    @abstractmethod
    async def replace(self, listings: Sequence[Listing]) -> None:
        """Atomically overwrite the collection. Raises PersistenceWriteError."""
        ...

    async def find_by_id(self, listing_id: str) -> Listing | None:
        for listing in await self.load():
            if listing.id == listing_id:
                return listing
        return None

    async def filter_published(self) -> list[Listing]:
        return [listing for listing in await self.load() if listing.published]

    async def append(self, listing: Listing) -> None:
        async with self.write_lock:
            listings = await self.load()
            listings.append(listing)
            await self.replace(listings)
