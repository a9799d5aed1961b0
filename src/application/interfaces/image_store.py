from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.domain.enums.listing_category import ListingCategory


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    content: bytes


class ImageStore(ABC):
    """Port for storing listing images."""

    @abstractmethod
    async def save(self, category: ListingCategory, images: list[ImageUpload]) -> list[str]:
        """Persist ``images`` and return their public references, in order."""
        ...
