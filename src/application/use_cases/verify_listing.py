from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from src.application.exceptions import ListingNotFoundError
from src.application.interfaces.listing_repository import ListingRepository
from src.application.interfaces.otp_challenge_store import OtpChallengeStore
from src.domain.entities.listing import Listing
from src.domain.enums.listing_category import ListingCategory

logger = structlog.get_logger(__name__)


class ChallengeMismatchError(Exception):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Invalid OTP")


@dataclass
class VerifyListingInput:
    category: ListingCategory
    listing_id: str
    email: str
    code: str


class VerifyListing:
    """
    Use case: consume an OTP challenge and publish its listing.

    Runs entirely under the category's write lock. The challenge is removed
    only after the updated collection has been written, so a failed write
    leaves the submitter able to retry with the same code.
    """

    def __init__(
        self,
        repositories: Mapping[ListingCategory, ListingRepository],
        challenge_store: OtpChallengeStore,
    ) -> None:
        self._repositories = repositories
        self._challenge_store = challenge_store

    async def execute(self, input_data: VerifyListingInput) -> Listing:
        repo = self._repositories[input_data.category]

        async with repo.write_lock:
            challenge = await self._challenge_store.get(input_data.email)
            if challenge is None or not challenge.matches(
                listing_id=input_data.listing_id,
                category=input_data.category,
                code=input_data.code,
            ):
                logger.info(
                    "otp_challenge_mismatch",
                    listing_id=input_data.listing_id,
                    category=input_data.category.value,
                    challenge_found=challenge is not None,
                )
                raise ChallengeMismatchError(input_data.email)

            listings = await repo.load()
            listing = next((item for item in listings if item.id == input_data.listing_id), None)
            if listing is None:
                raise ListingNotFoundError(input_data.listing_id)

            # May raise InvalidStateTransitionError, let it propagate to the caller
            listing.publish()

            # May raise PersistenceWriteError, the challenge is kept in that case
            await repo.replace(listings)

            await self._challenge_store.remove(input_data.email, expected=challenge)

        logger.info(
            "listing_published",
            listing_id=listing.id,
            category=input_data.category.value,
        )
        return listing
