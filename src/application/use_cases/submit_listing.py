from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from html import escape
from urllib.parse import urlencode

import structlog

from src.application.interfaces.image_store import ImageStore, ImageUpload
from src.application.interfaces.listing_repository import ListingRepository
from src.application.interfaces.notification_dispatcher import (
    DispatchError,
    NotificationDispatcher,
)
from src.application.interfaces.otp_challenge_store import OtpChallengeStore
from src.application.validation.submission import SubmissionFields, validate_submission
from src.config import settings
from src.domain.entities.listing import Listing
from src.domain.entities.otp_challenge import OtpChallenge
from src.domain.enums.listing_category import ListingCategory

logger = structlog.get_logger(__name__)

# Receives a coroutine function and its arguments; runs it after the response.
DeferFn = Callable[..., None]


@dataclass
class SubmitListingInput:
    category: ListingCategory
    fields: SubmissionFields
    images: list[ImageUpload] = field(default_factory=list)


@dataclass(frozen=True)
class VerificationReference:
    """What the submitter needs to complete verification."""

    listing_id: str
    email: str
    category: ListingCategory
    verify_url: str


@dataclass(frozen=True)
class OtpEmail:
    recipient: str
    subject: str
    html_body: str


def build_verify_url(category: ListingCategory, listing_id: str, email: str) -> str:
    query = urlencode({"id": listing_id, "email": email})
    return f"{settings.base_url}/verify-otp/{category.value}?{query}"


def render_otp_email(challenge: OtpChallenge, verify_url: str) -> OtpEmail:
    link = escape(verify_url)
    return OtpEmail(
        recipient=challenge.email,
        subject=f"OTP for Your {challenge.category.label} Listing",
        html_body=(
            f"<p>Your OTP: <b>{challenge.code}</b></p>"
            f'<p>Verify: <a href="{link}">{link}</a></p>'
        ),
    )


class SubmitListing:
    """
    Use case: record a new draft listing and start email verification.

    Validates the form, stores the images, appends the draft to its
    category's collection, issues an OTP challenge for the submitter's email
    (replacing any earlier one) and hands the OTP email to the dispatcher.

    OTP delivery is log-and-continue: a failed send never fails the
    submission.
    """

    def __init__(
        self,
        repositories: Mapping[ListingCategory, ListingRepository],
        challenge_store: OtpChallengeStore,
        dispatcher: NotificationDispatcher,
        image_store: ImageStore,
    ) -> None:
        self._repositories = repositories
        self._challenge_store = challenge_store
        self._dispatcher = dispatcher
        self._image_store = image_store

    async def execute(
        self,
        input_data: SubmitListingInput,
        defer: DeferFn | None = None,
    ) -> VerificationReference:
        # May raise ListingValidationError, nothing has been written yet
        submission = validate_submission(input_data.fields, image_count=len(input_data.images))
        category = input_data.category

        image_refs = await self._image_store.save(category, input_data.images)

        listing = Listing.create_draft(
            category=category,
            email=submission.email,
            item_name=submission.item_name,
            price=submission.price,
            seller_name=submission.seller_name,
            contact_number=submission.contact_number,
            whatsapp_number=submission.whatsapp_number,
            item_description=submission.item_description,
            price_period=submission.price_period,
            images=image_refs,
        )
        await self._repositories[category].append(listing)

        challenge = OtpChallenge.issue(email=listing.email, listing_id=listing.id, category=category)
        await self._challenge_store.put(listing.email, challenge)

        verify_url = build_verify_url(category, listing.id, listing.email)
        message = render_otp_email(challenge, verify_url)
        if defer is not None:
            defer(self.deliver_otp, message)
        else:
            await self.deliver_otp(message)

        logger.info(
            "listing_submitted",
            listing_id=listing.id,
            category=category.value,
            image_count=len(image_refs),
        )

        return VerificationReference(
            listing_id=listing.id,
            email=listing.email,
            category=category,
            verify_url=verify_url,
        )

    async def deliver_otp(self, message: OtpEmail) -> None:
        try:
            await self._dispatcher.send(message.recipient, message.subject, message.html_body)
        except DispatchError as exc:
            logger.warning("otp_delivery_failed", recipient=message.recipient, error=str(exc))
            return
        logger.info("otp_delivered", recipient=message.recipient)
