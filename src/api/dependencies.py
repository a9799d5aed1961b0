"""
FastAPI dependency injection wiring.

Storage, the challenge store and the mail dispatcher are process-wide
singletons: the per-category write locks and the challenge map only work if
every request shares the same instances.
"""
from functools import lru_cache

import structlog
from fastapi import Depends

from src.application.interfaces.image_store import ImageStore
from src.application.interfaces.listing_repository import ListingRepository
from src.application.interfaces.notification_dispatcher import NotificationDispatcher
from src.application.interfaces.otp_challenge_store import OtpChallengeStore
from src.application.use_cases.notify_contact_viewed import NotifyContactViewed
from src.application.use_cases.submit_listing import SubmitListing
from src.application.use_cases.verify_listing import VerifyListing
from src.config import settings
from src.domain.enums.listing_category import ListingCategory
from src.infrastructure.notifications.noop_dispatcher import NoOpNotificationDispatcher
from src.infrastructure.notifications.smtp_dispatcher import SmtpNotificationDispatcher
from src.infrastructure.otp.in_memory_challenge_store import InMemoryOtpChallengeStore
from src.infrastructure.storage.json_listing_repository import JsonFileListingRepository
from src.infrastructure.storage.local_image_store import LocalImageStore

logger = structlog.get_logger(__name__)

ListingRepositories = dict[ListingCategory, ListingRepository]


# ---- Process-wide singletons ----------------------------------------------

@lru_cache
def get_listing_repositories() -> ListingRepositories:
    return {
        category: JsonFileListingRepository(
            settings.data_dir / category.collection_filename, category
        )
        for category in ListingCategory
    }


@lru_cache
def get_challenge_store() -> OtpChallengeStore:
    return InMemoryOtpChallengeStore()


@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    if settings.email_user and settings.email_pass:
        return SmtpNotificationDispatcher(settings.email_user, settings.email_pass)
    logger.warning("mail_account_not_configured")
    return NoOpNotificationDispatcher()


@lru_cache
def get_image_store() -> ImageStore:
    return LocalImageStore(settings.uploads_dir)


# ---- Per-request dependencies ---------------------------------------------

def get_listing_repo(
    category: ListingCategory,
    repositories: ListingRepositories = Depends(get_listing_repositories),
) -> ListingRepository:
    return repositories[category]


def get_submit_listing_use_case(
    repositories: ListingRepositories = Depends(get_listing_repositories),
    challenge_store: OtpChallengeStore = Depends(get_challenge_store),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    image_store: ImageStore = Depends(get_image_store),
) -> SubmitListing:
    return SubmitListing(repositories, challenge_store, dispatcher, image_store)


def get_verify_listing_use_case(
    repositories: ListingRepositories = Depends(get_listing_repositories),
    challenge_store: OtpChallengeStore = Depends(get_challenge_store),
) -> VerifyListing:
    return VerifyListing(repositories, challenge_store)


def get_notify_contact_viewed_use_case(
    repositories: ListingRepositories = Depends(get_listing_repositories),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> NotifyContactViewed:
    return NotifyContactViewed(repositories, dispatcher, settings.contact_recipient)
