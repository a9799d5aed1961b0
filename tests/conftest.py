"""Shared fixtures: real JSON-file repositories in a temp dir and fake mail ports."""
from pathlib import Path

import pytest

from src.application.interfaces.notification_dispatcher import (
    DispatchError,
    NotificationDispatcher,
)
from src.domain.enums.listing_category import ListingCategory
from src.infrastructure.otp.in_memory_challenge_store import InMemoryOtpChallengeStore
from src.infrastructure.storage.json_listing_repository import JsonFileListingRepository
from src.infrastructure.storage.local_image_store import LocalImageStore


class RecordingDispatcher(NotificationDispatcher):
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    async def send(self, recipient: str, subject: str, html_body: str) -> None:
        self.sent.append((recipient, subject, html_body))


class FailingDispatcher(NotificationDispatcher):
    def __init__(self) -> None:
        self.attempts = 0

    async def send(self, recipient: str, subject: str, html_body: str) -> None:
        self.attempts += 1
        raise DispatchError("SMTP relay unavailable")


@pytest.fixture()
def repositories(tmp_path: Path) -> dict[ListingCategory, JsonFileListingRepository]:
    return {
        category: JsonFileListingRepository(tmp_path / category.collection_filename, category)
        for category in ListingCategory
    }


@pytest.fixture()
def challenge_store() -> InMemoryOtpChallengeStore:
    return InMemoryOtpChallengeStore()


@pytest.fixture()
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture()
def image_store(tmp_path: Path) -> LocalImageStore:
    return LocalImageStore(tmp_path / "uploads")
