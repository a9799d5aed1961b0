"""Unit tests for the in-memory OTP challenge store."""
import asyncio

import pytest

from src.domain.entities.otp_challenge import OtpChallenge
from src.domain.enums.listing_category import ListingCategory
from src.infrastructure.otp.in_memory_challenge_store import InMemoryOtpChallengeStore

EMAIL = "a@bue.edu.eg"


def _challenge(listing_id: str = "L1", category: ListingCategory = ListingCategory.SELL) -> OtpChallenge:
    return OtpChallenge.issue(email=EMAIL, listing_id=listing_id, category=category)


class TestPutGet:
    @pytest.mark.asyncio
    async def test_get_unknown_email(self, challenge_store: InMemoryOtpChallengeStore) -> None:
        assert await challenge_store.get(EMAIL) is None

    @pytest.mark.asyncio
    async def test_put_then_get(self, challenge_store: InMemoryOtpChallengeStore) -> None:
        challenge = _challenge()
        await challenge_store.put(EMAIL, challenge)
        assert await challenge_store.get(EMAIL) == challenge

    @pytest.mark.asyncio
    async def test_put_replaces_across_categories(
        self, challenge_store: InMemoryOtpChallengeStore
    ) -> None:
        await challenge_store.put(EMAIL, _challenge("L1", ListingCategory.SELL))
        second = _challenge("L2", ListingCategory.LEASE)
        await challenge_store.put(EMAIL, second)
        assert await challenge_store.get(EMAIL) == second
        assert len(challenge_store) == 1


class TestRemove:
    @pytest.mark.asyncio
    async def test_remove(self, challenge_store: InMemoryOtpChallengeStore) -> None:
        await challenge_store.put(EMAIL, _challenge())
        assert await challenge_store.remove(EMAIL) is True
        assert await challenge_store.get(EMAIL) is None

    @pytest.mark.asyncio
    async def test_remove_missing(self, challenge_store: InMemoryOtpChallengeStore) -> None:
        assert await challenge_store.remove(EMAIL) is False

    @pytest.mark.asyncio
    async def test_remove_expected_skips_newer_challenge(
        self, challenge_store: InMemoryOtpChallengeStore
    ) -> None:
        first = _challenge("L1")
        second = _challenge("L2")
        await challenge_store.put(EMAIL, first)
        await challenge_store.put(EMAIL, second)
        assert await challenge_store.remove(EMAIL, expected=first) is False
        assert await challenge_store.get(EMAIL) == second


class TestConcurrency:
    @pytest.mark.asyncio
    async def test_concurrent_puts_leave_one_challenge(
        self, challenge_store: InMemoryOtpChallengeStore
    ) -> None:
        challenges = [_challenge(f"L{i}") for i in range(50)]
        await asyncio.gather(*(challenge_store.put(EMAIL, c) for c in challenges))
        assert len(challenge_store) == 1
        assert await challenge_store.get(EMAIL) in challenges
