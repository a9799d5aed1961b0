"""Unit tests for the Listing and OtpChallenge domain entities."""
from decimal import Decimal

import pytest

from src.domain.entities.listing import Listing
from src.domain.entities.otp_challenge import OtpChallenge, generate_otp_code
from src.domain.enums.listing_category import ListingCategory
from src.domain.enums.listing_state import ListingState
from src.domain.state_machine.lifecycle_state_machine import InvalidStateTransitionError


def _make_listing(**overrides) -> Listing:  # type: ignore[no-untyped-def]
    defaults = dict(
        category=ListingCategory.SELL,
        email="a@bue.edu.eg",
        item_name="Drill",
        price=Decimal("50"),
    )
    defaults.update(overrides)
    return Listing.create_draft(**defaults)


class TestCreateDraft:
    def test_creates_unpublished_draft(self) -> None:
        listing = _make_listing()
        assert listing.state == ListingState.DRAFT
        assert listing.published is False
        assert listing.otp_verified is False

    def test_generates_distinct_ids(self) -> None:
        assert _make_listing().id != _make_listing().id

    def test_copies_images(self) -> None:
        images = ["/uploads/pending/1-a.jpg"]
        listing = _make_listing(images=images)
        images.append("/uploads/pending/2-b.jpg")
        assert listing.images == ["/uploads/pending/1-a.jpg"]


class TestPublish:
    def test_publish_sets_both_flags(self) -> None:
        listing = _make_listing()
        listing.publish()
        assert listing.state == ListingState.PUBLISHED
        assert listing.published is True
        assert listing.otp_verified is True

    def test_cannot_publish_twice(self) -> None:
        listing = _make_listing()
        listing.publish()
        with pytest.raises(InvalidStateTransitionError):
            listing.publish()


class TestOtpChallenge:
    def test_code_is_six_digits(self) -> None:
        for _ in range(200):
            code = generate_otp_code()
            assert len(code) == 6
            assert 100000 <= int(code) <= 999999

    def test_matches_exact_parameters(self) -> None:
        challenge = OtpChallenge(
            email="a@bue.edu.eg", code="123456", listing_id="L1", category=ListingCategory.SELL
        )
        assert challenge.matches(listing_id="L1", category=ListingCategory.SELL, code="123456")

    @pytest.mark.parametrize(
        "listing_id, category, code",
        [
            ("L1", ListingCategory.SELL, "654321"),
            ("L2", ListingCategory.SELL, "123456"),
            ("L1", ListingCategory.LEASE, "123456"),
            ("L1", ListingCategory.SELL, " 123456"),
        ],
    )
    def test_rejects_any_difference(
        self, listing_id: str, category: ListingCategory, code: str
    ) -> None:
        challenge = OtpChallenge(
            email="a@bue.edu.eg", code="123456", listing_id="L1", category=ListingCategory.SELL
        )
        assert not challenge.matches(listing_id=listing_id, category=category, code=code)
