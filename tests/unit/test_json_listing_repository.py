"""Unit tests for the JSON-file listing repository."""
import asyncio
import json
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from src.application.interfaces.listing_repository import PersistenceWriteError
from src.domain.entities.listing import Listing
from src.domain.enums.listing_category import ListingCategory
from src.infrastructure.storage.json_listing_repository import JsonFileListingRepository


def _make_listing(item_name: str = "Drill", published: bool = False) -> Listing:
    listing = Listing.create_draft(
        category=ListingCategory.SELL,
        email="a@bue.edu.eg",
        item_name=item_name,
        price=Decimal("50"),
        images=["/uploads/pending/1-drill.jpg"],
    )
    if published:
        listing.publish()
    return listing


@pytest.fixture()
def repo(tmp_path: Path) -> JsonFileListingRepository:
    return JsonFileListingRepository(tmp_path / "listingsforsale.json", ListingCategory.SELL)


class TestLoad:
    @pytest.mark.asyncio
    async def test_missing_file_is_empty(self, repo: JsonFileListingRepository) -> None:
        assert await repo.load() == []

    @pytest.mark.asyncio
    async def test_blank_file_is_empty(self, repo: JsonFileListingRepository) -> None:
        repo.path.write_text("  \n")
        assert await repo.load() == []

    @pytest.mark.asyncio
    async def test_corrupt_file_is_empty(self, repo: JsonFileListingRepository) -> None:
        repo.path.write_text("[{not json")
        assert await repo.load() == []

    @pytest.mark.asyncio
    async def test_wrong_shape_is_empty(self, repo: JsonFileListingRepository) -> None:
        repo.path.write_text(json.dumps({"id": "x"}))
        assert await repo.load() == []

    @pytest.mark.asyncio
    async def test_reads_existing_camel_case_records(
        self, repo: JsonFileListingRepository
    ) -> None:
        repo.path.write_text(
            json.dumps(
                [
                    {
                        "id": "abc",
                        "sellerName": "Ali",
                        "email": "a@bue.edu.eg",
                        "contactNumber": "",
                        "whatsappNumber": "",
                        "itemName": "Microscope",
                        "itemDescription": "",
                        "price": 120.5,
                        "pricePeriod": "",
                        "images": [],
                        "isPublished": True,
                        "otpVerified": False,
                    }
                ]
            )
        )
        [listing] = await repo.load()
        assert listing.id == "abc"
        assert listing.category == ListingCategory.SELL
        assert listing.item_name == "Microscope"
        assert listing.price == Decimal("120.5")
        assert listing.published is True

    @pytest.mark.asyncio
    async def test_null_price_record_is_kept_alongside_others(
        self, repo: JsonFileListingRepository
    ) -> None:
        repo.path.write_text(
            json.dumps(
                [
                    {
                        "id": "a",
                        "email": "a@bue.edu.eg",
                        "itemName": "Drill",
                        "price": 10,
                        "isPublished": True,
                    },
                    {"id": "b", "email": "b@bue.edu.eg", "itemName": "Saw", "price": None},
                ]
            )
        )
        listings = await repo.load()
        assert [listing.id for listing in listings] == ["a", "b"]
        assert listings[0].price == Decimal("10")
        assert listings[1].price is None

        await repo.replace(listings)
        stored = json.loads(repo.path.read_text())
        assert [record["price"] for record in stored] == [10.0, None]

    @pytest.mark.asyncio
    async def test_invalid_record_is_skipped_not_the_collection(
        self, repo: JsonFileListingRepository
    ) -> None:
        repo.path.write_text(
            json.dumps(
                [
                    {"id": "a", "email": "a@bue.edu.eg", "itemName": "Drill", "price": 10},
                    {"itemName": "No id", "price": 5},
                    "not a record",
                ]
            )
        )
        assert [listing.id for listing in await repo.load()] == ["a"]

    @pytest.mark.asyncio
    async def test_non_finite_stored_price_reads_as_missing(
        self, repo: JsonFileListingRepository
    ) -> None:
        repo.path.write_text('[{"id": "a", "itemName": "Drill", "price": Infinity}]')
        [listing] = await repo.load()
        assert listing.price is None

        await repo.replace([listing])
        assert json.loads(repo.path.read_text())[0]["price"] is None


class TestReplace:
    @pytest.mark.asyncio
    async def test_round_trip_preserves_order_and_fields(
        self, repo: JsonFileListingRepository
    ) -> None:
        listings = [_make_listing("Drill"), _make_listing("Saw", published=True)]
        await repo.replace(listings)

        loaded = await repo.load()
        await repo.replace(loaded)
        reloaded = await repo.load()

        assert [listing.id for listing in reloaded] == [listing.id for listing in listings]
        assert reloaded == loaded
        assert reloaded[1].published is True
        assert reloaded[0].images == ["/uploads/pending/1-drill.jpg"]

    @pytest.mark.asyncio
    async def test_writes_human_readable_camel_case(
        self, repo: JsonFileListingRepository
    ) -> None:
        await repo.replace([_make_listing()])
        text = repo.path.read_text()
        assert text.startswith("[\n  {")
        assert '"itemName": "Drill"' in text
        assert '"isPublished": false' in text

    @pytest.mark.asyncio
    async def test_leaves_no_temp_files(self, repo: JsonFileListingRepository) -> None:
        await repo.replace([_make_listing()])
        await repo.replace([_make_listing(), _make_listing()])
        assert [p.name for p in repo.path.parent.iterdir()] == [repo.path.name]

    @pytest.mark.asyncio
    async def test_failed_write_keeps_previous_contents(
        self, repo: JsonFileListingRepository
    ) -> None:
        original = _make_listing()
        await repo.replace([original])

        with patch(
            "src.infrastructure.storage.json_listing_repository.os.replace",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(PersistenceWriteError):
                await repo.replace([original, _make_listing("Saw")])

        assert [listing.id for listing in await repo.load()] == [original.id]
        assert [p.name for p in repo.path.parent.iterdir()] == [repo.path.name]

    @pytest.mark.asyncio
    async def test_price_beyond_float_range_is_refused(
        self, repo: JsonFileListingRepository
    ) -> None:
        original = _make_listing()
        await repo.replace([original])
        oversized = _make_listing("Saw")
        oversized.price = Decimal("1e400")

        with pytest.raises(PersistenceWriteError):
            await repo.replace([original, oversized])

        assert json.loads(repo.path.read_text())[0]["id"] == original.id
        assert [listing.id for listing in await repo.load()] == [original.id]


class TestDerivedReads:
    @pytest.mark.asyncio
    async def test_find_by_id(self, repo: JsonFileListingRepository) -> None:
        target = _make_listing("Saw")
        await repo.replace([_make_listing(), target])
        found = await repo.find_by_id(target.id)
        assert found is not None
        assert found.item_name == "Saw"
        assert await repo.find_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_filter_published(self, repo: JsonFileListingRepository) -> None:
        draft = _make_listing("Drill")
        live = _make_listing("Saw", published=True)
        await repo.replace([draft, live])
        assert [listing.id for listing in await repo.filter_published()] == [live.id]


class TestConcurrentAppends:
    @pytest.mark.asyncio
    async def test_no_lost_updates(self, repo: JsonFileListingRepository) -> None:
        listings = [_make_listing(f"Item {i}") for i in range(20)]
        await asyncio.gather(*(repo.append(listing) for listing in listings))
        stored = await repo.load()
        assert {listing.id for listing in stored} == {listing.id for listing in listings}
