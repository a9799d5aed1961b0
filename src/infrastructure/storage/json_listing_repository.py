import asyncio
import json
import math
import os
import tempfile
from collections.abc import Sequence
from decimal import Decimal
from functools import partial
from pathlib import Path

import structlog
from pydantic import ValidationError

from src.application.interfaces.listing_repository import (
    ListingRepository,
    PersistenceWriteError,
)
from src.domain.entities.listing import Listing
from src.domain.enums.listing_category import ListingCategory
from src.infrastructure.storage.records import ListingRecord

logger = structlog.get_logger(__name__)


def _price_from_record(value: float | None) -> Decimal | None:
    if value is None or not math.isfinite(value):
        return None
    return Decimal(str(value))


def _to_domain(record: ListingRecord, category: ListingCategory) -> Listing:
    return Listing(
        id=record.id,
        category=category,
        seller_name=record.seller_name,
        email=record.email,
        contact_number=record.contact_number,
        whatsapp_number=record.whatsapp_number,
        item_name=record.item_name,
        item_description=record.item_description,
        price=_price_from_record(record.price),
        price_period=record.price_period,
        images=list(record.images),
        published=record.is_published,
        otp_verified=record.otp_verified,
    )


def _to_record(listing: Listing) -> ListingRecord:
    return ListingRecord(
        id=listing.id,
        seller_name=listing.seller_name,
        email=listing.email,
        contact_number=listing.contact_number,
        whatsapp_number=listing.whatsapp_number,
        item_name=listing.item_name,
        item_description=listing.item_description,
        price=None if listing.price is None else float(listing.price),
        price_period=listing.price_period,
        images=list(listing.images),
        is_published=listing.published,
        otp_verified=listing.otp_verified,
    )


def _blocking_read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _blocking_atomic_write(path: Path, body: str) -> None:
    """Write to a sibling temp file, then rename over ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(body)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class JsonFileListingRepository(ListingRepository):
    """
    Listing collection stored as a single JSON file.

    Every replace rewrites the whole file through a temp file and an atomic
    rename, so unlocked readers only ever see a complete collection.
    """

    def __init__(self, path: Path, category: ListingCategory) -> None:
        super().__init__(category)
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> list[Listing]:
        loop = asyncio.get_running_loop()
        try:
            raw = await loop.run_in_executor(None, partial(_blocking_read, self._path))
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "listing_collection_unreadable",
                category=self.category.value,
                path=str(self._path),
                error=str(exc),
            )
            return []

        if not raw.strip():
            return []

        try:
            items = json.loads(raw)
        except ValueError as exc:
            # Corrupt collections degrade to empty rather than failing reads.
            logger.warning(
                "listing_collection_unreadable",
                category=self.category.value,
                path=str(self._path),
                error=str(exc),
            )
            return []
        if not isinstance(items, list):
            logger.warning(
                "listing_collection_unreadable",
                category=self.category.value,
                path=str(self._path),
                error=f"expected a JSON array, got {type(items).__name__}",
            )
            return []

        listings = []
        for index, item in enumerate(items):
            try:
                record = ListingRecord.model_validate(item)
            except ValidationError as exc:
                logger.warning(
                    "listing_record_skipped",
                    category=self.category.value,
                    path=str(self._path),
                    index=index,
                    error=str(exc),
                )
                continue
            listings.append(_to_domain(record, self.category))
        return listings

    async def replace(self, listings: Sequence[Listing]) -> None:
        payload = [_to_record(listing).model_dump(by_alias=True) for listing in listings]
        try:
            body = json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False)
        except ValueError as exc:
            logger.error(
                "listing_collection_write_failed",
                category=self.category.value,
                path=str(self._path),
                error=str(exc),
            )
            raise PersistenceWriteError(
                f"Refusing to write non-finite values to {self._path}: {exc}"
            ) from exc
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, partial(_blocking_atomic_write, self._path, body))
        except OSError as exc:
            logger.error(
                "listing_collection_write_failed",
                category=self.category.value,
                path=str(self._path),
                error=str(exc),
            )
            raise PersistenceWriteError(
                f"Failed to write {self.category.value} listings to {self._path}: {exc}"
            ) from exc
        logger.debug(
            "listing_collection_replaced",
            category=self.category.value,
            count=len(payload),
        )
