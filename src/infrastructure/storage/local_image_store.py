import asyncio
import time
from functools import partial
from pathlib import Path, PurePath
from uuid import uuid4

import structlog

from src.application.interfaces.image_store import ImageStore, ImageUpload
from src.application.interfaces.listing_repository import PersistenceWriteError
from src.domain.enums.listing_category import ListingCategory

logger = structlog.get_logger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


def _safe_name(filename: str) -> str:
    # Browsers may send full client paths; keep only the final component.
    name = PurePath(filename.replace("\\", "/")).name
    return name or "image"


def _blocking_write(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


class LocalImageStore(ImageStore):
    """Writes uploads under ``<root>/<category area>/<millis>-<tag>-<name>``."""

    def __init__(self, root: Path) -> None:
        self._root = root

    async def save(self, category: ListingCategory, images: list[ImageUpload]) -> list[str]:
        loop = asyncio.get_running_loop()
        refs: list[str] = []
        for image in images:
            filename = f"{int(time.time() * 1000)}-{uuid4().hex[:8]}-{_safe_name(image.filename)}"
            target = self._root / category.upload_area / filename
            try:
                await loop.run_in_executor(None, partial(_blocking_write, target, image.content))
            except OSError as exc:
                logger.error("listing_image_write_failed", path=str(target), error=str(exc))
                raise PersistenceWriteError(f"Failed to store image {filename}: {exc}") from exc
            refs.append(f"{UPLOADS_URL_PREFIX}/{category.upload_area}/{filename}")

        if refs:
            logger.info("listing_images_stored", category=category.value, count=len(refs))
        return refs
