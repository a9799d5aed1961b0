import os

from fastapi import APIRouter, Depends

from src.api.dependencies import ListingRepositories, get_listing_repositories
from src.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    repositories: ListingRepositories = Depends(get_listing_repositories),
) -> dict:  # type: ignore[type-arg]
    """Liveness + storage health check."""
    data_dir = settings.data_dir
    if not data_dir.is_dir():
        storage_status = f"error: {data_dir} is not a directory"
    elif not os.access(data_dir, os.W_OK):
        storage_status = f"error: {data_dir} is not writable"
    else:
        storage_status = "ok"

    published = {
        category.value: len(await repo.filter_published())
        for category, repo in repositories.items()
    }

    return {
        "status": "healthy" if storage_status == "ok" else "degraded",
        "storage": storage_status,
        "published_listings": published,
    }
