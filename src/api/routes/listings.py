from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_listing_repo
from src.api.schemas.listing_responses import ListingResponse
from src.application.interfaces.listing_repository import ListingRepository

router = APIRouter(prefix="/api", tags=["listings"])


@router.get("/{category}/listings", response_model=list[ListingResponse])
async def list_published_listings(
    repo: ListingRepository = Depends(get_listing_repo),
) -> list[ListingResponse]:
    """Published listings of one category, in stored order."""
    return [ListingResponse.from_listing(listing) for listing in await repo.filter_published()]


@router.get("/{category}/listings/{listing_id}", response_model=ListingResponse)
async def get_published_listing(
    listing_id: str,
    repo: ListingRepository = Depends(get_listing_repo),
) -> ListingResponse:
    listing = await repo.find_by_id(listing_id)
    if listing is None or not listing.published:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")
    return ListingResponse.from_listing(listing)
