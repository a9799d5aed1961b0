from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_notify_contact_viewed_use_case
from src.api.schemas.listing_responses import (
    NotifyViewContactRequest,
    NotifyViewContactResponse,
)
from src.application.exceptions import ListingNotFoundError
from src.application.interfaces.notification_dispatcher import DispatchError
from src.application.use_cases.notify_contact_viewed import (
    NotifyContactViewed,
    NotifyContactViewedInput,
)

router = APIRouter(prefix="/api", tags=["notifications"])


@router.post("/notify-view-contact", response_model=NotifyViewContactResponse)
async def notify_view_contact(
    body: NotifyViewContactRequest,
    use_case: NotifyContactViewed = Depends(get_notify_contact_viewed_use_case),
) -> NotifyViewContactResponse:
    try:
        await use_case.execute(NotifyContactViewedInput(listing_id=body.id, category=body.type))
    except ListingNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")
    except DispatchError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send notification",
        )
    return NotifyViewContactResponse()
