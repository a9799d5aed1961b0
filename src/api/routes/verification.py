from fastapi import APIRouter, Depends, Form, Query, status
from fastapi.responses import HTMLResponse

from src.api.dependencies import get_verify_listing_use_case
from src.api.views import error_page, listing_verified_page, otp_form_page
from src.application.exceptions import ListingNotFoundError
from src.application.interfaces.listing_repository import PersistenceWriteError
from src.application.use_cases.verify_listing import (
    ChallengeMismatchError,
    VerifyListing,
    VerifyListingInput,
)
from src.domain.enums.listing_category import ListingCategory
from src.domain.state_machine.lifecycle_state_machine import InvalidStateTransitionError

router = APIRouter(prefix="/verify-otp", tags=["verification"])


@router.get("/{category}", response_class=HTMLResponse)
async def otp_form(
    category: ListingCategory,
    listing_id: str = Query(default="", alias="id"),
    email: str = Query(default=""),
) -> HTMLResponse:
    return HTMLResponse(otp_form_page(category, listing_id, email))


@router.post("/{category}", response_class=HTMLResponse)
async def verify_otp(
    category: ListingCategory,
    listing_id: str = Form(default="", alias="id"),
    email: str = Form(default=""),
    otp: str = Form(default=""),
    use_case: VerifyListing = Depends(get_verify_listing_use_case),
) -> HTMLResponse:
    """Check the submitted code and publish the listing on a match."""
    try:
        await use_case.execute(
            VerifyListingInput(
                category=category,
                listing_id=listing_id.strip(),
                email=email.strip(),
                code=otp.strip(),
            )
        )
    except ChallengeMismatchError:
        return HTMLResponse(error_page("Invalid OTP"), status_code=status.HTTP_400_BAD_REQUEST)
    except ListingNotFoundError:
        return HTMLResponse(error_page("Listing not found"), status_code=status.HTTP_404_NOT_FOUND)
    except InvalidStateTransitionError:
        return HTMLResponse(
            error_page("Listing is already published"), status_code=status.HTTP_409_CONFLICT
        )
    except PersistenceWriteError:
        return HTMLResponse(
            error_page("Could not publish your listing, please try again."),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return HTMLResponse(listing_verified_page(category))
