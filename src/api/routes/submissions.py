import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, UploadFile, status
from fastapi.responses import HTMLResponse

from src.api.dependencies import get_submit_listing_use_case
from src.api.views import error_page, otp_sent_page
from src.application.interfaces.image_store import ImageUpload
from src.application.interfaces.listing_repository import PersistenceWriteError
from src.application.use_cases.submit_listing import SubmitListing, SubmitListingInput
from src.application.validation.submission import ListingValidationError, SubmissionFields
from src.domain.enums.listing_category import ListingCategory

logger = structlog.get_logger(__name__)
router = APIRouter(tags=["submissions"])


@router.post("/preowned/{category}", response_class=HTMLResponse)
async def submit_listing(
    category: ListingCategory,
    background_tasks: BackgroundTasks,
    seller_name: str = Form(default="", alias="sellerName"),
    email: str = Form(default=""),
    contact_number: str = Form(default="", alias="contactNumber"),
    whatsapp_number: str = Form(default="", alias="whatsappNumber"),
    item_name: str = Form(default="", alias="itemName"),
    item_description: str = Form(default="", alias="itemDescription"),
    price: str = Form(default=""),
    price_period: str = Form(default="", alias="pricePeriod"),
    images: list[UploadFile] | None = File(default=None),
    use_case: SubmitListing = Depends(get_submit_listing_use_case),
) -> HTMLResponse:
    """Create a draft listing and email the submitter a verification code."""
    uploads = [
        ImageUpload(filename=upload.filename, content=await upload.read())
        for upload in images or []
        if upload.filename
    ]

    try:
        reference = await use_case.execute(
            SubmitListingInput(
                category=category,
                fields=SubmissionFields(
                    email=email,
                    item_name=item_name,
                    price=price,
                    seller_name=seller_name,
                    contact_number=contact_number,
                    whatsapp_number=whatsapp_number,
                    item_description=item_description,
                    price_period=price_period,
                ),
                images=uploads,
            ),
            defer=background_tasks.add_task,
        )
    except ListingValidationError as exc:
        logger.info("listing_submission_rejected", category=category.value, field=exc.field)
        return HTMLResponse(error_page(exc.message), status_code=status.HTTP_400_BAD_REQUEST)
    except PersistenceWriteError:
        return HTMLResponse(
            error_page("Could not save your listing, please try again."),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return HTMLResponse(otp_sent_page(reference.verify_url))
