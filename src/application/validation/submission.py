"""
Validation of listing submission forms.

Pure functions only: the result is either a fully typed
``ValidatedSubmission`` or a ``ListingValidationError`` naming the first
failing field. Checks run in a fixed order and the first failure wins.
"""
import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from src.config import settings


class ListingValidationError(Exception):
    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)


@dataclass
class SubmissionFields:
    """Raw form values as received; absent fields are empty strings."""

    email: str = ""
    item_name: str = ""
    price: str = ""
    seller_name: str = ""
    contact_number: str = ""
    whatsapp_number: str = ""
    item_description: str = ""
    price_period: str = ""


@dataclass(frozen=True)
class ValidatedSubmission:
    email: str
    item_name: str
    price: Decimal
    seller_name: str
    contact_number: str
    whatsapp_number: str
    item_description: str
    price_period: str


def parse_price(raw: str) -> Decimal:
    try:
        price = Decimal(raw)
    except InvalidOperation:
        raise ListingValidationError("price", "Price must be a non-negative number") from None
    # Stored as a JSON number, so it must also fit a finite float.
    if not price.is_finite() or price < 0 or not math.isfinite(float(price)):
        raise ListingValidationError("price", "Price must be a non-negative number")
    return price


def validate_submission(
    fields: SubmissionFields,
    *,
    image_count: int = 0,
    email_domain: str | None = None,
    max_images: int | None = None,
) -> ValidatedSubmission:
    email_domain = email_domain or settings.institutional_email_domain
    max_images = settings.max_listing_images if max_images is None else max_images

    email = fields.email.strip()
    if not email or not email.endswith(f"@{email_domain}"):
        raise ListingValidationError("email", f"Email must be @{email_domain} domain")

    item_name = fields.item_name.strip()
    if not item_name:
        raise ListingValidationError("itemName", "Item name is required")

    raw_price = fields.price.strip()
    if not raw_price:
        raise ListingValidationError("price", "Price is required")
    price = parse_price(raw_price)

    if image_count > max_images:
        raise ListingValidationError("images", f"At most {max_images} images may be attached")

    return ValidatedSubmission(
        email=email,
        item_name=item_name,
        price=price,
        seller_name=fields.seller_name.strip(),
        contact_number=fields.contact_number.strip(),
        whatsapp_number=fields.whatsapp_number.strip(),
        item_description=fields.item_description.strip(),
        price_period=fields.price_period.strip(),
    )
