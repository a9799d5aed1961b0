from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities.listing import Listing
from src.domain.enums.listing_category import ListingCategory


class ListingResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    category: ListingCategory
    seller_name: str = Field(alias="sellerName")
    email: str
    contact_number: str = Field(alias="contactNumber")
    whatsapp_number: str = Field(alias="whatsappNumber")
    item_name: str = Field(alias="itemName")
    item_description: str = Field(alias="itemDescription")
    price: float | None
    price_period: str = Field(alias="pricePeriod")
    images: list[str]
    is_published: bool = Field(alias="isPublished")
    otp_verified: bool = Field(alias="otpVerified")

    @classmethod
    def from_listing(cls, listing: Listing) -> "ListingResponse":
        return cls(
            id=listing.id,
            category=listing.category,
            seller_name=listing.seller_name,
            email=listing.email,
            contact_number=listing.contact_number,
            whatsapp_number=listing.whatsapp_number,
            item_name=listing.item_name,
            item_description=listing.item_description,
            price=None if listing.price is None else float(listing.price),
            price_period=listing.price_period,
            images=listing.images,
            is_published=listing.published,
            otp_verified=listing.otp_verified,
        )


class NotifyViewContactRequest(BaseModel):
    id: str
    type: str


class NotifyViewContactResponse(BaseModel):
    success: bool = True
