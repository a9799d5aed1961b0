"""
On-disk listing records.

Collections are stored as a JSON array of camelCase objects, one file per
category. These models are purely infrastructure concerns; domain entities
are mapped to/from them inside the repository.

Older files may carry ``"price": null`` (a price that never parsed) or omit
optional fields, so everything except ``id`` has a default.
"""
from pydantic import BaseModel, ConfigDict, Field


class ListingRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    seller_name: str = Field(default="", alias="sellerName")
    email: str = ""
    contact_number: str = Field(default="", alias="contactNumber")
    whatsapp_number: str = Field(default="", alias="whatsappNumber")
    item_name: str = Field(default="", alias="itemName")
    item_description: str = Field(default="", alias="itemDescription")
    price: float | None = None
    price_period: str = Field(default="", alias="pricePeriod")
    images: list[str] = Field(default_factory=list)
    is_published: bool = Field(default=False, alias="isPublished")
    otp_verified: bool = Field(default=False, alias="otpVerified")
