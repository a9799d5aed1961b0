import secrets
from dataclasses import dataclass

from src.domain.enums.listing_category import ListingCategory

OTP_LOWEST = 100000
OTP_HIGHEST = 999999


def generate_otp_code() -> str:
    """Uniform 6-digit code in [100000, 999999]."""
    return str(OTP_LOWEST + secrets.randbelow(OTP_HIGHEST - OTP_LOWEST + 1))


@dataclass(frozen=True)
class OtpChallenge:
    """Pending proof-of-email for one draft listing, keyed by ``email``."""

    email: str
    code: str
    listing_id: str
    category: ListingCategory

    @classmethod
    def issue(cls, *, email: str, listing_id: str, category: ListingCategory) -> "OtpChallenge":
        return cls(email=email, code=generate_otp_code(), listing_id=listing_id, category=category)

    def matches(self, *, listing_id: str, category: ListingCategory, code: str) -> bool:
        return (
            secrets.compare_digest(self.code.encode(), code.encode())
            and self.listing_id == listing_id
            and self.category == category
        )
