"""Small HTML fragments returned by the form endpoints."""
from html import escape

from src.domain.enums.listing_category import ListingCategory


def otp_sent_page(verify_url: str) -> str:
    link = escape(verify_url)
    return f'<h1>OTP sent to your email!</h1><a href="{link}">Verify here</a>'


def otp_form_page(category: ListingCategory, listing_id: str, email: str) -> str:
    return (
        f'<form action="/verify-otp/{category.value}" method="POST">\n'
        f'  <input type="hidden" name="id" value="{escape(listing_id)}" />\n'
        f'  <input type="hidden" name="email" value="{escape(email)}" />\n'
        "  <label>Enter OTP:</label><input name=\"otp\" required />\n"
        '  <button type="submit">Verify</button>\n'
        "</form>"
    )


def listing_verified_page(category: ListingCategory) -> str:
    return (
        f"<h1>{category.label} Listing Verified!</h1>"
        f'<a href="{category.browse_path}">View listings</a>'
    )


def error_page(message: str) -> str:
    return escape(message)
