"""
Field validation rules shared by the request schemas.

Each function returns an error message, or None when the value is valid.
"""
import re
from urllib.parse import urlparse


PHONE_RE = re.compile(r"^\+?[0-9\s\-()]{8,20}$")
WEBSITE_RE = re.compile(
    r"^(https?://)?(www\.)?[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)+(/[a-zA-Z0-9\-._~:/?#\[\]@!$&'()*+,;=]*)?$"
)
MIN_PASSWORD_LENGTH = 8


def validate_phone(phone: str | None) -> str | None:
    if not phone:
        return "Phone number is required"
    if not PHONE_RE.match(phone):
        return "Please enter a valid phone number"
    return None


def validate_website(url: str | None) -> str | None:
    """Website is optional; the scheme may be omitted."""
    if not url:
        return None
    with_scheme = url if re.match(r"^https?://", url) else f"https://{url}"
    if not urlparse(with_scheme).netloc:
        return "Please enter a valid website URL"
    if not WEBSITE_RE.match(with_scheme):
        return "Please enter a valid website URL (e.g., example.com or www.example.com)"
    return None


def validate_address(address: str | None) -> str | None:
    if not address:
        return "Business location is required"
    if len(address.strip()) < 5:
        return "Please enter a complete address"
    parts = [part for part in address.split(",") if part.strip()]
    if len(parts) < 2:
        return "Please include street, city, and state/country"
    if not re.search(r"\d", address):
        return "Please include a street number in your address"
    return None


def validate_password(password: str | None) -> str | None:
    if not password or not password.strip():
        return "Password is required"
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return None


def check(error: str | None, value):
    """Raise ValueError for pydantic validators when a rule failed, else return the value."""
    if error:
        raise ValueError(error)
    return value
