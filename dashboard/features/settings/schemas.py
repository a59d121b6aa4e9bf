"""
Pydantic schemas for account settings and billing.
"""
from pydantic import EmailStr, Field, field_validator

from dashboard.core.schemas import SheetModel
from dashboard.core.validation import check, validate_address, validate_phone, validate_website
from dashboard.features.users.schemas import NotificationSettings


class SettingsResponse(SheetModel):
    plan: str
    role: str | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    business_name: str | None = None
    business_type: str | None = None
    website: str | None = None
    location: str | None = None
    notification_settings: NotificationSettings


class SettingsUpdate(SheetModel):
    """Business details and notification settings."""
    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = None
    business_name: str | None = Field(None, max_length=255)
    business_type: str | None = Field(None, max_length=100)
    website: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=500)
    notification_settings: NotificationSettings | None = None

    @field_validator("phone")
    @classmethod
    def phone_format(cls, v: str | None) -> str | None:
        return v if v is None else check(validate_phone(v), v)

    @field_validator("website")
    @classmethod
    def website_format(cls, v: str | None) -> str | None:
        return check(validate_website(v), v)

    @field_validator("location")
    @classmethod
    def location_format(cls, v: str | None) -> str | None:
        return v if v is None else check(validate_address(v), v)


class CheckoutSessionResponse(SheetModel):
    session_id: str
    url: str | None = None
