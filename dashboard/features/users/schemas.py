"""
Pydantic schemas for user profiles, authentication and onboarding.
"""
import enum

from pydantic import EmailStr, Field, field_validator

from dashboard.core.schemas import SheetModel
from dashboard.core.validation import (
    check,
    validate_address,
    validate_password,
    validate_phone,
    validate_website,
)
from dashboard.features.permissions.rbac import Role


class Plan(str, enum.Enum):
    FREE = "free"
    BASIC = "basic"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


class NotificationSettings(SheetModel):
    """Which notification kinds the user receives."""
    announcements: bool = True
    polls: bool = True
    mentions: bool = True
    team_updates: bool = True
    shift_changes: bool = True


class UserProfileResponse(SheetModel):
    """Profile as returned to clients."""
    id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    business_name: str | None = None
    business_type: str | None = None
    website: str | None = None
    location: str | None = None
    plan: str = Plan.FREE.value
    # Kept as a plain string; RBAC denies roles outside the catalog
    role: str | None = None
    profile_picture: str | None = None
    notification_settings: NotificationSettings = Field(default_factory=NotificationSettings)
    location_count: str | None = None
    employee_count: str | None = None
    onboarding_completed: bool = False
    onboarding_completed_at: str | None = None
    created_at: str | None = None


class UserProfile(UserProfileResponse):
    """Stored profile row, including the password hash."""
    password_hash: str | None = None


class UserRegister(SheetModel):
    """Schema for creating an account."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., max_length=72)
    phone: str | None = None
    business_name: str | None = Field(None, max_length=255)
    business_type: str | None = Field(None, max_length=100)
    website: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=500)

    @field_validator("password")
    @classmethod
    def password_rules(cls, v: str) -> str:
        return check(validate_password(v), v)

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


class UserLogin(SheetModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(SheetModel):
    access_token: str
    token_type: str = "bearer"
    profile: UserProfileResponse


class UserUpdate(SheetModel):
    """Schema for updating profile information. Role and plan are not editable here."""
    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = None
    business_name: str | None = Field(None, max_length=255)
    business_type: str | None = Field(None, max_length=100)
    website: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=500)
    profile_picture: str | None = Field(None, max_length=500)

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


class OnboardingData(SheetModel):
    """Answers collected by the onboarding flow."""
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    email: EmailStr | None = None
    phone: str | None = None
    profile_picture: str | None = Field(None, max_length=500)
    role: Role | None = None
    business_name: str | None = Field(None, max_length=255)
    business_type: str | None = Field(None, max_length=100)
    other_business_type: str | None = Field(None, max_length=100)
    website: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=500)
    location_count: str | None = Field(None, max_length=50)
    employee_count: str | None = Field(None, max_length=50)
    plan: Plan | None = None
    notification_settings: NotificationSettings | None = None

    @field_validator("phone")
    @classmethod
    def phone_format(cls, v: str | None) -> str | None:
        return v if v is None else check(validate_phone(v), v)

    @field_validator("website")
    @classmethod
    def website_format(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return check(validate_website(v), v)

    @field_validator("location")
    @classmethod
    def location_format(cls, v: str | None) -> str | None:
        return v if v is None else check(validate_address(v), v)
