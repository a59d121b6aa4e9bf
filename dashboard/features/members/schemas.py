"""
Pydantic schemas for team members.
"""
import enum
import json
from typing import Any

from pydantic import EmailStr, Field, model_validator

from dashboard.core.schemas import SheetModel


class MemberRole(str, enum.Enum):
    ADMINISTRATOR = "Administrator"
    MANAGER = "Manager"
    STAFF = "Staff"
    GUEST = "Guest"


class MemberStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def _as_list(value: Any) -> list[str]:
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


class MemberBase(SheetModel):
    """Base member schema."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    roles: list[MemberRole] = Field(default_factory=list)
    units: list[str] = Field(default_factory=list, description="Organization unit ids")
    status: MemberStatus = MemberStatus.ACTIVE


class MemberCreate(MemberBase):
    """Schema for creating a new member."""
    pass


class MemberUpdate(SheetModel):
    """Schema for updating member information."""
    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    roles: list[MemberRole] | None = None
    units: list[str] | None = None
    status: MemberStatus | None = None


class MemberResponse(MemberBase):
    """
    Schema for member responses.

    Rows written before members could belong to several units carry a single
    `unit` cell; those are read as a one-element `units` list.
    """
    id: str
    email: str
    created_at: str | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_stored_row(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("roles") not in (None, ""):
            data["roles"] = [role for role in _as_list(data["roles"])
                             if role in MemberRole._value2member_map_]
        if data.get("units") not in (None, ""):
            data["units"] = _as_list(data["units"])
        elif data.get("unit") not in (None, ""):
            data["units"] = [str(data["unit"])]
        return data


def legacy_unit(units: list[str] | None) -> str:
    """Value of the single-unit column kept for older readers."""
    return units[0] if units else ""


class RecalculateResponse(SheetModel):
    counts: dict[str, int]
