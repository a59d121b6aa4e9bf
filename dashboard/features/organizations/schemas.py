"""
Pydantic schemas for organization units (teams, locations, departments, roles).
"""
import enum

from pydantic import Field

from dashboard.core.schemas import SheetModel


class UnitType(str, enum.Enum):
    TEAM = "team"
    LOCATION = "location"
    DEPARTMENT = "department"
    ROLE = "role"


class UnitBase(SheetModel):
    """Base unit schema."""
    name: str = Field(..., min_length=1, max_length=255)
    type: UnitType
    description: str | None = Field(None, max_length=1000)
    address: str | None = Field(None, max_length=500, description="Locations only")
    capacity: int | None = Field(None, ge=0, description="Locations only")
    level: str | None = Field(None, max_length=100, description="Roles only")


class UnitCreate(UnitBase):
    """Schema for creating a new unit."""
    pass


class UnitUpdate(SheetModel):
    """Schema for updating unit information."""
    name: str | None = Field(None, min_length=1, max_length=255)
    type: UnitType | None = None
    description: str | None = Field(None, max_length=1000)
    address: str | None = Field(None, max_length=500)
    capacity: int | None = Field(None, ge=0)
    level: str | None = Field(None, max_length=100)


class UnitResponse(UnitBase):
    """Schema for unit responses. `members` is derived from member assignments."""
    id: str
    members: int = 0
    created_at: str | None = None
