"""
Pydantic schemas for the permission catalog and permission checks.
"""
from pydantic import Field

from dashboard.core.schemas import SheetModel


class CatalogResponse(SheetModel):
    """Resources, roles and the role table, as shown on the settings page."""
    resources: dict[str, list[str]]
    permissions: list[str]
    roles: list[str]
    role_permissions: dict[str, list[str]]


class MyPermissionsResponse(SheetModel):
    role: str | None = None
    permissions: list[str] = Field(default_factory=list)


class PermissionCheckRequest(SheetModel):
    """
    Permission check for the current user.

    `permission` takes precedence over `all_permissions`, which takes
    precedence over `any_permission`. A check naming nothing is denied.
    """
    permission: str | None = None
    all_permissions: list[str] = Field(default_factory=list)
    any_permission: list[str] = Field(default_factory=list)


class PermissionCheckResponse(SheetModel):
    allowed: bool
    role: str | None = None
