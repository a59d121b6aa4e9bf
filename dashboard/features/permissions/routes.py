"""
Permission routes: the role/permission catalog and checks for the current user.
"""
from typing import Annotated

from fastapi import APIRouter, Depends

from dashboard.features.permissions.dependencies import get_permission_context
from dashboard.features.permissions.rbac import ALL_PERMISSIONS, RESOURCE_ACTIONS, ROLE_PERMISSIONS, Role
from dashboard.features.permissions.schemas import (
    CatalogResponse,
    MyPermissionsResponse,
    PermissionCheckRequest,
    PermissionCheckResponse,
)
from dashboard.features.permissions.session import PermissionContext, Requirement


router = APIRouter(tags=["permissions"])


@router.get("/catalog", response_model=CatalogResponse)
async def get_catalog():
    """The permission catalog and the grants of every role."""
    return CatalogResponse(
        resources={resource: list(actions) for resource, actions in RESOURCE_ACTIONS.items()},
        permissions=sorted(ALL_PERMISSIONS),
        roles=[role.value for role in Role],
        role_permissions={role: sorted(granted) for role, granted in ROLE_PERMISSIONS.items()},
    )


@router.get("/me", response_model=MyPermissionsResponse)
async def get_my_permissions(
    context: Annotated[PermissionContext, Depends(get_permission_context)]
):
    """Current role and the permissions it grants."""
    role = context.role()
    return MyPermissionsResponse(role=role, permissions=sorted(context.permissions()))


@router.post("/check", response_model=PermissionCheckResponse)
async def check_permission(
    check_request: PermissionCheckRequest,
    context: Annotated[PermissionContext, Depends(get_permission_context)]
):
    """Check if the current user satisfies a permission requirement."""
    requirement = Requirement(
        permission=check_request.permission,
        all_of=tuple(check_request.all_permissions),
        any_of=tuple(check_request.any_permission),
    )
    return PermissionCheckResponse(allowed=context.allows(requirement), role=context.role())
