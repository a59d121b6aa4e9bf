"""
Dashboard routes.

The summary is rendered server side: each section and action is included only
when the current role is allowed to see it.
"""
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from dashboard.features.permissions.dependencies import get_permission_context, require
from dashboard.features.permissions.session import ADMIN, ANNOUNCEMENT_MANAGE, PermissionContext
from dashboard.features.users.dependencies import get_current_user
from dashboard.features.users.schemas import UserProfile, UserProfileResponse


router = APIRouter(tags=["dashboard"])

SECTIONS = {
    "announcements": ("announcement:view", "/announcements"),
    "units": ("org:view", "/organizations"),
    "members": ("member:view", "/members"),
    "settings": ("settings:view", "/settings"),
    "billing": ("settings:billing", "/settings/billing/checkout-session"),
}

ENTITY_ACTIONS = {
    "announcement": ("create", "edit", "delete"),
    "org": ("create", "edit", "delete"),
    "member": ("create", "edit", "delete"),
}


@router.get("/")
async def get_dashboard(
    user: Annotated[UserProfile, Depends(get_current_user)],
    context: Annotated[PermissionContext, Depends(get_permission_context)]
) -> dict[str, Any]:
    """Profile, permissions, and the sections and actions visible to the current role."""
    sections = {}
    for name, (permission, href) in SECTIONS.items():
        section = context.render_if(permission, {"href": href})
        if section is not None:
            sections[name] = section

    actions = {
        resource: [
            action for action in resource_actions
            if context.render_if(f"{resource}:{action}", True, False)
        ]
        for resource, resource_actions in ENTITY_ACTIONS.items()
    }

    return {
        "profile": UserProfileResponse.model_validate(user.model_dump()).model_dump(by_alias=True),
        "role": context.role(),
        "permissions": sorted(context.permissions()),
        "sections": sections,
        "actions": actions,
        "adminPanel": context.render_if(ADMIN, "/dashboard/admin"),
    }


@router.get("/admin")
async def admin_page(
    user: Annotated[UserProfile, Depends(require(ADMIN, redirect_to="/dashboard"))]
):
    """Administration page for roles holding every edit permission."""
    return {"page": "admin", "role": user.role}


@router.get("/announcements/manage")
async def manage_announcements_page(
    user: Annotated[UserProfile, Depends(require(ANNOUNCEMENT_MANAGE, redirect_to="/dashboard"))]
):
    """Announcement management page for roles that can create or edit announcements."""
    return {"page": "announcements-manage", "role": user.role}
