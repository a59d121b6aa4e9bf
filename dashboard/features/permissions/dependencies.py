"""
FastAPI dependencies for route protection.

Each dependency binds the RBAC decision functions to the authenticated
profile, then either returns the profile, raises 403, or raises a
PermissionRedirect when the route was declared with a redirect target.
"""
from collections.abc import Iterable
from typing import Annotated

from fastapi import Depends, HTTPException, status

from dashboard.features.permissions.session import (
    GuardStatus,
    PermissionContext,
    ProfileSnapshot,
    Requirement,
    RouteGuard,
)
from dashboard.features.users.dependencies import get_current_user
from dashboard.features.users.schemas import UserProfile
from dashboard.utils import get_logger


log = get_logger(__name__)


class PermissionRedirect(Exception):
    """Raised by a guarded page route; the application answers with a redirect."""

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location


def profile_snapshot(profile: UserProfile | None) -> ProfileSnapshot:
    """Snapshot of an already loaded profile."""
    if profile is None:
        return ProfileSnapshot(role=None)
    return ProfileSnapshot(role=profile.role)


async def get_permission_context(
    current_user: Annotated[UserProfile, Depends(get_current_user)]
) -> PermissionContext:
    """
    Permission queries bound to the authenticated profile.

    Usage:
        @router.get("/")
        async def page(context: PermissionContext = Depends(get_permission_context)):
            return context.render_if("member:edit", {"action": "edit"})
    """
    return PermissionContext(lambda: profile_snapshot(current_user))


def require(requirement: Requirement, redirect_to: str | None = None):
    """
    FastAPI dependency to require a permission requirement.

    Usage:
        @router.get("/admin")
        async def admin_page(user: UserProfile = Depends(require(ADMIN, redirect_to="/dashboard"))):
            ...

    Args:
        requirement: Permission, all-of or any-of requirement
        redirect_to: When set, a denial redirects here instead of answering 403

    Returns:
        Dependency function that returns the current profile if the requirement holds
    """
    async def permission_dependency(
        current_user: Annotated[UserProfile, Depends(get_current_user)]
    ) -> UserProfile:
        redirects: list[str] = []
        guard = RouteGuard(requirement, redirect_to or "", redirects.append)
        if guard.evaluate(profile_snapshot(current_user)) is GuardStatus.GRANTED:
            return current_user

        log.debug("Profile %s denied %s", current_user.id, requirement.describe())
        if redirect_to:
            raise PermissionRedirect(redirects[0])
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Permission denied: requires {requirement.describe()}"
        )

    return permission_dependency


def require_permission(permission: str, redirect_to: str | None = None):
    """
    FastAPI dependency to require a specific permission.

    Usage:
        @router.post("/members")
        async def create_member(user: UserProfile = Depends(require_permission("member:create"))):
            ...
    """
    return require(Requirement(permission=permission), redirect_to)


def require_all_permissions(permissions: Iterable[str], redirect_to: str | None = None):
    """FastAPI dependency to require ALL of the specified permissions."""
    return require(Requirement(all_of=tuple(permissions)), redirect_to)


def require_any_permission(permissions: Iterable[str], redirect_to: str | None = None):
    """FastAPI dependency to require ANY of the specified permissions."""
    return require(Requirement(any_of=tuple(permissions)), redirect_to)
