"""
Role-based access control: permission catalog, role table and decision functions.

Permissions are opaque "<resource>:<action>" tokens. Each actor holds exactly
one role, and each role grants a fixed set of permissions. Decisions are pure
lookups against the table below and deny by default: a missing role, an
unknown role, an empty permission or an empty requirement list never grants
access.
"""
import enum
import warnings
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from dashboard.utils import get_logger


log = get_logger(__name__)


class Role(str, enum.Enum):
    """Closed set of roles an actor can hold."""
    OWNER = "owner"
    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    GUEST = "guest"


class InvalidRoleWarning(UserWarning):
    """Issued when a permission lookup receives a role outside the catalog."""


# ============================================================================
# Permission Catalog
# ============================================================================

RESOURCE_ACTIONS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "org": ("create", "view", "edit", "delete"),
    "member": ("create", "view", "edit", "delete"),
    "announcement": ("create", "view", "edit", "delete"),
    "settings": ("view", "edit", "billing"),
})

ALL_PERMISSIONS: frozenset[str] = frozenset(
    f"{resource}:{action}"
    for resource, actions in RESOURCE_ACTIONS.items()
    for action in actions
)


# ============================================================================
# Role Table
# ============================================================================

ROLE_PERMISSIONS: Mapping[str, frozenset[str]] = MappingProxyType({
    Role.OWNER.value: ALL_PERMISSIONS,
    Role.ADMIN.value: frozenset({
        "org:view", "org:edit",
        "member:create", "member:view", "member:edit", "member:delete",
        "announcement:create", "announcement:view", "announcement:edit", "announcement:delete",
        "settings:view", "settings:edit",
    }),
    Role.MANAGER.value: frozenset({
        "org:view",
        "member:create", "member:view", "member:edit",
        "announcement:create", "announcement:view", "announcement:edit",
        "settings:view",
    }),
    Role.STAFF.value: frozenset({
        "org:view",
        "member:view",
        "announcement:view",
        "settings:view",
    }),
    Role.GUEST.value: frozenset({
        "org:view",
        "announcement:view",
    }),
})

# Outcome of an all-of / any-of query that names no permissions
EMPTY_REQUIREMENT_GRANTS = False


def empty_requirement_decision() -> bool:
    return EMPTY_REQUIREMENT_GRANTS


def _role_key(role: Role | str | None) -> str | None:
    if isinstance(role, Role):
        return role.value
    return role


def get_permissions_for_role(role: Role | str | None) -> frozenset[str]:
    """
    Get all permissions granted to a role.

    Args:
        role: A Role or its string value

    Returns:
        The role's immutable permission set, or an empty set when the role
        is missing or not in the catalog (an InvalidRoleWarning is issued).
    """
    key = _role_key(role)
    if not isinstance(key, str) or key not in ROLE_PERMISSIONS:
        log.warning("Invalid role provided: %r", role)
        warnings.warn(f"Invalid role provided: {role!r}", InvalidRoleWarning, stacklevel=2)
        return frozenset()
    return ROLE_PERMISSIONS[key]


def _granted(role: Role | str | None) -> frozenset[str] | None:
    """Permission set for a present role; None when the actor has no role."""
    if not role:
        return None
    return get_permissions_for_role(role)


def has_permission(role: Role | str | None, permission: str | None) -> bool:
    """Check if the given role has the specified permission."""
    if not role or not permission:
        log.debug("Denied %r: no role or no permission", permission)
        return False
    try:
        return permission in _granted(role)
    except Exception as e:
        log.warning("Error checking permission %r for role %r: %s", permission, role, e)
        return False


def has_all_permissions(role: Role | str | None, permissions: Iterable[str] | None) -> bool:
    """Check if the given role has every one of the specified permissions."""
    try:
        requested = list(permissions or ())
        if not requested:
            return empty_requirement_decision()
        granted = _granted(role)
        if granted is None:
            return False
        return all(permission in granted for permission in requested)
    except Exception as e:
        log.warning("Error checking all permissions for role %r: %s", role, e)
        return False


def has_any_permission(role: Role | str | None, permissions: Iterable[str] | None) -> bool:
    """Check if the given role has at least one of the specified permissions."""
    try:
        requested = list(permissions or ())
        if not requested:
            return empty_requirement_decision()
        granted = _granted(role)
        if granted is None:
            return False
        return any(permission in granted for permission in requested)
    except Exception as e:
        log.warning("Error checking any permissions for role %r: %s", role, e)
        return False
