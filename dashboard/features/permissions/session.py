"""
Binding of the RBAC decision functions to the current actor.

The current actor is read through an injected accessor returning a
ProfileSnapshot, never from a global. The accessor is consulted on every call
so a role change is seen by the next decision.
"""
import enum
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar, Union

from dashboard.features.permissions.rbac import (
    Role,
    empty_requirement_decision,
    get_permissions_for_role,
    has_all_permissions,
    has_any_permission,
    has_permission,
)
from dashboard.utils import get_logger


log = get_logger(__name__)

T = TypeVar("T")
F = TypeVar("F")


# ============================================================================
# Session state
# ============================================================================

@dataclass(frozen=True)
class Loading:
    """The actor's profile is still being fetched."""


@dataclass(frozen=True)
class Resolved:
    """The actor's profile has been fetched; role is None when it has none."""
    role: Role | str | None = None


SessionState = Union[Loading, Resolved]


@dataclass(frozen=True)
class ProfileSnapshot:
    """Read-only view of the current actor, as exposed by the account layer."""
    role: Role | str | None = None
    loading: bool = False

    def to_state(self) -> SessionState:
        if self.loading:
            return Loading()
        return Resolved(role=self.role)


ProfileAccessor = Callable[[], ProfileSnapshot]


# ============================================================================
# Requirements
# ============================================================================

@dataclass(frozen=True)
class Requirement:
    """
    A declarative permission requirement.

    The single permission wins over all_of, which wins over any_of. A
    requirement that names nothing is never satisfied.
    """
    permission: str | None = None
    all_of: tuple[str, ...] = ()
    any_of: tuple[str, ...] = ()

    def is_satisfied_by(self, role: Role | str | None) -> bool:
        if self.permission:
            return has_permission(role, self.permission)
        if self.all_of:
            return has_all_permissions(role, self.all_of)
        if self.any_of:
            return has_any_permission(role, self.any_of)
        return empty_requirement_decision()

    def describe(self) -> str:
        if self.permission:
            return self.permission
        if self.all_of:
            return "all of " + ", ".join(self.all_of)
        if self.any_of:
            return "one of " + ", ".join(self.any_of)
        return "nothing"


MEMBER_EDIT = Requirement(permission="member:edit")
ORG_EDIT = Requirement(permission="org:edit")
ANNOUNCEMENT_MANAGE = Requirement(any_of=("announcement:create", "announcement:edit"))
ADMIN = Requirement(all_of=("settings:edit", "member:edit", "org:edit"))


# ============================================================================
# Permission context
# ============================================================================

class PermissionContext:
    """
    Permission queries for the current actor.

    Usage:
        context = PermissionContext(lambda: ProfileSnapshot(role=profile.role))
        if context.can("member:edit"):
            ...
        actions = context.render_if(ADMIN, admin_panel, fallback=None)
    """

    def __init__(self, accessor: ProfileAccessor):
        self._accessor = accessor

    def state(self) -> SessionState:
        try:
            return self._accessor().to_state()
        except Exception as e:
            log.warning("Could not resolve current actor, denying by default: %s", e)
            return Resolved(role=None)

    def role(self) -> Role | str | None:
        """The actor's role, or None while loading or when it has none."""
        state = self.state()
        if isinstance(state, Resolved):
            return state.role
        return None

    def can(self, permission: str) -> bool:
        return has_permission(self.role(), permission)

    def can_all(self, permissions: Iterable[str]) -> bool:
        return has_all_permissions(self.role(), permissions)

    def can_any(self, permissions: Iterable[str]) -> bool:
        return has_any_permission(self.role(), permissions)

    def allows(self, requirement: Requirement) -> bool:
        return requirement.is_satisfied_by(self.role())

    def permissions(self) -> frozenset[str]:
        role = self.role()
        if not role:
            return frozenset()
        return get_permissions_for_role(role)

    def render_if(self, requirement: Requirement | str, granted: T, fallback: F = None) -> T | F:
        """Return `granted` when the requirement holds for the current actor, else `fallback`."""
        if isinstance(requirement, str):
            requirement = Requirement(permission=requirement)
        return granted if self.allows(requirement) else fallback


# ============================================================================
# Route guard
# ============================================================================

class GuardStatus(str, enum.Enum):
    LOADING = "loading"
    GRANTED = "granted"
    REDIRECTED = "redirected"


class RouteGuard:
    """
    Protects a route: waits for the session, then renders or redirects.

    While the session is loading the guard reports LOADING and never
    redirects. Once resolved, a role that fails the requirement triggers
    `navigate(redirect_to)` exactly once for the guard's lifetime.
    """

    def __init__(self, requirement: Requirement, redirect_to: str, navigate: Callable[[str], Any]):
        self.requirement = requirement
        self.redirect_to = redirect_to
        self._navigate = navigate
        self._redirected = False

    def evaluate(self, state: SessionState | ProfileSnapshot) -> GuardStatus:
        if isinstance(state, ProfileSnapshot):
            state = state.to_state()
        if isinstance(state, Loading):
            return GuardStatus.LOADING
        if self.requirement.is_satisfied_by(state.role):
            return GuardStatus.GRANTED
        if not self._redirected:
            self._redirected = True
            log.info("Access to %s denied for role %r, redirecting to %s",
                     self.requirement.describe(), state.role, self.redirect_to)
            try:
                self._navigate(self.redirect_to)
            except Exception as e:
                log.warning("Redirect to %s failed: %s", self.redirect_to, e)
        return GuardStatus.REDIRECTED

    async def wait_for(self, load: Awaitable[SessionState | ProfileSnapshot]) -> GuardStatus:
        """Wait for the session load to settle, then evaluate. No timeout is applied."""
        try:
            state = await load
        except Exception as e:
            log.warning("Session load failed, denying by default: %s", e)
            state = Resolved(role=None)
        return self.evaluate(state)
