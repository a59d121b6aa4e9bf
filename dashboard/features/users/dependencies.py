"""
FastAPI dependencies for authentication.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.requests import Request

from dashboard.core import config
from dashboard.core.sheets.store import RowStore, get_row_store
from dashboard.features.users.auth import verify_jwt_token
from dashboard.features.users.schemas import UserProfile


security = HTTPBearer()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    store: Annotated[RowStore, Depends(get_row_store)],
) -> UserProfile:
    """
    Get the current authenticated profile from the bearer token.

    Usage:
        @router.get("/me")
        async def get_me(user: UserProfile = Depends(get_current_user)):
            return user
    """
    payload = verify_jwt_token(credentials.credentials)
    profile_id = payload.get("sub")
    if not profile_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    row = await store.get(config.USER_PROFILES_SHEET, profile_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User profile not found",
        )
    return UserProfile.model_validate(row)


async def find_profile_by_email(store: RowStore, email: str) -> UserProfile | None:
    wanted = email.strip().lower()
    for row in await store.get_all(config.USER_PROFILES_SHEET):
        if str(row.get("email", "")).strip().lower() == wanted:
            return UserProfile.model_validate(row)
    return None


async def save_profile(store: RowStore, profile: UserProfile, updates: dict) -> UserProfile:
    """Write updates to a profile row and return the merged profile."""
    if not await store.update(config.USER_PROFILES_SHEET, profile.id, updates):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User profile not found"
        )
    return UserProfile.model_validate({**profile.to_row(), **updates})


def get_authorization_header(request: Request) -> str:
    """
    Extract authorization header for rate limiting.
    Used with slowapi Limiter.
    """
    auth = request.headers.get("Authorization", "")
    return auth or "anonymous"
