"""
User feature routes: registration, login, profile and onboarding.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from dashboard.core import config
from dashboard.core.sheets.store import RowStore, get_row_store
from dashboard.features.permissions.rbac import Role
from dashboard.features.users.auth import create_access_token, hash_password, verify_password
from dashboard.features.users.dependencies import find_profile_by_email, get_current_user, save_profile
from dashboard.features.users.schemas import (
    OnboardingData,
    Plan,
    TokenResponse,
    UserLogin,
    UserProfile,
    UserProfileResponse,
    UserRegister,
    UserUpdate,
)
from dashboard.utils import get_logger, utc_now_iso


log = get_logger(__name__)
router = APIRouter(tags=["users"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserRegister,
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Create an account. New accounts own their business and start on the free plan."""
    if await find_profile_by_email(store, data.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email already exists"
        )

    row = data.to_row(exclude={"password"})
    row.update(
        role=Role.OWNER.value,
        plan=Plan.FREE.value,
        onboardingCompleted=False,
        passwordHash=hash_password(data.password),
        createdAt=utc_now_iso(),
    )
    profile = UserProfile.model_validate(await store.add(config.USER_PROFILES_SHEET, row))
    log.info("Registered profile %s", profile.id)
    return TokenResponse(access_token=create_access_token(profile.id), profile=profile)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: UserLogin,
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Exchange email and password for a bearer token."""
    profile = await find_profile_by_email(store, data.email)
    if profile is None or not verify_password(data.password, profile.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(access_token=create_access_token(profile.id), profile=profile)


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    user: Annotated[UserProfile, Depends(get_current_user)]
):
    """Get current authenticated user's profile."""
    return user


@router.patch("/me", response_model=UserProfileResponse)
async def update_current_user_profile(
    update_data: UserUpdate,
    user: Annotated[UserProfile, Depends(get_current_user)],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Update current user's profile."""
    if update_data.email is not None and update_data.email.lower() != (user.email or "").lower():
        if await find_profile_by_email(store, update_data.email) is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="An account with this email already exists"
            )

    updates = update_data.to_row(exclude_unset=True)
    if not updates:
        return user
    return await save_profile(store, user, updates)


@router.post("/me/onboarding", response_model=UserProfileResponse)
async def complete_onboarding(
    data: OnboardingData,
    user: Annotated[UserProfile, Depends(get_current_user)],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Store the onboarding answers and mark onboarding complete."""
    if data.role is not None and user.onboarding_completed and data.role.value != user.role:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Role can only be chosen during onboarding"
        )

    updates = data.to_row(exclude={"first_name", "last_name", "other_business_type"})
    name = " ".join(part for part in (data.first_name, data.last_name) if part)
    if name:
        updates["name"] = name
    if data.business_type == "other" and data.other_business_type:
        updates["businessType"] = data.other_business_type
    updates["onboardingCompleted"] = True
    updates["onboardingCompletedAt"] = utc_now_iso()

    profile = await save_profile(store, user, updates)
    log.info("Onboarding completed for profile %s", user.id)
    return profile
