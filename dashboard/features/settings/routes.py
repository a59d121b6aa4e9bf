"""
Settings routes: business details, notification preferences and billing.
"""
import asyncio
from typing import Annotated

import stripe
from fastapi import APIRouter, Depends, HTTPException, status

from dashboard.core import config
from dashboard.core.sheets.store import RowStore, get_row_store
from dashboard.features.permissions.dependencies import require_permission
from dashboard.features.settings.schemas import CheckoutSessionResponse, SettingsResponse, SettingsUpdate
from dashboard.features.users.dependencies import save_profile
from dashboard.features.users.schemas import UserProfile
from dashboard.utils import get_logger


log = get_logger(__name__)
router = APIRouter(tags=["settings"])


@router.get("/", response_model=SettingsResponse)
async def get_settings(
    user: Annotated[UserProfile, Depends(require_permission("settings:view"))]
):
    """Current plan, business details and notification settings."""
    return SettingsResponse.model_validate(user.model_dump())


@router.patch("/", response_model=SettingsResponse)
async def update_settings(
    update_data: SettingsUpdate,
    user: Annotated[UserProfile, Depends(require_permission("settings:edit"))],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Update business details and notification settings."""
    updates = update_data.to_row(exclude_unset=True)
    if update_data.notification_settings is not None:
        updates["notificationSettings"] = update_data.notification_settings.to_row()
    if updates:
        user = await save_profile(store, user, updates)
    return SettingsResponse.model_validate(user.model_dump())


@router.post("/billing/checkout-session", response_model=CheckoutSessionResponse)
async def create_checkout_session(
    user: Annotated[UserProfile, Depends(require_permission("settings:billing"))]
):
    """Start a Stripe checkout for the paid plan."""
    if not config.STRIPE_SECRET_KEY or not config.STRIPE_PRO_PRICE_ID:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Billing is not configured"
        )

    try:
        session = await asyncio.to_thread(
            stripe.checkout.Session.create,
            api_key=config.STRIPE_SECRET_KEY,
            mode="subscription",
            customer_email=user.email,
            line_items=[{"price": config.STRIPE_PRO_PRICE_ID, "quantity": 1}],
            success_url=f"{config.PUBLIC_URL}/dashboard?success=true",
            cancel_url=f"{config.PUBLIC_URL}/dashboard?canceled=true",
            metadata={"profile_id": user.id},
        )
    except stripe.StripeError as e:
        log.error("Stripe checkout failed for profile %s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Payment provider error"
        )

    log.info("Created checkout session %s for profile %s", session.id, user.id)
    return CheckoutSessionResponse(session_id=session.id, url=session.url)
