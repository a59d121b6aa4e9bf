"""
Spreadsheet backend routes.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from dashboard.core import config
from dashboard.core.sheets.client import SheetsClient, SheetsError
from dashboard.features.permissions.dependencies import require_permission
from dashboard.features.users.schemas import UserProfile
from dashboard.utils import get_logger


log = get_logger(__name__)
router = APIRouter(tags=["sheets"])


@router.get("/status")
async def sheets_status():
    """Whether rows are stored in the spreadsheet or only in the local store."""
    return {
        "configured": config.SHEETS_ENABLED,
        "backend": "sheets" if config.SHEETS_ENABLED else "local",
        "sheets": list(config.SHEET_HEADERS),
    }


@router.post("/initialize")
async def initialize_sheets(
    user: Annotated[UserProfile, Depends(require_permission("settings:edit"))]
):
    """Create missing worksheets with their headers and sample rows."""
    client = SheetsClient.get_client()
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Spreadsheet backend is not configured"
        )
    try:
        initialized = await client.initialize_if_empty()
    except SheetsError as e:
        log.error("Spreadsheet initialization failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Spreadsheet initialization failed"
        )
    log.info("Profile %s initialized sheets: %s", user.id, initialized)
    return {"initialized": initialized}
