"""Router – account settings."""

from fastapi import APIRouter, Header

from src.oncosight.schemas.settings import SettingsRequest, SettingsResult
from src.oncosight.services.account_service import account_store

router = APIRouter(tags=["Settings"])


@router.post("/settings", response_model=SettingsResult, response_model_exclude_none=True)
def update_settings(
    body: SettingsRequest,
    x_user_id: str = Header(...),
) -> SettingsResult:
    """Update the caller's profile; identity comes from the ``X-User-Id`` header."""
    return account_store.update_settings(x_user_id, body)
