"""
Settings API routes.
"""
from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from vendorflow.config import settings as app_settings
from vendorflow.database import get_session
from vendorflow.services.settings_service import SettingsService
from vendorflow.schemas.settings import SettingsUpdate, SettingsResponse
from vendorflow.schemas.common import MessageResponse

router = APIRouter(prefix=f"{app_settings.API_PREFIX}/settings", tags=["settings"])


@router.get("/", response_model=SettingsResponse)
async def get_settings(
    session: AsyncSession = Depends(get_session)
):
    settings_service = SettingsService(session)
    return SettingsResponse(values=await settings_service.get_all())


@router.put("/", response_model=SettingsResponse)
async def update_settings(
    update: SettingsUpdate,
    session: AsyncSession = Depends(get_session)
):
    """Write one or more settings."""
    settings_service = SettingsService(session)
    return SettingsResponse(values=await settings_service.upsert(update.values))


@router.delete("/{key}", response_model=MessageResponse)
async def delete_setting(
    key: str,
    session: AsyncSession = Depends(get_session)
):
    settings_service = SettingsService(session)
    await settings_service.delete(key)
    return MessageResponse(message=f"Setting '{key}' deleted")
