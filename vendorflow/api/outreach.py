"""
Outreach API routes - task actions and today's log.
"""
import uuid
from typing import Optional, List
from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from vendorflow.config import settings as app_settings
from vendorflow.database import get_session
from vendorflow.services.outreach_service import OutreachService
from vendorflow.schemas.outreach import (
    MarkSentRequest, MarkSkippedRequest, OutreachLogResponse, RevertResponse
)
from vendorflow.api.deps import get_agent_id

router = APIRouter(prefix=f"{app_settings.API_PREFIX}/outreach", tags=["outreach"])


@router.post("/sent", response_model=OutreachLogResponse, status_code=201)
async def mark_sent(
    request: MarkSentRequest,
    session: AsyncSession = Depends(get_session)
):
    """Mark a task as sent."""
    outreach_service = OutreachService(session)
    return await outreach_service.mark_sent(request)


@router.post("/skipped", response_model=OutreachLogResponse, status_code=201)
async def mark_skipped(
    request: MarkSkippedRequest,
    session: AsyncSession = Depends(get_session)
):
    """Skip a task for the rest of today."""
    outreach_service = OutreachService(session)
    return await outreach_service.mark_skipped(request)


@router.delete("/logs/{log_id}", response_model=RevertResponse)
async def revert_log(
    log_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Undo a logged action."""
    outreach_service = OutreachService(session)
    return await outreach_service.revert(log_id)


@router.get("/today", response_model=List[OutreachLogResponse])
async def list_today(
    agent_id: Optional[str] = Depends(get_agent_id),
    session: AsyncSession = Depends(get_session)
):
    """Today's actions, newest first."""
    outreach_service = OutreachService(session)
    return await outreach_service.list_today(agent_id)
