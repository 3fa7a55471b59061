"""
Daily plan API routes.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from vendorflow.config import settings as app_settings
from vendorflow.database import get_session
from vendorflow.services.plan_service import PlanService
from vendorflow.schemas.plan import DailyPlan
from vendorflow.api.deps import get_agent_id

router = APIRouter(prefix=f"{app_settings.API_PREFIX}/plan", tags=["plan"])


@router.get("/", response_model=DailyPlan)
async def get_daily_plan(
    total_agents: Optional[int] = Query(None, ge=1),
    agent_index: int = Query(0, ge=0),
    agent_id: Optional[str] = Depends(get_agent_id),
    session: AsyncSession = Depends(get_session)
):
    """Today's prioritized task list for one agent."""
    plan_service = PlanService(session)
    return await plan_service.build_plan(agent_id, total_agents, agent_index)
