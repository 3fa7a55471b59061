"""
Plan service - loads today's inputs and runs the planning engine.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from vendorflow.config import settings as app_settings
from vendorflow.core.exceptions import raise_validation_error
from vendorflow.engine.planner import build_daily_plan
from vendorflow.engine.performance import log_window_start
from vendorflow.repositories.vendor_repo import VendorRepository
from vendorflow.repositories.sequence_repo import VendorSequenceRepository
from vendorflow.repositories.log_repo import OutreachLogRepository
from vendorflow.repositories.setting_repo import SettingRepository
from vendorflow.schemas.plan import DailyPlan

logger = logging.getLogger(__name__)


class PlanService:
    """Service for building daily plans."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.vendor_repo = VendorRepository(session)
        self.sequence_repo = VendorSequenceRepository(session)
        self.log_repo = OutreachLogRepository(session)
        self.setting_repo = SettingRepository(session)

    async def build_plan(
        self,
        agent_id: Optional[str] = None,
        total_agents: Optional[int] = None,
        agent_index: int = 0,
        now: Optional[datetime] = None
    ) -> DailyPlan:
        """Build today's plan for one agent from a full snapshot of the stores."""
        total_agents = total_agents or app_settings.DEFAULT_TOTAL_AGENTS
        if total_agents < 1:
            raise_validation_error("must be at least 1", "total_agents")
        if agent_index < 0 or agent_index >= total_agents:
            raise_validation_error(f"must be between 0 and {total_agents - 1}", "agent_index")

        now = now or datetime.utcnow()

        # Everything is loaded before planning starts
        vendors = await self.vendor_repo.get_all()
        sequences = await self.sequence_repo.get_active()
        logs = await self.log_repo.get_since(log_window_start(now))
        settings_map = await self.setting_repo.get_map()

        plan = build_daily_plan(
            vendors,
            sequences,
            logs,
            settings_map,
            agent_id=agent_id,
            total_agents=total_agents,
            agent_index=agent_index,
            now=now,
            hot_leads_limit=app_settings.HOT_LEADS_LIMIT,
        )
        logger.info(
            f"Built plan for agent {agent_id or '-'}: {plan.total_tasks} tasks, "
            f"~{plan.total_estimated_minutes} min"
        )
        return plan
