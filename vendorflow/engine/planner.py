"""
Daily plan entry point.

build_daily_plan turns fully loaded vendors, sequences, logs and settings
into one agent's prioritized, budget-capped task queue for today. It does
no I/O and never mutates its inputs; calling it twice with the same inputs
and the same `now` yields the same plan.
"""
import logging
from datetime import datetime
from typing import Optional, List, Mapping, Union

from vendorflow.engine import allocator, performance
from vendorflow.engine.channels import INSTAGRAM, WHATSAPP, EMAIL
from vendorflow.engine.generator import PlanContext, generate_candidates
from vendorflow.engine.plan_config import PlanConfig
from vendorflow.engine.sessions import group_sessions
from vendorflow.models.outreach_log import OutreachLog
from vendorflow.models.sequence import VendorSequence
from vendorflow.models.vendor import Vendor
from vendorflow.schemas.plan import DailyPlan

logger = logging.getLogger(__name__)


def followup_days(config: PlanConfig, agent_id: Optional[str] = None) -> dict:
    return {
        INSTAGRAM: config.resolve_int("days_insta_followup", agent_id),
        WHATSAPP: config.resolve_int("days_wa_followup", agent_id),
        EMAIL: config.resolve_int("days_email_followup", agent_id),
    }


def build_daily_plan(
    vendors: List[Vendor],
    sequences: List[VendorSequence],
    logs: List[OutreachLog],
    settings: Union[Mapping[str, str], PlanConfig],
    agent_id: Optional[str] = None,
    total_agents: int = 1,
    agent_index: int = 0,
    now: Optional[datetime] = None,
    hot_leads_limit: int = performance.HOT_LEADS_LIMIT,
) -> DailyPlan:
    """Build today's plan for one agent. `now` is sampled once and used throughout."""
    now = now or datetime.utcnow()
    vendors = list(vendors)
    sequences = list(sequences)
    logs = list(logs)
    config = PlanConfig.coerce(settings)
    total_agents = max(1, total_agents)

    # What has been done so far
    done = allocator.count_done_today(logs, now, agent_id)
    weekly_done = allocator.count_sent_between(logs, performance.week_start(now), now)

    # How much is left to do
    remaining, progress = allocator.compute_budgets(
        config, done, weekly_done, agent_id, total_agents, now
    )

    # What could be done, and what this agent will do
    ctx = PlanContext(
        now=now,
        remaining=remaining,
        skipped_today=allocator.skipped_today(logs, now),
        followup_days=followup_days(config, agent_id),
    )
    candidates = generate_candidates(vendors, sequences, ctx)
    planned = allocator.allocate(candidates, remaining, total_agents, agent_index)
    progress = allocator.cap_targets(progress, planned)

    sessions = group_sessions(planned)
    done_today = performance.done_today_summary(done, vendors, now)

    total_target = sum(item.target for item in progress.values())
    overall_pct = allocator.round_half_up(done_today.total / total_target * 100) if total_target > 0 else 0

    logger.debug(
        f"Plan for agent {agent_id or '-'} ({agent_index + 1}/{total_agents}): "
        f"{len(candidates)} candidates, {len(planned)} planned"
    )

    return DailyPlan(
        generated_at=now,
        sessions=sessions,
        planned_tasks=planned,
        progress=progress,
        done_today=done_today,
        yesterday=performance.yesterday_snapshot(logs, vendors, now),
        this_week=performance.week_snapshot(logs, vendors, now),
        hot_leads=performance.hot_leads(vendors, hot_leads_limit),
        time_recommendation=performance.time_recommendation(now),
        total_tasks=len(planned),
        total_estimated_minutes=sum(session.estimated_minutes for session in sessions),
        overall_pct=overall_pct,
    )
