"""
Budget allocation and agent partitioning.

Budgets are computed per agent: each agent gets an even share of every
channel's daily target, less what that agent already sent today. Vendors are
split between agents by a stable hash of their id, so a vendor stays with the
same agent for the whole day without any coordination between agents.
"""
import math
from datetime import datetime
from typing import Optional, List, Dict, Iterable, Set, Tuple

from vendorflow.engine.channels import CHANNELS, INSTAGRAM, WHATSAPP, EMAIL
from vendorflow.engine.plan_config import PlanConfig
from vendorflow.engine.safety import get_insta_safety_limit, FLAT_LIMITS
from vendorflow.models.outreach_log import OutreachLog, LogActions
from vendorflow.schemas.plan import ChannelProgress, DailyTask

_INT32 = 1 << 32


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def stable_vendor_hash(vendor_id) -> int:
    """
    Polynomial rolling hash (h * 31 + char) over the id string, wrapped to a
    signed 32-bit integer, absolute value.
    """
    h = 0
    for char in str(vendor_id):
        h = (h * 31 + ord(char)) % _INT32
    if h >= _INT32 // 2:
        h -= _INT32
    return abs(h)


def agent_for_vendor(vendor_id, total_agents: int) -> int:
    return stable_vendor_hash(vendor_id) % max(1, total_agents)


def _same_day(value: Optional[datetime], day_start: datetime) -> bool:
    return value is not None and value.date() == day_start.date()


def skipped_today(logs: Iterable[OutreachLog], now: datetime) -> Set[Tuple[str, str]]:
    """(vendor_id, channel) pairs skipped today by anyone."""
    return {
        (str(log.vendor_id), log.channel)
        for log in logs
        if log.action == LogActions.SKIPPED and _same_day(log.created_at, now)
    }


def count_done_today(
    logs: Iterable[OutreachLog],
    now: datetime,
    agent_id: Optional[str] = None,
) -> Dict[str, int]:
    """Sends per channel today; logs without an agent count for every agent."""
    done = {channel: 0 for channel in CHANNELS}
    for log in logs:
        if log.action not in LogActions.SENDS or not _same_day(log.created_at, now):
            continue
        if agent_id and log.agent_id and log.agent_id != agent_id:
            continue
        if log.channel in done:
            done[log.channel] += 1
    return done


def count_sent_between(logs: Iterable[OutreachLog], start: datetime, end: datetime) -> Dict[str, int]:
    """Sends per channel with start <= created_at <= end, across all agents."""
    counts = {channel: 0 for channel in CHANNELS}
    for log in logs:
        if log.action not in LogActions.SENDS or log.created_at is None:
            continue
        if start <= log.created_at <= end and log.channel in counts:
            counts[log.channel] += 1
    return counts


def _pct(done: int, target: int) -> int:
    return round_half_up(done / target * 100) if target > 0 else 0


def compute_budgets(
    settings,
    done_today: Dict[str, int],
    weekly_done: Dict[str, int],
    agent_id: Optional[str] = None,
    total_agents: int = 1,
    now: Optional[datetime] = None,
) -> Tuple[Dict[str, int], Dict[str, ChannelProgress]]:
    """
    Remaining sends per channel for this agent today, plus the progress view.
    Instagram's target is capped by the safety ceiling and the weekly headroom.
    """
    config = PlanConfig.coerce(settings)
    insta_safety = get_insta_safety_limit(config, agent_id, now)

    insta_target = min(config.resolve_int("instagram_daily_target", agent_id), insta_safety.daily)
    effective_insta = min(insta_target, max(0, insta_safety.weekly - weekly_done[INSTAGRAM]))

    channel_targets = {
        INSTAGRAM: effective_insta,
        WHATSAPP: config.resolve_int("whatsapp_daily_target", agent_id),
        EMAIL: config.resolve_int("email_daily_target", agent_id),
    }

    agent_count = max(1, total_agents)
    remaining = {}
    progress = {}
    for channel in CHANNELS:
        my_target = max(0, math.ceil(channel_targets[channel] / agent_count))
        done = done_today[channel]
        remaining[channel] = max(0, my_target - done)

        if channel == INSTAGRAM:
            safe_limit, weekly_cap = insta_safety.daily, insta_safety.weekly
            safe = done < insta_safety.daily
        else:
            safe_limit, weekly_cap = FLAT_LIMITS[channel].daily, FLAT_LIMITS[channel].weekly
            safe = True

        progress[channel] = ChannelProgress(
            done_today=done,
            target=my_target,
            safe_limit=safe_limit,
            remaining=remaining[channel],
            weekly_done=weekly_done[channel],
            weekly_cap=weekly_cap,
            pct=_pct(done, my_target),
            safe=safe,
        )
    return remaining, progress


def partition_for_agent(tasks: List[DailyTask], total_agents: int, agent_index: int) -> List[DailyTask]:
    if total_agents <= 1:
        return list(tasks)
    return [task for task in tasks if agent_for_vendor(task.vendor_id, total_agents) == agent_index]


def allocate(
    candidates: List[DailyTask],
    remaining: Dict[str, int],
    total_agents: int = 1,
    agent_index: int = 0,
) -> List[DailyTask]:
    """Highest priority first, this agent's vendors only, within budget."""
    ordered = sorted(candidates, key=lambda task: task.priority, reverse=True)
    mine = partition_for_agent(ordered, total_agents, agent_index)

    budget = dict(remaining)
    planned = []
    for task in mine:
        if budget.get(task.channel, 0) > 0:
            planned.append(task)
            budget[task.channel] -= 1
    return planned


def cap_targets(progress: Dict[str, ChannelProgress], planned: List[DailyTask]) -> Dict[str, ChannelProgress]:
    """Lower each target to what today's queue can actually reach."""
    capped = {}
    for channel, item in progress.items():
        in_queue = sum(1 for task in planned if task.channel == channel)
        achievable = item.done_today + in_queue
        if achievable < item.target:
            item = item.model_copy(update={
                "target": achievable,
                "remaining": in_queue,
                "pct": _pct(item.done_today, achievable) if achievable > 0 else 100,
            })
        capped[channel] = item
    return capped
