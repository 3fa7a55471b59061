"""
Safety limits for the rate-limited Instagram channel.

Instagram ceilings depend on how old the sending account is and are halved
for a week after the account was last action-blocked. WhatsApp and email use
flat caps.
"""
import logging
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from vendorflow.engine.channels import INSTAGRAM, WHATSAPP, EMAIL
from vendorflow.engine.plan_config import PlanConfig

logger = logging.getLogger(__name__)

BLOCK_COOLDOWN_DAYS = 7


class SafetyTier(BaseModel):
    daily: int
    weekly: int
    burst: int  # messages before a pause, shown to agents only
    pause_seconds: int


class SafetyLimit(BaseModel):
    daily: int
    weekly: int


SAFETY_LIMITS = {
    "new": SafetyTier(daily=15, weekly=70, burst=3, pause_seconds=300),
    "warm": SafetyTier(daily=25, weekly=140, burst=5, pause_seconds=180),
    "aged": SafetyTier(daily=40, weekly=200, burst=5, pause_seconds=120),
}

DEFAULT_ACCOUNT_AGE = "warm"

# Non-adaptive caps for the other channels
FLAT_LIMITS = {
    WHATSAPP: SafetyLimit(daily=50, weekly=300),
    EMAIL: SafetyLimit(daily=50, weekly=500),
}


def parse_iso_datetime(raw: str) -> datetime:
    """fromisoformat that also takes a trailing "Z" for UTC. Raises ValueError."""
    raw = raw.strip()
    if raw[-1:] in ("Z", "z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)


def _parse_block_date(raw: str) -> Optional[datetime]:
    try:
        parsed = parse_iso_datetime(raw)
    except ValueError:
        logger.warning(f"Ignoring unreadable action block date '{raw}'")
        return None
    # Compare as naive UTC like every other timestamp in the engine
    if parsed.tzinfo is not None:
        parsed = (parsed - parsed.utcoffset()).replace(tzinfo=None)
    return parsed


def get_insta_safety_limit(
    settings,
    agent_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> SafetyLimit:
    """Today's and this week's safe Instagram ceilings."""
    config = PlanConfig.coerce(settings)
    now = now or datetime.utcnow()

    age = config.resolve("insta_account_age", agent_id, default=DEFAULT_ACCOUNT_AGE)
    base = SAFETY_LIMITS.get(age, SAFETY_LIMITS[DEFAULT_ACCOUNT_AGE])

    last_block = config.resolve("insta_last_action_block", agent_id, default="")
    if last_block:
        blocked_at = _parse_block_date(last_block)
        if blocked_at is not None:
            days_since_block = (now - blocked_at).days
            if days_since_block < BLOCK_COOLDOWN_DAYS:
                return SafetyLimit(daily=base.daily // 2, weekly=base.weekly // 2)

    return SafetyLimit(daily=base.daily, weekly=base.weekly)


def get_channel_limit(channel: str, settings, agent_id: Optional[str] = None, now: Optional[datetime] = None) -> SafetyLimit:
    if channel == INSTAGRAM:
        return get_insta_safety_limit(settings, agent_id, now)
    return FLAT_LIMITS[channel]
