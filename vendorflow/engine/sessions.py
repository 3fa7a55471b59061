"""
Session grouping - splits the planned queue into work sessions.
"""
import math
from typing import List

from vendorflow.engine.channels import CHANNELS, CHANNEL_LABELS, INSTAGRAM
from vendorflow.engine.sequences import StepType
from vendorflow.schemas.plan import DailyTask, PlanSession

MINUTES_PER_TASK = 0.5
MINUTES_PER_NON_SOCIAL_INITIAL = 0.4


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count > 1 else ''}"


def _minutes(count: int, per_task: float) -> int:
    return math.ceil(count * per_task)


def group_sessions(planned: List[DailyTask]) -> List[PlanSession]:
    """Overdue follow-ups first, then follow-ups per channel, then new outreach per channel."""
    sessions = []

    overdue = [t for t in planned if t.is_overdue and t.type == StepType.FOLLOWUP]
    if overdue:
        sessions.append(PlanSession(
            id="overdue",
            label="Overdue Follow-ups",
            description=f"{_plural(len(overdue), 'follow-up')} past due, handle first",
            channel="mixed",
            session_type="overdue",
            tasks=overdue,
            estimated_minutes=_minutes(len(overdue), MINUTES_PER_TASK),
            urgent=True,
        ))

    for channel in CHANNELS:
        followups = [
            t for t in planned
            if not t.is_overdue and t.type == StepType.FOLLOWUP and t.channel == channel
        ]
        if followups:
            sessions.append(PlanSession(
                id=f"followup-{channel}",
                label=f"{CHANNEL_LABELS[channel]} Follow-ups",
                description=f"{_plural(len(followups), 'follow-up')} due today",
                channel=channel,
                session_type="followup",
                tasks=followups,
                estimated_minutes=_minutes(len(followups), MINUTES_PER_TASK),
            ))

    for channel in CHANNELS:
        initials = [t for t in planned if t.type == StepType.INITIAL and t.channel == channel]
        if initials:
            per_task = MINUTES_PER_TASK if channel == INSTAGRAM else MINUTES_PER_NON_SOCIAL_INITIAL
            sessions.append(PlanSession(
                id=f"outreach-{channel}",
                label=f"{CHANNEL_LABELS[channel]} Outreach",
                description=f"{_plural(len(initials), 'new vendor')} to reach",
                channel=channel,
                session_type="outreach",
                tasks=initials,
                estimated_minutes=_minutes(len(initials), per_task),
            ))

    return sessions
