"""
Task generator - decides which step, if any, each vendor is due for today.

Every vendor is reduced to a SequenceState: the ordered steps, an optional
cursor and the state of each channel. A persisted sequence supplies its own
steps, cursor and start time. A vendor without one gets its tier's steps,
filtered to the channels it has, and its position is read off the status
fields instead of a cursor. One evaluator turns either state into at most one
candidate task.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional, List, Dict, Set, Tuple, Iterable

from pydantic import BaseModel

from vendorflow.engine import channels as ch
from vendorflow.engine.scoring import score_priority, FALLBACK_PENALTY
from vendorflow.engine.sequences import (
    SequenceStep, StepType, active_steps, parse_steps, sequence_label,
    determine_sequence_type, get_sequence_steps,
)
from vendorflow.models.vendor import Vendor, VendorStatus, ChannelStatus
from vendorflow.models.sequence import VendorSequence
from vendorflow.schemas.plan import DailyTask

logger = logging.getLogger(__name__)


class ChannelState(BaseModel):
    available: bool
    status: str
    contacted_at: Optional[datetime] = None


class SequenceState(BaseModel):
    sequence_type: str
    label: str
    steps: List[SequenceStep]
    cursor: Optional[int] = None  # None when simulated from status fields
    started_at: Optional[datetime] = None
    channels: Dict[str, ChannelState]

    def channel(self, name: str) -> ChannelState:
        return self.channels.get(name) or ChannelState(available=False, status=ChannelStatus.PENDING)


class PlanContext:
    """Everything about "today" that task generation depends on."""

    def __init__(
        self,
        now: datetime,
        remaining: Dict[str, int],
        skipped_today: Optional[Set[Tuple[str, str]]] = None,
        followup_days: Optional[Dict[str, int]] = None,
    ):
        self.now = now
        self.today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        self.remaining = dict(remaining)
        self.skipped_today = skipped_today or set()
        self.followup_days = followup_days or {ch.INSTAGRAM: 5, ch.WHATSAPP: 3, ch.EMAIL: 4}

    def has_budget(self, channel: str) -> bool:
        return self.remaining.get(channel, 0) > 0

    def skipped(self, vendor_id, channel: str) -> bool:
        return (str(vendor_id), channel) in self.skipped_today


def _channel_states(vendor: Vendor) -> Dict[str, ChannelState]:
    return {
        name: ChannelState(
            available=ch.vendor_has_channel(vendor, name),
            status=ch.channel_status(vendor, name),
            contacted_at=ch.contacted_at(vendor, name),
        )
        for name in ch.CHANNELS
    }


def state_from_sequence(vendor: Vendor, sequence: VendorSequence) -> SequenceState:
    """State for a vendor with a persisted sequence. Raises ValueError on bad steps."""
    return SequenceState(
        sequence_type=sequence.sequence_type,
        label=sequence_label(sequence.sequence_type),
        steps=parse_steps(sequence.steps),
        cursor=sequence.current_step or 0,
        started_at=sequence.started_at,
        channels=_channel_states(vendor),
    )


def state_from_vendor(vendor: Vendor) -> SequenceState:
    """State simulated from the vendor's channel flags and statuses."""
    sequence_type = determine_sequence_type(
        bool(vendor.has_instagram), bool(vendor.has_phone), bool(vendor.has_email)
    )
    channels = _channel_states(vendor)
    steps = [
        step for step in get_sequence_steps(sequence_type)
        if step.is_terminal or channels[step.channel].available
    ]
    return SequenceState(
        sequence_type=sequence_type,
        label=sequence_label(sequence_type),
        steps=steps,
        channels=channels,
    )


def _shift(base: datetime, days: int) -> Optional[datetime]:
    """base + days, or None when the result falls outside the datetime range."""
    try:
        return base + timedelta(days=days)
    except OverflowError:
        logger.warning(f"Ignoring out-of-range offset of {days} days from {base}")
        return None


def _due_window(due_at: datetime, ctx: PlanContext) -> Optional[Tuple[bool, int]]:
    """(is_overdue, days_overdue) when a step due on due_at's date is due today, else None."""
    due_date = due_at.replace(hour=0, minute=0, second=0, microsecond=0)
    if due_date > ctx.today_start:
        return None
    is_overdue = due_date < ctx.today_start
    days_overdue = (ctx.today_start - due_date).days if is_overdue else 0
    return is_overdue, days_overdue


class _VendorFacts:
    def __init__(self, vendor: Vendor, ctx: PlanContext):
        created_at = vendor.created_at or ctx.now
        self.vendor = vendor
        self.uploaded_days_ago = (ctx.now - created_at).days
        self.has_all = ch.has_all_channels(vendor)
        self.available = ch.available_channels(vendor)

    def priority(self, task_type: str, is_overdue: bool, days_overdue: int) -> int:
        return score_priority(
            task_type, is_overdue, days_overdue,
            self.vendor.category, self.uploaded_days_ago, self.has_all,
        )

    def task(
        self,
        state: SequenceState,
        channel: str,
        task_type: str,
        priority: int,
        step_number: int,
        total_steps: int,
        is_overdue: bool = False,
        days_overdue: int = 0,
    ) -> DailyTask:
        vendor = self.vendor
        return DailyTask(
            vendor_id=vendor.id,
            vendor_name=vendor.full_name or "Unknown",
            category=vendor.category,
            city=vendor.city,
            channel=channel,
            type=task_type,
            priority=priority,
            is_overdue=is_overdue,
            days_overdue=days_overdue,
            identifier=ch.channel_identifier(vendor, channel),
            sequence_label=state.label,
            step_number=step_number,
            total_steps=total_steps,
            available_channels=list(self.available),
        )


def _cursor_candidate(facts: _VendorFacts, state: SequenceState, ctx: PlanContext) -> Optional[DailyTask]:
    """Persisted sequence: only the step under the cursor, or a budget fallback."""
    steps = state.steps
    cursor = state.cursor
    if cursor is None or cursor < 0 or cursor >= len(steps):
        return None
    step = steps[cursor]
    if step.is_terminal:
        return None

    vendor_id = facts.vendor.id
    if ctx.skipped(vendor_id, step.channel):
        return None

    # A follow-up on a channel whose initial was never sent is left alone
    if step.type == StepType.FOLLOWUP and state.channel(step.channel).status != ChannelStatus.SENT:
        logger.debug(f"Vendor {vendor_id}: follow-up on unsent {step.channel}, skipping")
        return None

    started_at = state.started_at or ctx.now
    due_at = _shift(started_at, step.day)
    window = _due_window(due_at, ctx) if due_at is not None else None
    if window is None:
        return None
    is_overdue, days_overdue = window
    total_steps = len(active_steps(steps))

    if ctx.has_budget(step.channel):
        return facts.task(
            state, step.channel, step.type,
            facts.priority(step.type, is_overdue, days_overdue),
            cursor + 1, total_steps, is_overdue, days_overdue,
        )

    # Budget spent on this channel: offer the next untouched initial elsewhere
    for index in range(cursor + 1, len(steps)):
        alt = steps[index]
        if alt.is_terminal:
            break
        if alt.type != StepType.INITIAL:
            continue
        alt_state = state.channel(alt.channel)
        if ctx.has_budget(alt.channel) and alt_state.available and alt_state.status == ChannelStatus.PENDING:
            return facts.task(
                state, alt.channel, StepType.INITIAL,
                facts.priority(StepType.INITIAL, is_overdue, days_overdue) - FALLBACK_PENALTY,
                index + 1, total_steps, is_overdue, days_overdue,
            )
    return None


def _initial_ready(state: SequenceState, index: int, ctx: PlanContext) -> bool:
    """Whether the initial step at index may be offered today."""
    step = state.steps[index]
    earlier = [s for s in state.steps[:index] if s.type == StepType.INITIAL and not s.is_terminal]

    # Every earlier initial is done, or cannot be done today for lack of budget
    for prev in earlier:
        if state.channel(prev.channel).status in ChannelStatus.NEEDS_INITIAL and ctx.has_budget(prev.channel):
            return False

    if not ctx.has_budget(step.channel):
        return False

    completed = [s for s in earlier if state.channel(s.channel).status not in ChannelStatus.NEEDS_INITIAL]
    if completed:
        last = completed[-1]
        last_contacted = state.channel(last.channel).contacted_at
        if last_contacted is not None:
            earliest = _shift(last_contacted, step.day - last.day)
            if earliest is None or earliest > ctx.now:
                return False
    return True


def _scan_candidate(facts: _VendorFacts, state: SequenceState, ctx: PlanContext) -> Optional[DailyTask]:
    """Simulated sequence: first step, in order, that is actionable today."""
    vendor_id = facts.vendor.id
    total_steps = len(active_steps(state.steps))

    for index, step in enumerate(state.steps):
        if step.is_terminal:
            break
        channel_state = state.channel(step.channel)
        if not channel_state.available:
            continue
        if ctx.skipped(vendor_id, step.channel):
            continue

        if step.type == StepType.INITIAL:
            if channel_state.status not in ChannelStatus.NEEDS_INITIAL:
                continue
            if not _initial_ready(state, index, ctx):
                continue
            return facts.task(
                state, step.channel, StepType.INITIAL,
                facts.priority(StepType.INITIAL, False, 0),
                index + 1, total_steps,
            )

        if step.type == StepType.FOLLOWUP:
            if channel_state.status != ChannelStatus.SENT or channel_state.contacted_at is None:
                continue
            gap = ctx.followup_days.get(step.channel, 0)
            due_at = _shift(channel_state.contacted_at, gap)
            window = _due_window(due_at, ctx) if due_at is not None else None
            if window is None:
                continue
            is_overdue, days_overdue = window
            return facts.task(
                state, step.channel, StepType.FOLLOWUP,
                facts.priority(StepType.FOLLOWUP, is_overdue, days_overdue),
                index + 1, total_steps, is_overdue, days_overdue,
            )
    return None


def next_task(vendor: Vendor, state: SequenceState, ctx: PlanContext) -> Optional[DailyTask]:
    """The single candidate task for a vendor today, if any."""
    facts = _VendorFacts(vendor, ctx)
    if state.cursor is not None:
        return _cursor_candidate(facts, state, ctx)
    return _scan_candidate(facts, state, ctx)


def generate_candidates(
    vendors: Iterable[Vendor],
    sequences: Iterable[VendorSequence],
    ctx: PlanContext,
) -> List[DailyTask]:
    """At most one candidate task per vendor that is still being worked."""
    active_by_vendor = {}
    for sequence in sequences:
        if sequence.is_active:
            active_by_vendor[str(sequence.vendor_id)] = sequence

    candidates = []
    for vendor in vendors:
        if vendor.overall_status in VendorStatus.EXCLUDED:
            continue

        sequence = active_by_vendor.get(str(vendor.id))
        if sequence is not None:
            try:
                state = state_from_sequence(vendor, sequence)
            except ValueError as e:
                logger.warning(f"Vendor {vendor.id}: unreadable sequence {sequence.id}, skipping ({e})")
                continue
        else:
            state = state_from_vendor(vendor)

        task = next_task(vendor, state, ctx)
        if task is not None:
            candidates.append(task)
    return candidates
