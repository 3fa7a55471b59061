"""
Outreach service - applying, skipping and reverting planned tasks.

Each action touches the vendor's channel fields, the outreach log and the
sequence cursor. All three are staged on the session and committed together
so they cannot drift apart.
"""
import uuid
import logging
from typing import Optional, List
from datetime import datetime

from sqlmodel.ext.asyncio.session import AsyncSession

from vendorflow.core.exceptions import raise_not_found, raise_validation_error
from vendorflow.engine import channels as ch
from vendorflow.engine.performance import day_start
from vendorflow.engine.sequences import StepType, parse_steps
from vendorflow.repositories.vendor_repo import VendorRepository
from vendorflow.repositories.sequence_repo import VendorSequenceRepository
from vendorflow.repositories.log_repo import OutreachLogRepository
from vendorflow.models.outreach_log import OutreachLog, LogActions
from vendorflow.models.sequence import VendorSequence
from vendorflow.models.vendor import Vendor, ChannelStatus, VendorStatus
from vendorflow.schemas.outreach import MarkSentRequest, MarkSkippedRequest, RevertResponse

logger = logging.getLogger(__name__)


class OutreachService:
    """Service for task actions."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.vendor_repo = VendorRepository(session)
        self.sequence_repo = VendorSequenceRepository(session)
        self.log_repo = OutreachLogRepository(session)

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except Exception:
            logger.exception("Outreach action failed, rolling back")
            await self.session.rollback()
            raise

    async def _get_vendor(self, vendor_id: uuid.UUID) -> Vendor:
        vendor = await self.vendor_repo.get(vendor_id)
        if not vendor:
            raise_not_found("Vendor", str(vendor_id))
        return vendor

    def _check_channel(self, vendor: Vendor, channel: str) -> None:
        if not ch.is_channel(channel):
            raise_validation_error(f"unknown channel '{channel}'", "channel")
        if not ch.vendor_has_channel(vendor, channel):
            raise_validation_error(f"vendor has no {channel} contact", "channel")

    def _sync_completion(self, sequence: VendorSequence, now: datetime) -> None:
        """Stamp completed_at while the cursor sits on the end marker."""
        try:
            steps = parse_steps(sequence.steps)
        except ValueError:
            logger.warning(f"Sequence {sequence.id} has unreadable steps")
            return
        at_end = sequence.current_step >= len(steps) or steps[sequence.current_step].is_terminal
        sequence.completed_at = (sequence.completed_at or now) if at_end else None

    async def mark_sent(self, request: MarkSentRequest) -> OutreachLog:
        """Record an initial message or follow-up as sent."""
        if request.type not in (StepType.INITIAL, StepType.FOLLOWUP):
            raise_validation_error(f"unknown task type '{request.type}'", "type")

        vendor = await self._get_vendor(request.vendor_id)
        self._check_channel(vendor, request.channel)

        now = datetime.utcnow()
        new_status = ChannelStatus.FOLLOWED_UP if request.type == StepType.FOLLOWUP else ChannelStatus.SENT

        setattr(vendor, ch.status_field(request.channel), new_status)
        setattr(vendor, ch.contacted_field(request.channel), now)
        if not vendor.overall_status or vendor.overall_status == VendorStatus.PENDING:
            vendor.overall_status = VendorStatus.IN_PROGRESS
        vendor.updated_at = now
        self.vendor_repo.stage_add(vendor)

        entry = self.log_repo.stage_log(
            vendor_id=vendor.id,
            channel=request.channel,
            action=new_status,
            agent_id=request.agent_id,
            message_sent=request.message_sent
        )

        sequence = await self.sequence_repo.get_active_for_vendor(vendor.id)
        if sequence:
            self.sequence_repo.stage_move_cursor(sequence, 1)
            self._sync_completion(sequence, now)

        await self._commit()
        await self.session.refresh(entry)
        logger.info(f"Vendor {vendor.id}: {request.channel} marked {new_status}")
        return entry

    async def mark_skipped(self, request: MarkSkippedRequest) -> OutreachLog:
        """
        Skip a vendor/channel for the rest of today.
        The sequence cursor stays where it is.
        """
        vendor = await self._get_vendor(request.vendor_id)
        self._check_channel(vendor, request.channel)

        # A skipped follow-up keeps the channel's sent status and timestamp
        if ch.channel_status(vendor, request.channel) in ChannelStatus.NEEDS_INITIAL:
            setattr(vendor, ch.status_field(request.channel), ChannelStatus.SKIPPED)
            vendor.updated_at = datetime.utcnow()
            self.vendor_repo.stage_add(vendor)

        entry = self.log_repo.stage_log(
            vendor_id=vendor.id,
            channel=request.channel,
            action=LogActions.SKIPPED,
            agent_id=request.agent_id
        )

        await self._commit()
        await self.session.refresh(entry)
        logger.info(f"Vendor {vendor.id}: {request.channel} skipped for today")
        return entry

    async def _previous_send(self, entry: OutreachLog) -> Optional[OutreachLog]:
        """Latest initial send on the same channel, excluding entry itself."""
        for other in await self.log_repo.get_by_vendor(entry.vendor_id):
            if other.id != entry.id and other.channel == entry.channel and other.action == LogActions.SENT:
                return other
        return None

    async def revert(self, log_id: uuid.UUID) -> RevertResponse:
        """Undo one logged action and put the vendor back in the queue."""
        entry = await self.log_repo.get(log_id)
        if not entry:
            raise_not_found("Outreach log", str(log_id))

        vendor = await self._get_vendor(entry.vendor_id)
        channel = entry.channel
        now = datetime.utcnow()

        if entry.action == LogActions.FOLLOWED_UP:
            reverted_to = ChannelStatus.SENT
            previous = await self._previous_send(entry)
            if previous:
                setattr(vendor, ch.contacted_field(channel), previous.created_at)
        elif entry.action == LogActions.SENT:
            reverted_to = ChannelStatus.PENDING
            setattr(vendor, ch.contacted_field(channel), None)
        else:
            current = ch.channel_status(vendor, channel)
            reverted_to = ChannelStatus.PENDING if current == ChannelStatus.SKIPPED else current

        setattr(vendor, ch.status_field(channel), reverted_to)

        if vendor.overall_status in VendorStatus.EXCLUDED:
            vendor.overall_status = VendorStatus.IN_PROGRESS
            vendor.responded_at = None
            vendor.responded_channel = None
        vendor.updated_at = now
        self.vendor_repo.stage_add(vendor)

        await self.log_repo.stage_delete(entry)

        if entry.action in LogActions.SENDS:
            sequence = await self.sequence_repo.get_active_for_vendor(vendor.id)
            if sequence and sequence.current_step > 0:
                self.sequence_repo.stage_move_cursor(sequence, -1)
                self._sync_completion(sequence, now)

        await self._commit()
        logger.info(f"Vendor {vendor.id}: reverted {entry.action} on {channel} to {reverted_to}")
        return RevertResponse(vendor_id=vendor.id, channel=channel, reverted_to=reverted_to)

    async def list_today(self, agent_id: Optional[str] = None) -> List[OutreachLog]:
        """Today's actions, newest first, optionally for one agent."""
        entries = await self.log_repo.get_since(day_start(datetime.utcnow()))
        if agent_id:
            entries = [e for e in entries if e.agent_id == agent_id]
        return sorted(entries, key=lambda e: e.created_at, reverse=True)
