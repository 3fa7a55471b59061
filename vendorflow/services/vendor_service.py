"""
Vendor service - intake, response tracking and resets.
"""
import uuid
import logging
from typing import Optional
from datetime import datetime

from sqlmodel.ext.asyncio.session import AsyncSession

from vendorflow.core.exceptions import raise_not_found, raise_validation_error, raise_conflict
from vendorflow.engine import channels as ch
from vendorflow.engine.sequences import determine_sequence_type, get_sequence_steps, dump_steps
from vendorflow.repositories.vendor_repo import VendorRepository
from vendorflow.repositories.sequence_repo import VendorSequenceRepository
from vendorflow.repositories.log_repo import OutreachLogRepository
from vendorflow.models.vendor import Vendor, ChannelStatus, VendorStatus
from vendorflow.models.sequence import VendorSequence
from vendorflow.schemas.vendor import VendorCreate, VendorFilter, ResponseUpdate

logger = logging.getLogger(__name__)


def normalize_username(username: Optional[str]) -> Optional[str]:
    """Instagram handles are stored lowercase without the leading "@"."""
    if not username:
        return None
    cleaned = username.strip().lstrip("@").strip().lower()
    return cleaned or None


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class VendorService:
    """Service for vendor operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.vendor_repo = VendorRepository(session)
        self.sequence_repo = VendorSequenceRepository(session)
        self.log_repo = OutreachLogRepository(session)

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except Exception:
            logger.exception("Vendor update failed, rolling back")
            await self.session.rollback()
            raise

    async def create(self, vendor_data: VendorCreate) -> Vendor:
        """Create a vendor and assign the drip sequence matching its channels."""
        username = normalize_username(vendor_data.username)
        phone = _clean(vendor_data.phone)
        email = _clean(vendor_data.email)
        email = email.lower() if email else None

        if not vendor_data.full_name.strip():
            raise_validation_error("must not be empty", "full_name")

        duplicate = await self.vendor_repo.find_duplicate(username, phone, email)
        if duplicate:
            raise_conflict("Vendor", f"contact details already used by '{duplicate.full_name}'")

        vendor = Vendor(
            full_name=vendor_data.full_name.strip(),
            category=(vendor_data.category or "uncategorized").strip().lower(),
            city=vendor_data.city.strip(),
            username=username,
            phone=phone,
            email=email,
            has_instagram=bool(username),
            has_phone=bool(phone),
            has_email=bool(email),
            notes=vendor_data.notes
        )
        self.vendor_repo.stage_add(vendor)

        sequence_type = determine_sequence_type(vendor.has_instagram, vendor.has_phone, vendor.has_email)
        sequence = VendorSequence(
            vendor_id=vendor.id,
            sequence_type=sequence_type,
            steps=dump_steps(get_sequence_steps(sequence_type))
        )
        self.sequence_repo.stage_add(sequence)

        await self._commit()
        await self.session.refresh(vendor)
        logger.info(f"Created vendor {vendor.id} on {sequence_type}")
        return vendor

    async def get(self, vendor_id: uuid.UUID) -> Vendor:
        """Get a vendor by ID."""
        vendor = await self.vendor_repo.get(vendor_id)
        if not vendor:
            raise_not_found("Vendor", str(vendor_id))
        return vendor

    async def list(
        self,
        filters: Optional[VendorFilter] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """List vendors with filtering and pagination."""
        return await self.vendor_repo.search(filters, page, limit)

    async def get_sequence(self, vendor_id: uuid.UUID) -> VendorSequence:
        await self.get(vendor_id)
        sequence = await self.sequence_repo.get_active_for_vendor(vendor_id)
        if not sequence:
            raise_not_found("Sequence for vendor", str(vendor_id))
        return sequence

    async def set_response(self, vendor_id: uuid.UUID, response: ResponseUpdate) -> Vendor:
        """Record the vendor's answer; it leaves the daily plan from now on."""
        if response.status not in VendorStatus.RESPONSES:
            raise_validation_error(f"unknown response status '{response.status}'", "status")
        if response.channel and not ch.is_channel(response.channel):
            raise_validation_error(f"unknown channel '{response.channel}'", "channel")

        vendor = await self.get(vendor_id)
        now = datetime.utcnow()
        vendor.overall_status = response.status
        vendor.responded_at = now
        vendor.responded_channel = response.channel
        vendor.updated_at = now
        self.vendor_repo.stage_add(vendor)

        await self._commit()
        await self.session.refresh(vendor)
        logger.info(f"Vendor {vendor.id} responded: {response.status}")
        return vendor

    async def revert_response(self, vendor_id: uuid.UUID) -> Vendor:
        """Undo a recorded response and put the vendor back in progress."""
        vendor = await self.get(vendor_id)
        if vendor.overall_status not in VendorStatus.RESPONSES:
            raise_conflict("Vendor", "has no recorded response")

        vendor.overall_status = VendorStatus.IN_PROGRESS
        vendor.responded_at = None
        vendor.responded_channel = None
        vendor.updated_at = datetime.utcnow()
        self.vendor_repo.stage_add(vendor)

        await self._commit()
        await self.session.refresh(vendor)
        return vendor

    async def reset_to_pending(self, vendor_id: uuid.UUID) -> Vendor:
        """
        Start the vendor over: every channel pending, history deleted,
        sequence back at its first step.
        """
        vendor = await self.get(vendor_id)

        for channel in ch.CHANNELS:
            setattr(vendor, ch.status_field(channel), ChannelStatus.PENDING)
            setattr(vendor, ch.contacted_field(channel), None)
        vendor.overall_status = VendorStatus.PENDING
        vendor.responded_at = None
        vendor.responded_channel = None
        vendor.updated_at = datetime.utcnow()
        self.vendor_repo.stage_add(vendor)

        for entry in await self.log_repo.get_by_vendor(vendor.id):
            await self.log_repo.stage_delete(entry)

        sequence = await self.sequence_repo.get_active_for_vendor(vendor.id)
        if sequence:
            sequence.current_step = 0
            sequence.completed_at = None
            self.sequence_repo.stage_add(sequence)

        await self._commit()
        await self.session.refresh(vendor)
        logger.info(f"Vendor {vendor.id} reset to pending")
        return vendor
