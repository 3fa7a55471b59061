"""
Vendor sequence repository.
"""
import uuid
from typing import Optional, List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from vendorflow.models.sequence import VendorSequence
from vendorflow.repositories.base import BaseRepository


class VendorSequenceRepository(BaseRepository[VendorSequence]):
    """Repository for VendorSequence operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(VendorSequence, session)

    async def get_active(self) -> List[VendorSequence]:
        """All active sequences (plan input)."""
        query = select(VendorSequence).where(VendorSequence.is_active == True)
        result = await self.session.exec(query)
        return result.all()

    async def get_active_for_vendor(self, vendor_id: uuid.UUID) -> Optional[VendorSequence]:
        query = select(VendorSequence).where(
            VendorSequence.vendor_id == vendor_id,
            VendorSequence.is_active == True
        )
        result = await self.session.exec(query)
        return result.first()

    def stage_move_cursor(self, sequence: VendorSequence, delta: int) -> VendorSequence:
        """Move the cursor by +1 or -1 without committing; never below zero."""
        sequence.current_step = max(0, (sequence.current_step or 0) + delta)
        self.session.add(sequence)
        return sequence
