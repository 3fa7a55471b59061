"""
Outreach log repository.
"""
import uuid
from typing import Optional, List
from datetime import datetime

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from vendorflow.models.outreach_log import OutreachLog
from vendorflow.repositories.base import BaseRepository


class OutreachLogRepository(BaseRepository[OutreachLog]):
    """Repository for OutreachLog operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(OutreachLog, session)

    def stage_log(
        self,
        vendor_id: uuid.UUID,
        channel: str,
        action: str,
        agent_id: Optional[str] = None,
        message_sent: Optional[str] = None
    ) -> OutreachLog:
        """Add a log entry to the session without committing."""
        entry = OutreachLog(
            vendor_id=vendor_id,
            channel=channel,
            action=action,
            agent_id=agent_id,
            message_sent=message_sent
        )
        self.session.add(entry)
        return entry

    async def get_since(self, since: datetime) -> List[OutreachLog]:
        """Log entries created at or after `since`, oldest first."""
        query = select(OutreachLog).where(
            OutreachLog.created_at >= since
        ).order_by(OutreachLog.created_at)
        result = await self.session.exec(query)
        return result.all()

    async def get_by_vendor(self, vendor_id: uuid.UUID) -> List[OutreachLog]:
        query = select(OutreachLog).where(
            OutreachLog.vendor_id == vendor_id
        ).order_by(OutreachLog.created_at.desc())
        result = await self.session.exec(query)
        return result.all()
