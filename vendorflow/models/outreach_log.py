"""
Outreach log model - append-only audit trail of task actions.
The planning engine reads it to know what happened today and this week.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class OutreachLog(SQLModel, table=True):
    """
    One action taken against a vendor on one channel.
    Rows are only ever inserted, or deleted when an action is reverted.
    """
    __tablename__ = "outreach_log"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    vendor_id: uuid.UUID = Field(foreign_key="vendor.id", index=True)

    channel: str = Field(index=True)  # instagram, whatsapp, email
    action: str = Field(index=True)  # sent, followed_up, skipped

    # Agent who performed the action (None for single-agent setups)
    agent_id: Optional[str] = Field(default=None, index=True)

    message_sent: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)


# Action constants for consistency
class LogActions:
    SENT = "sent"
    FOLLOWED_UP = "followed_up"
    SKIPPED = "skipped"

    # Actions that count against a channel's send budget
    SENDS = frozenset({SENT, FOLLOWED_UP})
