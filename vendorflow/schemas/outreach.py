"""
Outreach schemas - task actions and log entries.
"""
import uuid
from typing import Optional
from datetime import datetime
from pydantic import BaseModel


class MarkSentRequest(BaseModel):
    """Mark a planned task as done."""
    vendor_id: uuid.UUID
    channel: str  # instagram, whatsapp, email
    type: str = "initial"  # initial, followup
    agent_id: Optional[str] = None
    message_sent: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "vendor_id": "550e8400-e29b-41d4-a716-446655440000",
                "channel": "instagram",
                "type": "initial"
            }
        }


class MarkSkippedRequest(BaseModel):
    """Skip a planned task for today."""
    vendor_id: uuid.UUID
    channel: str
    agent_id: Optional[str] = None


class OutreachLogResponse(BaseModel):
    """Outreach log entry response."""
    id: uuid.UUID
    vendor_id: uuid.UUID
    channel: str
    action: str
    agent_id: Optional[str]
    message_sent: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class RevertResponse(BaseModel):
    """Result of reverting a log entry."""
    vendor_id: uuid.UUID
    channel: str
    reverted_to: str
