"""
Vendor model - a contact record being worked through outreach.
Tracks per-channel capability, status and contact timestamps.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class Vendor(SQLModel, table=True):
    """
    Vendor entity - one business being contacted over Instagram,
    WhatsApp and/or email.

    A channel's contacted-at timestamp is set only while that channel's
    status is "sent" or "followed_up".
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Basic info
    full_name: str = Field(default="", index=True)
    category: str = Field(default="uncategorized", index=True)
    city: str = Field(default="", index=True)

    # Contact info
    username: Optional[str] = Field(default=None, index=True)  # Instagram handle, no "@"
    phone: Optional[str] = Field(default=None, index=True)
    email: Optional[str] = Field(default=None, index=True)

    # Channel capability
    has_instagram: bool = Field(default=False)
    has_phone: bool = Field(default=False)
    has_email: bool = Field(default=False)

    # Per-channel status: pending, sent, followed_up, skipped
    insta_status: str = Field(default="pending", index=True)
    whatsapp_status: str = Field(default="pending", index=True)
    email_status: str = Field(default="pending", index=True)

    insta_contacted_at: Optional[datetime] = None
    whatsapp_contacted_at: Optional[datetime] = None
    email_contacted_at: Optional[datetime] = None

    # Lifecycle
    overall_status: str = Field(default="pending", index=True)
    # pending, in_progress, interested, not_interested, declined, maybe_later, converted, invalid
    responded_at: Optional[datetime] = None
    responded_channel: Optional[str] = None

    notes: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class ChannelStatus:
    PENDING = "pending"
    SENT = "sent"
    FOLLOWED_UP = "followed_up"
    SKIPPED = "skipped"

    # Statuses that still need an initial message
    NEEDS_INITIAL = frozenset({PENDING, SKIPPED})
    CONTACTED = frozenset({SENT, FOLLOWED_UP})


class VendorStatus:
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    INTERESTED = "interested"
    NOT_INTERESTED = "not_interested"
    DECLINED = "declined"
    MAYBE_LATER = "maybe_later"
    CONVERTED = "converted"
    INVALID = "invalid"

    # Vendors in these states never appear in a daily plan
    EXCLUDED = frozenset({
        INTERESTED, NOT_INTERESTED, DECLINED, CONVERTED, MAYBE_LATER, INVALID,
    })
    RESPONSES = EXCLUDED
