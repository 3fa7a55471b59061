"""
Vendor sequence model - the drip sequence assigned at intake.
"""
import uuid
from datetime import datetime
from typing import Optional, List

from sqlmodel import SQLModel, Field
from sqlalchemy import Column
from sqlalchemy.dialects.postgresql import JSONB


class VendorSequence(SQLModel, table=True):
    """
    Outreach sequence for a single vendor.
    The cursor (current_step) moves forward by one per sent task and back
    by one on revert; rows are deactivated, never deleted.
    """
    __tablename__ = "vendor_sequence"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    vendor_id: uuid.UUID = Field(foreign_key="vendor.id", unique=True, index=True)

    sequence_type: str = Field(default="tier_a")  # tier_a .. tier_e

    # Ordered steps, e.g. [{"day": 0, "channel": "instagram", "type": "initial"}, ...]
    steps: List[dict] = Field(default=[], sa_column=Column(JSONB))

    current_step: int = Field(default=0)
    is_active: bool = Field(default=True, index=True)

    started_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None
