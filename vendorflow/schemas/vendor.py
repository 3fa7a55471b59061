"""
Vendor schemas.
"""
import uuid
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr


class VendorCreate(BaseModel):
    """Create a new vendor (intake)."""
    full_name: str
    category: str = "uncategorized"
    city: str = ""
    username: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    notes: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "full_name": "Pixel Stories",
                "category": "photographer",
                "city": "Bangalore",
                "username": "pixel.stories",
                "phone": "9876543210",
                "email": "hello@pixelstories.in"
            }
        }


class VendorResponse(BaseModel):
    """Vendor response."""
    id: uuid.UUID
    full_name: str
    category: str
    city: str
    username: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    has_instagram: bool
    has_phone: bool
    has_email: bool
    insta_status: str
    whatsapp_status: str
    email_status: str
    insta_contacted_at: Optional[datetime]
    whatsapp_contacted_at: Optional[datetime]
    email_contacted_at: Optional[datetime]
    overall_status: str
    responded_at: Optional[datetime]
    responded_channel: Optional[str]
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class VendorFilter(BaseModel):
    """Vendor filtering options."""
    category: Optional[str] = None
    city: Optional[str] = None
    overall_status: Optional[str] = None
    search: Optional[str] = None


class ResponseUpdate(BaseModel):
    """Record how a vendor answered."""
    status: str  # interested, not_interested, declined, maybe_later, converted, invalid
    channel: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {"status": "interested", "channel": "whatsapp"}
        }


class SequenceResponse(BaseModel):
    """Vendor sequence response."""
    id: uuid.UUID
    vendor_id: uuid.UUID
    sequence_type: str
    steps: list
    current_step: int
    is_active: bool
    started_at: datetime
    completed_at: Optional[datetime]

    class Config:
        from_attributes = True
