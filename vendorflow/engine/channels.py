"""
Channel names and accessors for the per-channel fields on a vendor.
"""
from datetime import datetime
from typing import Optional, List

from vendorflow.models.vendor import Vendor, ChannelStatus

INSTAGRAM = "instagram"
WHATSAPP = "whatsapp"
EMAIL = "email"
EXHAUSTED = "exhausted"  # terminal marker in sequence steps

CHANNELS = (INSTAGRAM, WHATSAPP, EMAIL)

CHANNEL_LABELS = {
    INSTAGRAM: "Instagram",
    WHATSAPP: "WhatsApp",
    EMAIL: "Email",
}

_CAPABILITY_FIELDS = {
    INSTAGRAM: "has_instagram",
    WHATSAPP: "has_phone",
    EMAIL: "has_email",
}

_STATUS_FIELDS = {
    INSTAGRAM: "insta_status",
    WHATSAPP: "whatsapp_status",
    EMAIL: "email_status",
}

_CONTACTED_FIELDS = {
    INSTAGRAM: "insta_contacted_at",
    WHATSAPP: "whatsapp_contacted_at",
    EMAIL: "email_contacted_at",
}


def is_channel(value: str) -> bool:
    return value in _STATUS_FIELDS


def status_field(channel: str) -> str:
    return _STATUS_FIELDS[channel]


def contacted_field(channel: str) -> str:
    return _CONTACTED_FIELDS[channel]


def vendor_has_channel(vendor: Vendor, channel: str) -> bool:
    field = _CAPABILITY_FIELDS.get(channel)
    return bool(field and getattr(vendor, field, False))


def channel_status(vendor: Vendor, channel: str) -> str:
    field = _STATUS_FIELDS.get(channel)
    if not field:
        return ChannelStatus.PENDING
    return getattr(vendor, field, None) or ChannelStatus.PENDING


def contacted_at(vendor: Vendor, channel: str) -> Optional[datetime]:
    field = _CONTACTED_FIELDS.get(channel)
    return getattr(vendor, field, None) if field else None


def available_channels(vendor: Vendor) -> List[str]:
    return [ch for ch in CHANNELS if vendor_has_channel(vendor, ch)]


def has_all_channels(vendor: Vendor) -> bool:
    return all(vendor_has_channel(vendor, ch) for ch in CHANNELS)


def channel_identifier(vendor: Vendor, channel: str) -> str:
    """Handle, phone number or address the agent uses on that channel."""
    if channel == INSTAGRAM:
        return f"@{vendor.username}" if vendor.username else ""
    if channel == WHATSAPP:
        return vendor.phone or ""
    return vendor.email or ""
