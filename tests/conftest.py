# file: tests/conftest.py
import uuid
from datetime import datetime, timedelta

import pytest

from vendorflow.engine.sequences import dump_steps, get_sequence_steps
from vendorflow.models import Vendor, VendorSequence, OutreachLog
from vendorflow.schemas.plan import DailyTask

# Wednesday, mid-morning
NOW = datetime(2026, 10, 14, 11, 0)


def make_vendor(
    username="pixel.stories",
    phone="9876543210",
    email="hello@pixelstories.in",
    **kwargs
) -> Vendor:
    fields = dict(
        id=uuid.uuid4(),
        full_name="Pixel Stories",
        category="photographer",
        city="Pune",
        username=username,
        phone=phone,
        email=email,
        has_instagram=bool(username),
        has_phone=bool(phone),
        has_email=bool(email),
        insta_status="pending",
        whatsapp_status="pending",
        email_status="pending",
        overall_status="pending",
        created_at=NOW - timedelta(days=1),
        updated_at=NOW - timedelta(days=1),
    )
    fields.update(kwargs)
    return Vendor(**fields)


def make_sequence(vendor: Vendor, sequence_type="tier_a", current_step=0, started_at=NOW, **kwargs) -> VendorSequence:
    fields = dict(
        id=uuid.uuid4(),
        vendor_id=vendor.id,
        sequence_type=sequence_type,
        steps=dump_steps(get_sequence_steps(sequence_type)),
        current_step=current_step,
        is_active=True,
        started_at=started_at,
    )
    fields.update(kwargs)
    return VendorSequence(**fields)


def make_log(vendor: Vendor, channel="instagram", action="sent", created_at=NOW, agent_id=None) -> OutreachLog:
    return OutreachLog(
        id=uuid.uuid4(),
        vendor_id=vendor.id,
        channel=channel,
        action=action,
        agent_id=agent_id,
        created_at=created_at,
    )


def make_task(channel="instagram", task_type="initial", priority=50, is_overdue=False, vendor_id=None) -> DailyTask:
    return DailyTask(
        vendor_id=vendor_id or uuid.uuid4(),
        vendor_name="Vendor",
        category="photographer",
        city="Pune",
        channel=channel,
        type=task_type,
        priority=priority,
        is_overdue=is_overdue,
        days_overdue=2 if is_overdue else 0,
        sequence_label="Tier A (IG+WA+Email)",
        step_number=1,
        total_steps=6,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def vendor():
    return make_vendor()
