# file: tests/test_vendor_service.py
import uuid
from datetime import timedelta
from unittest.mock import Mock, AsyncMock

import pytest
from fastapi import HTTPException

from vendorflow.models import Vendor, VendorSequence
from vendorflow.services.vendor_service import VendorService, normalize_username
from vendorflow.schemas.vendor import VendorCreate, ResponseUpdate

from tests.conftest import NOW, make_vendor, make_sequence, make_log


@pytest.fixture
def session():
    session = AsyncMock()
    session.add = Mock()
    return session


def added(session, model):
    return [call.args[0] for call in session.add.call_args_list if isinstance(call.args[0], model)]


def test_normalize_username():
    assert normalize_username(" @Pixel.Stories ") == "pixel.stories"
    assert normalize_username("@") is None
    assert normalize_username(None) is None


@pytest.mark.asyncio
async def test_create_assigns_sequence(session):
    service = VendorService(session)
    service.vendor_repo.find_duplicate = AsyncMock(return_value=None)

    vendor = await service.create(VendorCreate(
        full_name="Pixel Stories",
        category="Photographer",
        username="@Pixel.Stories",
        phone="9876543210",
        email="Hello@PixelStories.in"
    ))

    assert vendor.username == "pixel.stories"
    assert vendor.email == "hello@pixelstories.in"
    assert vendor.category == "photographer"
    assert (vendor.has_instagram, vendor.has_phone, vendor.has_email) == (True, True, True)

    sequences = added(session, VendorSequence)
    assert len(sequences) == 1
    assert sequences[0].vendor_id == vendor.id
    assert sequences[0].sequence_type == "tier_a"
    assert len(sequences[0].steps) == 7
    assert sequences[0].current_step == 0
    session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_email_only_vendor(session):
    service = VendorService(session)
    service.vendor_repo.find_duplicate = AsyncMock(return_value=None)

    vendor = await service.create(VendorCreate(full_name="Bloom Decor", email="team@bloom.in"))

    assert not vendor.has_instagram
    assert added(session, VendorSequence)[0].sequence_type == "tier_e"


@pytest.mark.asyncio
async def test_create_duplicate(session):
    service = VendorService(session)
    service.vendor_repo.find_duplicate = AsyncMock(return_value=make_vendor())

    with pytest.raises(HTTPException) as exc:
        await service.create(VendorCreate(full_name="Copy", username="pixel.stories"))

    assert exc.value.status_code == 409
    assert added(session, Vendor) == []
    session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_set_response(session):
    vendor = make_vendor(overall_status="in_progress")
    service = VendorService(session)
    service.vendor_repo.get = AsyncMock(return_value=vendor)

    await service.set_response(vendor.id, ResponseUpdate(status="interested", channel="whatsapp"))

    assert vendor.overall_status == "interested"
    assert vendor.responded_channel == "whatsapp"
    assert vendor.responded_at is not None


@pytest.mark.asyncio
@pytest.mark.parametrize("status,channel", [("in_progress", None), ("interested", "fax")])
async def test_set_response_rejects_bad_input(session, status, channel):
    service = VendorService(session)
    service.vendor_repo.get = AsyncMock(return_value=make_vendor())
    with pytest.raises(HTTPException) as exc:
        await service.set_response(uuid.uuid4(), ResponseUpdate(status=status, channel=channel))
    assert exc.value.status_code == 422


@pytest.mark.asyncio
async def test_revert_response(session):
    vendor = make_vendor(overall_status="declined", responded_at=NOW, responded_channel="email")
    service = VendorService(session)
    service.vendor_repo.get = AsyncMock(return_value=vendor)

    await service.revert_response(vendor.id)

    assert vendor.overall_status == "in_progress"
    assert vendor.responded_at is None
    assert vendor.responded_channel is None


@pytest.mark.asyncio
async def test_revert_response_without_response(session):
    service = VendorService(session)
    service.vendor_repo.get = AsyncMock(return_value=make_vendor(overall_status="in_progress"))
    with pytest.raises(HTTPException) as exc:
        await service.revert_response(uuid.uuid4())
    assert exc.value.status_code == 409


@pytest.mark.asyncio
async def test_reset_to_pending(session):
    vendor = make_vendor(
        insta_status="followed_up",
        insta_contacted_at=NOW,
        whatsapp_status="skipped",
        overall_status="maybe_later",
        responded_at=NOW,
    )
    sequence = make_sequence(vendor, current_step=6, completed_at=NOW, started_at=NOW - timedelta(days=20))
    logs = [make_log(vendor, "instagram", "followed_up"), make_log(vendor, "instagram", "sent")]
    service = VendorService(session)
    service.vendor_repo.get = AsyncMock(return_value=vendor)
    service.log_repo.get_by_vendor = AsyncMock(return_value=logs)
    service.sequence_repo.get_active_for_vendor = AsyncMock(return_value=sequence)

    await service.reset_to_pending(vendor.id)

    assert (vendor.insta_status, vendor.whatsapp_status, vendor.email_status) == ("pending",) * 3
    assert vendor.insta_contacted_at is None
    assert vendor.overall_status == "pending"
    assert vendor.responded_at is None
    assert sequence.current_step == 0
    assert sequence.completed_at is None
    assert session.delete.await_count == 2
    session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_missing_vendor(session):
    service = VendorService(session)
    service.vendor_repo.get = AsyncMock(return_value=None)
    with pytest.raises(HTTPException) as exc:
        await service.get(uuid.uuid4())
    assert exc.value.status_code == 404
