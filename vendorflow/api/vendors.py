"""
Vendors API routes.
"""
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from vendorflow.config import settings as app_settings
from vendorflow.database import get_session
from vendorflow.core.pagination import PaginatedResponse
from vendorflow.services.vendor_service import VendorService
from vendorflow.schemas.vendor import (
    VendorCreate, VendorResponse, VendorFilter, ResponseUpdate, SequenceResponse
)

router = APIRouter(prefix=f"{app_settings.API_PREFIX}/vendors", tags=["vendors"])


@router.post("/", response_model=VendorResponse, status_code=201)
async def create_vendor(
    vendor_data: VendorCreate,
    session: AsyncSession = Depends(get_session)
):
    """Add a vendor and assign its sequence."""
    vendor_service = VendorService(session)
    return await vendor_service.create(vendor_data)


@router.get("/", response_model=PaginatedResponse[VendorResponse])
async def list_vendors(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category: Optional[str] = None,
    city: Optional[str] = None,
    overall_status: Optional[str] = None,
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session)
):
    """List vendors with filtering and pagination."""
    filters = VendorFilter(
        category=category,
        city=city,
        overall_status=overall_status,
        search=search
    )

    vendor_service = VendorService(session)
    return await vendor_service.list(filters, page, limit)


@router.get("/{vendor_id}", response_model=VendorResponse)
async def get_vendor(
    vendor_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    vendor_service = VendorService(session)
    return await vendor_service.get(vendor_id)


@router.get("/{vendor_id}/sequence", response_model=SequenceResponse)
async def get_vendor_sequence(
    vendor_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    vendor_service = VendorService(session)
    return await vendor_service.get_sequence(vendor_id)


@router.post("/{vendor_id}/response", response_model=VendorResponse)
async def set_vendor_response(
    vendor_id: uuid.UUID,
    response: ResponseUpdate,
    session: AsyncSession = Depends(get_session)
):
    """Record how the vendor answered."""
    vendor_service = VendorService(session)
    return await vendor_service.set_response(vendor_id, response)


@router.delete("/{vendor_id}/response", response_model=VendorResponse)
async def revert_vendor_response(
    vendor_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    vendor_service = VendorService(session)
    return await vendor_service.revert_response(vendor_id)


@router.post("/{vendor_id}/reset", response_model=VendorResponse)
async def reset_vendor(
    vendor_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Start the vendor's outreach over from scratch."""
    vendor_service = VendorService(session)
    return await vendor_service.reset_to_pending(vendor_id)
