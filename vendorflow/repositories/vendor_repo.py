"""
Vendor repository.
"""
from typing import Optional, List

from sqlmodel import select, or_
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy import func

from vendorflow.models.vendor import Vendor
from vendorflow.repositories.base import BaseRepository
from vendorflow.core.pagination import create_paginated_response, page_offset
from vendorflow.schemas.vendor import VendorFilter


class VendorRepository(BaseRepository[Vendor]):
    """Repository for Vendor operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Vendor, session)

    async def get_all(self) -> List[Vendor]:
        """Every vendor, oldest first (plan input)."""
        query = select(Vendor).order_by(Vendor.created_at, Vendor.id)
        result = await self.session.exec(query)
        return result.all()

    async def find_duplicate(
        self,
        username: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None
    ) -> Optional[Vendor]:
        """Existing vendor sharing any contact handle."""
        conditions = []
        if username:
            conditions.append(Vendor.username == username)
        if phone:
            conditions.append(Vendor.phone == phone)
        if email:
            conditions.append(Vendor.email == email)
        if not conditions:
            return None
        result = await self.session.exec(select(Vendor).where(or_(*conditions)))
        return result.first()

    async def search(
        self,
        filters: Optional[VendorFilter] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """Search vendors with filters."""
        query = select(Vendor)

        if filters:
            if filters.category:
                query = query.where(Vendor.category == filters.category)
            if filters.city:
                query = query.where(Vendor.city == filters.city)
            if filters.overall_status:
                query = query.where(Vendor.overall_status == filters.overall_status)
            if filters.search:
                pattern = f"%{filters.search}%"
                query = query.where(or_(
                    Vendor.full_name.ilike(pattern),
                    Vendor.username.ilike(pattern),
                    Vendor.email.ilike(pattern),
                    Vendor.phone.ilike(pattern),
                ))

        count_query = select(func.count()).select_from(query.subquery())
        total_result = await self.session.exec(count_query)
        total = total_result.one()

        query = query.order_by(Vendor.created_at.desc())
        query = query.offset(page_offset(page, limit)).limit(limit)

        result = await self.session.exec(query)
        items = result.all()

        return create_paginated_response(items, total, page, limit)
