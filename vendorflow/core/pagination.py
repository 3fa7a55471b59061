"""
Pagination helpers for list endpoints.
"""
from typing import TypeVar, Generic, List
from pydantic import BaseModel

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results plus page metadata."""
    items: List[T]
    total: int
    page: int
    limit: int
    pages: int
    has_next: bool
    has_prev: bool

    class Config:
        from_attributes = True


def page_offset(page: int, limit: int) -> int:
    """Row offset for a 1-based page number."""
    return max(0, page - 1) * limit


def create_paginated_response(items: List[T], total: int, page: int, limit: int) -> dict:
    pages = -(-total // limit) if limit > 0 else 0
    return {
        "items": items,
        "total": total,
        "page": page,
        "limit": limit,
        "pages": pages,
        "has_next": page < pages,
        "has_prev": page > 1
    }
