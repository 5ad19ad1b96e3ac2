# --- File: tripdesk/schemas/common/pagination.py ---
"""
Pagination schemas for page-based list responses.
"""

from __future__ import annotations

from pydantic import Field, computed_field

from tripdesk.schemas.common.base import BaseSchema

__all__ = [
    "PaginationParams",
    "PaginationMeta",
]


class PaginationParams(BaseSchema):
    """Pagination query parameters."""

    page: int = Field(
        default=1,
        ge=1,
        description="Page number (1-indexed)",
    )
    limit: int = Field(
        default=10,
        ge=1,
        description="Items per page",
    )

    @computed_field  # type: ignore[misc]
    @property
    def offset(self) -> int:
        """Calculate offset for database queries."""
        return (self.page - 1) * self.limit


class PaginationMeta(BaseSchema):
    """Pagination metadata."""

    current_page: int = Field(..., ge=1, description="Current page number")
    total_pages: int = Field(..., ge=0, description="Total number of pages")
    total_items: int = Field(..., ge=0, description="Total number of items")
    items_per_page: int = Field(..., ge=1, description="Items per page")
