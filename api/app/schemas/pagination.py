"""
Pagination schemas.
"""
from pydantic import BaseModel, Field

from app.utils.pagination import Page


class PageInfo(BaseModel):
    """Paging block of every list response."""
    number: int = Field(..., description="Zero-based page index")
    size: int = Field(..., description="Page size actually used (after clamping)")
    total_items: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page) -> "PageInfo":
        return cls(
            number=page.number,
            size=page.size,
            total_items=page.total_items,
            total_pages=page.total_pages,
        )
