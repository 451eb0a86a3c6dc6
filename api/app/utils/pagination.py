"""
Pagination helpers shared by list endpoints and services.
"""
import math
from dataclasses import dataclass
from typing import Generic, List, Optional, Sequence, TypeVar

from sqlalchemy import func
from sqlmodel import Session, select

from app.core.config import settings
from app.core.exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class PageParams:
    """Zero-based page index and page size, already bounded."""
    number: int = 0
    size: int = 20

    @classmethod
    def create(cls, number: int = 0, size: Optional[int] = None) -> "PageParams":
        """Validate raw paging input and clamp size to the configured maximum."""
        if size is None:
            size = settings.default_page_size
        if number < 0:
            raise ValidationError("Page number must be >= 0")
        if size < 1:
            raise ValidationError("Page size must be >= 1")
        return cls(number=number, size=min(size, settings.max_page_size))

    @property
    def offset(self) -> int:
        return self.number * self.size


@dataclass
class Page(Generic[T]):
    """One page of results plus totals."""
    items: List[T]
    number: int
    size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.size) if self.size else 0


def paginate(session: Session, query, page_params: PageParams) -> Page:
    """
    Execute an ordered select for one page and count the full result set.

    Args:
        session: Database session
        query: select() statement, already filtered and ordered
        page_params: Page number and size

    Returns:
        Page with items and total_items
    """
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total_items = session.exec(count_query).one()
    items: Sequence = session.exec(query.offset(page_params.offset).limit(page_params.size)).all()
    return Page(
        items=list(items),
        number=page_params.number,
        size=page_params.size,
        total_items=total_items,
    )
