"""
Utility dependencies shared by endpoint modules.
"""
from typing import Optional

from fastapi import Query

from app.utils.pagination import PageParams


def get_page_params(
    page: int = Query(0, description="Zero-based page index"),
    size: Optional[int] = Query(None, description="Page size (clamped to the configured maximum)"),
) -> PageParams:
    """
    Read paging query parameters.

    Bounds are checked in PageParams.create so that a bad page or size is
    reported as a 400 like any other invalid input.
    """
    return PageParams.create(number=page, size=size)
