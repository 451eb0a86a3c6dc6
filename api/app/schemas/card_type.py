"""
Card type schemas.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from app.schemas.pagination import PageInfo


class CardTypeResponse(BaseModel):
    """Card type response schema."""
    code: str
    name: str
    description: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CardTypePageResponse(BaseModel):
    """Paginated card types."""
    items: List[CardTypeResponse]
    page: PageInfo
