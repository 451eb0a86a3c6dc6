"""
Card schemas.
"""
from pydantic import BaseModel, Field, StrictInt
from typing import List, Optional
from datetime import datetime

from app.schemas.pagination import PageInfo


class CardResponse(BaseModel):
    """Card response schema."""
    id: int
    account_id: int
    item_code: str
    card_type_code: str
    ease_factor: float
    interval_days: int
    repetitions: int
    next_review_at: datetime
    last_reviewed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CardPageResponse(BaseModel):
    """Paginated cards."""
    items: List[CardResponse]
    page: PageInfo


class ReviewRequest(BaseModel):
    """Review outcome for a card."""
    quality: StrictInt = Field(..., description="Recall quality from 0 (blackout) to 5 (perfect)")

    class Config:
        json_schema_extra = {
            "example": {
                "quality": 4
            }
        }


class ReviewEventResponse(BaseModel):
    """One accepted review."""
    id: int
    card_id: int
    quality: int
    reviewed_at: datetime

    class Config:
        from_attributes = True


class ReviewEventPageResponse(BaseModel):
    """Paginated review history."""
    items: List[ReviewEventResponse]
    page: PageInfo


class InitializeCardsResponse(BaseModel):
    """Result of bulk card initialization."""
    created: int = Field(..., description="Number of cards created")
    skipped: int = Field(..., description="Number of (item, card type) pairs that already had a card")
