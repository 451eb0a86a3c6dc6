"""
ReviewEvent model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from sqlalchemy import CheckConstraint

from app.utils.time_utils import utcnow


class ReviewEvent(SQLModel, table=True):
    """ReviewEvent table - append-only history of accepted reviews."""
    __tablename__ = "review_event"
    __table_args__ = (
        CheckConstraint("quality >= 0 AND quality <= 5", name="ck_review_event_quality_range"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    card_id: int = Field(foreign_key="card.id", index=True)
    quality: int  # 0-5
    reviewed_at: datetime = Field(default_factory=utcnow)
