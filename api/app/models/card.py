"""
Card model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from sqlalchemy import CheckConstraint, UniqueConstraint, Index

from app.utils.time_utils import utcnow


class Card(SQLModel, table=True):
    """Card table - one account's SM-2 scheduling state for an (item, card type) pair."""
    __tablename__ = "card"
    __table_args__ = (
        UniqueConstraint("account_id", "item_code", "card_type_code", name="uq_card_account_item_type"),
        Index("ix_card_account_next_review", "account_id", "next_review_at"),
        CheckConstraint("ease_factor >= 1.3", name="ck_card_ease_factor_min"),
        CheckConstraint("interval_days >= 1", name="ck_card_interval_days_min"),
        CheckConstraint("repetitions >= 0", name="ck_card_repetitions_min"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="account.id", index=True)
    item_code: str = Field(foreign_key="catalog_item.code", index=True)
    card_type_code: str = Field(foreign_key="card_type.code")
    ease_factor: Decimal = Field(default=Decimal("2.50"), max_digits=5, decimal_places=2)
    interval_days: int = Field(default=1)
    repetitions: int = Field(default=0)
    next_review_at: datetime  # Always (last_reviewed_at or created_at) + interval_days
    last_reviewed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
