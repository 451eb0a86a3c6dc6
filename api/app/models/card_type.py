"""
CardType model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from app.utils.time_utils import utcnow


class CardType(SQLModel, table=True):
    """CardType table - the ways a catalog item can be studied (e.g. word to meaning)."""
    __tablename__ = "card_type"

    code: str = Field(primary_key=True, max_length=32)
    name: str
    description: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
