"""
CatalogItem model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional, Any, Dict
from datetime import datetime
from sqlalchemy import Column, JSON, Index
from sqlalchemy.dialects.postgresql import JSONB

from app.utils.time_utils import utcnow


class CatalogItem(SQLModel, table=True):
    """CatalogItem table - learning content, mutated only through approved change requests."""
    __tablename__ = "catalog_item"
    __table_args__ = (
        Index("ix_catalog_item_created_at", "created_at"),
    )

    code: str = Field(primary_key=True, max_length=32)  # e.g. 'ST-0000042'
    name: str
    description: str = ""
    # 'metadata' is reserved on SQLModel classes, so the attribute is renamed
    item_metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        sa_column=Column("metadata", JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql"), nullable=True)
    )
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
