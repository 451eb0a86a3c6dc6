"""
ChangeRequest model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional, Any, Dict
from datetime import datetime
from sqlalchemy import CheckConstraint, Column, JSON, String as SAString, Index
from sqlalchemy.dialects.postgresql import JSONB

from app.models.enums import ChangeRequestStatus
from app.utils.time_utils import utcnow


class ChangeRequest(SQLModel, table=True):
    """ChangeRequest table - proposed catalog mutations awaiting a reviewer."""
    __tablename__ = "change_request"
    __table_args__ = (
        Index("ix_change_request_status_created", "status", "created_at"),
        CheckConstraint("kind IN ('CREATE', 'UPDATE', 'DELETE')", name="ck_change_request_kind"),
        CheckConstraint("status IN ('PENDING', 'APPROVED', 'REJECTED')", name="ck_change_request_status"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    kind: str = Field(sa_column=Column(SAString, nullable=False))  # ChangeRequestKind value
    target_code: Optional[str] = None  # Absent for CREATE
    payload: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    )
    status: str = Field(
        default=ChangeRequestStatus.PENDING.value,
        sa_column=Column(SAString, nullable=False, default=ChangeRequestStatus.PENDING.value)
    )  # ChangeRequestStatus value - stored as string
    submitter_id: int = Field(foreign_key="account.id", index=True)
    reviewer_id: Optional[int] = Field(default=None, foreign_key="account.id")
    review_comment: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    resolved_at: Optional[datetime] = None
