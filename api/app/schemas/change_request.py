"""
Change request schemas.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime

from app.models.enums import ChangeRequestKind
from app.schemas.pagination import PageInfo


class SubmitChangeRequest(BaseModel):
    """Proposed catalog mutation. The payload shape depends on kind."""
    kind: ChangeRequestKind
    target_code: Optional[str] = Field(None, description="Item code; required for UPDATE and DELETE, absent for CREATE")
    payload: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        json_schema_extra = {
            "example": {
                "kind": "UPDATE",
                "target_code": "ST-0000042",
                "payload": {"name": "serendipity"}
            }
        }


class ChangeRequestDecision(BaseModel):
    """Reviewer decision on a pending change request."""
    approved: bool
    reason: Optional[str] = Field(None, max_length=1000)


class ChangeRequestResponse(BaseModel):
    """Change request response schema."""
    id: int
    kind: ChangeRequestKind
    target_code: Optional[str] = None
    payload: Dict[str, Any]
    status: str
    submitter_id: int
    reviewer_id: Optional[int] = None
    review_comment: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    resolved_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ChangeRequestPageResponse(BaseModel):
    """Paginated change requests."""
    items: List[ChangeRequestResponse]
    page: PageInfo
