"""
Catalog item schemas.

The Create/Update/Delete payload models are the tagged variants of a change
request payload: the request kind selects exactly one of them, and the payload
is decoded into it when the request is submitted.
"""
from pydantic import BaseModel, Field, model_validator
from typing import Any, Dict, List, Optional
from datetime import datetime

from app.models.catalog_item import CatalogItem
from app.schemas.pagination import PageInfo


class CreateItemPayload(BaseModel):
    """New catalog item. The code is generated on approval."""
    name: str = Field(..., min_length=1, description="Item name")
    description: str = Field("", description="Item description")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Free-form metadata")
    code_prefix: Optional[str] = Field(
        None,
        description="Code prefix hint: 'ST' or 'CS'. Unknown or missing hints fall back to 'ST'"
    )

    class Config:
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "name": "serendipity",
                "description": "the occurrence of events by chance in a happy way",
                "metadata": {"part_of_speech": "noun"},
                "code_prefix": "ST"
            }
        }


class UpdateItemPayload(BaseModel):
    """
    Partial update of a catalog item.

    Omitted fields are left unchanged. A field sent explicitly replaces the
    current value; 'metadata': null clears the metadata.
    """
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    class Config:
        extra = "forbid"

    @model_validator(mode="after")
    def check_changes(self) -> "UpdateItemPayload":
        if not self.model_fields_set:
            raise ValueError("Update payload must contain at least one field")
        for field_name in ("name", "description"):
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Only the fields that were sent."""
        return self.model_dump(exclude_unset=True)


class DeleteItemPayload(BaseModel):
    """Deletion carries no fields besides an optional note for the reviewer."""
    note: Optional[str] = None

    class Config:
        extra = "forbid"


class CatalogItemResponse(BaseModel):
    """Catalog item response schema."""
    code: str
    name: str
    description: str
    metadata: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime
    created_by: Optional[str] = None
    updated_by: Optional[str] = None

    @classmethod
    def from_model(cls, item: CatalogItem) -> "CatalogItemResponse":
        return cls(
            code=item.code,
            name=item.name,
            description=item.description,
            metadata=item.item_metadata,
            created_at=item.created_at,
            updated_at=item.updated_at,
            created_by=item.created_by,
            updated_by=item.updated_by,
        )


class CatalogItemPageResponse(BaseModel):
    """Paginated catalog items."""
    items: List[CatalogItemResponse]
    page: PageInfo
