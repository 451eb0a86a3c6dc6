"""
Knowledge endpoint - catalog reads and, when enabled, direct manager edits.
"""
import logging

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from app.core.config import settings
from app.core.database import get_session
from app.core.exceptions import AuthorizationError
from app.core.security import Identity, Role, get_current_identity, require_role
from app.schemas.catalog import (
    CatalogItemPageResponse,
    CatalogItemResponse,
    CreateItemPayload,
    UpdateItemPayload,
)
from app.schemas.pagination import PageInfo
from app.services import catalog_service, code_generation_service
from app.api.v1.endpoints.utils import get_page_params
from app.utils.pagination import PageParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/knowledge", tags=["knowledge"])


def _require_direct_edits() -> None:
    if not settings.allow_direct_catalog_edits:
        raise AuthorizationError("Direct catalog edits are disabled; submit a change request instead")


@router.get("", response_model=CatalogItemPageResponse)
async def list_knowledge(
    page_params: PageParams = Depends(get_page_params),
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """List catalog items, most recently created first."""
    page = catalog_service.list_items(session, page_params)
    return CatalogItemPageResponse(
        items=[CatalogItemResponse.from_model(item) for item in page.items],
        page=PageInfo.from_page(page),
    )


@router.get("/{code}", response_model=CatalogItemResponse)
async def get_knowledge(
    code: str,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Get a catalog item by code."""
    return CatalogItemResponse.from_model(catalog_service.get_item(session, code))


@router.post("", response_model=CatalogItemResponse, status_code=status.HTTP_201_CREATED)
async def create_knowledge(
    request: CreateItemPayload,
    identity: Identity = Depends(require_role(Role.OPERATOR_MANAGER)),
    session: Session = Depends(get_session)
):
    """Create a catalog item directly, bypassing the change request workflow."""
    _require_direct_edits()
    try:
        code = code_generation_service.next_code(
            session, code_generation_service.resolve_prefix(request.code_prefix)
        )
        item = catalog_service.insert_item(
            session,
            code=code,
            name=request.name,
            description=request.description,
            metadata=request.metadata,
            actor=identity.username,
        )
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(item)
    logger.info(f"Catalog item {item.code} created directly by {identity.username}")
    return CatalogItemResponse.from_model(item)


@router.patch("/{code}", response_model=CatalogItemResponse)
async def update_knowledge(
    code: str,
    request: UpdateItemPayload,
    identity: Identity = Depends(require_role(Role.OPERATOR_MANAGER)),
    session: Session = Depends(get_session)
):
    """Partially update a catalog item directly."""
    _require_direct_edits()
    try:
        item = catalog_service.update_item(session, code, request.changes(), identity.username)
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(item)
    logger.info(f"Catalog item {code} updated directly by {identity.username}")
    return CatalogItemResponse.from_model(item)


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_knowledge(
    code: str,
    identity: Identity = Depends(require_role(Role.OPERATOR_MANAGER)),
    session: Session = Depends(get_session)
):
    """Delete an unused catalog item directly."""
    _require_direct_edits()
    try:
        catalog_service.delete_item(session, code)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"Catalog item {code} deleted directly by {identity.username}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
