"""
Card types endpoint.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.database import get_session
from app.core.security import Identity, get_current_identity
from app.schemas.card_type import CardTypePageResponse, CardTypeResponse
from app.schemas.pagination import PageInfo
from app.services import card_type_service
from app.api.v1.endpoints.utils import get_page_params
from app.utils.pagination import PageParams

router = APIRouter(prefix="/card-types", tags=["card-types"])


@router.get("", response_model=CardTypePageResponse)
async def list_card_types(
    page_params: PageParams = Depends(get_page_params),
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """List card types, most recently created first."""
    page = card_type_service.list_card_types(session, page_params)
    return CardTypePageResponse(
        items=[CardTypeResponse.model_validate(card_type) for card_type in page.items],
        page=PageInfo.from_page(page),
    )


@router.get("/{code}", response_model=CardTypeResponse)
async def get_card_type(
    code: str,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Get a card type by code."""
    return CardTypeResponse.model_validate(card_type_service.get_card_type(session, code))
