"""
Cards endpoint - the current account's cards and reviews.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.database import get_session
from app.core.security import Identity, get_current_identity
from app.schemas.card import (
    CardPageResponse,
    CardResponse,
    InitializeCardsResponse,
    ReviewEventPageResponse,
    ReviewEventResponse,
    ReviewRequest,
)
from app.schemas.pagination import PageInfo
from app.services import card_service
from app.api.v1.endpoints.utils import get_page_params
from app.utils.pagination import Page, PageParams

router = APIRouter(prefix="/accounts/me/cards", tags=["cards"])


def _card_page(page: Page) -> CardPageResponse:
    return CardPageResponse(
        items=[CardResponse.model_validate(card) for card in page.items],
        page=PageInfo.from_page(page),
    )


@router.get("", response_model=CardPageResponse)
async def list_my_cards(
    card_type_code: Optional[str] = Query(None, description="Only cards of this card type"),
    page_params: PageParams = Depends(get_page_params),
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """List the current account's cards, soonest review first."""
    page = card_service.list_cards(session, identity.account_id, page_params, card_type_code)
    return _card_page(page)


# Declared before /{card_id} so 'due' is not parsed as an id
@router.get("/due", response_model=CardPageResponse)
async def list_my_due_cards(
    page_params: PageParams = Depends(get_page_params),
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """List the current account's cards that are due for review."""
    page = card_service.list_due_cards(session, identity.account_id, page_params)
    return _card_page(page)


@router.post("/initialize", response_model=InitializeCardsResponse)
async def initialize_my_cards(
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Create a card for every catalog item and card type the account does not have yet."""
    result = card_service.initialize_cards(session, identity.account_id)
    return InitializeCardsResponse(created=result.created, skipped=result.skipped)


@router.get("/{card_id}", response_model=CardResponse)
async def get_my_card(
    card_id: int,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Get one of the current account's cards."""
    return CardResponse.model_validate(card_service.get_card(session, identity.account_id, card_id))


@router.post("/{card_id}/review", response_model=CardResponse)
async def review_my_card(
    card_id: int,
    request: ReviewRequest,
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Record a review and reschedule the card."""
    card = card_service.review_card(session, identity.account_id, card_id, request.quality)
    return CardResponse.model_validate(card)


@router.get("/{card_id}/history", response_model=ReviewEventPageResponse)
async def get_my_card_history(
    card_id: int,
    page_params: PageParams = Depends(get_page_params),
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Review history of a card, newest first."""
    page = card_service.get_review_history(session, identity.account_id, card_id, page_params)
    return ReviewEventPageResponse(
        items=[ReviewEventResponse.model_validate(event) for event in page.items],
        page=PageInfo.from_page(page),
    )
