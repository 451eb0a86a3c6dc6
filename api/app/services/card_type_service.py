"""
Card type lookups.
"""
from sqlmodel import Session, select

from app.core.exceptions import NotFoundError
from app.models.card_type import CardType
from app.utils.pagination import Page, PageParams, paginate


def list_card_types(session: Session, page_params: PageParams) -> Page:
    """List card types, most recently created first."""
    query = select(CardType).order_by(CardType.created_at.desc(), CardType.code)  # type: ignore
    return paginate(session, query, page_params)


def get_card_type(session: Session, code: str) -> CardType:
    card_type = session.get(CardType, code)
    if not card_type:
        raise NotFoundError(f"Card type with code {code} not found")
    return card_type
