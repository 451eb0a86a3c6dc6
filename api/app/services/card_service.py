"""
Card service - per-account cards, review application and bulk initialization.

Reviews are applied with the SM-2 scheduler (app.services.sm2_service); the
card update and the review event are committed together.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlmodel import Session, select

from app.core.exceptions import NotFoundError
from app.models.card import Card
from app.models.card_type import CardType
from app.models.catalog_item import CatalogItem
from app.models.review_event import ReviewEvent
from app.services import sm2_service
from app.utils.db_utils import insert_ignore_conflicts
from app.utils.pagination import Page, PageParams, paginate
from app.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitializeResult:
    """Outcome of initialize_cards."""
    created: int
    skipped: int


def list_cards(
    session: Session,
    account_id: int,
    page_params: PageParams,
    card_type_code: Optional[str] = None,
) -> Page:
    """
    List an account's cards ordered by next review time (soonest first).

    Args:
        session: Database session
        account_id: Owner account
        page_params: Page number and size
        card_type_code: Optional card type filter
    """
    query = select(Card).where(Card.account_id == account_id)
    if card_type_code:
        query = query.where(Card.card_type_code == card_type_code)
    query = query.order_by(Card.next_review_at, Card.id)  # type: ignore
    return paginate(session, query, page_params)


def list_due_cards(
    session: Session,
    account_id: int,
    page_params: PageParams,
    now: Optional[datetime] = None,
) -> Page:
    """List an account's cards whose next review time is at or before now."""
    now = now or utcnow()
    query = (
        select(Card)
        .where(Card.account_id == account_id, Card.next_review_at <= now)
        .order_by(Card.next_review_at, Card.id)  # type: ignore
    )
    return paginate(session, query, page_params)


def _owned_card_query(account_id: int, card_id: int):
    return select(Card).where(Card.id == card_id, Card.account_id == account_id)


def get_card(session: Session, account_id: int, card_id: int) -> Card:
    """
    Get one of the account's cards.

    A card owned by another account is reported exactly like a missing one.

    Raises:
        NotFoundError: If the card does not exist or belongs to someone else
    """
    card = session.exec(_owned_card_query(account_id, card_id)).first()
    if not card:
        raise NotFoundError("Card not found")
    return card


def review_card(session: Session, account_id: int, card_id: int, quality: int) -> Card:
    """
    Apply a review outcome to a card.

    Validates quality, locks the card row, computes the next SM-2 state, stores
    it with last_reviewed_at/updated_at and appends a ReviewEvent. Everything is
    committed in one transaction; on any error the transaction is rolled back.

    Args:
        session: Database session
        account_id: Owner account (cards of other accounts are not found)
        card_id: Card to review
        quality: Review quality (0-5)

    Returns:
        The updated card

    Raises:
        ValidationError: If quality is outside 0-5
        NotFoundError: If the card is not the account's
    """
    sm2_service.validate_quality(quality)

    try:
        card = session.exec(_owned_card_query(account_id, card_id).with_for_update()).first()
        if not card:
            raise NotFoundError("Card not found")

        current = sm2_service.SchedulingState(
            ease_factor=card.ease_factor,
            interval_days=card.interval_days,
            repetitions=card.repetitions,
        )
        new_state = sm2_service.next_state(current, quality)
        now = utcnow()

        card.ease_factor = new_state.ease_factor
        card.interval_days = new_state.interval_days
        card.repetitions = new_state.repetitions
        card.next_review_at = sm2_service.next_review_at(now, new_state.interval_days)
        card.last_reviewed_at = now
        card.updated_at = now
        session.add(card)
        session.add(ReviewEvent(card_id=card.id, quality=quality, reviewed_at=now))

        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(card)
    logger.info(
        f"Reviewed card {card_id} for account {account_id}: quality={quality}, "
        f"ease={new_state.ease_factor}, interval={new_state.interval_days}d, "
        f"repetitions={new_state.repetitions}, next_review_at={card.next_review_at}"
    )
    return card


def get_review_history(session: Session, account_id: int, card_id: int, page_params: PageParams) -> Page:
    """Review events of one of the account's cards, newest first."""
    get_card(session, account_id, card_id)
    query = (
        select(ReviewEvent)
        .where(ReviewEvent.card_id == card_id)
        .order_by(ReviewEvent.reviewed_at.desc(), ReviewEvent.id.desc())  # type: ignore
    )
    return paginate(session, query, page_params)


def initialize_cards(session: Session, account_id: int) -> InitializeResult:
    """
    Create a card for every (catalog item, card type) pair the account lacks.

    New cards get the SM-2 initial state and are first due one interval after
    creation. Inserts use ON CONFLICT DO NOTHING on the (account, item, type)
    unique constraint, so concurrent calls for the same account never create
    duplicates; a pair inserted by someone else meanwhile counts as skipped.
    Running it again creates nothing.

    Args:
        session: Database session
        account_id: Account to initialize

    Returns:
        InitializeResult with created and skipped counts
    """
    item_codes = session.exec(select(CatalogItem.code).order_by(CatalogItem.code)).all()
    card_type_codes = session.exec(select(CardType.code).order_by(CardType.code)).all()
    existing = {
        (item_code, card_type_code)
        for item_code, card_type_code in session.exec(
            select(Card.item_code, Card.card_type_code).where(Card.account_id == account_id)
        ).all()
    }

    initial = sm2_service.initial_state()
    created = 0
    skipped = 0

    try:
        for item_code in item_codes:
            for card_type_code in card_type_codes:
                if (item_code, card_type_code) in existing:
                    skipped += 1
                    continue

                now = utcnow()
                statement = insert_ignore_conflicts(
                    session,
                    Card,
                    {
                        "account_id": account_id,
                        "item_code": item_code,
                        "card_type_code": card_type_code,
                        "ease_factor": initial.ease_factor,
                        "interval_days": initial.interval_days,
                        "repetitions": initial.repetitions,
                        "next_review_at": sm2_service.next_review_at(now, initial.interval_days),
                        "created_at": now,
                        "updated_at": now,
                    },
                    index_elements=["account_id", "item_code", "card_type_code"],
                )
                result = session.exec(statement)
                if result.rowcount:
                    created += 1
                else:
                    skipped += 1

        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"Initialized cards for account {account_id}: created={created}, skipped={skipped}")
    return InitializeResult(created=created, skipped=skipped)
