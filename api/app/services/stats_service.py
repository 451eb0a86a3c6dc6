"""
Learning statistics for an account.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy import case, func
from sqlmodel import Session, select

from app.models.card import Card
from app.utils.time_utils import utcnow

# Cards with fewer successful repetitions than this (but at least one) are still being learned
LEARNING_REPETITIONS = 3


@dataclass
class AccountStats:
    total_cards: int = 0
    new_cards: int = 0
    learning_cards: int = 0
    due_today: int = 0
    by_card_type: Dict[str, int] = field(default_factory=dict)


def get_stats(session: Session, account_id: int, now: Optional[datetime] = None) -> AccountStats:
    """
    Count an account's cards.

    Args:
        session: Database session
        account_id: Account
        now: Reference time for due cards (defaults to the current UTC time)

    Returns:
        AccountStats with totals, new (never passed), learning (1-2 repetitions),
        due (next_review_at <= now) and per card type counts
    """
    now = now or utcnow()

    totals = session.exec(
        select(
            func.count(Card.id),
            func.coalesce(func.sum(case((Card.repetitions == 0, 1), else_=0)), 0),
            func.coalesce(func.sum(case(
                ((Card.repetitions > 0) & (Card.repetitions < LEARNING_REPETITIONS), 1),
                else_=0,
            )), 0),
            func.coalesce(func.sum(case((Card.next_review_at <= now, 1), else_=0)), 0),
        ).where(Card.account_id == account_id)
    ).one()

    by_card_type = session.exec(
        select(Card.card_type_code, func.count(Card.id))
        .where(Card.account_id == account_id)
        .group_by(Card.card_type_code)
        .order_by(Card.card_type_code)
    ).all()

    return AccountStats(
        total_cards=int(totals[0]),
        new_cards=int(totals[1]),
        learning_cards=int(totals[2]),
        due_today=int(totals[3]),
        by_card_type={code: int(count) for code, count in by_card_type},
    )
