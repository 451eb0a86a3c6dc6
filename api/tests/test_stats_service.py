"""
Tests for account statistics.
"""
from datetime import timedelta

from sqlmodel import select

from app.models.card import Card
from app.services import card_service, stats_service
from app.utils.time_utils import utcnow


def test_empty_account(session, client_account):
    stats = stats_service.get_stats(session, client_account[0].id)
    assert stats.total_cards == 0
    assert stats.new_cards == 0
    assert stats.learning_cards == 0
    assert stats.due_today == 0
    assert stats.by_card_type == {}


def test_counts(session, small_catalog, client_account):
    account, _ = client_account
    card_service.initialize_cards(session, account.id)
    cards = session.exec(select(Card).where(Card.account_id == account.id).order_by(Card.id)).all()

    card_service.review_card(session, account.id, cards[0].id, 5)
    card_service.review_card(session, account.id, cards[1].id, 5)
    card_service.review_card(session, account.id, cards[1].id, 5)
    cards[2].repetitions = 4
    cards[3].next_review_at = utcnow() - timedelta(minutes=5)
    session.add(cards[2])
    session.add(cards[3])
    session.commit()

    stats = stats_service.get_stats(session, account.id)

    assert stats.total_cards == 6
    assert stats.new_cards == 3
    assert stats.learning_cards == 2
    assert stats.due_today == 1
    assert stats.by_card_type == {"MEANING_TO_WORD": 3, "WORD_TO_MEANING": 3}
