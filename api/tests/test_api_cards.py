"""
Tests for the card, card type and stats endpoints.
"""
from datetime import timedelta

import pytest
from sqlmodel import select

from app.models.card import Card
from app.utils.time_utils import utcnow

CARDS_URL = "/api/v1/accounts/me/cards"


def test_requires_authentication(client):
    assert client.get(CARDS_URL).status_code == 401


def test_initialize_twice(client, small_catalog, client_account):
    _, headers = client_account

    first = client.post(f"{CARDS_URL}/initialize", headers=headers)
    second = client.post(f"{CARDS_URL}/initialize", headers=headers)

    assert first.status_code == 200
    assert first.json() == {"created": 6, "skipped": 0}
    assert second.json() == {"created": 0, "skipped": 6}

    listing = client.get(CARDS_URL, headers=headers, params={"size": 4}).json()
    assert len(listing["items"]) == 4
    assert listing["page"] == {"number": 0, "size": 4, "total_items": 6, "total_pages": 2}


def test_list_filtered_by_card_type(client, small_catalog, client_account):
    _, headers = client_account
    client.post(f"{CARDS_URL}/initialize", headers=headers)

    response = client.get(CARDS_URL, headers=headers, params={"card_type_code": "MEANING_TO_WORD"})

    assert response.status_code == 200
    assert {card["card_type_code"] for card in response.json()["items"]} == {"MEANING_TO_WORD"}
    assert response.json()["page"]["total_items"] == 3


def test_review_flow(client, session, small_catalog, client_account):
    account, headers = client_account
    client.post(f"{CARDS_URL}/initialize", headers=headers)
    card_id = client.get(CARDS_URL, headers=headers).json()["items"][0]["id"]

    response = client.post(f"{CARDS_URL}/{card_id}/review", headers=headers, json={"quality": 5})

    assert response.status_code == 200
    card = response.json()
    assert card["id"] == card_id
    assert card["repetitions"] == 1
    assert card["interval_days"] == 1
    assert card["ease_factor"] == 2.6
    assert card["last_reviewed_at"] is not None

    history = client.get(f"{CARDS_URL}/{card_id}/history", headers=headers).json()
    assert [event["quality"] for event in history["items"]] == [5]


def test_review_rejects_bad_quality(client, small_catalog, client_account):
    _, headers = client_account
    client.post(f"{CARDS_URL}/initialize", headers=headers)
    card_id = client.get(CARDS_URL, headers=headers).json()["items"][0]["id"]

    out_of_range = client.post(f"{CARDS_URL}/{card_id}/review", headers=headers, json={"quality": 7})
    not_a_number = client.post(f"{CARDS_URL}/{card_id}/review", headers=headers, json={"quality": "good"})

    assert out_of_range.status_code == 400
    assert out_of_range.json()["detail"] == "Quality must be between 0 and 5"
    assert not_a_number.status_code == 422
    assert client.get(f"{CARDS_URL}/{card_id}", headers=headers).json()["repetitions"] == 0


def test_cards_of_other_accounts_are_hidden(client, small_catalog, make_account):
    _, owner_headers = make_account()
    _, other_headers = make_account()
    client.post(f"{CARDS_URL}/initialize", headers=owner_headers)
    card_id = client.get(CARDS_URL, headers=owner_headers).json()["items"][0]["id"]

    assert client.get(f"{CARDS_URL}/{card_id}", headers=other_headers).status_code == 404
    response = client.post(f"{CARDS_URL}/{card_id}/review", headers=other_headers, json={"quality": 4})
    assert response.status_code == 404
    assert response.json()["detail"] == "Card not found"


def test_due_cards(client, session, small_catalog, client_account):
    account, headers = client_account
    client.post(f"{CARDS_URL}/initialize", headers=headers)
    assert client.get(f"{CARDS_URL}/due", headers=headers).json()["page"]["total_items"] == 0

    card = session.exec(select(Card).where(Card.account_id == account.id)).first()
    card.next_review_at = utcnow() - timedelta(minutes=1)
    session.add(card)
    session.commit()

    due = client.get(f"{CARDS_URL}/due", headers=headers).json()
    assert [item["id"] for item in due["items"]] == [card.id]


def test_invalid_paging(client, client_account):
    _, headers = client_account
    assert client.get(CARDS_URL, headers=headers, params={"page": -1}).status_code == 400
    assert client.get(CARDS_URL, headers=headers, params={"size": 0}).status_code == 400


def test_stats(client, small_catalog, client_account):
    _, headers = client_account
    client.post(f"{CARDS_URL}/initialize", headers=headers)

    response = client.get("/api/v1/accounts/me/stats", headers=headers)

    assert response.status_code == 200
    assert response.json() == {
        "total_cards": 6,
        "new_cards": 6,
        "learning_cards": 0,
        "due_today": 0,
        "by_card_type": {"MEANING_TO_WORD": 3, "WORD_TO_MEANING": 3},
    }


def test_card_types(client, small_catalog, client_account):
    _, headers = client_account

    listing = client.get("/api/v1/card-types", headers=headers)
    single = client.get("/api/v1/card-types/WORD_TO_MEANING", headers=headers)
    missing = client.get("/api/v1/card-types/NOPE", headers=headers)

    assert listing.status_code == 200
    assert listing.json()["page"]["total_items"] == 2
    assert single.json()["code"] == "WORD_TO_MEANING"
    assert missing.status_code == 404


@pytest.mark.parametrize("quality", [True, "4", 4.5, 4.0, None])
def test_review_requires_json_integer(client, session, small_catalog, client_account, quality):
    _, headers = client_account
    client.post(f"{CARDS_URL}/initialize", headers=headers)
    card_id = client.get(CARDS_URL, headers=headers).json()["items"][0]["id"]

    response = client.post(f"{CARDS_URL}/{card_id}/review", headers=headers, json={"quality": quality})

    assert response.status_code == 422
    card = client.get(f"{CARDS_URL}/{card_id}", headers=headers).json()
    assert card["repetitions"] == 0
    assert card["interval_days"] == 1
    assert card["ease_factor"] == 2.5
    assert card["last_reviewed_at"] is None
    history = client.get(f"{CARDS_URL}/{card_id}/history", headers=headers).json()
    assert history["page"]["total_items"] == 0
