"""
Learning statistics schemas.
"""
from pydantic import BaseModel
from typing import Dict


class StatsResponse(BaseModel):
    """Card counts for one account."""
    total_cards: int
    new_cards: int
    learning_cards: int
    due_today: int
    by_card_type: Dict[str, int]
