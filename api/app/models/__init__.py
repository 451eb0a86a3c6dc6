"""
Models package - imports all models so they register with SQLModel.metadata.
"""
# Import enums first
from app.models.enums import ChangeRequestKind, ChangeRequestStatus, CodePrefix

# Import all models
from app.models.account import Account
from app.models.card_type import CardType
from app.models.catalog_item import CatalogItem
from app.models.card import Card
from app.models.review_event import ReviewEvent
from app.models.change_request import ChangeRequest
from app.models.code_sequence import CodeSequence

__all__ = [
    'ChangeRequestKind',
    'ChangeRequestStatus',
    'CodePrefix',
    'Account',
    'CardType',
    'CatalogItem',
    'Card',
    'ReviewEvent',
    'ChangeRequest',
    'CodeSequence',
]
