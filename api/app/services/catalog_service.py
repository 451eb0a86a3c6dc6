"""
Catalog service - keyed store over catalog items.

Mutators flush but never commit: the change request workflow (or the direct
edit endpoint) owns the enclosing transaction.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy import exists
from sqlmodel import Session, select

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.card import Card
from app.models.catalog_item import CatalogItem
from app.utils.pagination import Page, PageParams, paginate
from app.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

# Payload field name -> model attribute
_UPDATABLE_FIELDS = {
    "name": "name",
    "description": "description",
    "metadata": "item_metadata",
}


def get_item(session: Session, code: str, for_update: bool = False) -> CatalogItem:
    """
    Get a catalog item by code.

    Args:
        session: Database session
        code: Item code
        for_update: Lock the row until the transaction ends

    Raises:
        NotFoundError: If no item has this code
    """
    query = select(CatalogItem).where(CatalogItem.code == code)
    if for_update:
        query = query.with_for_update()
    item = session.exec(query).first()
    if not item:
        raise NotFoundError(f"Catalog item with code {code} not found")
    return item


def list_items(session: Session, page_params: PageParams) -> Page:
    """List catalog items, most recently created first."""
    query = select(CatalogItem).order_by(CatalogItem.created_at.desc(), CatalogItem.code.desc())  # type: ignore
    return paginate(session, query, page_params)


def is_item_in_use(session: Session, code: str) -> bool:
    """True when at least one card references the item."""
    return session.exec(select(exists().where(Card.item_code == code))).one()


def insert_item(
    session: Session,
    code: str,
    name: str,
    description: str,
    metadata: Optional[Dict[str, Any]],
    actor: str,
) -> CatalogItem:
    """
    Insert a new catalog item with creator and updater set to actor.

    Raises:
        ConflictError: If the code is already taken
    """
    if session.get(CatalogItem, code) is not None:
        raise ConflictError(f"Catalog item with code {code} already exists")

    now = utcnow()
    item = CatalogItem(
        code=code,
        name=name,
        description=description,
        item_metadata=metadata,
        created_at=now,
        updated_at=now,
        created_by=actor,
        updated_by=actor,
    )
    session.add(item)
    session.flush()
    logger.info(f"Inserted catalog item {code} by {actor}")
    return item


def update_item(session: Session, code: str, changes: Dict[str, Any], actor: str) -> CatalogItem:
    """
    Apply a partial update to a catalog item.

    Every key present in changes replaces the current value, including an
    explicit None for metadata; keys that are absent are left untouched.

    Args:
        session: Database session
        code: Item code
        changes: Subset of 'name', 'description', 'metadata'
        actor: Identity recorded as updated_by

    Raises:
        NotFoundError: If the item does not exist
        ValidationError: If changes names a field that cannot be updated
    """
    item = get_item(session, code, for_update=True)

    for field_name, value in changes.items():
        attribute = _UPDATABLE_FIELDS.get(field_name)
        if attribute is None:
            raise ValidationError(f"Unsupported catalog field: {field_name}")
        setattr(item, attribute, value)

    item.updated_at = utcnow()
    item.updated_by = actor
    session.add(item)
    session.flush()
    logger.info(f"Updated catalog item {code} fields {sorted(changes)} by {actor}")
    return item


def delete_item(session: Session, code: str) -> None:
    """
    Delete a catalog item that no card references.

    Raises:
        NotFoundError: If the item does not exist
        ConflictError: If any card references the item
    """
    item = get_item(session, code, for_update=True)
    if is_item_in_use(session, code):
        logger.warning(f"Refusing to delete catalog item {code}: referenced by cards")
        raise ConflictError("Cannot delete item in use")

    session.delete(item)
    session.flush()
    logger.info(f"Deleted catalog item {code}")
