"""
Shared fixtures: an isolated in-memory SQLite database per test, a FastAPI
TestClient bound to it, and helpers for accounts, catalog items and card types.
"""
import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("TOKEN_SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app import models  # noqa: F401
from app.core.database import get_session
from app.core.security import Role, issue_token
from app.main import app
from app.models.card_type import CardType
from app.models.catalog_item import CatalogItem
from app.services.account_service import create_account
from app.services.code_generation_service import ensure_code_sequences
from app.utils.time_utils import utcnow


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        ensure_code_sequences(session)
        session.commit()
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    def _get_session_override():
        yield session

    app.dependency_overrides[get_session] = _get_session_override
    # No context manager: the startup hook would create tables on the app engine
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_account(session):
    """Create an account and return (account, auth headers)."""
    counter = {"value": 0}

    def _make(role: Role = Role.CLIENT, username: str = None):
        counter["value"] += 1
        username = username or f"{role.value.replace('-', '_')}_{counter['value']}"
        account = create_account(session, username, "secret-password", role)
        token = issue_token(account.id, account.username, account.role)
        return account, {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def client_account(make_account):
    return make_account(Role.CLIENT)


@pytest.fixture
def operator_account(make_account):
    return make_account(Role.OPERATOR)


@pytest.fixture
def manager_account(make_account):
    return make_account(Role.OPERATOR_MANAGER)


@pytest.fixture
def add_card_type(session):
    def _add(code: str, name: str = None):
        now = utcnow()
        card_type = CardType(code=code, name=name or code.title(), created_at=now, updated_at=now)
        session.add(card_type)
        session.commit()
        return card_type

    return _add


@pytest.fixture
def add_item(session):
    def _add(code: str, name: str = None, description: str = "", metadata=None):
        now = utcnow()
        item = CatalogItem(
            code=code,
            name=name or code.lower(),
            description=description,
            item_metadata=metadata,
            created_at=now,
            updated_at=now,
            created_by="seed",
            updated_by="seed",
        )
        session.add(item)
        session.commit()
        return item

    return _add


@pytest.fixture
def small_catalog(add_item, add_card_type):
    """Three catalog items and two card types."""
    items = [
        add_item("ST-0000001", "apple"),
        add_item("ST-0000002", "banana"),
        add_item("CS-0000001", "cherry"),
    ]
    card_types = [add_card_type("WORD_TO_MEANING"), add_card_type("MEANING_TO_WORD")]
    return items, card_types
