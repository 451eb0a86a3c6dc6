"""
Account service - registration, credential checks and privileged account creation.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from app.core.security import Role
from app.models.account import Account
from app.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


def get_account_by_username(session: Session, username: str) -> Optional[Account]:
    return session.exec(select(Account).where(Account.username == username)).first()


def get_account(session: Session, account_id: int) -> Account:
    account = session.get(Account, account_id)
    if not account:
        raise NotFoundError(f"Account with id {account_id} not found")
    return account


def create_account(session: Session, username: str, password: str, role: Role = Role.CLIENT) -> Account:
    """
    Create an account with the given role.

    Args:
        session: Database session
        username: Unique username
        password: Plain password, stored hashed
        role: Account role

    Raises:
        ConflictError: If the username is taken
    """
    if get_account_by_username(session, username):
        raise ConflictError("Username already exists")

    now = utcnow()
    account = Account(
        username=username,
        password=Account.hash_password(password),
        role=Role(role).value,
        created_at=now,
        updated_at=now,
    )
    try:
        session.add(account)
        session.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration of the same username
        session.rollback()
        logger.warning(f"Duplicate username on insert: {username}")
        raise ConflictError("Username already exists") from exc
    except Exception:
        session.rollback()
        raise

    session.refresh(account)
    logger.info(f"Created account {account.id} ({username}) with role {account.role}")
    return account


def register_account(session: Session, username: str, password: str) -> Account:
    """Self-service registration. Always creates a client account."""
    return create_account(session, username, password, Role.CLIENT)


def authenticate(session: Session, username: str, password: str) -> Account:
    """
    Check credentials.

    Raises:
        AuthenticationError: If the username is unknown or the password is wrong
    """
    account = get_account_by_username(session, username)
    if not account or not account.verify_password(password):
        logger.warning(f"Failed login for username {username}")
        raise AuthenticationError("Invalid username or password")
    return account
