"""
Access tokens, caller identity and role checks.

Tokens are signed and timestamped with itsdangerous; clients treat them as
opaque strings and send them as 'Authorization: Bearer <token>'.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from app.core.config import settings
from app.core.exceptions import AuthenticationError, AuthorizationError

_TOKEN_SALT = "cardwise.access"

_bearer_scheme = HTTPBearer(auto_error=False)


class Role(str, Enum):
    """Account roles, ordered: each role includes the permissions of the ones before it."""
    CLIENT = "client"
    OPERATOR = "operator"
    OPERATOR_MANAGER = "operator-manager"

    @property
    def rank(self) -> int:
        return _ROLE_ORDER.index(self)

    def includes(self, other: "Role") -> bool:
        return self.rank >= other.rank


_ROLE_ORDER = [Role.CLIENT, Role.OPERATOR, Role.OPERATOR_MANAGER]


@dataclass(frozen=True)
class Identity:
    """Authenticated caller."""
    account_id: int
    username: str
    role: Role

    @property
    def is_manager(self) -> bool:
        return self.role.includes(Role.OPERATOR_MANAGER)


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(settings.token_secret_key, salt=_TOKEN_SALT)


def issue_token(account_id: int, username: str, role: str) -> str:
    """Sign an access token for an account."""
    payload = {"sub": account_id, "username": username, "role": Role(role).value}
    return _serializer().dumps(payload)


def verify_token(token: str) -> Identity:
    """
    Verify an access token and return the identity it carries.

    Raises:
        AuthenticationError: If the token is expired, tampered with or malformed
    """
    try:
        payload = _serializer().loads(token, max_age=settings.token_max_age_seconds)
    except SignatureExpired as exc:
        raise AuthenticationError("Access token expired") from exc
    except BadSignature as exc:
        raise AuthenticationError("Invalid access token") from exc

    try:
        return Identity(
            account_id=int(payload["sub"]),
            username=str(payload["username"]),
            role=Role(payload["role"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid access token") from exc


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Identity:
    """Resolve the caller from the bearer token."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing access token")
    return verify_token(credentials.credentials)


def require_role(minimum: Role):
    """Dependency factory: the caller must hold at least the given role."""

    async def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        if not identity.role.includes(minimum):
            raise AuthorizationError(f"Requires role {minimum.value}")
        return identity

    return dependency
