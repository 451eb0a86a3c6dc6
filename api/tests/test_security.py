"""
Tests for access tokens and roles.
"""
import pytest
from itsdangerous import URLSafeTimedSerializer

from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.core.security import Identity, Role, issue_token, verify_token


class TestRole:

    def test_hierarchy(self):
        assert Role.OPERATOR_MANAGER.includes(Role.OPERATOR)
        assert Role.OPERATOR_MANAGER.includes(Role.CLIENT)
        assert Role.OPERATOR.includes(Role.CLIENT)
        assert Role.OPERATOR.includes(Role.OPERATOR)
        assert not Role.OPERATOR.includes(Role.OPERATOR_MANAGER)
        assert not Role.CLIENT.includes(Role.OPERATOR)

    def test_values(self):
        assert Role("operator-manager") is Role.OPERATOR_MANAGER


class TestTokens:

    def test_round_trip(self):
        token = issue_token(7, "alice", "operator")
        assert verify_token(token) == Identity(account_id=7, username="alice", role=Role.OPERATOR)

    def test_tampered_token(self):
        token = issue_token(7, "alice", "client")
        with pytest.raises(AuthenticationError):
            verify_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))

    def test_token_signed_with_other_key(self):
        forged = URLSafeTimedSerializer("another-key", salt="cardwise.access").dumps(
            {"sub": 1, "username": "mallory", "role": "operator-manager"}
        )
        with pytest.raises(AuthenticationError):
            verify_token(forged)

    def test_expired_token(self, monkeypatch):
        token = issue_token(7, "alice", "client")
        monkeypatch.setattr(settings, "token_max_age_seconds", -1)
        with pytest.raises(AuthenticationError, match="expired"):
            verify_token(token)

    def test_unknown_role(self):
        token = URLSafeTimedSerializer(settings.token_secret_key, salt="cardwise.access").dumps(
            {"sub": 1, "username": "mallory", "role": "admin"}
        )
        with pytest.raises(AuthenticationError):
            verify_token(token)

    def test_issue_rejects_unknown_role(self):
        with pytest.raises(ValueError):
            issue_token(1, "alice", "admin")
