"""
Account model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from sqlalchemy import Column, String as SAString
import hashlib

from app.utils.time_utils import utcnow


class Account(SQLModel, table=True):
    """Account table - learners, operators and operator managers."""
    __tablename__ = "account"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)
    password: str  # Hashed password
    role: str = Field(
        default="client",
        sa_column=Column(SAString, nullable=False, default="client")
    )  # 'client', 'operator' or 'operator-manager' - see app.core.security.Role
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @staticmethod
    def hash_password(password: str) -> str:
        """Simple password hashing using SHA256."""
        return hashlib.sha256(password.encode()).hexdigest()

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return self.password == self.hash_password(password)
