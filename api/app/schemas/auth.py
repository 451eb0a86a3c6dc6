"""
Authentication schemas.
"""
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Login request schema."""
    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class RegisterRequest(BaseModel):
    """Registration request schema. New accounts always get the client role."""
    username: str = Field(..., min_length=3, max_length=50, description="Username")
    password: str = Field(..., min_length=6, description="Password (minimum 6 characters)")


class AccountResponse(BaseModel):
    """Account response schema (without password)."""
    id: int
    username: str
    role: str

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """Authentication response schema."""
    access_token: str
    token_type: str = "bearer"
    account: AccountResponse
