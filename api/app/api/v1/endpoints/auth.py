"""
Authentication endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.database import get_session
from app.core.security import Identity, get_current_identity, issue_token
from app.models.account import Account
from app.schemas.auth import AccountResponse, LoginRequest, RegisterRequest, TokenResponse
from app.services import account_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(account: Account) -> TokenResponse:
    return TokenResponse(
        access_token=issue_token(account.id, account.username, account.role),
        account=AccountResponse.model_validate(account),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    register_data: RegisterRequest,
    session: Session = Depends(get_session)
):
    """Register a new client account and return an access token."""
    account = account_service.register_account(session, register_data.username, register_data.password)
    return _token_response(account)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    session: Session = Depends(get_session)
):
    """Login with username and password."""
    account = account_service.authenticate(session, login_data.username, login_data.password)
    return _token_response(account)


@router.get("/me", response_model=AccountResponse)
async def get_me(
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Get the account behind the access token."""
    account = account_service.get_account(session, identity.account_id)
    return AccountResponse.model_validate(account)
