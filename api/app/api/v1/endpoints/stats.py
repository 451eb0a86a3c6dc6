"""
Learning statistics endpoint.
"""
from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.database import get_session
from app.core.security import Identity, get_current_identity
from app.schemas.stats import StatsResponse
from app.services import stats_service

router = APIRouter(prefix="/accounts/me/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
async def get_my_stats(
    identity: Identity = Depends(get_current_identity),
    session: Session = Depends(get_session)
):
    """Card counts for the current account."""
    stats = stats_service.get_stats(session, identity.account_id)
    return StatsResponse(**asdict(stats))
