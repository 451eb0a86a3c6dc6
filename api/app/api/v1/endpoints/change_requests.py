"""
Change requests endpoint - propose catalog edits and decide on them.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session

from app.core.database import get_session
from app.core.security import Identity, Role, require_role
from app.models.enums import ChangeRequestStatus
from app.schemas.change_request import (
    ChangeRequestDecision,
    ChangeRequestPageResponse,
    ChangeRequestResponse,
    SubmitChangeRequest,
)
from app.schemas.pagination import PageInfo
from app.services import change_request_service
from app.api.v1.endpoints.utils import get_page_params
from app.utils.pagination import PageParams

router = APIRouter(prefix="/change-requests", tags=["change-requests"])


def _visible_submitter(identity: Identity) -> Optional[int]:
    """Managers see every request; operators only their own."""
    return None if identity.is_manager else identity.account_id


@router.post("", response_model=ChangeRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_change_request(
    request: SubmitChangeRequest,
    identity: Identity = Depends(require_role(Role.OPERATOR)),
    session: Session = Depends(get_session)
):
    """Propose a catalog create, update or delete."""
    change_request = change_request_service.submit_change_request(
        session,
        kind=request.kind,
        target_code=request.target_code,
        payload=request.payload,
        submitter_id=identity.account_id,
    )
    return ChangeRequestResponse.model_validate(change_request)


@router.get("", response_model=ChangeRequestPageResponse)
async def list_change_requests(
    status_filter: Optional[ChangeRequestStatus] = Query(None, alias="status"),
    page_params: PageParams = Depends(get_page_params),
    identity: Identity = Depends(require_role(Role.OPERATOR)),
    session: Session = Depends(get_session)
):
    """List change requests, newest first."""
    page = change_request_service.list_change_requests(
        session,
        page_params,
        status=status_filter,
        submitter_id=_visible_submitter(identity),
    )
    return ChangeRequestPageResponse(
        items=[ChangeRequestResponse.model_validate(item) for item in page.items],
        page=PageInfo.from_page(page),
    )


@router.get("/{request_id}", response_model=ChangeRequestResponse)
async def get_change_request(
    request_id: int,
    identity: Identity = Depends(require_role(Role.OPERATOR)),
    session: Session = Depends(get_session)
):
    """Get a change request by id."""
    change_request = change_request_service.get_change_request(
        session, request_id, submitter_id=_visible_submitter(identity)
    )
    return ChangeRequestResponse.model_validate(change_request)


@router.post("/{request_id}/decision", status_code=status.HTTP_204_NO_CONTENT)
async def decide_change_request(
    request_id: int,
    decision: ChangeRequestDecision,
    identity: Identity = Depends(require_role(Role.OPERATOR_MANAGER)),
    session: Session = Depends(get_session)
):
    """Approve (and apply) or reject a pending change request."""
    if decision.approved:
        change_request_service.approve_change_request(
            session,
            request_id,
            reviewer_id=identity.account_id,
            reviewer_label=identity.username,
            comment=decision.reason,
        )
    else:
        change_request_service.reject_change_request(
            session,
            request_id,
            reviewer_id=identity.account_id,
            comment=decision.reason,
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
