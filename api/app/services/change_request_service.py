"""
Change request workflow.

Catalog mutations are proposed as change requests and only reach the catalog
when a reviewer approves them. A request starts PENDING and moves exactly once
to APPROVED or REJECTED. Approval applies the mutation and flips the status in
one transaction, so the catalog changes exactly once or not at all.
"""
import logging
from typing import Any, Dict, Optional, Type, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from app.core.exceptions import (
    CardwiseException,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from app.models.change_request import ChangeRequest
from app.models.enums import ChangeRequestKind, ChangeRequestStatus
from app.schemas.catalog import CreateItemPayload, DeleteItemPayload, UpdateItemPayload
from app.services import catalog_service, code_generation_service
from app.utils.pagination import Page, PageParams, paginate
from app.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

ItemPayload = Union[CreateItemPayload, UpdateItemPayload, DeleteItemPayload]

PAYLOAD_MODELS: Dict[ChangeRequestKind, Type[BaseModel]] = {
    ChangeRequestKind.CREATE: CreateItemPayload,
    ChangeRequestKind.UPDATE: UpdateItemPayload,
    ChangeRequestKind.DELETE: DeleteItemPayload,
}


def decode_payload(kind: ChangeRequestKind, raw: Optional[Dict[str, Any]]) -> ItemPayload:
    """
    Decode a raw payload into the model matching the request kind.

    Raises:
        pydantic.ValidationError: If the payload does not fit the kind's shape
    """
    return PAYLOAD_MODELS[kind].model_validate(raw or {})


def _format_errors(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def submit_change_request(
    session: Session,
    kind: ChangeRequestKind,
    target_code: Optional[str],
    payload: Optional[Dict[str, Any]],
    submitter_id: int,
) -> ChangeRequest:
    """
    Queue a proposed catalog mutation as a PENDING change request.

    The payload is decoded once into the kind's payload model and stored in its
    normalized form. For UPDATE only the fields that were sent are stored, which
    keeps an omitted field distinct from an explicit null.

    Args:
        session: Database session
        kind: CREATE, UPDATE or DELETE
        target_code: Item code; must be absent for CREATE, present otherwise
        payload: Raw payload
        submitter_id: Submitting account

    Returns:
        The stored change request

    Raises:
        ValidationError: If the kind/target pairing or the payload is malformed
    """
    kind = ChangeRequestKind(kind)
    if kind == ChangeRequestKind.CREATE and target_code is not None:
        raise ValidationError("target_code must be absent for CREATE requests")
    if kind != ChangeRequestKind.CREATE and not target_code:
        raise ValidationError(f"target_code is required for {kind.value} requests")

    try:
        decoded = decode_payload(kind, payload)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid {kind.value} payload: {_format_errors(exc)}") from exc

    now = utcnow()
    change_request = ChangeRequest(
        kind=kind.value,
        target_code=target_code,
        payload=decoded.model_dump(exclude_unset=True, mode="json"),
        status=ChangeRequestStatus.PENDING.value,
        submitter_id=submitter_id,
        created_at=now,
        updated_at=now,
    )

    try:
        session.add(change_request)
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(change_request)
    logger.info(
        f"Change request {change_request.id} submitted by account {submitter_id}: "
        f"{kind.value} {target_code or ''}".rstrip()
    )
    return change_request


def list_change_requests(
    session: Session,
    page_params: PageParams,
    status: Optional[ChangeRequestStatus] = None,
    submitter_id: Optional[int] = None,
) -> Page:
    """List change requests, newest first, optionally filtered by status and submitter."""
    query = select(ChangeRequest)
    if status is not None:
        query = query.where(ChangeRequest.status == ChangeRequestStatus(status).value)
    if submitter_id is not None:
        query = query.where(ChangeRequest.submitter_id == submitter_id)
    query = query.order_by(ChangeRequest.created_at.desc(), ChangeRequest.id.desc())  # type: ignore
    return paginate(session, query, page_params)


def get_change_request(
    session: Session,
    request_id: int,
    submitter_id: Optional[int] = None,
) -> ChangeRequest:
    """
    Get a change request, optionally scoped to its submitter.

    Raises:
        NotFoundError: If it does not exist or was submitted by someone else
    """
    query = select(ChangeRequest).where(ChangeRequest.id == request_id)
    if submitter_id is not None:
        query = query.where(ChangeRequest.submitter_id == submitter_id)
    change_request = session.exec(query).first()
    if not change_request:
        raise NotFoundError(f"Change request {request_id} not found")
    return change_request


def _apply(session: Session, change_request: ChangeRequest, actor: str) -> Optional[str]:
    """Apply the request's catalog mutation. Returns the affected item code."""
    kind = ChangeRequestKind(change_request.kind)
    try:
        payload = decode_payload(kind, change_request.payload)
    except PydanticValidationError as exc:
        raise InternalError(f"Stored payload of change request {change_request.id} is invalid") from exc

    if kind == ChangeRequestKind.CREATE:
        prefix = code_generation_service.resolve_prefix(payload.code_prefix)
        code = code_generation_service.next_code(session, prefix)
        catalog_service.insert_item(
            session,
            code=code,
            name=payload.name,
            description=payload.description,
            metadata=payload.metadata,
            actor=actor,
        )
        return code

    if not change_request.target_code:
        raise InternalError(f"Change request {change_request.id} has no target code")

    if kind == ChangeRequestKind.UPDATE:
        catalog_service.update_item(session, change_request.target_code, payload.changes(), actor)
    else:
        catalog_service.delete_item(session, change_request.target_code)
    return change_request.target_code


def approve_change_request(
    session: Session,
    request_id: int,
    reviewer_id: int,
    reviewer_label: str,
    comment: Optional[str] = None,
) -> ChangeRequest:
    """
    Approve a pending change request and apply it to the catalog.

    The request row is locked before its status is inspected, so of two
    concurrent approvals the second waits and then sees a resolved request.
    The catalog mutation, the code allocation (CREATE) and the status change
    commit together; on any failure everything is rolled back and the request
    stays PENDING.

    Args:
        session: Database session
        request_id: Change request id
        reviewer_id: Reviewing account
        reviewer_label: Recorded as created_by/updated_by on the catalog item
        comment: Optional reason kept on the request

    Returns:
        The approved change request

    Raises:
        NotFoundError: If the request or its target item does not exist
        ConflictError: If the request is not pending or the item is in use
        InternalError: If the stored payload or the database fails
    """
    try:
        change_request = session.exec(
            select(ChangeRequest).where(ChangeRequest.id == request_id).with_for_update()
        ).first()
        if not change_request:
            raise NotFoundError(f"Change request {request_id} not found")
        if change_request.status != ChangeRequestStatus.PENDING.value:
            raise ConflictError("Change request is not pending")

        item_code = _apply(session, change_request, reviewer_label)

        now = utcnow()
        change_request.status = ChangeRequestStatus.APPROVED.value
        change_request.reviewer_id = reviewer_id
        change_request.review_comment = comment
        change_request.resolved_at = now
        change_request.updated_at = now
        session.add(change_request)
        session.commit()
    except CardwiseException as exc:
        session.rollback()
        logger.warning(f"Approval of change request {request_id} failed: {exc}")
        raise
    except IntegrityError as exc:
        session.rollback()
        logger.warning(f"Approval of change request {request_id} violated a constraint: {exc}")
        raise ConflictError("Change request conflicts with the current catalog") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f"Database error approving change request {request_id}: {exc}")
        raise InternalError("Failed to apply change request") from exc
    except Exception:
        session.rollback()
        raise

    session.refresh(change_request)
    logger.info(
        f"Change request {request_id} approved by account {reviewer_id}: "
        f"{change_request.kind} {item_code}"
    )
    return change_request


def reject_change_request(
    session: Session,
    request_id: int,
    reviewer_id: int,
    comment: Optional[str] = None,
) -> None:
    """
    Reject a pending change request. The catalog is not touched.

    The status flip is a single conditional UPDATE on status = PENDING, so a
    request can never be rejected twice or rejected after approval.

    Raises:
        NotFoundError: If the request does not exist
        ConflictError: If the request was already resolved
    """
    table = ChangeRequest.__table__
    now = utcnow()
    statement = (
        update(table)
        .where(table.c.id == request_id, table.c.status == ChangeRequestStatus.PENDING.value)
        .values(
            status=ChangeRequestStatus.REJECTED.value,
            reviewer_id=reviewer_id,
            review_comment=comment,
            resolved_at=now,
            updated_at=now,
        )
    )

    try:
        result = session.exec(statement)
        if result.rowcount == 0:
            exists = session.exec(select(ChangeRequest.id).where(ChangeRequest.id == request_id)).first()
            if exists is None:
                raise NotFoundError(f"Change request {request_id} not found")
            raise ConflictError("Change request is not pending")
        session.commit()
    except CardwiseException as exc:
        session.rollback()
        logger.warning(f"Rejection of change request {request_id} failed: {exc}")
        raise
    except Exception:
        session.rollback()
        raise

    logger.info(f"Change request {request_id} rejected by account {reviewer_id}")
