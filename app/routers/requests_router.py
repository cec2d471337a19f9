"""Connection requests API: send, list, respond, cancel."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from fastapi_pagination import Page, Params, paginate
from sqlalchemy.orm import Session

from app.db import get_db
from app.models.connection_request import ConnectionRequest
from app.models.user import UserLookup
from app.routers.utils.dependencies import get_current_uid
from app.schemas.connection_request import (
    ConnectionRequestCreate,
    ConnectionRequestRead,
    ConnectionRequestRespond,
    ConnectionRequestRow,
    RespondResult,
)
from app.schemas.user import UserRef
from app.services.request_broker import RequestBroker

router = APIRouter(
    prefix="/requests",
    tags=["requests"],
    responses={404: {"description": "Not found"}},
)


def _row(request: ConnectionRequest, counterpart: UserLookup) -> ConnectionRequestRow:
    payload = ConnectionRequestRead.model_validate(request).model_dump()
    return ConnectionRequestRow(**payload, counterpart=UserRef.model_validate(counterpart))


@router.post(
    "", response_model=ConnectionRequestRead, status_code=status.HTTP_201_CREATED
)
def send_request(
    data: ConnectionRequestCreate,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> ConnectionRequestRead:
    """Send a request to the user whose exact texting ID or display name is `target`."""
    request = RequestBroker(db).send_request(uid, data.target)
    return ConnectionRequestRead.model_validate(request)


@router.get("/incoming", response_model=Page[ConnectionRequestRow])
def list_incoming(
    params: Params = Depends(),
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> Page[ConnectionRequestRow]:
    """Pending requests addressed to the caller, with each sender's lookup record."""
    rows = [_row(r, sender) for r, sender in RequestBroker(db).list_incoming(uid)]
    return paginate(rows, params=params)


@router.get("/outgoing", response_model=Page[ConnectionRequestRow])
def list_outgoing(
    params: Params = Depends(),
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> Page[ConnectionRequestRow]:
    """Requests the caller sent that are not yet accepted."""
    rows = [_row(r, recipient) for r, recipient in RequestBroker(db).list_outgoing(uid)]
    return paginate(rows, params=params)


@router.post("/{request_id}/respond", response_model=RespondResult)
def respond_to_request(
    request_id: UUID,
    data: ConnectionRequestRespond,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> RespondResult:
    conversation = RequestBroker(db).respond(request_id, uid, data.decision)
    return RespondResult(
        request_id=request_id,
        decision=data.decision,
        conversation_id=conversation.id if conversation is not None else None,
    )


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_request(
    request_id: UUID,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> Response:
    """Withdraw a pending request. Cancelling one that is already gone succeeds."""
    RequestBroker(db).cancel(request_id, uid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
