"""Pydantic schemas for connection requests (the handshake)."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.user import UserRef

RequestStatus = Literal["pending", "accepted", "denied"]
RequestDecision = Literal["accepted", "denied"]


class ConnectionRequestCreate(BaseModel):
    """Target is an exact texting ID or an exact display name."""

    target: str = Field(min_length=1)


class ConnectionRequestRespond(BaseModel):
    decision: RequestDecision


class ConnectionRequestRead(BaseModel):
    """Request as stored; serialized with `from` / `to` keys."""

    id: UUID
    from_uid: str = Field(alias="from")
    to_uid: str = Field(alias="to")
    status: RequestStatus
    created_at: datetime

    model_config = {"from_attributes": True, "populate_by_name": True}


class ConnectionRequestRow(ConnectionRequestRead):
    """Request listed with the other party's lookup record."""

    counterpart: Optional[UserRef] = None


class RespondResult(BaseModel):
    """Outcome of respond(); conversation_id is set on acceptance."""

    request_id: UUID
    decision: RequestDecision
    conversation_id: Optional[UUID] = None
