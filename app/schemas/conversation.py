"""Pydantic schemas for conversations, messages and the per-viewer projections."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.core.content_filter import FilterReason

# -----------------------------------------------------------------------------
# Conversation
# -----------------------------------------------------------------------------


class ParticipantDetail(BaseModel):
    """Denormalized copy of a participant's profile."""

    display_name: str
    photo_url: Optional[str] = None
    texting_id: str


class ConversationRead(BaseModel):
    id: UUID
    participants: list[str]
    participant_details: dict[str, ParticipantDetail]
    last_message: Optional[str] = None
    last_message_sender_id: Optional[str] = None
    last_message_timestamp: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ConversationListItem(BaseModel):
    """One row of a viewer's conversation list."""

    id: UUID
    other_uid: str
    other: Optional[ParticipantDetail] = None
    preview: str
    last_message_sender_id: Optional[str] = None
    last_message_from_self: bool
    sort_timestamp: datetime


# -----------------------------------------------------------------------------
# Messages
# -----------------------------------------------------------------------------


class MessageCreate(BaseModel):
    text: str = Field(max_length=10000)


class MessageRead(BaseModel):
    """Message as stored."""

    id: UUID
    conversation_id: UUID
    sender_id: str
    text: str
    timestamp: datetime
    sequence: int

    model_config = {"from_attributes": True}


class MessageView(BaseModel):
    """Message rendered for one viewer. `text` is kept so the client can reveal locally."""

    id: UUID
    sender_id: str
    text: str
    timestamp: datetime
    display_name: str = "Unknown"
    photo_url: Optional[str] = None
    is_own: bool
    blocked: bool
    reason: FilterReason = FilterReason.NONE
    placeholder: Optional[str] = None


class ConversationSnapshot(BaseModel):
    """Complete ordered state of one conversation for one viewer."""

    conversation_id: UUID
    messages: list[MessageView]


# -----------------------------------------------------------------------------
# Translation
# -----------------------------------------------------------------------------


class TranslationRequest(BaseModel):
    """Languages are short codes such as `en` or `fr`; the source defaults to English."""

    target_language: str = Field(min_length=2, max_length=8)
    source_language: Optional[str] = Field(default=None, min_length=2, max_length=8)


class TranslationRead(BaseModel):
    message_id: UUID
    source_language: str
    target_language: str
    translated_text: str
