"""Conversations API: the caller's conversation list and each conversation's message log."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi_pagination import Page, Params, paginate
from sqlalchemy.orm import Session

from app.core.content_filter import FilterConfig
from app.db import get_db
from app.exceptions import NotFoundError
from app.models.conversation import Conversation
from app.routers.utils.dependencies import (
    get_conversation_for_caller,
    get_current_uid,
    get_filter_config,
    get_translator,
)
from app.schemas.conversation import (
    ConversationListItem,
    ConversationRead,
    ConversationSnapshot,
    MessageCreate,
    MessageRead,
    TranslationRead,
    TranslationRequest,
)
from app.services.conversation_list_projector import ConversationListProjector
from app.services.conversation_store import ConversationStore
from app.services.translation_service import TranslationService

router = APIRouter(
    prefix="/conversations",
    tags=["conversations"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=Page[ConversationListItem])
def list_conversations(
    params: Params = Depends(),
    search: Optional[str] = Query(None, max_length=256),
    uid: str = Depends(get_current_uid),
    config: FilterConfig = Depends(get_filter_config),
    db: Session = Depends(get_db),
) -> Page[ConversationListItem]:
    """The caller's conversations, newest first, previews filtered for the caller."""
    conversations = ConversationStore(db).list_for_user(uid)
    rows = ConversationListProjector().project(uid, conversations, config, search)
    return paginate(rows, params=params)


@router.get("/{conversation_id}", response_model=ConversationRead)
def get_conversation(
    conversation: Conversation = Depends(get_conversation_for_caller),
) -> ConversationRead:
    return ConversationRead.model_validate(conversation)


@router.get("/{conversation_id}/messages", response_model=ConversationSnapshot)
def get_messages(
    conversation: Conversation = Depends(get_conversation_for_caller),
    uid: str = Depends(get_current_uid),
    config: FilterConfig = Depends(get_filter_config),
    db: Session = Depends(get_db),
) -> ConversationSnapshot:
    """Complete ordered log as the caller sees it."""
    store = ConversationStore(db)
    messages = store.get_snapshot(conversation.id)
    return store.render_snapshot(conversation, messages, uid, config)


@router.post(
    "/{conversation_id}/messages",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
)
def send_message(
    conversation_id: UUID,
    data: MessageCreate,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> MessageRead:
    message = ConversationStore(db).append(conversation_id, uid, data.text)
    return MessageRead.model_validate(message)


@router.delete(
    "/{conversation_id}/messages/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_message(
    conversation_id: UUID,
    message_id: UUID,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> Response:
    """Delete one of the caller's own messages."""
    ConversationStore(db).delete_message(conversation_id, message_id, uid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{conversation_id}/messages/{message_id}/translate",
    response_model=TranslationRead,
)
def translate_message(
    message_id: UUID,
    data: TranslationRequest,
    conversation: Conversation = Depends(get_conversation_for_caller),
    translator: TranslationService = Depends(get_translator),
    db: Session = Depends(get_db),
) -> TranslationRead:
    """Translate one message of the conversation for the caller."""
    message = ConversationStore(db).get_message(conversation.id, message_id)
    if message is None:
        raise NotFoundError("Message not found")
    source = (data.source_language or translator.default_source).lower()
    translated = translator.translate(message.text, data.target_language, source)
    return TranslationRead(
        message_id=message.id,
        source_language=source,
        target_language=data.target_language.lower(),
        translated_text=translated,
    )


@router.delete("/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_conversation(
    conversation_id: UUID,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> Response:
    """Delete the conversation and its whole log for both participants."""
    ConversationStore(db).delete_conversation(conversation_id, uid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
