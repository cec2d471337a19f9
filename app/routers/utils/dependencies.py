from functools import lru_cache
from uuid import UUID

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.content_filter import FilterConfig
from app.db import get_db
from app.models.conversation import Conversation
from app.models.user import User
from app.services.conversation_store import ConversationStore
from app.services.translation_service import TranslationService
from app.services.user_service import UserService


def get_current_uid(request: Request) -> str:
    """FastAPI dependency: the authenticated caller's uid, set by the upstream gateway."""
    header = get_settings().user_id_header
    uid = (request.headers.get(header) or "").strip()
    if not uid:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return uid


def get_current_user(
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> User:
    """FastAPI dependency to get the caller's profile."""
    return UserService(db).require_user(uid)


def get_filter_config(
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> FilterConfig:
    return UserService(db).get_filter_config(uid)


def get_conversation_for_caller(
    conversation_id: UUID,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> Conversation:
    """FastAPI dependency to get a conversation the caller takes part in."""
    return ConversationStore(db).require_participant(conversation_id, uid)


@lru_cache
def get_translator() -> TranslationService:
    """One translator per process so loaded models and cached results are shared."""
    return TranslationService()
