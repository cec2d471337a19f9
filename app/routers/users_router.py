"""Users API: the caller's profile, texting ID, chat filters and public search."""

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db import get_db
from app.infra.logging_config import get_logger
from app.models.user import User
from app.routers.utils.dependencies import get_current_uid, get_current_user
from app.schemas.user import (
    ChatFilters,
    ProfileCreate,
    ProfileRead,
    ProfileUpdate,
    TextingIdUpdate,
    UserRef,
)
from app.services.user_directory_service import UserDirectoryService
from app.services.user_service import UserService

logger = get_logger("users")

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={404: {"description": "Not found"}},
)


@router.post("/me", response_model=ProfileRead, status_code=status.HTTP_201_CREATED)
def create_my_profile(
    data: ProfileCreate,
    response: Response,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> ProfileRead:
    """Create the caller's profile. Returns the existing one (200) if already created."""
    user, created = UserService(db).create_profile(uid, data)
    if not created:
        response.status_code = status.HTTP_200_OK
    return ProfileRead.model_validate(user)


@router.get("/me", response_model=ProfileRead)
def get_my_profile(user: User = Depends(get_current_user)) -> ProfileRead:
    return ProfileRead.model_validate(user)


@router.patch("/me", response_model=ProfileRead)
def update_my_profile(
    data: ProfileUpdate,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> ProfileRead:
    """Update display name, photo or visibility."""
    user = UserService(db).update_profile(uid, data)
    return ProfileRead.model_validate(user)


@router.put("/me/texting-id", response_model=ProfileRead)
def set_my_texting_id(
    data: TextingIdUpdate,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> ProfileRead:
    user = UserService(db).set_texting_id(uid, data.texting_id)
    logger.info("Texting id changed for %s", uid)
    return ProfileRead.model_validate(user)


@router.put("/me/chat-filters", response_model=ProfileRead)
def set_my_chat_filters(
    data: ChatFilters,
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> ProfileRead:
    user = UserService(db).update_chat_filters(uid, data)
    return ProfileRead.model_validate(user)


@router.get("/search", response_model=List[UserRef])
def search_users(
    q: str = Query("", max_length=256),
    uid: str = Depends(get_current_uid),
    db: Session = Depends(get_db),
) -> List[UserRef]:
    """Prefix search over public display names, excluding the caller."""
    settings = get_settings()
    rows = UserDirectoryService(db).search_public(
        q,
        exclude_uid=uid,
        scan_limit=settings.user_search_scan_limit,
        result_limit=settings.user_search_result_limit,
    )
    return [UserRef.model_validate(r) for r in rows]
