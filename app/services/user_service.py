"""Profile management: users + user_lookups kept in step, snapshots refreshed."""

from __future__ import annotations

import re
import secrets
import string
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.app_state import state
from app.core.content_filter import FilterConfig
from app.core.snapshot_hub import (
    SnapshotHub,
    conversation_topic,
    user_conversations_topic,
)
from app.exceptions import (
    BackendUnavailableError,
    InvalidTextingIdError,
    NotFoundError,
    TextingIdTakenError,
)
from app.infra.logging_config import get_logger
from app.models.conversation import Conversation
from app.models.user import User, UserLookup
from app.schemas.user import ChatFilters, ProfileCreate, ProfileUpdate
from app.utils.store_guard import is_unique_violation, store_guard

logger = get_logger("user_service")

TEXTING_ID_PATTERN = re.compile(r"^[a-zA-Z0-9]{4}-[a-zA-Z0-9]{4}$")
_TEXTING_ID_ALPHABET = string.ascii_letters + string.digits
_MAX_TEXTING_ID_ATTEMPTS = 20
DEFAULT_DISPLAY_NAME = "New User"


def generate_texting_id() -> str:
    part1 = "".join(secrets.choice(_TEXTING_ID_ALPHABET) for _ in range(4))
    part2 = "".join(secrets.choice(_TEXTING_ID_ALPHABET) for _ in range(4))
    return f"{part1}-{part2}"


class UserService:
    """Creates and updates profiles; the lookup record mirrors the public fields."""

    def __init__(self, db: Session, hub: Optional[SnapshotHub] = None) -> None:
        self.db = db
        self._hub = hub or state.hub

    def get_user(self, uid: str) -> Optional[User]:
        return self.db.query(User).filter(User.uid == uid).first()

    def require_user(self, uid: str) -> User:
        user = self.get_user(uid)
        if user is None:
            raise NotFoundError("Profile not found")
        return user

    def get_filter_config(self, uid: str) -> FilterConfig:
        """The viewer's filter settings; no profile means nothing is filtered."""
        user = self.get_user(uid)
        if user is None:
            return FilterConfig()
        return FilterConfig.from_settings(user.chat_filters)

    def create_profile(self, uid: str, data: ProfileCreate) -> tuple[User, bool]:
        """
        Create the profile and its lookup record together. Returns (user, created);
        an existing profile is returned unchanged.
        """
        with store_guard(self.db, "create_profile"):
            existing = self.get_user(uid)
            if existing is not None:
                return existing, False
            display_name = (data.display_name or "").strip()
            texting_id = self._unused_texting_id()
            user = User(
                uid=uid,
                display_name=display_name or DEFAULT_DISPLAY_NAME,
                display_name_is_set=bool(display_name),
                texting_id=texting_id,
                texting_id_is_set=False,
                photo_url=data.photo_url,
                visibility="private",
                chat_filters={},
            )
            lookup = UserLookup(
                uid=uid,
                display_name=user.display_name,
                texting_id=texting_id,
                photo_url=data.photo_url,
                visibility="private",
            )
            self.db.add(user)
            self.db.add(lookup)
            try:
                self.db.commit()
            except IntegrityError as e:
                if not is_unique_violation(e):
                    raise
                self.db.rollback()
                # Same uid created concurrently, or the generated ID was claimed
                existing = self.get_user(uid)
                if existing is not None:
                    return existing, False
                raise TextingIdTakenError() from e
            self.db.refresh(user)
        logger.info("Created profile for %s with texting id %s", uid, texting_id)
        return user, True

    def update_profile(self, uid: str, data: ProfileUpdate) -> User:
        with store_guard(self.db, "update_profile"):
            user = self.require_user(uid)
            lookup = self._require_lookup(uid)
            update_data = data.model_dump(exclude_unset=True)
            snapshot_changed = False
            if update_data.get("display_name") is not None:
                name = update_data["display_name"].strip()
                if name and name != user.display_name:
                    user.display_name = name
                    lookup.display_name = name
                    snapshot_changed = True
                user.display_name_is_set = True
            if "photo_url" in update_data and update_data["photo_url"] != user.photo_url:
                user.photo_url = update_data["photo_url"]
                lookup.photo_url = update_data["photo_url"]
                snapshot_changed = True
            if update_data.get("visibility") is not None:
                user.visibility = update_data["visibility"]
                lookup.visibility = update_data["visibility"]
            self.db.commit()
            self.db.refresh(user)
        if snapshot_changed:
            self.refresh_participant_details(uid)
        return user

    def set_texting_id(self, uid: str, texting_id: str) -> User:
        texting_id = texting_id.strip()
        if not TEXTING_ID_PATTERN.match(texting_id):
            raise InvalidTextingIdError()
        with store_guard(self.db, "set_texting_id"):
            user = self.require_user(uid)
            holder = self._texting_id_holder(texting_id)
            if holder is not None and holder.uid != uid:
                raise TextingIdTakenError()
            lookup = self._require_lookup(uid)
            user.texting_id = texting_id
            user.texting_id_is_set = True
            lookup.texting_id = texting_id
            try:
                self.db.commit()
            except IntegrityError as e:
                if not is_unique_violation(e):
                    raise
                # Claimed by someone else since the check above
                self.db.rollback()
                raise TextingIdTakenError() from e
            self.db.refresh(user)
        self.refresh_participant_details(uid)
        return user

    def update_chat_filters(self, uid: str, filters: ChatFilters) -> User:
        with store_guard(self.db, "update_chat_filters"):
            user = self.require_user(uid)
            # Reassign so the JSON column is marked dirty
            user.chat_filters = filters.model_dump()
            self.db.commit()
            self.db.refresh(user)
            conversations = self._conversations_of(uid)
        # Previews and open conversation streams render with the viewer's filters
        topics = [user_conversations_topic(uid)]
        topics += [conversation_topic(c.id) for c in conversations]
        self._hub.publish(*topics)
        return user

    def refresh_participant_details(self, uid: str) -> int:
        """
        Copy the user's current display name, photo and texting ID into every
        conversation they take part in. Best effort: failures are logged and
        the stale copies stay until the next profile change.
        """
        user = self.get_user(uid)
        if user is None:
            return 0
        detail = {
            "display_name": user.display_name,
            "photo_url": user.photo_url,
            "texting_id": user.texting_id,
        }
        try:
            with store_guard(self.db, "refresh_participant_details"):
                conversations = self._conversations_of(uid)
                for conversation in conversations:
                    details = dict(conversation.participant_details or {})
                    details[uid] = detail
                    conversation.participant_details = details
                self.db.commit()
        except BackendUnavailableError:
            logger.exception("Could not refresh participant details for %s", uid)
            return 0
        topics = {user_conversations_topic(uid)}
        for conversation in conversations:
            topics.add(conversation_topic(conversation.id))
            other = conversation.other_participant(uid)
            if other:
                topics.add(user_conversations_topic(other))
        self._hub.publish(*topics)
        return len(conversations)

    def _conversations_of(self, uid: str) -> list[Conversation]:
        return (
            self.db.query(Conversation)
            .filter(or_(Conversation.pair_low == uid, Conversation.pair_high == uid))
            .all()
        )

    def _texting_id_holder(self, texting_id: str) -> Optional[UserLookup]:
        return self.db.query(UserLookup).filter(UserLookup.texting_id == texting_id).first()

    def _require_lookup(self, uid: str) -> UserLookup:
        lookup = self.db.query(UserLookup).filter(UserLookup.uid == uid).first()
        if lookup is None:
            raise NotFoundError("Profile not found")
        return lookup

    def _unused_texting_id(self) -> str:
        for _ in range(_MAX_TEXTING_ID_ATTEMPTS):
            candidate = generate_texting_id()
            if self._texting_id_holder(candidate) is None:
                return candidate
        raise BackendUnavailableError("Could not allocate a texting ID")
