"""
Conversation store: the ordered message log of each conversation.

Messages are ordered by (timestamp, sequence). The timestamp is assigned here,
never by the client, and never goes backwards within a conversation; the
sequence comes from a per-conversation counter bumped with an UPDATE, so
concurrent appends are ordered by arrival at the store.
"""

from __future__ import annotations

from typing import AsyncIterator, Awaitable, Callable, List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.app_state import state
from app.core.content_filter import ContentFilter, FilterConfig
from app.core.snapshot_hub import (
    SnapshotHub,
    conversation_topic,
    user_conversations_topic,
)
from app.exceptions import EmptyMessageError, NotAuthorizedError
from app.infra.logging_config import get_logger
from app.models.conversation import Conversation
from app.models.message import Message
from app.schemas.conversation import ConversationSnapshot, MessageView
from app.utils.store_guard import store_guard
from app.utils.timestamps import as_utc, utcnow

logger = get_logger("conversation_store")

EMPTY_LOG_MESSAGE = "Chat started."


class ConversationStore:
    """append / delete_message / delete_conversation / subscribe."""

    def __init__(
        self,
        db: Session,
        content_filter: Optional[ContentFilter] = None,
        hub: Optional[SnapshotHub] = None,
    ) -> None:
        self.db = db
        self._filter = content_filter or state.content_filter
        self._hub = hub or state.hub

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_conversation(self, conversation_id: UUID) -> Optional[Conversation]:
        return (
            self.db.query(Conversation)
            .filter(Conversation.id == conversation_id)
            .first()
        )

    def require_participant(self, conversation_id: UUID, uid: str) -> Conversation:
        """
        The conversation, if uid takes part in it. A missing conversation is
        reported exactly like a foreign one.
        """
        conversation = self.get_conversation(conversation_id)
        if conversation is None or not conversation.has_participant(uid):
            raise NotAuthorizedError()
        return conversation

    def list_for_user(self, uid: str) -> List[Conversation]:
        with store_guard(self.db, "list_for_user"):
            return (
                self.db.query(Conversation)
                .filter(or_(Conversation.pair_low == uid, Conversation.pair_high == uid))
                .all()
            )

    def get_snapshot(self, conversation_id: UUID) -> List[Message]:
        """Complete message log in display order."""
        with store_guard(self.db, "get_snapshot"):
            return (
                self.db.query(Message)
                .filter(Message.conversation_id == conversation_id)
                .order_by(Message.timestamp.asc(), Message.sequence.asc())
                .all()
            )

    def get_message(self, conversation_id: UUID, message_id: UUID) -> Optional[Message]:
        return (
            self.db.query(Message)
            .filter(
                Message.conversation_id == conversation_id,
                Message.id == message_id,
            )
            .first()
        )

    def get_tail(self, conversation_id: UUID) -> Optional[Message]:
        return (
            self.db.query(Message)
            .filter(Message.conversation_id == conversation_id)
            .order_by(Message.timestamp.desc(), Message.sequence.desc())
            .first()
        )

    def render_snapshot(
        self,
        conversation: Conversation,
        messages: List[Message],
        viewer_uid: str,
        config: FilterConfig,
    ) -> ConversationSnapshot:
        """The log as viewer_uid sees it, with their own filter settings applied."""
        details = conversation.participant_details or {}
        views = []
        for message in messages:
            detail = details.get(message.sender_id) or {}
            rendered = self._filter.render_message(
                message.text, message.sender_id, viewer_uid, config
            )
            views.append(
                MessageView(
                    id=message.id,
                    sender_id=message.sender_id,
                    text=rendered.text,
                    timestamp=as_utc(message.timestamp),
                    display_name=detail.get("display_name") or "Unknown",
                    photo_url=detail.get("photo_url"),
                    is_own=message.sender_id == viewer_uid,
                    blocked=rendered.blocked,
                    reason=rendered.reason,
                    placeholder=rendered.placeholder,
                )
            )
        return ConversationSnapshot(conversation_id=conversation.id, messages=views)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append(self, conversation_id: UUID, sender_uid: str, text: str) -> Message:
        """
        Add a message and point last_message* at it.

        Raises:
            EmptyMessageError: text is blank after trimming.
            NotAuthorizedError: sender is not a participant (or no such conversation).
            BackendUnavailableError: the store failed.
        """
        body = (text or "").strip()
        if not body:
            raise EmptyMessageError()
        with store_guard(self.db, "append"):
            conversation = self.require_participant(conversation_id, sender_uid)
            # Bump the counter first; on Postgres this row lock serializes appends
            self.db.query(Conversation).filter(
                Conversation.id == conversation_id
            ).update(
                {Conversation.message_seq: Conversation.message_seq + 1},
                synchronize_session=False,
            )
            sequence = (
                self.db.query(Conversation.message_seq)
                .filter(Conversation.id == conversation_id)
                .scalar()
            )
            timestamp = utcnow()
            tail = self.get_tail(conversation_id)
            if tail is not None and as_utc(tail.timestamp) > timestamp:
                timestamp = as_utc(tail.timestamp)
            message = Message(
                conversation_id=conversation_id,
                sender_id=sender_uid,
                text=body,
                timestamp=timestamp,
                sequence=sequence,
            )
            self.db.add(message)
            conversation.last_message = body
            conversation.last_message_sender_id = sender_uid
            conversation.last_message_timestamp = timestamp
            self.db.commit()
            self.db.refresh(message)
        self._publish_change(conversation)
        return message

    def delete_message(
        self, conversation_id: UUID, message_id: UUID, caller_uid: str
    ) -> bool:
        """
        Delete one of the caller's own messages. If it was the tail, last_message*
        is recomputed from the new tail, or reset to the empty-log sentinel.
        Returns False when the message is already gone.
        """
        with store_guard(self.db, "delete_message"):
            conversation = self.require_participant(conversation_id, caller_uid)
            message = (
                self.db.query(Message)
                .filter(
                    Message.id == message_id,
                    Message.conversation_id == conversation_id,
                )
                .first()
            )
            if message is None:
                return False
            if message.sender_id != caller_uid:
                raise NotAuthorizedError()
            tail = self.get_tail(conversation_id)
            was_tail = tail is not None and tail.id == message.id
            self.db.delete(message)
            self.db.flush()
            if was_tail:
                self._recompute_last_message(conversation)
            self.db.commit()
        logger.info(
            "Message %s deleted from %s (tail=%s)", message_id, conversation_id, was_tail
        )
        self._publish_change(conversation)
        return True

    def delete_conversation(self, conversation_id: UUID, caller_uid: str) -> None:
        """
        Delete every message and then the conversation, in one transaction.
        Only a participant may do this; a missing conversation raises the same
        NotAuthorizedError as a foreign one.
        """
        with store_guard(self.db, "delete_conversation"):
            conversation = self.require_participant(conversation_id, caller_uid)
            participants = list(conversation.participants or [])
            deleted = (
                self.db.query(Message)
                .filter(Message.conversation_id == conversation_id)
                .delete(synchronize_session=False)
            )
            self.db.query(Conversation).filter(
                Conversation.id == conversation_id
            ).delete(synchronize_session=False)
            self.db.commit()
            self.db.expunge(conversation)
        logger.info(
            "Conversation %s deleted by %s (%d messages)",
            conversation_id,
            caller_uid,
            deleted,
        )
        self._hub.publish(
            conversation_topic(conversation_id),
            *(user_conversations_topic(uid) for uid in participants),
        )

    # ------------------------------------------------------------------
    # Realtime
    # ------------------------------------------------------------------

    def subscribe(
        self,
        conversation_id: UUID,
        load: Optional[Callable[[], Awaitable[List[Message]]]] = None,
    ) -> AsyncIterator[List[Message]]:
        """
        Lazy, infinite, restartable stream of complete ordered snapshots.

        Every emission is the whole log, never a delta. Closing the iterator
        releases the listener. `load` overrides how a snapshot is read (the
        websocket route runs it off the event loop).
        """

        async def _load() -> List[Message]:
            self.db.expire_all()
            return self.get_snapshot(conversation_id)

        return self._hub.stream(conversation_topic(conversation_id), load or _load)

    def _recompute_last_message(self, conversation: Conversation) -> None:
        new_tail = self.get_tail(conversation.id)
        if new_tail is None:
            conversation.last_message = EMPTY_LOG_MESSAGE
            conversation.last_message_sender_id = None
            conversation.last_message_timestamp = utcnow()
        else:
            conversation.last_message = new_tail.text
            conversation.last_message_sender_id = new_tail.sender_id
            conversation.last_message_timestamp = new_tail.timestamp

    def _publish_change(self, conversation: Conversation) -> None:
        self._hub.publish(
            conversation_topic(conversation.id),
            *(user_conversations_topic(uid) for uid in conversation.participants or []),
        )
