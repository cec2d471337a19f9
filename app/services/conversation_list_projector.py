"""Per-viewer projection of a user's conversations into list rows."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from app.core.app_state import state
from app.core.content_filter import ContentFilter, FilterConfig
from app.models.conversation import Conversation
from app.schemas.conversation import ConversationListItem, ParticipantDetail
from app.utils.timestamps import as_utc

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def sort_timestamp(conversation: Conversation) -> datetime:
    """last_message_timestamp, falling back to created_at."""
    return (
        as_utc(conversation.last_message_timestamp)
        or as_utc(conversation.created_at)
        or _EPOCH
    )


class ConversationListProjector:
    """
    Turns conversations into the rows one viewer sees: the other participant,
    a filtered preview, newest first, optionally narrowed by a search term.
    """

    def __init__(self, content_filter: Optional[ContentFilter] = None) -> None:
        self._filter = content_filter or state.content_filter

    def project(
        self,
        viewer_uid: str,
        conversations: Iterable[Conversation],
        filter_config: FilterConfig,
        search_term: Optional[str] = None,
    ) -> List[ConversationListItem]:
        term = (search_term or "").strip().lower()
        rows: List[ConversationListItem] = []
        for conversation in conversations:
            other_uid = conversation.other_participant(viewer_uid)
            if other_uid is None:
                continue
            raw_detail = (conversation.participant_details or {}).get(other_uid)
            other = ParticipantDetail(**raw_detail) if raw_detail else None
            if term and not _matches(other, term):
                continue
            sender = conversation.last_message_sender_id
            rows.append(
                ConversationListItem(
                    id=conversation.id,
                    other_uid=other_uid,
                    other=other,
                    preview=self._filter.render_preview(
                        conversation.last_message, sender, viewer_uid, filter_config
                    ),
                    last_message_sender_id=sender,
                    last_message_from_self=sender == viewer_uid,
                    sort_timestamp=sort_timestamp(conversation),
                )
            )
        rows.sort(key=lambda row: row.sort_timestamp, reverse=True)
        return rows


def _matches(other: Optional[ParticipantDetail], term: str) -> bool:
    if other is None:
        return False
    return term in other.display_name.lower() or term in other.texting_id.lower()
