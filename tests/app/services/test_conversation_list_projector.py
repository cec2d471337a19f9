"""Tests for ConversationListProjector."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from app.core.content_filter import (
    MESSAGE_HIDDEN_PREVIEW,
    ContentFilter,
    FilterConfig,
    FilterLexicon,
)
from app.models.conversation import Conversation
from app.services.conversation_list_projector import ConversationListProjector

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_conversation(other_uid, other_name, texting_id, last_message="hi",
                      sender=None, last_at=None, created_at=NOW):
    viewer = "uid-me"
    low, high = sorted([viewer, other_uid])
    return Conversation(
        id=uuid.uuid4(),
        participants=[viewer, other_uid],
        pair_low=low,
        pair_high=high,
        participant_details={
            viewer: {"display_name": "Me", "photo_url": None, "texting_id": "mmmm-0000"},
            other_uid: {
                "display_name": other_name,
                "photo_url": None,
                "texting_id": texting_id,
            },
        },
        last_message=last_message,
        last_message_sender_id=sender or other_uid,
        last_message_timestamp=last_at,
        created_at=created_at,
    )


@pytest.fixture
def project():
    projector = ConversationListProjector(ContentFilter(FilterLexicon.from_words(["darn"])))

    def _project(conversations, config=FilterConfig(), search=None):
        return projector.project("uid-me", conversations, config, search)

    return _project


def test_sorted_newest_first_with_created_at_fallback(project):
    old = make_conversation("uid-1", "Old", "oldd-0001", last_at=NOW - timedelta(days=2))
    fresh = make_conversation("uid-2", "Fresh", "fres-0002", last_at=NOW)
    never = make_conversation(
        "uid-3", "Never", "nevr-0003", last_at=None, created_at=NOW - timedelta(days=1)
    )
    rows = project([old, never, fresh])
    assert [r.other_uid for r in rows] == ["uid-2", "uid-3", "uid-1"]
    assert rows[1].sort_timestamp == NOW - timedelta(days=1)


def test_search_matches_name_or_texting_id_case_insensitive(project):
    bob = make_conversation("uid-b", "Bob", "abcd-1234", last_at=NOW)
    eve = make_conversation("uid-e", "Eve", "evee-5555", last_at=NOW)
    assert [r.other_uid for r in project([bob, eve], search="BO")] == ["uid-b"]
    assert [r.other_uid for r in project([bob, eve], search="ABCD")] == ["uid-b"]
    assert [r.other_uid for r in project([bob, eve], search="zzz")] == []
    assert len(project([bob, eve], search="   ")) == 2


def test_preview_hidden_for_blocked_incoming(project):
    conv = make_conversation("uid-b", "Bob", "abcd-1234", last_message="darn it", last_at=NOW)
    rows = project([conv], config=FilterConfig(block_profanity=True))
    assert rows[0].preview == MESSAGE_HIDDEN_PREVIEW
    assert rows[0].last_message_from_self is False


def test_own_preview_never_hidden(project):
    conv = make_conversation(
        "uid-b", "Bob", "abcd-1234", last_message="darn it", sender="uid-me", last_at=NOW
    )
    rows = project([conv], config=FilterConfig(block_profanity=True))
    assert rows[0].preview == "darn it"
    assert rows[0].last_message_from_self is True


def test_link_preview_scenario(project):
    """A blocks links; B's last message is a URL: A sees the hidden preview, B sees the text."""
    conv = make_conversation(
        "uid-b", "Bob", "abcd-1234", last_message="https://x.y", sender="uid-b", last_at=NOW
    )
    rows = project([conv], config=FilterConfig(block_links=True))
    assert rows[0].preview == MESSAGE_HIDDEN_PREVIEW
    sender_view = ConversationListProjector(ContentFilter()).project(
        "uid-b", [conv], FilterConfig(), None
    )
    assert sender_view[0].preview == "https://x.y"


def test_conversation_without_other_participant_skipped(project):
    conv = make_conversation("uid-b", "Bob", "abcd-1234", last_at=NOW)
    conv.participants = ["uid-me"]
    assert project([conv]) == []


def test_empty_log_sentinel_preview(project):
    conv = make_conversation(
        "uid-b", "Bob", "abcd-1234", last_message="Chat started.", last_at=NOW
    )
    conv.last_message_sender_id = None
    rows = project([conv], config=FilterConfig(block_links=True, block_profanity=True))
    assert rows[0].preview == "Chat started."
    assert rows[0].last_message_sender_id is None
