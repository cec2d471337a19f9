"""Tests for UserService."""

from unittest.mock import patch

import pytest

from app.exceptions import InvalidTextingIdError, NotFoundError, TextingIdTakenError
from app.models.user import User, UserLookup
from app.schemas.user import ChatFilters, ProfileCreate, ProfileUpdate
from app.services.conversation_store import ConversationStore
from app.services.user_service import (
    DEFAULT_DISPLAY_NAME,
    TEXTING_ID_PATTERN,
    UserService,
    generate_texting_id,
)


def test_generate_texting_id_format():
    for _ in range(20):
        assert TEXTING_ID_PATTERN.match(generate_texting_id())


def test_create_profile_writes_user_and_lookup(db, faker):
    name = faker.name()
    user, created = UserService(db).create_profile("uid-new", ProfileCreate(display_name=name))
    assert created is True
    assert user.display_name == name
    assert user.display_name_is_set is True
    assert user.texting_id_is_set is False
    assert user.visibility == "private"
    lookup = db.query(UserLookup).filter(UserLookup.uid == "uid-new").one()
    assert lookup.texting_id == user.texting_id
    assert lookup.display_name == name


def test_create_profile_defaults_display_name(db):
    user, _ = UserService(db).create_profile("uid-anon", ProfileCreate())
    assert user.display_name == DEFAULT_DISPLAY_NAME
    assert user.display_name_is_set is False


def test_create_profile_is_idempotent(db, setup_user_a):
    user, created = UserService(db).create_profile(
        setup_user_a.uid, ProfileCreate(display_name="Someone Else")
    )
    assert created is False
    assert user.display_name == "Alice"


def test_require_user_missing(db):
    with pytest.raises(NotFoundError):
        UserService(db).require_user("uid-nobody")


def test_set_texting_id(db, setup_user_a):
    user = UserService(db).set_texting_id(setup_user_a.uid, "Zz99-aa11")
    assert user.texting_id == "Zz99-aa11"
    assert user.texting_id_is_set is True
    lookup = db.query(UserLookup).filter(UserLookup.uid == setup_user_a.uid).one()
    assert lookup.texting_id == "Zz99-aa11"


@pytest.mark.parametrize("value", ["abc-1234", "abcd1234", "abcd-12345", "ab!d-1234", ""])
def test_set_texting_id_invalid(db, setup_user_a, value):
    with pytest.raises(InvalidTextingIdError):
        UserService(db).set_texting_id(setup_user_a.uid, value)


def test_set_texting_id_taken(db, setup_user_a, setup_user_b):
    with pytest.raises(TextingIdTakenError):
        UserService(db).set_texting_id(setup_user_a.uid, setup_user_b.texting_id)


def test_set_own_texting_id_again(db, setup_user_b):
    user = UserService(db).set_texting_id(setup_user_b.uid, "abcd-1234")
    assert user.texting_id == "abcd-1234"


def test_update_profile_mirrors_lookup(db, setup_user_a):
    UserService(db).update_profile(
        setup_user_a.uid,
        ProfileUpdate(display_name="Alicia", visibility="private", photo_url="https://p/1"),
    )
    lookup = db.query(UserLookup).filter(UserLookup.uid == setup_user_a.uid).one()
    assert lookup.display_name == "Alicia"
    assert lookup.visibility == "private"
    assert lookup.photo_url == "https://p/1"


def test_profile_change_refreshes_participant_details(
    db, setup_conversation, setup_user_a
):
    UserService(db).update_profile(setup_user_a.uid, ProfileUpdate(display_name="Alicia"))
    conversation = ConversationStore(db).get_conversation(setup_conversation.id)
    db.refresh(conversation)
    assert conversation.participant_details[setup_user_a.uid]["display_name"] == "Alicia"


def test_texting_id_change_refreshes_participant_details(
    db, setup_conversation, setup_user_b
):
    UserService(db).set_texting_id(setup_user_b.uid, "wxyz-0000")
    db.refresh(setup_conversation)
    assert setup_conversation.participant_details[setup_user_b.uid]["texting_id"] == (
        "wxyz-0000"
    )


def test_update_chat_filters(db, setup_user_a):
    svc = UserService(db)
    svc.update_chat_filters(setup_user_a.uid, ChatFilters(block_links=True))
    config = svc.get_filter_config(setup_user_a.uid)
    assert config.block_links is True
    assert config.block_profanity is False


def test_filter_config_without_profile(db):
    config = UserService(db).get_filter_config("uid-nobody")
    assert config.block_links is False
    assert config.block_profanity is False


def test_texting_id_claimed_after_check(db, setup_user_a, setup_user_b):
    """Another user takes the ID between the availability check and the commit."""
    with patch.object(UserService, "_texting_id_holder", return_value=None):
        with pytest.raises(TextingIdTakenError):
            UserService(db).set_texting_id(setup_user_a.uid, setup_user_b.texting_id)
    lookup = db.query(UserLookup).filter(UserLookup.uid == setup_user_a.uid).one()
    assert lookup.texting_id == "alic-0001"


def test_create_profile_generated_id_claimed_after_check(db, setup_user_b):
    with patch.object(UserService, "_unused_texting_id", return_value="abcd-1234"):
        with pytest.raises(TextingIdTakenError):
            UserService(db).create_profile("uid-new", ProfileCreate(display_name="Nia"))
    assert db.query(User).filter(User.uid == "uid-new").count() == 0


def test_create_profile_concurrent_create_returns_existing(db, setup_user_a):
    """The same uid is created by another request between the lookup and the commit."""
    db.expunge_all()
    with patch.object(UserService, "get_user", side_effect=[None, setup_user_a]):
        user, created = UserService(db).create_profile(
            setup_user_a.uid, ProfileCreate(display_name="Alice Again")
        )
    assert created is False
    assert user.uid == setup_user_a.uid
    assert db.query(User).count() == 1


def test_chat_filter_change_wakes_open_conversations(
    db, hub, setup_conversation, setup_user_a
):
    with patch.object(hub, "publish") as publish:
        UserService(db).update_chat_filters(setup_user_a.uid, ChatFilters(block_links=True))
    topics = set(publish.call_args.args)
    assert topics == {
        "user:uid-alice:conversations",
        f"conversation:{setup_conversation.id}",
    }
