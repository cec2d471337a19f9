"""Tests for UserDirectoryService."""

from app.services.user_directory_service import UserDirectoryService
from tests.fixtures.user_fixtures import create_user


def test_resolve_exact_by_texting_id(db, setup_user_b):
    matches = UserDirectoryService(db).resolve_exact("abcd-1234")
    assert [m.uid for m in matches] == [setup_user_b.uid]


def test_resolve_exact_is_case_sensitive(db, setup_user_b):
    assert UserDirectoryService(db).resolve_exact("bob") == []


def test_resolve_exact_returns_every_match(db):
    create_user(db, "uid-x1", "Max", texting_id="maxx-0001")
    create_user(db, "uid-x2", "Max", texting_id="maxx-0002")
    matches = UserDirectoryService(db).resolve_exact("Max")
    assert sorted(m.uid for m in matches) == ["uid-x1", "uid-x2"]


def test_get_many(db, setup_user_a, setup_user_b):
    found = UserDirectoryService(db).get_many([setup_user_a.uid, "uid-missing"])
    assert list(found) == [setup_user_a.uid]
    assert UserDirectoryService(db).get_many([]) == {}


def test_search_public_prefix(db, setup_user_a, setup_user_b, setup_user_c):
    create_user(db, "uid-al2", "Alfred", texting_id="alfr-0002")
    results = UserDirectoryService(db).search_public("Al", exclude_uid="uid-someone")
    assert [r.display_name for r in results] == ["Alfred", "Alice"]


def test_search_excludes_private_and_self(db, setup_user_a, setup_user_c):
    directory = UserDirectoryService(db)
    assert directory.search_public("Carol") == []
    assert directory.search_public("Alice", exclude_uid=setup_user_a.uid) == []


def test_search_returns_at_most_three(db):
    for i in range(5):
        create_user(db, f"uid-z{i}", f"Zed {i}", texting_id=f"zedd-000{i}")
    results = UserDirectoryService(db).search_public("Zed")
    assert [r.display_name for r in results] == ["Zed 0", "Zed 1", "Zed 2"]


def test_search_scans_only_ten_candidates(db):
    """Private names sorting first use up the scan window."""
    for i in range(10):
        create_user(db, f"uid-p{i}", f"Pat {i}", texting_id=f"patt-000{i}", visibility="private")
    create_user(db, "uid-pz", "Pat z", texting_id="patz-0000")
    assert UserDirectoryService(db).search_public("Pat") == []


def test_search_blank_prefix(db, setup_user_a):
    assert UserDirectoryService(db).search_public("  ") == []
