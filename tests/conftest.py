import os

os.environ["ENV"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

import app.models  # noqa: E402,F401
from app.config import get_settings  # noqa: E402
from app.core.app_state import state  # noqa: E402
from app.core.snapshot_hub import SnapshotHub  # noqa: E402
from app.db import Base, build_engine, get_db  # noqa: E402
from app.main import create_app  # noqa: E402

pytest_plugins = [
    "tests.fixtures.user_fixtures",
    "tests.fixtures.conversation_fixtures",
    "tests.fixtures.translation_fixtures",
]


@pytest.fixture(scope="function")
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def hub():
    """Isolated snapshot hub per test."""
    previous = state.hub
    state.hub = SnapshotHub()
    yield state.hub
    state.hub = previous


@pytest.fixture
def test_app(db):
    application = create_app(testing=True)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    with TestClient(test_app) as c:
        yield c


@pytest.fixture
def as_user():
    """Headers that authenticate a request as the given uid."""
    header = get_settings().user_id_header

    def _headers(uid: str) -> dict:
        return {header: uid}

    return _headers
