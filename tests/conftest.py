"""Shared test fixtures."""

from __future__ import annotations

import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "events_notifications_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.models import EventModel, UserModel  # noqa: E402
from app.infrastructure.security import create_access_token  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_users(session):
    """Insert users with the given ids and return the ids."""

    def _make(*user_ids: int, is_active: bool = True, deleted: bool = False) -> list[int]:
        for user_id in user_ids:
            session.add(
                UserModel(
                    id=user_id,
                    name=f"User {user_id}",
                    email=f"user{user_id}@example.com",
                    is_active=is_active,
                    deleted=deleted,
                )
            )
        session.commit()
        return list(user_ids)

    return _make


@pytest.fixture()
def make_event(session):
    """Insert an event and return its id."""

    def _make(
        event_id: int,
        *,
        title: str = "Jazz Night",
        description: str | None = None,
        location: str | None = None,
        start_time: datetime | None = None,
    ) -> int:
        session.add(
            EventModel(
                event_id=event_id,
                event_title=title,
                description=description,
                location=location,
                start_time=start_time,
            )
        )
        session.commit()
        return event_id

    return _make


@pytest.fixture()
def delete_event(session):
    """Remove an event the way the admin event flow does."""

    def _delete(event_id: int) -> None:
        session.query(EventModel).filter(EventModel.event_id == event_id).delete()
        session.commit()

    return _delete


@pytest.fixture()
def auth_headers():
    """Build bearer headers for a user token."""

    def _headers(user_id: int, *, is_admin: bool = False) -> dict[str, str]:
        token = create_access_token({"sub": str(user_id), "is_admin": is_admin})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def client():
    """Return a test client bound to a fresh application instance."""

    pytest.importorskip("httpx")
    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
