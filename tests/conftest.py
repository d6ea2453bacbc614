"""Shared fixtures for the notification service tests."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ["DATABASE_URL"] = f"sqlite:///{Path(tempfile.mkdtemp()) / 'notifications.db'}"
os.environ["APP_ENV"] = "test"
os.environ["VERCEL"] = "false"
os.environ["FIREBASE_SERVICE_ACCOUNT_PATH"] = str(ROOT / "tests" / "no-service-account.json")
for name in ("FIREBASE_SERVICE_ACCOUNT_KEY", "SENDGRID_API_KEY", "SENDGRID_SENDER"):
    os.environ.pop(name, None)

from app.domain.entities import TPPK_ROLE, DeliveryOutcome, User  # noqa: E402


class RecordingPushClient:
    """Push client double that records calls and fails for chosen tokens."""

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.failures: dict[str, str] = {}
        self.crashes: dict[str, Exception] = {}

    def deliver(self, token, title, body, data=None):
        self.calls.append({"token": token, "title": title, "body": body, "data": dict(data or {})})
        if token in self.crashes:
            raise self.crashes[token]
        if token in self.failures:
            return DeliveryOutcome.failed(self.failures[token])
        return DeliveryOutcome.delivered(f"projects/sippke/messages/{len(self.calls)}")

    @property
    def tokens(self) -> list[str]:
        return [call["token"] for call in self.calls]


@pytest.fixture(autouse=True)
def database():
    """Create the schema for every test and drop it afterwards."""

    from app.infrastructure import database as database_module

    database_module.initialize_database()
    yield database_module
    database_module.Base.metadata.drop_all(bind=database_module.engine)


@pytest.fixture()
def session(database):
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def push_client() -> RecordingPushClient:
    return RecordingPushClient()


@pytest.fixture()
def make_user(session):
    """Return a factory persisting users through the repository."""

    from app.infrastructure.repositories import UserRepository

    def factory(
        full_name: str,
        *,
        school_id: str = "school-9",
        role: str = TPPK_ROLE,
        is_active: bool = True,
        fcm_token: str | None = None,
        email: str | None = None,
    ) -> User:
        return UserRepository(session).create(
            User(
                id=None,
                full_name=full_name,
                email=email,
                school_id=school_id,
                role=role,
                is_active=is_active,
                fcm_token=fcm_token,
                created_at=None,
                updated_at=None,
            )
        )

    return factory


@pytest.fixture()
def client(push_client):
    """Return a test client whose push deliveries go to ``push_client``."""

    from fastapi.testclient import TestClient

    from app.interfaces.api.dependencies import get_push_client
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_push_client] = lambda: push_client
    with TestClient(app) as test_client:
        yield test_client
