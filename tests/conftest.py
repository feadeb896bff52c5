"""Shared fixtures: an isolated user store, a log capture and a test client."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from loguru import logger

from account_gateway.config import settings
from account_gateway.main import app
from account_gateway.models.auth import User
from account_gateway.models.user import Tag
from account_gateway.services import users
from account_gateway.services.auth import create_token


@pytest.fixture()
def store(tmp_path, monkeypatch):
    """Point the user store and mail outbox at files under ``tmp_path``."""
    monkeypatch.setattr(settings, "USER_STORE_FILE", str(tmp_path / "users.yaml"))
    monkeypatch.setattr(settings, "MAIL_OUTBOX_FILE", str(tmp_path / "outbox.jsonl"))
    return tmp_path


@pytest.fixture()
def log_records():
    """Collect Loguru records emitted during the test."""
    records: list[dict] = []
    handler_id = logger.add(lambda msg: records.append(msg.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture()
def alice(store) -> User:
    return users.save_user(
        User(
            id="u-alice",
            email="alice@example.com",
            tags=[Tag(id="t-exchange", name="exchange"), Tag(id="t-cold", name="cold storage")],
        )
    )


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture()
def bearer():
    """Build an ``Authorization`` header for *user*."""

    def _bearer(user: User, kind: str = "access", **kw) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_token(user, kind=kind, **kw)}"}

    return _bearer
