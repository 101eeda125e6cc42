"""Pytest fixtures and configuration for Thoughtlog tests"""

import os
from typing import List, Optional

import pytest

# Set up test environment variables before importing modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = ""
os.environ["CLAUDE_API_KEY"] = ""
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from thoughtlog.database.connection import DatabaseConnection  # noqa: E402
from thoughtlog.database.init_db import init_tables, issue_api_token  # noqa: E402
from thoughtlog.database.store import SQLRecordStore  # noqa: E402
from thoughtlog.llm.client import GenerationOptions, ProviderClient  # noqa: E402
from thoughtlog.llm.selector import ProviderCredentials, ProviderSelector  # noqa: E402
from thoughtlog.services import InsightOrchestrator  # noqa: E402


class FakeProviderClient(ProviderClient):
    """Provider double that records calls and returns canned replies in order."""

    name = "Fake"

    def __init__(self, api_key: str = "test-key", replies: Optional[List[str]] = None):
        super().__init__(api_key)
        self.replies = list(replies or [])
        self.calls = []

    def queue(self, *replies: str) -> None:
        self.replies.extend(replies)

    def invoke(self, system_instruction: str, payload_text: str, options: GenerationOptions) -> str:
        self.calls.append({
            "system": system_instruction,
            "payload": payload_text,
            "options": options,
        })
        if not self.replies:
            raise AssertionError("FakeProviderClient called with no reply queued")
        return self.replies.pop(0)


@pytest.fixture
def store():
    """Fresh in-memory record store with all tables created."""
    db = DatabaseConnection("sqlite://")
    init_tables(db)
    yield SQLRecordStore(db)
    db.close()


@pytest.fixture
def fake_client():
    return FakeProviderClient()


@pytest.fixture
def selector(fake_client):
    """Selector whose primary slot is configured and returns fake_client."""
    return ProviderSelector(
        ProviderCredentials(primary_api_key="test-key"),
        primary_factory=lambda key: fake_client,
        secondary_factory=lambda key: fake_client,
    )


@pytest.fixture
def unconfigured_selector():
    return ProviderSelector(ProviderCredentials())


@pytest.fixture
def orchestrator(store, selector):
    return InsightOrchestrator(store, selector)


@pytest.fixture
def user_token(store):
    """Raw bearer token for user-1."""
    return issue_api_token("user-1", store)


@pytest.fixture
def auth_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def app(store, selector):
    """FastAPI app wired to the in-memory store and the fake provider."""
    from thoughtlog.api.deps import get_selector, get_store
    from thoughtlog.api.main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_selector] = lambda: selector
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient
    return TestClient(app)
