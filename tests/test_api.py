"""Tests for API endpoints"""

import json

import pytest

from thoughtlog.api.deps import get_selector
from thoughtlog.database.store import CATEGORIES, ENTRIES, INSIGHTS
from thoughtlog.llm.parser import CATEGORIZE_FALLBACK_REASONING
from thoughtlog.llm.selector import ProviderCredentials, ProviderSelector
from thoughtlog.services import NO_ENTRIES_MESSAGE


@pytest.fixture
def no_provider(app):
    app.dependency_overrides[get_selector] = lambda: ProviderSelector(ProviderCredentials())


class TestCors:

    @pytest.mark.parametrize("path", ["/categorize-entry", "/generate-insights"])
    def test_preflight(self, client, path):
        response = client.options(path)
        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "*"
        assert "authorization" in response.headers["access-control-allow-headers"]

    def test_headers_on_error_responses(self, client):
        response = client.post("/categorize-entry", json={})
        assert response.headers["access-control-allow-origin"] == "*"


class TestCategorizeEntry:

    def test_success(self, client, fake_client):
        fake_client.queue('{"categoryName": "Fitness", "reasoning": "Running is exercise"}')

        response = client.post("/categorize-entry", json={"content": "Went for a 5k run"})

        assert response.status_code == 200
        assert response.json() == {"categoryName": "Fitness", "reasoning": "Running is exercise"}

    def test_null_category(self, client, fake_client):
        fake_client.queue('{"categoryName": null, "reasoning": "No clear theme"}')

        response = client.post("/categorize-entry", json={"content": "Hmm"})

        assert response.json()["categoryName"] is None

    def test_unparseable_reply_is_not_an_error(self, client, fake_client):
        fake_client.queue("Fitness!")

        response = client.post("/categorize-entry", json={"content": "Went for a run"})

        assert response.status_code == 200
        assert response.json() == {"categoryName": None, "reasoning": CATEGORIZE_FALLBACK_REASONING}

    @pytest.mark.parametrize("body", [{}, {"content": ""}, {"content": "   "}, {"content": None}])
    def test_missing_content(self, client, fake_client, body):
        response = client.post("/categorize-entry", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Content is required", "kind": "validation", "retryable": False}
        assert fake_client.calls == []

    def test_no_body(self, client):
        assert client.post("/categorize-entry").status_code == 400

    def test_wrong_content_type(self, client):
        response = client.post("/categorize-entry", json={"content": 42})
        assert response.status_code == 400
        assert response.json()["kind"] == "validation"

    def test_no_provider_configured(self, client, no_provider):
        response = client.post("/categorize-entry", json={"content": "Went for a run"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "No AI API keys configured",
            "kind": "configuration",
            "retryable": False,
        }

    def test_provider_failure_is_retryable(self, client, fake_client):
        from thoughtlog.core.exceptions import ProviderHttpError

        def failing_invoke(*args):
            raise ProviderHttpError("OpenAI", 503)

        fake_client.invoke = failing_invoke

        response = client.post("/categorize-entry", json={"content": "Went for a run"})

        assert response.status_code == 500
        assert response.json() == {"error": "OpenAI API error: 503", "kind": "provider", "retryable": True}

    def test_unexpected_error_is_internal(self, client):
        # nothing queued on the fake provider
        response = client.post("/categorize-entry", json={"content": "Went for a run"})

        assert response.status_code == 500
        assert response.json()["kind"] == "internal"


class TestGenerateInsights:

    def test_requires_auth(self, client):
        response = client.post("/generate-insights", json={})

        assert response.status_code == 401
        assert response.json() == {"error": "No authorization header", "kind": "auth", "retryable": False}

    def test_unknown_token(self, client):
        response = client.post("/generate-insights", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_no_entries(self, client, auth_headers, fake_client):
        response = client.post("/generate-insights", json={"type": "habits"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["insights"] == []
        assert response.json()["message"] == NO_ENTRIES_MESSAGE
        assert fake_client.calls == []

    def test_transient_insights(self, client, auth_headers, fake_client, store):
        store.insert(ENTRIES, {"user_id": "user-1", "original_input": "Ran", "content": "Ran"})
        fake_client.queue(json.dumps([
            {"type": "insight", "title": "Keep running", "content": "Three runs a week", "priority": "medium"},
        ]))

        response = client.post("/generate-insights", json={"type": "actions"}, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["fallback"] is False
        assert body["insights"] == [{
            "type": "action",
            "title": "Keep running",
            "content": "Three runs a week",
            "priority": "medium",
            "category": None,
        }]
        assert store.find(INSIGHTS) == []

    def test_empty_body_defaults_to_general(self, client, auth_headers, fake_client, store):
        store.insert(ENTRIES, {"user_id": "user-1", "original_input": "Ran", "content": "Ran"})
        fake_client.queue(json.dumps([{"type": "pattern", "title": "T", "content": "C"}]))

        response = client.post("/generate-insights", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["insights"][0]["type"] == "pattern"

    def test_null_type_defaults_to_general(self, client, auth_headers, fake_client, store):
        store.insert(ENTRIES, {"user_id": "user-1", "original_input": "Ran", "content": "Ran"})
        fake_client.queue(json.dumps([{"type": "pattern", "title": "T", "content": "C"}]))

        response = client.post("/generate-insights", json={"type": None}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["insights"][0]["type"] == "pattern"

    def test_persisted_insights(self, client, auth_headers, fake_client, store):
        store.insert(ENTRIES, {"user_id": "user-1", "original_input": "Ran", "content": "Ran"})
        fake_client.queue(json.dumps([{"insight_text": "You run", "action_plan": "Run more"}]))

        response = client.post("/generate-insights", json={"persist": True}, headers=auth_headers)

        assert response.status_code == 200
        saved = response.json()["insights"]
        assert saved[0]["insight_text"] == "You run"
        assert saved[0]["user_id"] == "user-1"

        listed = client.get("/insights", headers=auth_headers).json()
        assert [row["id"] for row in listed] == [saved[0]["id"]]

        assert client.delete(f"/insights/{saved[0]['id']}", headers=auth_headers).status_code == 204
        assert client.get("/insights", headers=auth_headers).json() == []

    def test_no_provider_with_entries(self, client, auth_headers, store, no_provider):
        store.insert(ENTRIES, {"user_id": "user-1", "original_input": "Ran", "content": "Ran"})

        response = client.post("/generate-insights", headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["kind"] == "configuration"


class TestEntriesAndCategories:

    def test_create_and_list_entries(self, client, auth_headers, fake_client, store):
        fake_client.queue('{"categoryName": "Fitness", "reasoning": "Running"}')

        created = client.post("/entries", json={"content": "Went for a 5k run"}, headers=auth_headers)

        assert created.status_code == 201
        assert created.json()["category"]["name"] == "Fitness"
        assert len(store.find(CATEGORIES, {"user_id": "user-1"})) == 1

        listed = client.get("/entries", headers=auth_headers)
        assert [entry["id"] for entry in listed.json()] == [created.json()["id"]]

    def test_create_entry_without_provider_stores_nothing(self, client, auth_headers, store, no_provider):
        response = client.post("/entries", json={"content": "Went for a run"}, headers=auth_headers)

        assert response.status_code == 500
        assert store.find(ENTRIES) == []

    def test_delete_missing_entry(self, client, auth_headers):
        response = client.delete("/entries/missing", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"

    def test_category_crud(self, client, auth_headers):
        created = client.post("/categories", json={"name": "Work", "color": "#10B981"}, headers=auth_headers)
        assert created.status_code == 201
        category_id = created.json()["id"]

        duplicate = client.post("/categories", json={"name": "Work"}, headers=auth_headers)
        assert duplicate.status_code == 409
        assert duplicate.json()["kind"] == "conflict"

        updated = client.put(f"/categories/{category_id}", json={"name": "Career"}, headers=auth_headers)
        assert updated.json()["name"] == "Career"

        listed = client.get("/categories", headers=auth_headers).json()
        assert [(c["name"], c["entry_count"]) for c in listed] == [("Career", 0)]

        assert client.delete(f"/categories/{category_id}", headers=auth_headers).status_code == 204
        assert client.get("/categories", headers=auth_headers).json() == []

    def test_invalid_color(self, client, auth_headers):
        response = client.post("/categories", json={"name": "Work", "color": "red"}, headers=auth_headers)
        assert response.status_code == 400


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_reports_missing_providers(self, client):
        body = client.get("/health/ready").json()
        assert body["providers"] == []
        assert body["database"] is True
        assert body["status"] == "degraded"
