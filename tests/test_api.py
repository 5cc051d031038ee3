"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from errors import UpstreamError
from orchestrator import FALLBACK_RESPONSE

from conftest import queue_happy_path, REPLY_TEXT

ENDPOINT = "/api/conversation-processor"
BODY = {
    "conversationInput": "This seems too expensive for what we get",
    "conversationStrategy": "value-focused sales",
}
MISSING = {"error": "Missing required parameters: conversationInput and conversationStrategy"}


class TestConversationProcessorAPI:
    """Test the JSON contract."""

    @pytest.fixture(autouse=True)
    def _client(self, settings, orchestrator, llm_client):
        self.llm_client = llm_client
        self.orchestrator = orchestrator
        self.client = TestClient(create_app(settings=settings, orchestrator=orchestrator))

    def test_success(self):
        queue_happy_path(self.llm_client)

        response = self.client.post(ENDPOINT, json=BODY)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["response"] == REPLY_TEXT.strip()
        assert body["analysis"]["intent"] == "objection"
        assert body["analysis"]["recommendedResponseTone"] == "reassuring"
        assert body["quality"]["overallScore"] == 8.5
        metadata = body["metadata"]
        assert set(metadata) >= {"model", "timestamp", "processingTime", "sessionId", "subagentsUsed"}
        assert metadata["subagentsUsed"][-1] == "ContextManager"

    def test_netlify_path_is_served(self):
        queue_happy_path(self.llm_client)

        response = self.client.post("/.netlify/functions/conversation-processor", json=BODY)

        assert response.status_code == 200

    @pytest.mark.parametrize("body", [
        {"conversationStrategy": "value-focused sales"},
        {"conversationInput": "Too pricey"},
        {"conversationInput": "", "conversationStrategy": "value-focused sales"},
        {},
    ])
    def test_missing_parameters(self, body):
        response = self.client.post(ENDPOINT, json=body)

        assert response.status_code == 400
        assert response.json() == MISSING
        assert self.llm_client.calls == []
        assert len(self.orchestrator.context_manager) == 0

    def test_unparseable_body(self):
        response = self.client.post(
            ENDPOINT,
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == MISSING

    def test_upstream_failure(self):
        self.llm_client.queue(UpstreamError("Anthropic request failed: timeout"))

        response = self.client.post(ENDPOINT, json=BODY)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Failed to process conversation",
            "details": "Anthropic request failed: timeout",
            "fallbackResponse": FALLBACK_RESPONSE,
        }

    def test_get_not_allowed(self):
        response = self.client.get(ENDPOINT)
        assert response.status_code == 405

    def test_cors_preflight(self):
        response = self.client.options(
            ENDPOINT,
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_history(self):
        for _ in range(4):
            queue_happy_path(self.llm_client)
            self.client.post(ENDPOINT, json=BODY)

        response = self.client.get("/api/history", params={"limit": 2})

        assert response.status_code == 200
        items = response.json()["items"]
        assert len(items) == 2
        assert set(items[0]) == {"timestamp", "input", "response", "analysis", "quality", "sessionId"}

    def test_health(self):
        response = self.client.get("/api/health")
        assert response.json() == {"status": "ok", "provider": "fake", "model": "fake-model"}

    def test_shutdown_clears_history(self, settings, orchestrator):
        queue_happy_path(self.llm_client)
        with TestClient(create_app(settings=settings, orchestrator=orchestrator)) as client:
            client.post(ENDPOINT, json=BODY)
            assert len(orchestrator.context_manager) == 1
        assert len(orchestrator.context_manager) == 0

    def test_history_rejects_negative_limit(self):
        response = self.client.get("/api/history", params={"limit": -1})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request parameters"}
