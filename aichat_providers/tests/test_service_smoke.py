"""HTTP edge tests using FastAPI's TestClient with mock-backed orchestrators."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from aichat_providers.base.constants import DEFAULT_SYSTEM_PROMPT
from aichat_providers.base.errors import ErrorCode
from aichat_providers.base.routing import ChatOrchestrator, ProviderRegistry
from aichat_providers.mock import MockProvider
from aichat_providers.service.app import create_app


def _client(*providers, default="PRIMARY", fallback="OPENAI") -> TestClient:
    orch = ChatOrchestrator(ProviderRegistry(providers), default_provider=default, fallback_provider=fallback)
    return TestClient(create_app(orch))


@pytest.fixture()
def primary():
    return MockProvider("PRIMARY", reply="Primary Response")


@pytest.fixture()
def openai():
    return MockProvider("OPENAI", reply="Fallback Response")


def test_health(primary):
    resp = _client(primary).get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_providers_listing(primary, openai):
    resp = _client(primary, openai).get("/api/providers")
    assert resp.json() == {
        "ok": True,
        "providers": ["PRIMARY", "OPENAI"],
        "default": "PRIMARY",
        "fallback": "OPENAI",
    }


def test_post_chat_uses_default(primary, openai):
    resp = _client(primary, openai).post("/api/chat", json={"message": "Hello"})
    assert resp.status_code == 200
    assert resp.json() == {"response": "Primary Response"}
    assert primary.calls == [("Hello", DEFAULT_SYSTEM_PROMPT)]
    assert openai.calls == []


def test_post_chat_model_override_and_system_prompt(primary, openai):
    body = {"message": "Hello", "model": "openai", "sessionId": "abc", "systemPrompt": "Be brief."}
    resp = _client(primary, openai).post("/api/chat", json=body)
    assert resp.json() == {"response": "Fallback Response"}
    assert openai.calls == [("Hello", "Be brief.")]
    assert primary.calls == []


def test_get_chat_query_params(primary, openai):
    client = _client(primary, openai)
    assert client.get("/api/chat", params={"message": "Hello"}).json() == {"response": "Primary Response"}
    resp = client.get("/api/chat", params={"message": "Hello", "model": "OPENAI"})
    assert resp.json() == {"response": "Fallback Response"}


@pytest.mark.parametrize("body", [{"message": ""}, {"message": "   "}, {}])
def test_blank_message_is_400(primary, body):
    resp = _client(primary).post("/api/chat", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"response": "Message cannot be empty."}
    assert primary.calls == []


def test_get_without_message_is_400(primary):
    resp = _client(primary).get("/api/chat")
    assert resp.status_code == 400
    assert resp.json() == {"response": "Message cannot be empty."}


def test_fallback_success_is_transparent(openai):
    broken = MockProvider("PRIMARY", error=ErrorCode.UNAVAILABLE)
    resp = _client(broken, openai).post("/api/chat", json={"message": "Hello"})
    assert resp.status_code == 200
    assert resp.json() == {"response": "Fallback Response"}


def test_terminal_errors_are_generic_500(log_capture):
    broken = MockProvider("PRIMARY", error=ErrorCode.AUTH)
    client = _client(broken, MockProvider("OPENAI", error=ErrorCode.RATE_LIMIT))

    resp = client.post("/api/chat", json={"message": "Hello"})
    assert resp.status_code == 500
    assert resp.json() == {"response": "Error: Unable to process request at this time."}
    assert "rate_limit" not in resp.text
    assert log_capture.named("http.chat.error")[-1]["error_code"] == "rate_limit"


def test_unknown_override_is_500(primary, log_capture):
    resp = _client(primary).post("/api/chat", json={"message": "Hello", "model": "GEMINI"})
    assert resp.status_code == 500
    assert resp.json() == {"response": "Error: Unable to process request at this time."}
    assert log_capture.named("http.chat.error")[-1]["error_code"] == "no_provider_found"


def test_missing_fallback_is_500(primary):
    broken = MockProvider("PRIMARY", error=ErrorCode.TIMEOUT)
    resp = _client(broken).post("/api/chat", json={"message": "Hello"})
    assert resp.status_code == 500


def test_cors_origins_from_env(monkeypatch, primary):
    monkeypatch.setenv("AICHAT_CORS_ORIGINS", "http://desk.example:8000")
    client = _client(primary)
    resp = client.options(
        "/api/chat",
        headers={"Origin": "http://desk.example:8000", "Access-Control-Request-Method": "POST"},
    )
    assert resp.headers.get("access-control-allow-origin") == "http://desk.example:8000"


def test_default_cors_origins_allow_local_frontends(primary):
    client = _client(primary)
    for origin in ("http://localhost:4200", "http://localhost:3000", "http://localhost:5173"):
        resp = client.options(
            "/api/chat",
            headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
        )
        assert resp.headers.get("access-control-allow-origin") == origin


def test_default_app_builds_from_config(monkeypatch):
    monkeypatch.setenv("AICHAT_PROVIDERS", "PRIMARY=mock,OPENAI=mock")
    client = TestClient(create_app())
    assert client.post("/api/chat", json={"message": "ping"}).json() == {"response": "pong"}
