from __future__ import annotations

import json
import types

import httpx

from aichat_providers.base.errors import (
    ErrorCode,
    ProviderError,
    RoutingError,
    RoutingErrorKind,
    classify_exception,
    wrap_exception,
)


def test_classify_provider_error_passthrough():
    e = ProviderError(code=ErrorCode.AUTH, message="nope", provider="x")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_classify_http_status_mapping():
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101
    e3 = types.SimpleNamespace(status_code=429)
    assert classify_exception(e3) is ErrorCode.RATE_LIMIT  # nosec B101


def test_classify_httpx_status_error():
    request = httpx.Request("POST", "http://localhost:11434/api/generate")
    response = httpx.Response(401, request=request)
    exc = httpx.HTTPStatusError("unauthorized", request=request, response=response)
    assert classify_exception(exc) is ErrorCode.AUTH  # nosec B101


def test_classify_transport_errors():
    request = httpx.Request("POST", "http://localhost:11434/api/generate")
    assert classify_exception(httpx.ReadTimeout("slow", request=request)) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused", request=request)) is ErrorCode.UNAVAILABLE  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101


def test_classify_malformed_payloads():
    assert classify_exception(json.JSONDecodeError("bad", "x", 0)) is ErrorCode.MALFORMED_RESPONSE  # nosec B101


def test_classify_programming_errors_are_not_malformed_responses():
    # Only the response-parsing helpers decide a payload is malformed.
    assert classify_exception(KeyError("response")) is ErrorCode.UNKNOWN  # nosec B101
    assert classify_exception(IndexError("list index out of range")) is ErrorCode.UNKNOWN  # nosec B101
    assert classify_exception(TypeError("got an unexpected keyword argument")) is ErrorCode.UNKNOWN  # nosec B101


def test_classify_sdk_connection_errors_as_unavailable():
    # openai and anthropic APIConnectionError both say "Connection error."
    assert classify_exception(Exception("Connection error.")) is ErrorCode.UNAVAILABLE  # nosec B101
    assert classify_exception(Exception("connection refused")) is ErrorCode.UNAVAILABLE  # nosec B101


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(Exception("unsupported parameter")) is ErrorCode.UNSUPPORTED  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_wrap_exception_keeps_cause_and_attribution():
    cause = RuntimeError("connection refused")
    err = wrap_exception(cause, provider="PRIMARY", model="llama3")
    assert err.code is ErrorCode.UNAVAILABLE
    assert err.provider == "PRIMARY" and err.model == "llama3"
    assert err.raw is cause
    assert err.message == "connection refused"
    assert str(err) == "PRIMARY:llama3 unavailable: connection refused"


def test_wrap_exception_returns_provider_error_unchanged():
    original = ProviderError(code=ErrorCode.TIMEOUT, message="slow", provider="OPENAI")
    assert wrap_exception(original, provider="OTHER") is original


def test_routing_error_messages():
    missing = RoutingError(kind=RoutingErrorKind.NO_PROVIDER_FOUND, name="GEMINI")
    assert str(missing) == "No AI provider found for: GEMINI"
    no_fallback = RoutingError(kind=RoutingErrorKind.NO_FALLBACK_AVAILABLE, name="OPENAI")
    assert str(no_fallback) == "No fallback provider available: OPENAI"
    assert no_fallback.cause is None
