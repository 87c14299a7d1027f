import asyncio

import httpx
import pytest

from careerdesk import gemini_client as gc
from careerdesk.errors import ConfigurationError, ProviderError


def _fake_async_client(response=None, exc=None, seen=None):
    class FakeAsyncClient:
        def __init__(self, *args, **kwargs):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def post(self, url, json=None, headers=None):
            if seen is not None:
                seen.update(url=url, json=json, headers=headers)
            if exc is not None:
                raise exc
            return response

    return FakeAsyncClient


def _response(status, body):
    return httpx.Response(status, json=body, request=httpx.Request("POST", "https://example.test"))


def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(ConfigurationError) as info:
        gc.GeminiClient()
    assert "GEMINI_API_KEY" in str(info.value)


def test_generate_content_success(monkeypatch):
    seen = {}
    body = {"candidates": [{"content": {"parts": [{"text": "Hello "}, {"text": "world"}]}, "finishReason": "STOP"}]}
    monkeypatch.setattr(gc.httpx, "AsyncClient", _fake_async_client(_response(200, body), seen=seen))

    client = gc.GeminiClient(api_key="k", base_url="https://example.test/v1beta/")
    text = asyncio.run(client.generate_content("gemini-2.5-flash", "Say hi"))

    assert text == "Hello world"
    assert seen["url"] == "https://example.test/v1beta/models/gemini-2.5-flash:generateContent"
    assert seen["headers"]["x-goog-api-key"] == "k"
    assert seen["json"]["contents"][0]["parts"][0]["text"] == "Say hi"


def test_error_envelope_becomes_provider_error(monkeypatch):
    body = {"error": {"code": 429, "message": "Quota exceeded for metric", "status": "RESOURCE_EXHAUSTED"}}
    monkeypatch.setattr(gc.httpx, "AsyncClient", _fake_async_client(_response(429, body)))

    client = gc.GeminiClient(api_key="k")
    with pytest.raises(ProviderError) as info:
        asyncio.run(client.generate_content("gemini-2.5-flash", "x"))
    assert info.value.status == 429
    assert info.value.message == "[429 RESOURCE_EXHAUSTED] Quota exceeded for metric"


def test_blocked_prompt(monkeypatch):
    body = {"promptFeedback": {"blockReason": "SAFETY"}}
    monkeypatch.setattr(gc.httpx, "AsyncClient", _fake_async_client(_response(200, body)))

    client = gc.GeminiClient(api_key="k")
    with pytest.raises(ProviderError) as info:
        asyncio.run(client.generate_content("gemini-2.5-flash", "x"))
    assert "blocked due to SAFETY" in info.value.message
    assert info.value.status is None


def test_timeout_is_reported_as_timeout(monkeypatch):
    monkeypatch.setattr(gc.httpx, "AsyncClient", _fake_async_client(exc=httpx.ReadTimeout("read timed out")))

    client = gc.GeminiClient(api_key="k")
    with pytest.raises(ProviderError) as info:
        asyncio.run(client.generate_content("gemini-2.5-flash", "x"))
    assert "timeout" in info.value.message


def test_check_api_reports_success(monkeypatch):
    from careerdesk import check_api

    body = {"candidates": [{"content": {"parts": [{"text": "API is working!"}]}}]}
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.setattr(gc.httpx, "AsyncClient", _fake_async_client(_response(200, body)))
    assert asyncio.run(check_api.check()) is True


def test_check_api_reports_failure(monkeypatch):
    from careerdesk import check_api

    body = {"error": {"code": 403, "message": "API key not valid", "status": "PERMISSION_DENIED"}}
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.setattr(gc.httpx, "AsyncClient", _fake_async_client(_response(403, body)))
    assert asyncio.run(check_api.check()) is False
    monkeypatch.delenv("GEMINI_API_KEY")
    assert asyncio.run(check_api.check()) is False
