import asyncio

import httpx
import pytest

from code_assistant.domain.exceptions import ApiError, NetworkError, RateLimitError, ValidationError
from code_assistant.providers.gemini_client import GeminiClient


class SettingsStub:
    gemini_api_key = "g-test-key-123"
    http_timeout = 1.0
    temperature = 0.5
    gemini_base_url = "https://generativelanguage.googleapis.com/v1beta"


class Resp:
    def __init__(self, status_code=200, data=None, text=""):
        self.status_code = status_code
        self._data = data
        self.text = text

    def json(self):
        if isinstance(self._data, Exception):
            raise self._data
        return self._data


def fake_client(response=None, error=None, captured=None):
    class Client:
        def __init__(self, *a, **kw):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def post(self, url, json=None, headers=None, **_):
            if captured is not None:
                captured.update(url=url, payload=json, headers=headers)
            if error is not None:
                raise error
            return response

    return Client


def test_gemini_client_parse_basic(monkeypatch):
    data = {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": "useState "}, {"text": "lets you..."}]},
                "finishReason": "STOP",
            }
        ],
        "usageMetadata": {"promptTokenCount": 4, "candidatesTokenCount": 3, "totalTokenCount": 7},
    }
    monkeypatch.setattr("httpx.AsyncClient", fake_client(Resp(data=data)))

    res = asyncio.run(GeminiClient(SettingsStub()).complete("React useState example"))

    assert res.text == "useState lets you..."
    assert res.finish_reason == "STOP"
    assert res.usage.total_tokens == 7
    assert res.provider == "gemini"


def test_gemini_client_request_shape(monkeypatch):
    captured = {}
    monkeypatch.setattr("httpx.AsyncClient", fake_client(Resp(data={"candidates": []}), captured=captured))

    asyncio.run(GeminiClient(SettingsStub()).complete("hi"))

    assert captured["url"].endswith("/models/gemini-1.5-flash:generateContent")
    assert captured["headers"]["x-goog-api-key"] == "g-test-key-123"
    assert captured["payload"]["contents"][0]["parts"][0]["text"] == "hi"
    assert captured["payload"]["generationConfig"]["temperature"] == 0.5


def test_gemini_client_no_candidates_gives_empty_text(monkeypatch):
    monkeypatch.setattr("httpx.AsyncClient", fake_client(Resp(data={"candidates": []})))

    res = asyncio.run(GeminiClient(SettingsStub()).complete("hi"))

    assert res.text == ""
    assert res.usage is None


def test_gemini_client_missing_key():
    class NoKey(SettingsStub):
        gemini_api_key = None

    with pytest.raises(ValidationError) as exc:
        asyncio.run(GeminiClient(NoKey()).complete("hi"))
    assert exc.value.code == "MISSING_API_KEY"


def test_gemini_client_network_error(monkeypatch):
    monkeypatch.setattr("httpx.AsyncClient", fake_client(error=httpx.ConnectError("refused")))

    with pytest.raises(NetworkError):
        asyncio.run(GeminiClient(SettingsStub()).complete("hi"))


@pytest.mark.parametrize(
    "status, exc_type, code",
    [(429, RateLimitError, "RATE_LIMIT"), (400, ApiError, "API_ERROR"), (500, ApiError, "API_ERROR")],
)
def test_gemini_client_http_errors(monkeypatch, status, exc_type, code):
    monkeypatch.setattr("httpx.AsyncClient", fake_client(Resp(status_code=status, text="API key not valid")))

    with pytest.raises(exc_type) as exc:
        asyncio.run(GeminiClient(SettingsStub()).complete("hi"))
    assert exc.value.code == code
    assert exc.value.http_status == status


def test_gemini_client_malformed_body(monkeypatch):
    monkeypatch.setattr("httpx.AsyncClient", fake_client(Resp(data=ValueError("not json"))))

    with pytest.raises(ApiError) as exc:
        asyncio.run(GeminiClient(SettingsStub()).complete("hi"))
    assert exc.value.code == "MALFORMED_RESPONSE"


@pytest.mark.parametrize(
    "data",
    [
        {"candidates": "nope"},
        {"candidates": [], "promptFeedback": "blocked"},
        {"candidates": [{"content": {"parts": [{"text": "ok"}]}}], "usageMetadata": [1, 2]},
    ],
)
def test_gemini_client_wrong_shape(monkeypatch, data):
    monkeypatch.setattr("httpx.AsyncClient", fake_client(Resp(data=data)))

    with pytest.raises(ApiError) as exc:
        asyncio.run(GeminiClient(SettingsStub()).complete("hi"))
    assert exc.value.code == "MALFORMED_RESPONSE"


def test_gemini_client_blocked_prompt(monkeypatch):
    data = {"promptFeedback": {"blockReason": "SAFETY"}}
    monkeypatch.setattr("httpx.AsyncClient", fake_client(Resp(data=data)))

    with pytest.raises(ApiError) as exc:
        asyncio.run(GeminiClient(SettingsStub()).complete("hi"))
    assert exc.value.code == "PROMPT_BLOCKED"
