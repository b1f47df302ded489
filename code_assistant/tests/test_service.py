import asyncio

from code_assistant.api import service
from code_assistant.domain.models import CompletionResult
from code_assistant.providers.gemini_client import GeminiClient
from code_assistant.session.controller import SessionController


class FakeProvider:
    name = "fake"

    async def complete(self, prompt):
        return CompletionResult(provider="fake", model="code-assistant", text="```js\nconsole.log(1)\n```")


def test_session_snapshot():
    session = SessionController(FakeProvider())
    asyncio.run(session.submit("JavaScript async/await example"))
    session.set_pending_query("next")

    snap = service.session_snapshot(session)

    assert snap["pending_query"] == "next"
    assert snap["is_loading"] is False
    assert snap["last_error"] is None
    assert snap["history"] == [
        {
            "query": "JavaScript async/await example",
            "response": "```js\nconsole.log(1)\n```",
            "answer_kind": "code",
        }
    ]


def test_get_default_session_is_singleton(monkeypatch):
    monkeypatch.setattr(service, "_session", None)
    first = service.get_default_session()
    second = service.get_default_session()
    assert first is second
    assert isinstance(first._provider_client, GeminiClient)
