from __future__ import annotations

from typing import Any

import httpx
import pytest

from query_genie.core.config import clear_settings_cache

TEST_BASE_URL = "https://llm.test/v1"
TEST_MODEL = "test-model"


@pytest.fixture(autouse=True)
def _test_settings(monkeypatch, tmp_path):
    """Point settings at a fake endpoint and a throwaway state file."""
    monkeypatch.setenv("OPENAI_BASE_URL", TEST_BASE_URL)
    monkeypatch.setenv("OPENAI_MODEL", TEST_MODEL)
    monkeypatch.setenv("REQUEST_TIMEOUT", "5")
    monkeypatch.setenv("QUERY_GENIE_STATE_PATH", str(tmp_path / "state.json"))
    clear_settings_cache()
    yield
    clear_settings_cache()


class FakeCompletions:
    """Stand-in for httpx.post that records calls and replays a canned reply."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.status_code = 200
        self.payload: Any = None
        self.text: str | None = None
        self.exception: Exception | None = None

    def reply(self, content: str) -> None:
        self.payload = {"choices": [{"message": {"role": "assistant", "content": content}}]}

    def __call__(self, url: str, **kwargs: Any) -> httpx.Response:
        self.calls.append({"url": url, **kwargs})
        if self.exception is not None:
            raise self.exception
        request = httpx.Request("POST", url)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text, request=request)
        return httpx.Response(self.status_code, json=self.payload, request=request)

    @property
    def last_messages(self) -> list[dict[str, str]]:
        return self.calls[-1]["json"]["messages"]


@pytest.fixture
def fake_completions(monkeypatch) -> FakeCompletions:
    fake = FakeCompletions()
    monkeypatch.setattr("query_genie.llm.client.httpx.post", fake)
    return fake
