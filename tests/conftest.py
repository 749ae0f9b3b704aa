"""Shared test fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable

import httpx
import pytest
from PIL import Image

from src.oncosight.config import Settings
from src.oncosight.httpclient import get_http_client, get_settings
from src.oncosight.main import app
from src.oncosight.services.account_service import account_store

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        brain_tumor_url="http://inference.test",
        groq_api_key="gsk-test-key",
        groq_base_url="https://groq.test/openai/v1",
        log_level="DEBUG",
    )


@pytest.fixture
def upstream(test_settings: Settings):
    """Route the app's outbound calls to a handler set by the test.

    Yields a list that collects every outbound request.
    """
    calls: list[httpx.Request] = []
    state: dict[str, Handler] = {}

    def dispatch(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return state["handler"](request)

    async def _client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(dispatch)) as client:
            yield client

    app.dependency_overrides[get_http_client] = _client
    app.dependency_overrides[get_settings] = lambda: test_settings

    def set_handler(handler: Handler) -> list[httpx.Request]:
        state["handler"] = handler
        return calls

    yield set_handler
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clean_accounts():
    account_store.clear()
    yield
    account_store.clear()


@pytest.fixture
def jpeg_bytes() -> bytes:
    img = Image.new("RGB", (64, 64), color="gray")
    buf = io.BytesIO()
    img.save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture
def make_completion() -> Callable[[str], dict]:
    """Build a minimal OpenAI-style completion envelope."""

    def _completion(content: str) -> dict:
        return {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "model": "llama3-8b-8192",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": "stop",
                },
            ],
        }

    return _completion
