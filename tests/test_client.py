"""Tests for the page session objects."""

import json
from unittest.mock import MagicMock

import httpx
import pytest

from src.oncosight.client.account import SettingsForm
from src.oncosight.client.chat import ChatSession
from src.oncosight.client.classification import BrainTumorSession
from src.oncosight.config import CHAT_FALLBACK_REPLY
from src.oncosight.main import app
from src.oncosight.services.account_service import Account, account_store, hash_password


def _mock_client(handler, **kwargs) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), **kwargs)


def _app_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


# ──────────────────────────────────────────────
# Brain tumor page
# ──────────────────────────────────────────────
@pytest.mark.asyncio
async def test_submit_issues_one_multipart_post() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"notumor": 0.18, "tumor": 0.82})

    async with _mock_client(handler) as client:
        session = BrainTumorSession(client, "http://inference.test")
        session.select_file("scan.jpg", b"jpeg-bytes", "image/jpeg")
        await session.submit()

    assert len(seen) == 1
    assert str(seen[0].url) == "http://inference.test/predict"
    assert b'name="image"' in seen[0].content
    assert session.predictions == {"notumor": 0.18, "tumor": 0.82}
    assert session.ranked[0].class_name == "tumor"
    assert session.ranked[0].percentage == "82.00%"
    assert not session.is_loading


@pytest.mark.asyncio
async def test_failed_submit_keeps_previous_result() -> None:
    responses = iter([
        httpx.Response(200, json={"tumor": 0.7, "notumor": 0.3}),
        httpx.Response(500),
    ])

    async with _mock_client(lambda request: next(responses)) as client:
        session = BrainTumorSession(client, "http://inference.test")
        session.select_file("scan.jpg", b"jpeg-bytes")
        await session.submit()
        result = await session.submit()

    assert result is None
    assert session.predictions == {"tumor": 0.7, "notumor": 0.3}
    assert "500" in session.last_error
    assert not session.is_loading


@pytest.mark.asyncio
async def test_network_error_does_not_raise() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _mock_client(refuse) as client:
        session = BrainTumorSession(client, "http://inference.test")
        session.select_file("scan.jpg", b"jpeg-bytes")
        assert await session.submit() is None

    assert session.predictions is None
    assert session.last_error


@pytest.mark.asyncio
async def test_submit_without_file_or_while_loading_is_noop() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    async with _mock_client(handler) as client:
        session = BrainTumorSession(client, "http://inference.test")
        assert not session.can_submit
        assert await session.submit() is None

        session.select_file("scan.jpg", b"jpeg-bytes")
        session.is_loading = True
        assert not session.can_submit
        assert await session.submit() is None

    assert seen == []


def test_selecting_a_file_clears_predictions() -> None:
    session = BrainTumorSession(MagicMock(spec=httpx.AsyncClient), "http://inference.test")
    session.predictions = {"tumor": 1.0}
    session.select_file("other.jpg", b"x")
    assert session.predictions is None
    assert session.ranked == []


@pytest.mark.asyncio
async def test_non_numeric_probabilities_keep_previous_result() -> None:
    responses = iter([
        httpx.Response(200, json={"tumor": 0.7, "notumor": 0.3}),
        httpx.Response(200, json={"tumor": "high", "notumor": 0.1}),
    ])

    async with _mock_client(lambda request: next(responses)) as client:
        session = BrainTumorSession(client, "http://inference.test")
        session.select_file("scan.jpg", b"jpeg-bytes")
        await session.submit()
        result = await session.submit()

    assert result is None
    assert session.predictions == {"tumor": 0.7, "notumor": 0.3}
    assert [row.class_name for row in session.ranked] == ["tumor", "notumor"]
    assert "non-numeric" in session.last_error

# ──────────────────────────────────────────────
# Chat page
# ──────────────────────────────────────────────
@pytest.mark.asyncio
async def test_chat_appends_user_then_assistant(upstream, make_completion) -> None:
    calls = upstream(lambda request: httpx.Response(200, json=make_completion("Here is what I know.")))

    async with _app_client() as client:
        session = ChatSession(client)
        reply = await session.send("What is melanoma?")

    transcript = session.transcript
    assert [m.role for m in transcript] == ["user", "assistant"]
    assert transcript[0].content == "What is melanoma?"
    assert transcript[1].content == "Here is what I know."
    assert reply == transcript[1]
    assert transcript[0].timestamp is not None
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_chat_sends_only_current_message(upstream, make_completion) -> None:
    calls = upstream(lambda request: httpx.Response(200, json=make_completion("ok")))

    async with _app_client() as client:
        session = ChatSession(client)
        await session.send("first")
        await session.send("second")

    assert len(session.transcript) == 4
    second_payload = json.loads(calls[1].content)
    assert [m["content"] for m in second_payload["messages"][1:]] == ["second"]


@pytest.mark.asyncio
async def test_chat_failure_appends_fallback(upstream) -> None:
    upstream(lambda request: httpx.Response(500, json={"error": "down"}))

    async with _app_client() as client:
        session = ChatSession(client)
        await session.send("Hello")

    transcript = session.transcript
    assert [m.role for m in transcript] == ["user", "assistant"]
    assert transcript[1].content == CHAT_FALLBACK_REPLY


@pytest.mark.asyncio
async def test_chat_network_error_appends_fallback() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _mock_client(refuse, base_url="http://app.test") as client:
        session = ChatSession(client)
        await session.send("Hello")

    assert [m.content for m in session.transcript][-1] == CHAT_FALLBACK_REPLY
    assert len(session.transcript) == 2
    assert not session.is_loading


@pytest.mark.asyncio
async def test_chat_ignores_blank_input() -> None:
    async with _mock_client(lambda request: httpx.Response(200, json={})) as client:
        session = ChatSession(client)
        assert await session.send("   ") is None

    assert session.transcript == []


@pytest.mark.asyncio
async def test_chat_ignores_send_while_loading() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    async with _mock_client(handler, base_url="http://app.test") as client:
        session = ChatSession(client)
        session.is_loading = True
        assert await session.send("Hello") is None

    assert session.transcript == []
    assert seen == []


@pytest.mark.asyncio
async def test_transcript_is_a_copy(upstream, make_completion) -> None:
    upstream(lambda request: httpx.Response(200, json=make_completion("ok")))

    async with _app_client() as client:
        session = ChatSession(client)
        await session.send("Hello")

    snapshot = session.transcript
    snapshot.clear()

    assert snapshot == []
    assert [m.role for m in session.transcript] == ["user", "assistant"]

# ──────────────────────────────────────────────
# Settings page
# ──────────────────────────────────────────────
@pytest.mark.asyncio
async def test_settings_form_rejects_before_network() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": "Settings Updated!"})

    async with _mock_client(handler, base_url="http://app.test") as client:
        form = SettingsForm(client, "user-1")
        mismatched = await form.submit({"password": "secret1"})
        bad_email = await form.submit({"email": "nope"})

    assert mismatched.error == "New password is required!"
    assert bad_email.error
    assert seen == []


@pytest.mark.asyncio
async def test_settings_form_submits_valid_payload() -> None:
    account_store.add(
        Account(id="user-1", name="Ada", email="ada@example.com", password_hash=hash_password("secret1")),
    )

    async with _app_client() as client:
        form = SettingsForm(client, "user-1")
        result = await form.submit({"password": "secret1", "newPassword": "secret2"})

    assert result.success == "Settings Updated!"
    assert not form.is_pending


@pytest.mark.asyncio
async def test_settings_form_server_failure() -> None:
    async with _mock_client(lambda request: httpx.Response(500), base_url="http://app.test") as client:
        form = SettingsForm(client, "user-1")
        result = await form.submit({"name": "Ada"})

    assert result.error == "Something went wrong!"
