"""Client session for the chat page."""

from __future__ import annotations

import logging
from datetime import datetime

import httpx

from src.oncosight.config import CHAT_FALLBACK_REPLY
from src.oncosight.schemas.chat import ChatMessage
from src.oncosight.services.chat_service import ChatServiceError, extract_reply

logger = logging.getLogger(__name__)


class ChatSession:
    """Append-only transcript backed by the ``/api/chatbot/create`` proxy.

    Only the current message is sent; the proxy keeps no history.
    """

    def __init__(self, client: httpx.AsyncClient, endpoint: str = "/api/chatbot/create") -> None:
        self._client = client
        self._endpoint = endpoint
        self._messages: list[ChatMessage] = []
        self.is_loading = False

    @property
    def transcript(self) -> list[ChatMessage]:
        return list(self._messages)

    async def send(self, text: str) -> ChatMessage | None:
        """Send *text* and return the assistant reply appended to the transcript."""
        if not text.strip() or self.is_loading:
            return None

        self._messages.append(ChatMessage(role="user", content=text, timestamp=datetime.now()))
        self.is_loading = True
        try:
            content = await self._request_reply(text)
        except (httpx.HTTPError, ValueError, ChatServiceError) as exc:
            logger.error("Error fetching AI response: %s", exc)
            content = CHAT_FALLBACK_REPLY
        finally:
            self.is_loading = False

        reply = ChatMessage(role="assistant", content=content, timestamp=datetime.now())
        self._messages.append(reply)
        return reply

    async def _request_reply(self, text: str) -> str:
        response = await self._client.post(self._endpoint, json={"message": text})
        data = response.json()
        if response.is_error:
            error = data.get("error") if isinstance(data, dict) else None
            raise ChatServiceError(error or "Failed to fetch AI response")
        return extract_reply(data)
