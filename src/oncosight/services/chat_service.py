"""Service layer – cancer-focused chat completions via the Groq API.

Groq exposes the OpenAI chat completions format, so a plain ``httpx`` POST to
``{groq_base_url}/chat/completions`` is enough. Requests are stateless: only
the fixed system prompt and the current user message are sent.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from src.oncosight.config import CANCER_SYSTEM_PROMPT, Settings

logger = logging.getLogger(__name__)


class ChatServiceError(Exception):
    """The chat provider failed or returned an unusable envelope."""


def build_messages(message: str) -> list[dict[str, str]]:
    """Return the provider message list for a single user turn."""
    return [
        {"role": "system", "content": CANCER_SYSTEM_PROMPT},
        {"role": "user", "content": message},
    ]


async def create_chat_completion(
    client: httpx.AsyncClient,
    message: str,
    config: Settings,
) -> dict[str, Any]:
    """Send one chat-completion request and return the raw provider envelope."""
    if not config.groq_api_key:
        raise ChatServiceError("GROQ_API_KEY is not configured")

    url = f"{config.groq_base_url.rstrip('/')}/chat/completions"
    payload = {
        "messages": build_messages(message),
        "model": config.chat_model,
        "temperature": config.chat_temperature,
        "max_tokens": config.chat_max_tokens,
    }
    headers = {
        "Authorization": f"Bearer {config.groq_api_key}",
        "Content-Type": "application/json",
    }

    try:
        response = await client.post(url, json=payload, headers=headers)
        response.raise_for_status()
        envelope = response.json()
    except httpx.HTTPStatusError as exc:
        raise ChatServiceError(
            f"Chat provider returned HTTP {exc.response.status_code}: {exc.response.text[:200]}",
        ) from exc
    except httpx.HTTPError as exc:
        raise ChatServiceError(f"Chat provider request failed: {exc}") from exc
    except ValueError as exc:
        raise ChatServiceError("Chat provider returned invalid JSON") from exc

    if not isinstance(envelope, dict):
        raise ChatServiceError("Chat provider returned an unexpected envelope")

    logger.debug(
        "Chat completion %s (%s)", envelope.get("id", "?"), envelope.get("model", config.chat_model),
    )
    return envelope


def extract_reply(envelope: dict[str, Any]) -> str:
    """Return ``choices[0].message.content`` from a completion envelope."""
    try:
        content = envelope["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ChatServiceError("Completion envelope has no first choice") from exc
    if not isinstance(content, str):
        raise ChatServiceError("Completion content is not text")
    return content
