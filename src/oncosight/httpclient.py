"""Shared ``httpx`` client for outbound calls (inference service, chat provider)."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import httpx
from fastapi import Request

from src.oncosight.config import Settings, settings


def make_http_client(config: Settings = settings, **kwargs: Any) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` using the configured timeout."""
    kwargs.setdefault("timeout", config.timeout)
    return httpx.AsyncClient(**kwargs)


async def get_http_client(request: Request) -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency – the app-wide client, or a short-lived one outside the lifespan."""
    client = getattr(request.app.state, "http_client", None)
    if client is not None:
        yield client
        return
    async with make_http_client() as client:
        yield client


def get_settings() -> Settings:
    """FastAPI dependency – the global settings (overridden in tests)."""
    return settings
