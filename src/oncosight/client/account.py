"""Client form for the account settings page."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from src.oncosight.config import SETTINGS_FAILED
from src.oncosight.schemas.settings import SettingsRequest, SettingsResult

logger = logging.getLogger(__name__)


class SettingsForm:
    """Validates settings locally and submits them only when valid."""

    def __init__(self, client: httpx.AsyncClient, user_id: str, endpoint: str = "/settings") -> None:
        self._client = client
        self._user_id = user_id
        self._endpoint = endpoint
        self.is_pending = False

    async def submit(self, values: dict[str, Any]) -> SettingsResult:
        try:
            request = SettingsRequest.model_validate(values)
        except ValidationError as exc:
            return SettingsResult(error=_first_message(exc))

        self.is_pending = True
        try:
            response = await self._client.post(
                self._endpoint,
                json=request.model_dump(by_alias=True, exclude_none=True),
                headers={"X-User-Id": self._user_id},
            )
            response.raise_for_status()
            return SettingsResult.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Settings update failed: %s", exc)
            return SettingsResult(error=SETTINGS_FAILED)
        finally:
            self.is_pending = False


def _first_message(exc: ValidationError) -> str:
    message = exc.errors()[0]["msg"]
    # pydantic prefixes errors raised from validators
    return message.removeprefix("Value error, ")
