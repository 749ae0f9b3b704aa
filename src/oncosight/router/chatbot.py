"""Router – cancer assistant chat proxy."""

import logging

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.oncosight.config import Settings
from src.oncosight.httpclient import get_http_client, get_settings
from src.oncosight.schemas.chat import ChatRequest
from src.oncosight.services.chat_service import ChatServiceError, create_chat_completion

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chatbot", tags=["Chat"])


@router.post("/create")
async def create_chat(
    body: ChatRequest,
    client: httpx.AsyncClient = Depends(get_http_client),
    config: Settings = Depends(get_settings),
) -> JSONResponse:
    """Forward one message to the chat provider and return its raw completion."""
    if not body.message:
        return JSONResponse(status_code=400, content={"error": "Message content is required"})

    try:
        completion = await create_chat_completion(client, body.message, config)
    except ChatServiceError as exc:
        logger.error("Error fetching AI response: %s", exc)
        return JSONResponse(status_code=500, content={"error": "Failed to fetch AI response"})

    return JSONResponse(status_code=200, content=completion)


@router.api_route(
    "/create",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def create_chat_wrong_method() -> JSONResponse:
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})
