from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class ChatRequest(BaseModel):
    """Body schema for POST /api/chatbot/create."""
    message: str | None = None


class ChatMessage(BaseModel):
    """One entry of a chat transcript."""
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime | None = None
