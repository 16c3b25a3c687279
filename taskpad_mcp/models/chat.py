"""Chat message and relay payload models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from taskpad_mcp.enums import ChatRole
from taskpad_mcp.models.task import utcnow


class ChatMessage(BaseModel):
    """A message kept in the persisted chat history."""

    role: ChatRole
    content: str
    timestamp: datetime = Field(default_factory=utcnow)


class ChatTurn(BaseModel):
    """A history entry as sent to the relay (no timestamp)."""

    model_config = ConfigDict(extra="ignore")

    role: str
    content: str


class ChatReply(BaseModel):
    """Successful relay response body."""

    message: str
    success: bool = True


class ChatErrorBody(BaseModel):
    """Failed relay response body."""

    error: str
    details: str | None = None
