"""Server side of the chat helper: relays a message to a hosted model."""

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from google import genai
from google.genai import types
from pydantic import ValidationError

from taskpad_mcp.chat.fallback import FatalError, Success, classify_error, error_response, run_fallback
from taskpad_mcp.models.chat import ChatErrorBody, ChatReply, ChatTurn

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 10

SYSTEM_PROMPT = """You are a helpful AI assistant integrated into a task management application.
You can help users with:
1. General questions and conversation
2. Task management advice (creating, organizing, prioritizing tasks)
3. Productivity tips and suggestions
4. Answering questions about how to use the task manager

Be friendly, concise, and helpful. When users ask about tasks, provide practical, actionable advice.
Keep responses clear and to the point."""


class ChatUpstream(Protocol):
    """A hosted text-completion model reachable by name."""

    async def send(self, model: str, history: list[ChatTurn], message: str) -> str: ...


class GeminiUpstream:
    """Google Gemini via the google-genai async client."""

    def __init__(self, api_key: str):
        self._client = genai.Client(api_key=api_key)

    async def send(self, model: str, history: list[ChatTurn], message: str) -> str:
        chat = self._client.aio.chats.create(
            model=model,
            history=[types.Content(role=turn.role, parts=[types.Part(text=turn.content)]) for turn in history],
        )
        response = await chat.send_message(message)
        return response.text or ""


def build_history(message: str, chat_history: Any) -> list[ChatTurn]:
    """
    Prepare client history for the upstream model.

    Drops the entry repeating the current user message, keeps the most recent
    ``HISTORY_LIMIT`` entries and renames the assistant role to ``model``.
    Malformed entries are skipped.
    """
    if not isinstance(chat_history, list):
        return []
    turns: list[ChatTurn] = []
    for entry in chat_history:
        try:
            turn = ChatTurn.model_validate(entry)
        except ValidationError:
            continue
        if turn.role == "user" and turn.content == message:
            continue
        turns.append(turn)
    return [
        ChatTurn(role="user" if turn.role == "user" else "model", content=turn.content)
        for turn in turns[-HISTORY_LIMIT:]
    ]


class ChatRelay:
    """Handles ``{message, chatHistory}`` requests and returns (status, body)."""

    def __init__(self, upstream: ChatUpstream | None, models: Sequence[str]):
        self.upstream = upstream
        self.models = list(models)

    async def handle(self, payload: Any) -> tuple[int, dict[str, Any]]:
        if self.upstream is None:
            return 500, _dump(
                ChatErrorBody(error="Gemini API key is not configured. Please set GEMINI_API_KEY.")
            )

        message = payload.get("message") if isinstance(payload, dict) else None
        if not message or not isinstance(message, str):
            return 400, _dump(ChatErrorBody(error="Message is required and must be a string"))

        history = build_history(message, payload.get("chatHistory", []))
        outgoing = message if history else f"{SYSTEM_PROMPT}\n\nUser: {message}"
        upstream = self.upstream

        async def attempt(model: str) -> str:
            return await upstream.send(model, history, outgoing)

        result = await run_fallback(self.models, attempt)
        if isinstance(result, Success):
            logger.debug("Chat reply from %s", result.model)
            return 200, ChatReply(message=result.text).model_dump()

        if isinstance(result, FatalError):
            error: Exception | None = result.error
        else:
            error = result.last_error
        text = str(error) if error is not None else "No available models found"
        logger.error("Chat relay failed: %s", text)
        status, body = error_response(classify_error(text), text)
        return status, _dump(body)


def _dump(body: ChatErrorBody) -> dict[str, Any]:
    return body.model_dump(exclude_none=True)
