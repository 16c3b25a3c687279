"""Client side of the chat helper: local history and one request at a time."""

import logging

from taskpad_mcp.chat.relay import ChatRelay, GeminiUpstream
from taskpad_mcp.config import Settings
from taskpad_mcp.core.storage import TaskStore
from taskpad_mcp.core.transfer import export_chat
from taskpad_mcp.enums import ChatRole
from taskpad_mcp.errors import InputValidationError, RequestInFlightError, UpstreamChatError
from taskpad_mcp.models.chat import ChatMessage

logger = logging.getLogger(__name__)


class ChatSession:
    """
    Sends user messages through the relay and keeps the persisted history.

    ``loading`` is set while a request is outstanding; a second send during
    that time is refused rather than queued.
    """

    def __init__(self, relay: ChatRelay, store: TaskStore):
        self.relay = relay
        self.store = store
        self.loading = False
        self._messages = store.load_chat_history()

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    async def send(self, text: str) -> ChatMessage:
        """Send ``text`` and return the assistant's reply."""
        content = (text or "").strip()
        if not content:
            raise InputValidationError("Message cannot be empty")
        if self.loading:
            raise RequestInFlightError("A chat request is already in progress")

        self.loading = True
        try:
            self._append(ChatMessage(role=ChatRole.USER, content=content))
            history = [{"role": m.role.value, "content": m.content} for m in self._messages]
            status, body = await self.relay.handle({"message": content, "chatHistory": history})
            if status != 200:
                raise UpstreamChatError(body.get("error") or "Failed to get response")
            reply = ChatMessage(role=ChatRole.ASSISTANT, content=body["message"])
            self._append(reply)
            return reply
        finally:
            self.loading = False

    def clear(self) -> None:
        self._messages = []
        self.store.clear_chat_history()

    def export(self) -> str:
        return export_chat(self._messages)

    def _append(self, message: ChatMessage) -> None:
        self._messages.append(message)
        self.store.save_chat_history(self._messages)


def build_relay(settings: Settings) -> ChatRelay:
    upstream = GeminiUpstream(settings.gemini_api_key) if settings.gemini_api_key else None
    if upstream is None:
        logger.warning("GEMINI_API_KEY is not set; chat requests will fail")
    return ChatRelay(upstream, settings.chat_models)


_relay: ChatRelay | None = None
_session: ChatSession | None = None


def get_chat_relay() -> ChatRelay:
    global _relay
    if _relay is None:
        _relay = build_relay(Settings.from_env())
    return _relay


def get_chat_session() -> ChatSession:
    global _session
    if _session is None:
        from taskpad_mcp.core.workspace import get_workspace

        _session = ChatSession(get_chat_relay(), get_workspace().store)
    return _session


def set_chat_session(session: ChatSession | None, relay: ChatRelay | None = None) -> None:
    global _session, _relay
    _session = session
    _relay = relay if relay is not None else (session.relay if session else None)
