"""Chat relay and chat session."""

from taskpad_mcp.chat.fallback import ErrorKind, classify_error, error_response, run_fallback
from taskpad_mcp.chat.relay import SYSTEM_PROMPT, ChatRelay, GeminiUpstream, build_history
from taskpad_mcp.chat.session import ChatSession, get_chat_relay, get_chat_session, set_chat_session

__all__ = [
    "ErrorKind",
    "classify_error",
    "error_response",
    "run_fallback",
    "SYSTEM_PROMPT",
    "ChatRelay",
    "GeminiUpstream",
    "build_history",
    "ChatSession",
    "get_chat_relay",
    "get_chat_session",
    "set_chat_session",
]
