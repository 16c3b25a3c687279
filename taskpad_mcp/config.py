"""Environment-driven settings for Taskpad MCP."""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_CHAT_MODELS = ("gemini-1.5-flash", "gemini-pro", "gemini-1.0-pro", "gemini-1.5-pro")

# Values shipped in example .env files; treated as unset
PLACEHOLDER_VALUES = frozenset(
    {
        "your-gemini-api-key-here",
        "your-project-url-here",
        "your-anon-key-here",
    }
)


def _env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    if not value or value in PLACEHOLDER_VALUES:
        return default
    return value


class Settings(BaseModel):
    """Runtime settings for the server and its collaborators."""

    data_dir: Path = Field(default_factory=lambda: Path.home() / ".taskpad")
    log_level: str = "INFO"
    gemini_api_key: str | None = None
    chat_models: list[str] = Field(default_factory=lambda: list(DEFAULT_CHAT_MODELS))
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    auth_redirect: str = "/todo"
    # stdio, sse or streamable-http; the /api/chat route needs an HTTP transport
    transport: Literal["stdio", "sse", "streamable-http"] = "stdio"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment and a local .env file."""
        load_dotenv()
        values: dict[str, object] = {}
        if data_dir := _env("TASKPAD_DATA_DIR"):
            values["data_dir"] = Path(data_dir).expanduser()
        if log_level := _env("TASKPAD_LOG_LEVEL"):
            values["log_level"] = log_level.upper()
        if models := _env("TASKPAD_CHAT_MODELS"):
            values["chat_models"] = [m.strip() for m in models.split(",") if m.strip()]
        values["gemini_api_key"] = _env("GEMINI_API_KEY")
        values["supabase_url"] = _env("SUPABASE_URL")
        values["supabase_anon_key"] = _env("SUPABASE_ANON_KEY")
        if redirect := _env("TASKPAD_AUTH_REDIRECT"):
            values["auth_redirect"] = redirect
        if transport := _env("TASKPAD_TRANSPORT"):
            values["transport"] = transport
        return cls.model_validate(values)
