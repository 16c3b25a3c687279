"""Ordered model fallback for the chat relay.

The relay tries each candidate model in turn. A "model not found" failure
advances to the next candidate; any other failure stops the search, and so
does an empty reply. The policy is a small state machine so it can be tested
without a network:

    TryModel(0) --not found--> TryModel(1) --not found--> ... --> Exhausted
        |                          |
        +--reply--> Success        +--other error--> FatalError
        +--empty reply--> Exhausted
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from taskpad_mcp.models.chat import ChatErrorBody

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Upstream failure categories, each with its own response."""

    CREDENTIAL = "credential"
    RATE_LIMIT = "rate_limit"
    MODEL_UNAVAILABLE = "model_unavailable"
    GENERIC = "generic"


def classify_error(message: str) -> ErrorKind:
    """Categorize an upstream error by its message text."""
    if "API key" in message:
        return ErrorKind.CREDENTIAL
    if "quota" in message or "rate limit" in message:
        return ErrorKind.RATE_LIMIT
    if "not found" in message or "404" in message:
        return ErrorKind.MODEL_UNAVAILABLE
    return ErrorKind.GENERIC


MODEL_UNAVAILABLE_HELP = (
    "Model not available with your API key. Please: 1) Check Google AI Studio "
    "(https://aistudio.google.com/app/apikey) to see which models are enabled, "
    "2) Make sure the Gemini API is enabled in Google Cloud Console, "
    "3) Set TASKPAD_CHAT_MODELS to a model your key can use."
)


def error_response(kind: ErrorKind, message: str) -> tuple[int, ChatErrorBody]:
    """HTTP status and body reported for an upstream failure."""
    if kind == ErrorKind.CREDENTIAL:
        return 401, ChatErrorBody(error="Invalid Gemini API key. Please check your GEMINI_API_KEY setting.")
    if kind == ErrorKind.RATE_LIMIT:
        return 429, ChatErrorBody(error="API rate limit exceeded. Please try again later.")
    if kind == ErrorKind.MODEL_UNAVAILABLE:
        return 400, ChatErrorBody(error=MODEL_UNAVAILABLE_HELP, details=message)
    return 500, ChatErrorBody(
        error=message or "An error occurred while processing your request. Please try again."
    )


# ============================================================================
# States
# ============================================================================


@dataclass(frozen=True)
class TryModel:
    index: int
    # not-found error from the previous candidate, if any
    last_error: Exception | None = None


@dataclass(frozen=True)
class Success:
    model: str
    text: str


@dataclass(frozen=True)
class Exhausted:
    last_error: Exception | None = None


@dataclass(frozen=True)
class FatalError:
    error: Exception


FallbackState = TryModel | Success | Exhausted | FatalError


def start(models: Sequence[str]) -> FallbackState:
    return TryModel(0) if models else Exhausted()


def step(state: TryModel, models: Sequence[str], outcome: str | Exception) -> FallbackState:
    """Next state after trying ``models[state.index]`` with the given outcome.

    An empty reply ends the search with no answer.
    """
    if not isinstance(outcome, Exception):
        if not outcome:
            return Exhausted(state.last_error)
        return Success(model=models[state.index], text=outcome)
    if classify_error(str(outcome)) != ErrorKind.MODEL_UNAVAILABLE:
        return FatalError(outcome)
    next_index = state.index + 1
    if next_index < len(models):
        return TryModel(next_index, outcome)
    return Exhausted(outcome)


async def run_fallback(
    models: Sequence[str],
    attempt: Callable[[str], Awaitable[str]],
) -> Success | Exhausted | FatalError:
    """Drive the state machine, calling ``attempt(model)`` for each candidate."""
    state = start(models)
    while isinstance(state, TryModel):
        model = models[state.index]
        try:
            outcome: str | Exception = await attempt(model)
        except Exception as e:
            logger.warning("Chat model %s failed: %s", model, e)
            outcome = e
        state = step(state, models, outcome)
    return state
