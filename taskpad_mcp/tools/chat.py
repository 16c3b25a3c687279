"""Chat helper MCP tools and the HTTP chat relay route."""

import json
from pathlib import Path

from mcp.types import ToolAnnotations
from starlette.requests import Request
from starlette.responses import JSONResponse

from taskpad_mcp.chat.session import get_chat_relay, get_chat_session
from taskpad_mcp.core.transfer import export_filename
from taskpad_mcp.enums import ResponseFormat
from taskpad_mcp.errors import TaskpadError
from taskpad_mcp.models.inputs import ChatHistoryInput, ChatInput, ExportInput
from taskpad_mcp.server import mcp
from taskpad_mcp.utils.formatters import _format_chat_markdown


@mcp.custom_route("/api/chat", methods=["POST"])
async def chat_endpoint(request: Request) -> JSONResponse:
    """POST {message, chatHistory} -> {message, success} or {error, details?}."""
    try:
        payload = await request.json()
    except ValueError:
        return JSONResponse({"error": "Request body must be valid JSON"}, status_code=400)
    status, body = await get_chat_relay().handle(payload)
    return JSONResponse(body, status_code=status)


@mcp.tool(
    name="taskpad_chat",
    annotations=ToolAnnotations(
        title="Ask the Assistant",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=True,
    ),
)
async def taskpad_chat(params: ChatInput) -> str:
    """
    Send a message to the task-management assistant and return its reply.

    The conversation is kept in the chat history; only one message can be in
    flight at a time.

    Examples:
        - params with message="How should I prioritize my week?"
    """
    try:
        reply = await get_chat_session().send(params.message)
    except TaskpadError as e:
        return f"Error: {e}"
    return reply.content


@mcp.tool(
    name="taskpad_chat_history",
    annotations=ToolAnnotations(
        title="Chat History",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_chat_history(params: ChatHistoryInput) -> str:
    """
    Show the stored conversation with the assistant.
    """
    messages = get_chat_session().messages
    if params.limit:
        messages = messages[-params.limit :]
    if params.response_format == ResponseFormat.JSON:
        return json.dumps([m.model_dump(mode="json") for m in messages], indent=2)
    return _format_chat_markdown(messages)


@mcp.tool(
    name="taskpad_chat_clear",
    annotations=ToolAnnotations(
        title="Clear Chat History",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_chat_clear() -> str:
    """
    Delete the stored conversation.
    """
    get_chat_session().clear()
    return "Chat history cleared."


@mcp.tool(
    name="taskpad_chat_export",
    annotations=ToolAnnotations(
        title="Export Chat History",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_chat_export(params: ExportInput) -> str:
    """
    Export the conversation as {messages, exportedAt}.

    With a directory, writes chat-history-YYYY-MM-DD.json there; otherwise
    returns the document inline.
    """
    document = get_chat_session().export()
    if not params.directory:
        return document
    path = Path(params.directory).expanduser() / export_filename("chat-history")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document, encoding="utf-8")
    except OSError as e:
        return f"Error: Could not write export - {e}"
    return f"Chat history exported to {path}"
