"""Utility functions for Taskpad MCP."""

from taskpad_mcp.utils.formatters import (
    _format_chat_markdown,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
    _format_templates_markdown,
)
from taskpad_mcp.utils.log import configure_logging
from taskpad_mcp.utils.parsers import _dump_tasks, _parse_task, _parse_tasks

__all__ = [
    "configure_logging",
    "_parse_task",
    "_parse_tasks",
    "_dump_tasks",
    "_format_task_concise",
    "_format_tasks_concise",
    "_format_task_markdown",
    "_format_tasks_markdown",
    "_format_templates_markdown",
    "_format_chat_markdown",
]
