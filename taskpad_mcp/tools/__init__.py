"""MCP tool definitions for Taskpad."""

# Import all tools to register them with the MCP server
from taskpad_mcp.tools.auth import taskpad_sign_in, taskpad_sign_up
from taskpad_mcp.tools.chat import (
    chat_endpoint,
    taskpad_chat,
    taskpad_chat_clear,
    taskpad_chat_export,
    taskpad_chat_history,
)
from taskpad_mcp.tools.tasks import (
    taskpad_add,
    taskpad_bulk_complete,
    taskpad_bulk_delete,
    taskpad_bulk_priority,
    taskpad_delete,
    taskpad_deselect_all,
    taskpad_expand,
    taskpad_export,
    taskpad_get,
    taskpad_import,
    taskpad_list,
    taskpad_reorder,
    taskpad_select,
    taskpad_select_all,
    taskpad_subtask_add,
    taskpad_subtask_delete,
    taskpad_subtask_toggle,
    taskpad_summary,
    taskpad_template_delete,
    taskpad_template_save,
    taskpad_template_use,
    taskpad_templates,
    taskpad_theme,
    taskpad_toggle,
    taskpad_update,
)

__all__ = [
    # Task tools
    "taskpad_list",
    "taskpad_get",
    "taskpad_add",
    "taskpad_update",
    "taskpad_toggle",
    "taskpad_delete",
    "taskpad_reorder",
    "taskpad_expand",
    "taskpad_subtask_add",
    "taskpad_subtask_toggle",
    "taskpad_subtask_delete",
    "taskpad_select",
    "taskpad_select_all",
    "taskpad_deselect_all",
    "taskpad_bulk_complete",
    "taskpad_bulk_delete",
    "taskpad_bulk_priority",
    "taskpad_template_save",
    "taskpad_template_use",
    "taskpad_template_delete",
    "taskpad_templates",
    "taskpad_export",
    "taskpad_import",
    "taskpad_summary",
    "taskpad_theme",
    # Chat tools
    "taskpad_chat",
    "taskpad_chat_history",
    "taskpad_chat_clear",
    "taskpad_chat_export",
    "chat_endpoint",
    # Auth tools
    "taskpad_sign_in",
    "taskpad_sign_up",
]
