"""
MCP Server for a personal task list.

This server provides tools to manage a to-do list kept in local JSON storage
(adding, editing, completing, filtering, sorting, bulk-editing, templating,
exporting and importing tasks), an AI chat helper relayed to a hosted model,
and sign-in against a hosted identity service.
"""

# Re-export enums
from taskpad_mcp.enums import (
    ChatRole,
    Priority,
    ResponseFormat,
    SearchMode,
    SelectMode,
    SortKey,
    StatusFilter,
    TaskStatus,
    Theme,
)

# Re-export errors
from taskpad_mcp.errors import (
    AuthError,
    ConfigurationError,
    ImportRejectedError,
    InputValidationError,
    RequestInFlightError,
    TaskpadError,
    UpstreamChatError,
)

# Re-export models
from taskpad_mcp.models import (
    AddSubtaskInput,
    AddTaskInput,
    BulkPriorityInput,
    ChatHistoryInput,
    ChatInput,
    ChatMessage,
    CredentialsInput,
    DeleteSubtaskInput,
    DeleteTaskInput,
    DeleteTemplateInput,
    ExpandTaskInput,
    ExportInput,
    GetTaskInput,
    ImportTasksInput,
    ListTasksInput,
    ListTemplatesInput,
    ReorderTasksInput,
    SaveTemplateInput,
    SelectTasksInput,
    SubtaskModel,
    SummaryInput,
    TaskModel,
    TemplateModel,
    ThemeInput,
    ToggleSubtaskInput,
    ToggleTaskInput,
    UIState,
    UpdateTaskInput,
    UseTemplateInput,
)

# Re-export core components
from taskpad_mcp.core import TaskRepository, Workspace, get_workspace, set_workspace

# Re-export MCP server instance
from taskpad_mcp.server import mcp

# Re-export tools
from taskpad_mcp.tools import (
    chat_endpoint,
    taskpad_add,
    taskpad_bulk_complete,
    taskpad_bulk_delete,
    taskpad_bulk_priority,
    taskpad_chat,
    taskpad_chat_clear,
    taskpad_chat_export,
    taskpad_chat_history,
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
    taskpad_sign_in,
    taskpad_sign_up,
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

# Re-export utilities (including private functions used by tests)
from taskpad_mcp.utils import (
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
    _parse_task,
    _parse_tasks,
)

__all__ = [
    # Enums
    "ResponseFormat",
    "TaskStatus",
    "StatusFilter",
    "Priority",
    "SortKey",
    "SearchMode",
    "SelectMode",
    "Theme",
    "ChatRole",
    # Errors
    "TaskpadError",
    "InputValidationError",
    "ImportRejectedError",
    "ConfigurationError",
    "RequestInFlightError",
    "AuthError",
    "UpstreamChatError",
    # Models
    "TaskModel",
    "SubtaskModel",
    "TemplateModel",
    "ChatMessage",
    "UIState",
    # Input models
    "ListTasksInput",
    "GetTaskInput",
    "AddTaskInput",
    "UpdateTaskInput",
    "ToggleTaskInput",
    "DeleteTaskInput",
    "ReorderTasksInput",
    "ExpandTaskInput",
    "AddSubtaskInput",
    "ToggleSubtaskInput",
    "DeleteSubtaskInput",
    "SelectTasksInput",
    "BulkPriorityInput",
    "SaveTemplateInput",
    "UseTemplateInput",
    "DeleteTemplateInput",
    "ListTemplatesInput",
    "ExportInput",
    "ImportTasksInput",
    "SummaryInput",
    "ThemeInput",
    "ChatInput",
    "ChatHistoryInput",
    "CredentialsInput",
    # Core
    "TaskRepository",
    "Workspace",
    "get_workspace",
    "set_workspace",
    # Server
    "mcp",
    # Tools
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
    "taskpad_chat",
    "taskpad_chat_history",
    "taskpad_chat_clear",
    "taskpad_chat_export",
    "chat_endpoint",
    "taskpad_sign_in",
    "taskpad_sign_up",
    # Utilities
    "_parse_task",
    "_parse_tasks",
    "_format_task_concise",
    "_format_task_markdown",
    "_format_tasks_concise",
    "_format_tasks_markdown",
]
