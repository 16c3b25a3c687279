"""Pydantic models for Taskpad MCP."""

from taskpad_mcp.models.chat import ChatErrorBody, ChatMessage, ChatReply, ChatTurn
from taskpad_mcp.models.inputs import (
    AddSubtaskInput,
    AddTaskInput,
    BulkPriorityInput,
    ChatHistoryInput,
    ChatInput,
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
    SummaryInput,
    ThemeInput,
    ToggleSubtaskInput,
    ToggleTaskInput,
    UpdateTaskInput,
    UseTemplateInput,
)
from taskpad_mcp.models.state import UIState
from taskpad_mcp.models.task import SubtaskModel, TaskModel, TemplateModel

__all__ = [
    # Task models
    "TaskModel",
    "SubtaskModel",
    "TemplateModel",
    "UIState",
    # Chat models
    "ChatMessage",
    "ChatTurn",
    "ChatReply",
    "ChatErrorBody",
    # Task input models
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
    # Chat and auth input models
    "ChatInput",
    "ChatHistoryInput",
    "CredentialsInput",
]
