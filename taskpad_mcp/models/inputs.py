"""Input models for Taskpad MCP tools."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from taskpad_mcp.enums import (
    Priority,
    ResponseFormat,
    SearchMode,
    SelectMode,
    SortKey,
    StatusFilter,
    TaskStatus,
    Theme,
)

# ============================================================================
# Task Tool Input Models
# ============================================================================


class ListTasksInput(BaseModel):
    """Input model for listing the visible tasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    filter: StatusFilter | None = Field(
        default=None,
        description="Status filter: All, Pending or Completed (omit to keep the current one)",
    )
    search: str | None = Field(
        default=None,
        description="Case-insensitive text matched against title, description and category; '' clears it",
    )
    sort_by: SortKey | None = Field(
        default=None,
        description="Sort order: date (newest first), priority, dueDate or alphabetical",
    )
    search_mode: SearchMode | None = Field(
        default=None,
        description="'and' to search within the status filter, 'replace' to search across all statuses",
    )
    limit: int | None = Field(default=50, description="Maximum number of tasks to return", ge=1, le=500)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )


class GetTaskInput(BaseModel):
    """Input model for getting a single task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID to retrieve")
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )


class AddTaskInput(BaseModel):
    """Input model for adding a new task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., description="Task title (required)", min_length=1, max_length=500)
    description: str | None = Field(default=None, description="Optional free-text description")
    priority: Priority = Field(default=Priority.MEDIUM, description="Low, Medium, High or Urgent")
    due_date: datetime | None = Field(default=None, description="Due date-time, ISO 8601 (e.g. '2024-12-31T17:00')")
    category: str | None = Field(default=None, description="Optional category label")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()


class UpdateTaskInput(BaseModel):
    """Input model for editing a task. Omitted fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID to edit")
    title: str | None = Field(default=None, description="New title (blank becomes 'Untitled Task')")
    description: str | None = Field(default=None, description="New description (empty string to remove)")
    status: TaskStatus | None = Field(default=None, description="New status: Pending or Completed")
    priority: Priority | None = Field(default=None, description="New priority")
    due_date: str | None = Field(default=None, description="New due date-time, ISO 8601 (empty string to remove)")
    category: str | None = Field(default=None, description="New category (empty string to remove)")


class ToggleTaskInput(BaseModel):
    """Input model for flipping a task between Pending and Completed."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID to toggle")


class DeleteTaskInput(BaseModel):
    """Input model for deleting a task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID to delete")


class ReorderTasksInput(BaseModel):
    """Input model for moving a task before another one."""

    model_config = ConfigDict(str_strip_whitespace=True)

    dragged_id: int = Field(..., description="Task ID to move")
    target_id: int = Field(..., description="Task ID the moved task is placed in front of")


class ExpandTaskInput(BaseModel):
    """Input model for showing or hiding a task's subtasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID to expand or collapse")


# ============================================================================
# Subtask Input Models
# ============================================================================


class AddSubtaskInput(BaseModel):
    """Input model for adding a subtask."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Parent task ID")
    title: str = Field(..., description="Subtask title", min_length=1, max_length=500)


class ToggleSubtaskInput(BaseModel):
    """Input model for checking or unchecking a subtask."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Parent task ID")
    subtask_id: int = Field(..., description="Subtask ID")


class DeleteSubtaskInput(BaseModel):
    """Input model for removing a subtask."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Parent task ID")
    subtask_id: int = Field(..., description="Subtask ID")


# ============================================================================
# Selection and Bulk Input Models
# ============================================================================


class SelectTasksInput(BaseModel):
    """Input model for changing the selection."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_ids: list[int] = Field(..., description="Task IDs to select, deselect or toggle", min_length=1, max_length=500)
    mode: SelectMode = Field(default=SelectMode.ADD, description="'add', 'remove' or 'toggle'")


class BulkPriorityInput(BaseModel):
    """Input model for setting the priority of every selected task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    priority: Priority = Field(..., description="Low, Medium, High or Urgent")


# ============================================================================
# Template, Export and Import Input Models
# ============================================================================


class SaveTemplateInput(BaseModel):
    """Input model for saving a task as a template."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID to snapshot")


class UseTemplateInput(BaseModel):
    """Input model for creating a task from a template."""

    model_config = ConfigDict(str_strip_whitespace=True)

    template_id: int = Field(..., description="Template ID to instantiate")


class DeleteTemplateInput(BaseModel):
    """Input model for deleting a template."""

    model_config = ConfigDict(str_strip_whitespace=True)

    template_id: int = Field(..., description="Template ID to delete")


class ListTemplatesInput(BaseModel):
    """Input model for listing templates."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' or 'json'",
    )


class ExportInput(BaseModel):
    """Input model for exporting tasks or chat history."""

    model_config = ConfigDict(str_strip_whitespace=True)

    directory: str | None = Field(
        default=None,
        description="Directory to write the dated export file to; omit to return the JSON inline",
    )


class ImportTasksInput(BaseModel):
    """Input model for importing a task export. Replaces the whole list."""

    model_config = ConfigDict(str_strip_whitespace=True)

    path: str | None = Field(default=None, description="Path of a JSON export file")
    content: str | None = Field(default=None, description="JSON export document given inline")

    @model_validator(mode="after")
    def validate_source(self) -> "ImportTasksInput":
        if bool(self.path) == bool(self.content):
            raise ValueError("Provide exactly one of 'path' or 'content'")
        return self


class SummaryInput(BaseModel):
    """Input model for task statistics."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' or 'json'",
    )


class ThemeInput(BaseModel):
    """Input model for reading or changing the colour theme."""

    model_config = ConfigDict(str_strip_whitespace=True)

    theme: Theme | None = Field(default=None, description="'dark' or 'light'; omit to read the current theme")


# ============================================================================
# Chat and Auth Input Models
# ============================================================================


class ChatInput(BaseModel):
    """Input model for sending a chat message."""

    model_config = ConfigDict(str_strip_whitespace=True)

    message: str = Field(..., description="Message for the assistant", max_length=4000)


class ChatHistoryInput(BaseModel):
    """Input model for reading the chat history."""

    model_config = ConfigDict(str_strip_whitespace=True)

    limit: int | None = Field(default=None, description="Only return the most recent N messages", ge=1, le=500)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' or 'json'",
    )


class CredentialsInput(BaseModel):
    """Input model for sign-in and sign-up."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., description="Account email address")
    password: str = Field(..., description="Account password (at least 6 characters)")
