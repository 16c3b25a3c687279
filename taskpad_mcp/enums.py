"""Enums for Taskpad MCP."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    CONCISE = "concise"  # One line per task, for chaining
    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"  # Machine-readable with all fields


class TaskStatus(str, Enum):
    """Lifecycle status of a task."""

    PENDING = "Pending"
    COMPLETED = "Completed"


class StatusFilter(str, Enum):
    """Status filter applied by the view projection."""

    ALL = "All"
    PENDING = "Pending"
    COMPLETED = "Completed"


class Priority(str, Enum):
    """Task priority levels."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"

    @property
    def rank(self) -> int:
        """Sort weight, Urgent highest."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
    Priority.URGENT: 4,
}


class SortKey(str, Enum):
    """Sort orders offered by the view projection."""

    DATE = "date"  # Newest first (default)
    PRIORITY = "priority"
    DUE_DATE = "dueDate"
    ALPHABETICAL = "alphabetical"


class SearchMode(str, Enum):
    """How a search query combines with the status filter."""

    AND = "and"  # Task must match both the filter and the query
    REPLACE = "replace"  # A non-empty query replaces the status filter


class SelectMode(str, Enum):
    """How ids passed to the select tool change the selection."""

    ADD = "add"
    REMOVE = "remove"
    TOGGLE = "toggle"


class Theme(str, Enum):
    """Persisted colour theme."""

    DARK = "dark"
    LIGHT = "light"


class ChatRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
