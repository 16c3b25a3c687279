"""Core task models for Taskpad MCP."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from taskpad_mcp.enums import Priority, TaskStatus

UNTITLED_TASK = "Untitled Task"


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class _Record(BaseModel):
    """Base for persisted records: camelCase on disk, snake_case in code."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        """Dump in the persisted (JSON, camelCase) shape."""
        return self.model_dump(mode="json", by_alias=True)


class SubtaskModel(_Record):
    """A checklist item owned by exactly one task."""

    id: int
    title: str
    completed: bool = False


class TaskModel(_Record):
    """A user-created unit of work."""

    id: int
    title: str = UNTITLED_TASK
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    category: str | None = None
    subtasks: list[SubtaskModel] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    completed_at: datetime | None = None

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, v: object) -> object:
        if v is None or (isinstance(v, str) and not v.strip()):
            return UNTITLED_TASK
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", "category", "due_date", "completed_at", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("due_date", "created_at", "completed_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)

    @model_validator(mode="after")
    def check_completion_stamp(self) -> TaskModel:
        # completed_at is present iff the task is completed
        if self.status == TaskStatus.PENDING:
            self.completed_at = None
        elif self.completed_at is None:
            self.completed_at = self.created_at
        return self

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def is_overdue(self, now: datetime | None = None) -> bool:
        """True when the due date has passed and the task is still pending."""
        if self.due_date is None or self.is_completed:
            return False
        return self.due_date < (now or utcnow())


class TemplateModel(_Record):
    """A saved task shape used to stamp out new tasks."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: int
    title: str
    description: str | None = None
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    category: str | None = None
    subtasks: list[SubtaskModel] = Field(default_factory=list)

    @field_validator("due_date")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)
