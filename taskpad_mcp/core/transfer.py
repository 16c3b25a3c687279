"""Task templates and JSON export / import."""

import json
import logging
from datetime import date, datetime

from pydantic import ValidationError

from taskpad_mcp.core.ids import IdSource
from taskpad_mcp.core.repository import TaskRepository
from taskpad_mcp.core.storage import TaskStore
from taskpad_mcp.errors import ImportRejectedError
from taskpad_mcp.models.chat import ChatMessage
from taskpad_mcp.models.task import SubtaskModel, TaskModel, TemplateModel, utcnow
from taskpad_mcp.utils.parsers import _dump_tasks, _parse_tasks

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = " (Template)"


def strip_template_suffix(title: str) -> str:
    if title.endswith(TEMPLATE_SUFFIX):
        return title[: -len(TEMPLATE_SUFFIX)]
    return title


class TemplateLibrary:
    """Persisted list of task templates."""

    def __init__(self, store: TaskStore, ids: IdSource):
        self.store = store
        self.ids = ids
        self._templates = store.load_templates()
        self.ids.observe(t.id for t in self._templates)

    @property
    def templates(self) -> list[TemplateModel]:
        return list(self._templates)

    def get(self, template_id: int) -> TemplateModel | None:
        return next((t for t in self._templates if t.id == template_id), None)

    def save_from(self, task: TaskModel) -> TemplateModel:
        """Snapshot a task's content (no status or timestamps) as a new template."""
        template = TemplateModel(
            id=self.ids.next(),
            title=task.title + TEMPLATE_SUFFIX,
            description=task.description,
            priority=task.priority,
            due_date=task.due_date,
            category=task.category,
            subtasks=[s.model_copy() for s in task.subtasks],
        )
        self._templates.append(template)
        self.store.save_templates(self._templates)
        return template

    def instantiate(self, template_id: int, repository: TaskRepository) -> TaskModel | None:
        """Create a fresh pending task from a template."""
        template = self.get(template_id)
        if template is None:
            return None
        task = repository.add(
            strip_template_suffix(template.title),
            description=template.description,
            priority=template.priority,
            due_date=template.due_date,
            category=template.category,
        )
        if task is not None and template.subtasks:
            subtasks = [SubtaskModel(id=self.ids.next(), title=s.title) for s in template.subtasks]
            repository.update(task.id, {"subtasks": subtasks})
        return task

    def remove(self, template_id: int) -> bool:
        template = self.get(template_id)
        if template is None:
            return False
        self._templates.remove(template)
        self.store.save_templates(self._templates)
        return True


def export_filename(prefix: str, today: date | None = None) -> str:
    """Download name such as ``tasks-2024-05-01.json``."""
    return f"{prefix}-{(today or utcnow().date()).isoformat()}.json"


def export_tasks(tasks: list[TaskModel]) -> str:
    """The whole task list as a bare JSON array."""
    return json.dumps(_dump_tasks(tasks), indent=2)


def parse_import(text: str) -> list[TaskModel]:
    """
    Parse an uploaded task export.

    Raises:
        ImportRejectedError: the text is not JSON, its top level is not an
            array, or an element is not a task record.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportRejectedError(f"Invalid JSON file: {e.msg}") from e
    if not isinstance(data, list):
        raise ImportRejectedError("Invalid file format: expected an array of tasks")
    try:
        tasks = _parse_tasks(data)
    except ValidationError as e:
        raise ImportRejectedError(f"Invalid file format: {e.error_count()} invalid task field(s)") from e
    logger.info("Parsed %d task(s) from import", len(tasks))
    return tasks


def export_chat(messages: list[ChatMessage], now: datetime | None = None) -> str:
    """Chat history export document ``{messages, exportedAt}``."""
    document = {
        "messages": [m.model_dump(mode="json") for m in messages],
        "exportedAt": (now or utcnow()).isoformat(),
    }
    return json.dumps(document, indent=2)
