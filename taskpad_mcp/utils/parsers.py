"""Parser helpers for persisted and imported task data."""

from typing import Any

from taskpad_mcp.models.task import TaskModel


def _parse_task(task_dict: dict[str, Any]) -> TaskModel:
    """
    Parse a task dictionary into a TaskModel.

    Args:
        task_dict: Task record in the persisted camelCase shape

    Returns:
        TaskModel instance with validated data
    """
    return TaskModel.model_validate(task_dict)


def _parse_tasks(tasks: list[dict[str, Any]]) -> list[TaskModel]:
    """
    Parse a list of task dictionaries into TaskModel instances.

    Raises:
        pydantic.ValidationError: if any record is not task-shaped
    """
    return [TaskModel.model_validate(t) for t in tasks]


def _dump_tasks(tasks: list[TaskModel]) -> list[dict[str, Any]]:
    """Inverse of ``_parse_tasks``."""
    return [t.to_record() for t in tasks]
