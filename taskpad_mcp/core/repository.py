"""In-memory task repository with save-on-change persistence."""

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from taskpad_mcp.core.ids import IdSource
from taskpad_mcp.core.storage import TaskStore
from taskpad_mcp.enums import Priority, TaskStatus
from taskpad_mcp.models.task import SubtaskModel, TaskModel, utcnow

logger = logging.getLogger(__name__)

# Fields ``update`` may change; identity and timestamps are managed here
EDITABLE_FIELDS = frozenset({"title", "description", "status", "priority", "due_date", "category", "subtasks"})


def seed_tasks(ids: IdSource) -> list[TaskModel]:
    """Example tasks shown when nothing has been stored yet."""
    return [
        TaskModel(id=ids.next(), title="Study DSA"),
        TaskModel(id=ids.next(), title="Build To-Do App", status=TaskStatus.COMPLETED, completed_at=utcnow()),
    ]


def _set_status(task: TaskModel, status: TaskStatus) -> None:
    if task.status == status:
        return
    task.status = status
    task.completed_at = utcnow() if status == TaskStatus.COMPLETED else None


class TaskRepository:
    """
    Authoritative in-process copy of the task list.

    Every mutating call writes the whole list through the store, one write per
    call. Calls naming an unknown id are no-ops.
    """

    def __init__(self, store: TaskStore, ids: IdSource):
        self.store = store
        self.ids = ids
        loaded = store.load_tasks()
        if loaded is None:
            logger.info("No stored task list; starting from example tasks")
            loaded = seed_tasks(ids)
        self._tasks: list[TaskModel] = loaded
        self.ids.observe(self._all_ids())

    # -------------------- queries --------------------

    @property
    def tasks(self) -> list[TaskModel]:
        return list(self._tasks)

    def get(self, task_id: int) -> TaskModel | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    def _all_ids(self) -> Iterable[int]:
        for task in self._tasks:
            yield task.id
            for sub in task.subtasks:
                yield sub.id

    def _persist(self) -> None:
        self.store.save_tasks(self._tasks)

    # -------------------- task operations --------------------

    def add(
        self,
        title: str,
        description: str | None = None,
        priority: Priority = Priority.MEDIUM,
        due_date: datetime | None = None,
        category: str | None = None,
    ) -> TaskModel | None:
        """Append a new pending task. Returns None when the title is blank."""
        if not title or not title.strip():
            return None
        task = TaskModel(
            id=self.ids.next(),
            title=title,
            description=description,
            priority=priority,
            due_date=due_date,
            category=category,
        )
        self._tasks.append(task)
        logger.debug("Added task %s", task.id)
        self._persist()
        return task

    def update(self, task_id: int, fields: dict[str, Any]) -> TaskModel | None:
        """Merge ``fields`` into the task. Unknown keys are ignored."""
        task = self.get(task_id)
        if task is None:
            return None
        changes = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        status = changes.pop("status", None)
        # Run the merged record through validation so titles, enums and dates
        # are coerced exactly as on load
        merged = TaskModel.model_validate({**task.model_dump(), **changes})
        for name in changes:
            setattr(task, name, getattr(merged, name))
        if status is not None:
            _set_status(task, TaskStatus(status))
        logger.debug("Updated task %s: %s", task_id, sorted(fields))
        self._persist()
        return task

    def toggle_status(self, task_id: int) -> TaskModel | None:
        task = self.get(task_id)
        if task is None:
            return None
        new_status = TaskStatus.PENDING if task.is_completed else TaskStatus.COMPLETED
        _set_status(task, new_status)
        self._persist()
        return task

    def remove(self, task_id: int) -> bool:
        """Delete a task together with its subtasks."""
        return self.remove_many([task_id]) > 0

    def reorder(self, dragged_id: int, target_id: int) -> bool:
        """Move the dragged task to sit immediately before the target task."""
        if dragged_id == target_id:
            return False
        dragged = self.get(dragged_id)
        if dragged is None or self.get(target_id) is None:
            return False
        self._tasks.remove(dragged)
        target_index = next(i for i, t in enumerate(self._tasks) if t.id == target_id)
        self._tasks.insert(target_index, dragged)
        self._persist()
        return True

    def replace_all(self, tasks: list[TaskModel]) -> None:
        """Swap in a whole new task list (import)."""
        self._tasks = list(tasks)
        self.ids.observe(self._all_ids())
        logger.info("Replaced task list with %d task(s)", len(self._tasks))
        self._persist()

    # -------------------- multi-task operations --------------------

    def complete_many(self, task_ids: Iterable[int]) -> int:
        """Complete every pending task among ``task_ids``. Completed tasks are left as is."""
        wanted = set(task_ids)
        count = 0
        for task in self._tasks:
            if task.id in wanted and not task.is_completed:
                _set_status(task, TaskStatus.COMPLETED)
                count += 1
        self._persist()
        return count

    def remove_many(self, task_ids: Iterable[int]) -> int:
        wanted = set(task_ids)
        kept = [t for t in self._tasks if t.id not in wanted]
        removed = len(self._tasks) - len(kept)
        if not removed:
            return 0
        self._tasks = kept
        logger.debug("Removed %d task(s)", removed)
        self._persist()
        return removed

    def set_priority_many(self, task_ids: Iterable[int], priority: Priority) -> int:
        wanted = set(task_ids)
        count = 0
        for task in self._tasks:
            if task.id in wanted:
                task.priority = priority
                count += 1
        self._persist()
        return count

    # -------------------- subtasks --------------------

    def add_subtask(self, task_id: int, title: str) -> SubtaskModel | None:
        task = self.get(task_id)
        if task is None or not title or not title.strip():
            return None
        subtask = SubtaskModel(id=self.ids.next(), title=title.strip())
        task.subtasks.append(subtask)
        self._persist()
        return subtask

    def _find_subtask(self, task_id: int, subtask_id: int) -> tuple[TaskModel, SubtaskModel] | None:
        task = self.get(task_id)
        if task is None:
            return None
        for sub in task.subtasks:
            if sub.id == subtask_id:
                return task, sub
        return None

    def toggle_subtask(self, task_id: int, subtask_id: int) -> SubtaskModel | None:
        found = self._find_subtask(task_id, subtask_id)
        if found is None:
            return None
        _, sub = found
        sub.completed = not sub.completed
        self._persist()
        return sub

    def remove_subtask(self, task_id: int, subtask_id: int) -> bool:
        found = self._find_subtask(task_id, subtask_id)
        if found is None:
            return False
        task, sub = found
        task.subtasks.remove(sub)
        self._persist()
        return True
