"""View projection and UI-state reducers.

``project`` derives the visible task list from the raw list and a
``UIState``. The reducers below return a new ``UIState``; none of them
touch the repository.
"""

from collections.abc import Iterable
from datetime import datetime

from taskpad_mcp.enums import Priority, SearchMode, SortKey, StatusFilter
from taskpad_mcp.models.state import UIState
from taskpad_mcp.models.task import TaskModel, utcnow


def _matches_filter(task: TaskModel, status_filter: StatusFilter) -> bool:
    return status_filter == StatusFilter.ALL or task.status.value == status_filter.value


def _matches_query(task: TaskModel, query: str) -> bool:
    needle = query.casefold()
    for text in (task.title, task.description, task.category):
        if text and needle in text.casefold():
            return True
    return False


def _is_visible(task: TaskModel, state: UIState) -> bool:
    query = state.search_query.strip()
    if not query:
        return _matches_filter(task, state.filter)
    if state.search_mode == SearchMode.REPLACE:
        return _matches_query(task, query)
    return _matches_filter(task, state.filter) and _matches_query(task, query)


def sort_tasks(tasks: Iterable[TaskModel], sort_by: SortKey) -> list[TaskModel]:
    """Stable sort of ``tasks`` by one of the supported keys."""
    tasks = list(tasks)
    if sort_by == SortKey.PRIORITY:
        return sorted(tasks, key=lambda t: -t.priority.rank)
    if sort_by == SortKey.DUE_DATE:
        # tasks without a due date go last
        return sorted(tasks, key=lambda t: (t.due_date is None, t.due_date or datetime.min))
    if sort_by == SortKey.ALPHABETICAL:
        return sorted(tasks, key=lambda t: (t.title.casefold(), t.title))
    # Newest first; ids are monotonic so they break createdAt ties
    return sorted(tasks, key=lambda t: (t.created_at, t.id), reverse=True)


def project(tasks: Iterable[TaskModel], state: UIState) -> list[TaskModel]:
    """Filtered, searched and sorted view of ``tasks``."""
    return sort_tasks((t for t in tasks if _is_visible(t, state)), state.sort_by)


# -------------------- reducers --------------------


def set_filter(state: UIState, status_filter: StatusFilter) -> UIState:
    return state.model_copy(update={"filter": status_filter})


def set_search(state: UIState, query: str) -> UIState:
    return state.model_copy(update={"search_query": query})


def set_sort(state: UIState, sort_by: SortKey) -> UIState:
    return state.model_copy(update={"sort_by": sort_by})


def set_search_mode(state: UIState, mode: SearchMode) -> UIState:
    return state.model_copy(update={"search_mode": mode})


def select(state: UIState, task_ids: Iterable[int]) -> UIState:
    return state.model_copy(update={"selected": state.selected | frozenset(task_ids)})


def deselect(state: UIState, task_ids: Iterable[int]) -> UIState:
    return state.model_copy(update={"selected": state.selected - frozenset(task_ids)})


def toggle_selected(state: UIState, task_ids: Iterable[int]) -> UIState:
    return state.model_copy(update={"selected": state.selected ^ frozenset(task_ids)})


def select_all(state: UIState, visible_ids: Iterable[int]) -> UIState:
    """Select exactly the currently visible tasks."""
    return state.model_copy(update={"selected": frozenset(visible_ids)})


def clear_selection(state: UIState) -> UIState:
    return state.model_copy(update={"selected": frozenset()})


def toggle_expanded(state: UIState, task_id: int) -> UIState:
    return state.model_copy(update={"expanded": state.expanded ^ {task_id}})


def start_editing(state: UIState, task_id: int) -> UIState:
    return state.model_copy(update={"editing_id": task_id})


def stop_editing(state: UIState) -> UIState:
    return state.model_copy(update={"editing_id": None})


def forget_task(state: UIState, task_ids: Iterable[int]) -> UIState:
    """Drop deleted task ids from selection, expansion and edit mode."""
    gone = frozenset(task_ids)
    return state.model_copy(
        update={
            "selected": state.selected - gone,
            "expanded": state.expanded - gone,
            "editing_id": None if state.editing_id in gone else state.editing_id,
        }
    )


# -------------------- statistics --------------------


def summarize(tasks: Iterable[TaskModel], now: datetime | None = None) -> dict:
    """Counts by status, priority and category, plus overdue tasks."""
    now = now or utcnow()
    tasks = list(tasks)
    by_priority = {p.value: 0 for p in sorted(Priority, key=lambda p: p.rank, reverse=True)}
    by_category: dict[str, int] = {}
    completed = overdue = 0
    for task in tasks:
        by_priority[task.priority.value] += 1
        category = task.category or "(none)"
        by_category[category] = by_category.get(category, 0) + 1
        if task.is_completed:
            completed += 1
        elif task.is_overdue(now):
            overdue += 1
    return {
        "total": len(tasks),
        "pending": len(tasks) - completed,
        "completed": completed,
        "overdue": overdue,
        "by_priority": by_priority,
        "by_category": by_category,
    }
