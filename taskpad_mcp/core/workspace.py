"""Single-user session wiring the task components together."""

import logging
from collections.abc import Callable
from pathlib import Path

from taskpad_mcp.core import view
from taskpad_mcp.core.bulk import BulkCoordinator
from taskpad_mcp.core.ids import IdSource
from taskpad_mcp.core.repository import TaskRepository
from taskpad_mcp.core.storage import THEME_KEY, KeyValueStore, TaskStore
from taskpad_mcp.core.transfer import TemplateLibrary
from taskpad_mcp.enums import Priority, Theme
from taskpad_mcp.models.state import UIState
from taskpad_mcp.models.task import TaskModel

logger = logging.getLogger(__name__)


class Workspace:
    """
    Store, repository, UI state, bulk coordinator and templates for one user.

    ``state`` is replaced (never mutated) by the view reducers.
    """

    def __init__(self, data_dir: Path):
        self.kv = KeyValueStore(data_dir)
        self.store = TaskStore(self.kv)
        self.ids = IdSource()
        self.repository = TaskRepository(self.store, self.ids)
        self.templates = TemplateLibrary(self.store, self.ids)
        self.bulk = BulkCoordinator(self.repository)
        self.state = UIState()
        self.theme = self.store.load_theme()
        self.kv.subscribe(THEME_KEY, self._on_theme_change)

    def visible_tasks(self) -> list[TaskModel]:
        return view.project(self.repository.tasks, self.state)

    def remove_task(self, task_id: int) -> bool:
        removed = self.repository.remove(task_id)
        if removed:
            self.state = view.forget_task(self.state, [task_id])
        return removed

    def select_all_visible(self) -> int:
        visible = [t.id for t in self.visible_tasks()]
        self.state = view.select_all(self.state, visible)
        return len(visible)

    def bulk_complete(self) -> int:
        count, self.state = self.bulk.complete(self.state)
        return count

    def bulk_delete(self) -> int:
        count, self.state = self.bulk.delete(self.state)
        return count

    def bulk_set_priority(self, priority: Priority) -> int:
        count, self.state = self.bulk.set_priority(self.state, priority)
        return count

    def set_theme(self, theme: Theme) -> None:
        self.theme = theme
        self.store.save_theme(theme)

    def watch_theme(self, listener: Callable[[Theme], None]) -> Callable[[], None]:
        """Call ``listener`` with the new theme whenever it changes."""

        def on_change(_key: str, value: object) -> None:
            listener(_parse_theme(value))

        return self.kv.subscribe(THEME_KEY, on_change)

    def sync(self) -> list[str]:
        """Pick up theme changes written by another process."""
        return self.kv.poll()

    def _on_theme_change(self, _key: str, value: object) -> None:
        theme = _parse_theme(value)
        if theme != self.theme:
            logger.info("Theme changed to %s", theme.value)
        self.theme = theme


def _parse_theme(value: object) -> Theme:
    try:
        return Theme(value)
    except ValueError:
        return Theme.LIGHT


_workspace: Workspace | None = None


def get_workspace() -> Workspace:
    """Return the process-wide workspace, building it from settings on first use."""
    global _workspace
    if _workspace is None:
        from taskpad_mcp.config import Settings

        settings = Settings.from_env()
        logger.info("Opening task data in %s", settings.data_dir)
        _workspace = Workspace(settings.data_dir)
    return _workspace


def set_workspace(workspace: Workspace | None) -> None:
    global _workspace
    _workspace = workspace
