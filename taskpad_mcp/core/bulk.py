"""Bulk operations over the selected tasks."""

import logging

from taskpad_mcp.core.repository import TaskRepository
from taskpad_mcp.core.view import clear_selection, forget_task
from taskpad_mcp.enums import Priority
from taskpad_mcp.models.state import UIState

logger = logging.getLogger(__name__)


class BulkCoordinator:
    """
    Applies one operation to every selected task, then clears the selection.

    Each task is updated independently; there is no rollback. Selected ids
    that no longer exist are skipped.
    """

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    def complete(self, state: UIState) -> tuple[int, UIState]:
        count = self.repository.complete_many(state.selected)
        logger.info("Bulk completed %d task(s)", count)
        return count, clear_selection(state)

    def delete(self, state: UIState) -> tuple[int, UIState]:
        count = self.repository.remove_many(state.selected)
        logger.info("Bulk deleted %d task(s)", count)
        return count, clear_selection(forget_task(state, state.selected))

    def set_priority(self, state: UIState, priority: Priority) -> tuple[int, UIState]:
        count = self.repository.set_priority_many(state.selected, priority)
        logger.info("Bulk set priority %s on %d task(s)", priority.value, count)
        return count, clear_selection(state)
