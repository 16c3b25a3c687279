"""Task list state: storage, repository, view projection, bulk operations and transfer."""

from taskpad_mcp.core.bulk import BulkCoordinator
from taskpad_mcp.core.ids import IdSource
from taskpad_mcp.core.repository import TaskRepository, seed_tasks
from taskpad_mcp.core.storage import KeyValueStore, TaskStore
from taskpad_mcp.core.transfer import TemplateLibrary, export_chat, export_filename, export_tasks, parse_import
from taskpad_mcp.core.view import project, sort_tasks, summarize
from taskpad_mcp.core.workspace import Workspace, get_workspace, set_workspace

__all__ = [
    "BulkCoordinator",
    "IdSource",
    "TaskRepository",
    "seed_tasks",
    "KeyValueStore",
    "TaskStore",
    "TemplateLibrary",
    "export_chat",
    "export_filename",
    "export_tasks",
    "parse_import",
    "project",
    "sort_tasks",
    "summarize",
    "Workspace",
    "get_workspace",
    "set_workspace",
]
