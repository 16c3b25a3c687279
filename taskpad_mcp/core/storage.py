"""Persistent store adapter backed by JSON documents on disk.

Each storage key maps to ``<root>/<key>.json``. Read and write failures are
logged and swallowed: a failed read looks like missing data and a failed
write is skipped, leaving the in-memory state as the source of truth.
"""

import json
import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from taskpad_mcp.enums import Theme
from taskpad_mcp.models.chat import ChatMessage
from taskpad_mcp.models.task import TaskModel, TemplateModel
from taskpad_mcp.utils.parsers import _dump_tasks, _parse_tasks

logger = logging.getLogger(__name__)

TASKS_KEY = "todo-tasks"
TEMPLATES_KEY = "todo-templates"
THEME_KEY = "todo-theme"
CHAT_HISTORY_KEY = "chatbot-history"

Listener = Callable[[str, Any], None]


class KeyValueStore:
    """JSON key-value storage with change notification."""

    def __init__(self, root: Path):
        self.root = Path(root)
        self._listeners: dict[str, list[Listener]] = {}
        self._mtimes: dict[str, int | None] = {}

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def _mtime(self, key: str) -> int | None:
        try:
            return self._path(key).stat().st_mtime_ns
        except OSError:
            return None

    def get(self, key: str) -> Any:
        """Return the parsed value for ``key``, or None if missing or unreadable."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s: %s", path, e)
            return None

    def set(self, key: str, value: Any) -> bool:
        """Write ``value`` under ``key``. Returns False if the write was skipped."""
        path = self._path(key)
        try:
            payload = json.dumps(value, indent=2)
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp, path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Skipped write of %s: %s", path, e)
            return False
        self._mtimes[key] = self._mtime(key)
        self._notify(key, value)
        return True

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove %s: %s", self._path(key), e)
            return
        self._mtimes[key] = None
        self._notify(key, None)

    def subscribe(self, key: str, listener: Listener) -> Callable[[], None]:
        """
        Call ``listener(key, value)`` whenever ``key`` changes.

        Writes through this store notify immediately; writes by other
        processes are picked up by ``poll()``. Returns an unsubscribe callable.
        """
        self._listeners.setdefault(key, []).append(listener)
        self._mtimes.setdefault(key, self._mtime(key))

        def unsubscribe() -> None:
            listeners = self._listeners.get(key, [])
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def poll(self) -> list[str]:
        """Notify listeners of keys changed on disk since last seen. Returns those keys."""
        changed = []
        for key in list(self._listeners):
            current = self._mtime(key)
            if current != self._mtimes.get(key):
                self._mtimes[key] = current
                changed.append(key)
                self._notify(key, self.get(key))
        return changed

    def _notify(self, key: str, value: Any) -> None:
        for listener in list(self._listeners.get(key, [])):
            listener(key, value)


class TaskStore:
    """Typed access to the task list, templates, theme and chat history."""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def load_tasks(self) -> list[TaskModel] | None:
        """Return the stored task list, or None if absent or unreadable."""
        raw = self.kv.get(TASKS_KEY)
        if raw is None:
            return None
        if not isinstance(raw, list):
            logger.warning("Stored task list is not an array; ignoring it")
            return None
        try:
            return _parse_tasks(raw)
        except ValidationError as e:
            logger.warning("Stored task list is malformed; ignoring it: %s", e)
            return None

    def save_tasks(self, tasks: list[TaskModel]) -> bool:
        return self.kv.set(TASKS_KEY, _dump_tasks(tasks))

    def load_templates(self) -> list[TemplateModel]:
        raw = self.kv.get(TEMPLATES_KEY)
        if not isinstance(raw, list):
            return []
        try:
            return [TemplateModel.model_validate(t) for t in raw]
        except ValidationError as e:
            logger.warning("Stored templates are malformed; ignoring them: %s", e)
            return []

    def save_templates(self, templates: list[TemplateModel]) -> bool:
        return self.kv.set(TEMPLATES_KEY, [t.to_record() for t in templates])

    def load_theme(self) -> Theme:
        raw = self.kv.get(THEME_KEY)
        try:
            return Theme(raw)
        except ValueError:
            return Theme.LIGHT

    def save_theme(self, theme: Theme) -> bool:
        return self.kv.set(THEME_KEY, theme.value)

    def load_chat_history(self) -> list[ChatMessage]:
        raw = self.kv.get(CHAT_HISTORY_KEY)
        if not isinstance(raw, list):
            return []
        try:
            return [ChatMessage.model_validate(m) for m in raw]
        except ValidationError as e:
            logger.warning("Stored chat history is malformed; ignoring it: %s", e)
            return []

    def save_chat_history(self, messages: list[ChatMessage]) -> bool:
        return self.kv.set(CHAT_HISTORY_KEY, [m.model_dump(mode="json") for m in messages])

    def clear_chat_history(self) -> None:
        self.kv.remove(CHAT_HISTORY_KEY)
