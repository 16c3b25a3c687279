"""Pytest configuration and fixtures for taskpad-mcp tests."""

import pytest

from taskpad_mcp.chat.relay import ChatRelay
from taskpad_mcp.chat.session import ChatSession, set_chat_session
from taskpad_mcp.core.ids import IdSource
from taskpad_mcp.core.repository import TaskRepository
from taskpad_mcp.core.storage import KeyValueStore, TaskStore
from taskpad_mcp.core.workspace import Workspace, set_workspace

MODELS = ["model-a", "model-b", "model-c"]


class FakeUpstream:
    """Stands in for the hosted chat model."""

    def __init__(self, reply="Hello from the assistant", errors=None):
        self.reply = reply
        self.errors = dict(errors or {})
        self.calls = []

    async def send(self, model, history, message):
        self.calls.append({"model": model, "history": history, "message": message})
        if model in self.errors:
            raise self.errors[model]
        return self.reply


@pytest.fixture
def kv(tmp_path):
    """Key-value store in a temporary directory."""
    return KeyValueStore(tmp_path / "data")


@pytest.fixture
def store(kv):
    """Typed task store with an empty (but present) task list."""
    store = TaskStore(kv)
    store.save_tasks([])
    return store


@pytest.fixture
def repository(store):
    """Repository starting from an empty list."""
    return TaskRepository(store, IdSource())


@pytest.fixture
def workspace(tmp_path):
    """Process-wide workspace over fresh storage (starts with the example tasks)."""
    ws = Workspace(tmp_path / "workspace")
    set_workspace(ws)
    yield ws
    set_workspace(None)


@pytest.fixture
def empty_workspace(tmp_path):
    """Process-wide workspace whose stored task list is empty."""
    data_dir = tmp_path / "empty-workspace"
    TaskStore(KeyValueStore(data_dir)).save_tasks([])
    ws = Workspace(data_dir)
    set_workspace(ws)
    yield ws
    set_workspace(None)


@pytest.fixture
def fake_upstream():
    return FakeUpstream()


@pytest.fixture
def relay(fake_upstream):
    return ChatRelay(fake_upstream, MODELS)


@pytest.fixture
def chat_session(relay, store):
    """Process-wide chat session backed by the fake upstream."""
    session = ChatSession(relay, store)
    set_chat_session(session)
    yield session
    set_chat_session(None)
