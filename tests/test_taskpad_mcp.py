"""Tests for the Taskpad MCP server."""

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from taskpad_mcp import (
    AddSubtaskInput,
    AddTaskInput,
    BulkPriorityInput,
    DeleteSubtaskInput,
    DeleteTaskInput,
    DeleteTemplateInput,
    ExpandTaskInput,
    ExportInput,
    GetTaskInput,
    ImportTasksInput,
    ListTasksInput,
    ListTemplatesInput,
    Priority,
    ReorderTasksInput,
    ResponseFormat,
    SaveTemplateInput,
    SelectTasksInput,
    SubtaskModel,
    SummaryInput,
    TaskModel,
    TaskStatus,
    Theme,
    ThemeInput,
    ToggleSubtaskInput,
    ToggleTaskInput,
    UpdateTaskInput,
    UseTemplateInput,
    Workspace,
    _format_task_concise,
    _format_tasks_concise,
    _format_tasks_markdown,
    _parse_task,
    taskpad_add,
    taskpad_bulk_complete,
    taskpad_bulk_delete,
    taskpad_bulk_priority,
    taskpad_delete,
    taskpad_deselect_all,
    taskpad_expand,
    taskpad_export,
    taskpad_get,
    taskpad_import,
    taskpad_list,
    taskpad_reorder,
    taskpad_select,
    taskpad_select_all,
    taskpad_subtask_add,
    taskpad_subtask_delete,
    taskpad_subtask_toggle,
    taskpad_summary,
    taskpad_template_delete,
    taskpad_template_save,
    taskpad_template_use,
    taskpad_templates,
    taskpad_theme,
    taskpad_toggle,
    taskpad_update,
)

NOW = datetime(2024, 12, 1, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Models and helpers
# ============================================================================


class TestEnums:
    """Tests for enum definitions."""

    def test_priority_rank(self):
        """Test that Urgent ranks highest and Low lowest."""
        ranks = [p.rank for p in (Priority.LOW, Priority.MEDIUM, Priority.HIGH, Priority.URGENT)]
        assert ranks == sorted(ranks)

    def test_values(self):
        """Test persisted enum values."""
        assert TaskStatus.PENDING.value == "Pending"
        assert Theme.DARK.value == "dark"
        assert ResponseFormat.CONCISE.value == "concise"


class TestTaskModel:
    """Tests for TaskModel parsing."""

    def test_parse_persisted_record(self):
        """Test parsing a camelCase record."""
        task = _parse_task(
            {
                "id": 1718000000000,
                "title": "Write report",
                "status": "Completed",
                "priority": "High",
                "dueDate": "2024-12-31T17:00:00Z",
                "createdAt": "2024-12-01T09:00:00Z",
                "completedAt": "2024-12-02T09:00:00Z",
                "subtasks": [{"id": 1718000000001, "title": "Outline", "completed": True}],
            }
        )
        assert task.status == TaskStatus.COMPLETED
        assert task.priority == Priority.HIGH
        assert task.due_date == datetime(2024, 12, 31, 17, 0, tzinfo=timezone.utc)
        assert task.subtasks[0].completed is True

    def test_pending_task_drops_completion_stamp(self):
        """Test that completedAt is only kept for completed tasks."""
        task = _parse_task({"id": 1, "title": "x", "completedAt": "2024-12-02T09:00:00Z"})
        assert task.completed_at is None

    def test_naive_dates_are_utc(self):
        """Test that dates without an offset are read as UTC."""
        task = _parse_task({"id": 1, "title": "x", "dueDate": "2024-12-31T17:00"})
        assert task.due_date.tzinfo is not None

    def test_blank_optional_fields(self):
        """Test that blank strings become missing values."""
        task = _parse_task({"id": 1, "title": "", "description": " ", "category": "", "dueDate": ""})
        assert task.title == "Untitled Task"
        assert task.description is None
        assert task.category is None
        assert task.due_date is None

    def test_is_overdue(self):
        """Test the overdue check."""
        past = datetime(2024, 11, 1, tzinfo=timezone.utc)
        assert TaskModel(id=1, title="x", due_date=past).is_overdue(NOW) is True
        done = TaskModel(id=2, title="x", due_date=past, status=TaskStatus.COMPLETED)
        assert done.is_overdue(NOW) is False
        assert TaskModel(id=3, title="x").is_overdue(NOW) is False


class TestInputModels:
    """Tests for tool input validation."""

    def test_add_task_strips_title(self):
        """Test title whitespace handling."""
        assert AddTaskInput(title="  Buy milk  ").title == "Buy milk"

    def test_add_task_requires_title(self):
        """Test that an empty or blank title is rejected."""
        with pytest.raises(ValidationError):
            AddTaskInput(title="")
        with pytest.raises(ValidationError):
            AddTaskInput(title="   ")

    def test_add_task_rejects_unknown_priority(self):
        """Test that priority must be one of the four levels."""
        with pytest.raises(ValidationError):
            AddTaskInput(title="x", priority="Critical")

    def test_import_needs_exactly_one_source(self):
        """Test that import takes a path or inline content, not both."""
        with pytest.raises(ValidationError):
            ImportTasksInput()
        with pytest.raises(ValidationError):
            ImportTasksInput(path="a.json", content="[]")

    def test_select_requires_ids(self):
        """Test that an empty id list is rejected."""
        with pytest.raises(ValidationError):
            SelectTasksInput(task_ids=[])


class TestFormatters:
    """Tests for output formatting."""

    def test_concise_task(self):
        """Test the one-line task format."""
        task = TaskModel(
            id=1,
            title="Write report",
            priority=Priority.HIGH,
            due_date=datetime(2024, 12, 31, tzinfo=timezone.utc),
            category="work",
            subtasks=[
                SubtaskModel(id=2, title="a", completed=True),
                SubtaskModel(id=3, title="b"),
                SubtaskModel(id=4, title="c"),
            ],
        )
        assert _format_task_concise(task, NOW) == "[ ] #1: Write report (High, due:2024-12-31, cat:work, 1/3)"

    def test_concise_overdue(self):
        """Test the overdue marker."""
        task = TaskModel(id=1, title="Late", due_date=datetime(2024, 11, 1, tzinfo=timezone.utc))
        assert "OVERDUE" in _format_task_concise(task, NOW)

    def test_concise_list(self):
        """Test the concise list header."""
        tasks = [TaskModel(id=1, title="a"), TaskModel(id=2, title="b", status=TaskStatus.COMPLETED)]
        output = _format_tasks_concise(tasks, "Tasks", NOW)
        assert output.splitlines()[0] == "2 task(s) | Tasks"
        assert output.splitlines()[2].startswith("[x] #2")
        assert _format_tasks_concise([]) == "0 tasks"

    def test_markdown_list(self):
        """Test markdown output with selection and collapsed subtasks."""
        task = TaskModel(id=1, title="Parent", subtasks=[SubtaskModel(id=2, title="Child")])
        output = _format_tasks_markdown([task], "Tasks", expanded=frozenset(), selected=frozenset({1}), now=NOW)
        assert "### [ ] Parent `#1` (selected)" in output
        assert "**Subtasks** (0/1):" in output
        assert "Child" not in output

        expanded = _format_tasks_markdown([task], "Tasks", expanded=frozenset({1}), now=NOW)
        assert "  - [ ] Child `#2`" in expanded

    def test_markdown_empty(self):
        """Test the empty markdown list."""
        assert _format_tasks_markdown([], "Pending Tasks") == "# Pending Tasks\n\nNo tasks found."


# ============================================================================
# Task tools
# ============================================================================


class TestListAndGet:
    """Tests for taskpad_list and taskpad_get."""

    @pytest.mark.asyncio
    async def test_example_tasks_newest_first(self, workspace):
        """Test the initial list on fresh storage."""
        result = await taskpad_list(ListTasksInput(response_format=ResponseFormat.JSON))
        data = json.loads(result)
        assert data["total"] == 2
        assert [t["title"] for t in data["tasks"]] == ["Build To-Do App", "Study DSA"]
        assert data["view"]["sort_by"] == "date"

    @pytest.mark.asyncio
    async def test_filter_persists_between_calls(self, workspace):
        """Test that view settings stay in effect."""
        await taskpad_list(ListTasksInput(filter="Pending"))
        result = await taskpad_list(ListTasksInput(response_format=ResponseFormat.CONCISE))
        assert result.splitlines()[0] == "1 task(s) | Pending Tasks"
        assert "Study DSA" in result

    @pytest.mark.asyncio
    async def test_search(self, workspace):
        """Test search with the default mode."""
        result = await taskpad_list(ListTasksInput(search="dsa", response_format=ResponseFormat.CONCISE))
        assert "Study DSA" in result
        assert "Build To-Do App" not in result

    @pytest.mark.asyncio
    async def test_limit(self, workspace):
        """Test that limit truncates but total reports everything visible."""
        data = json.loads(await taskpad_list(ListTasksInput(limit=1, response_format=ResponseFormat.JSON)))
        assert data["total"] == 2
        assert data["count"] == 1

    @pytest.mark.asyncio
    async def test_empty_list(self, empty_workspace):
        """Test the markdown output for an empty list."""
        assert await taskpad_list(ListTasksInput()) == "# Tasks\n\nNo tasks found."

    @pytest.mark.asyncio
    async def test_get(self, workspace):
        """Test fetching a single task."""
        task = workspace.repository.tasks[0]
        result = await taskpad_get(GetTaskInput(task_id=task.id, response_format=ResponseFormat.JSON))
        assert json.loads(result)["title"] == "Study DSA"

    @pytest.mark.asyncio
    async def test_get_not_found(self, workspace):
        """Test the error for an unknown id."""
        result = await taskpad_get(GetTaskInput(task_id=1))
        assert result.startswith("Error: Task '1' not found.")
        assert "Tip:" in result


class TestEditTools:
    """Tests for add, update, toggle, delete, reorder and expand."""

    @pytest.mark.asyncio
    async def test_add(self, empty_workspace):
        """Test adding a task."""
        result = await taskpad_add(AddTaskInput(title="Buy milk", priority="High", category="home"))
        assert result.startswith("Task created successfully.")
        task = empty_workspace.repository.tasks[0]
        assert task.title == "Buy milk"
        assert task.priority == Priority.HIGH
        assert task.status == TaskStatus.PENDING

    @pytest.mark.asyncio
    async def test_update(self, empty_workspace):
        """Test editing fields, including clearing one."""
        task = empty_workspace.repository.add("Draft", category="work")
        result = await taskpad_update(UpdateTaskInput(task_id=task.id, title="Final", category=""))
        assert result.startswith(f"Task {task.id} updated.")
        assert task.title == "Final"
        assert task.category is None
        assert empty_workspace.state.editing_id is None

    @pytest.mark.asyncio
    async def test_update_nothing(self, empty_workspace):
        """Test that an update without fields is refused."""
        task = empty_workspace.repository.add("Draft")
        result = await taskpad_update(UpdateTaskInput(task_id=task.id))
        assert result.startswith("Error: Nothing to update")

    @pytest.mark.asyncio
    async def test_update_bad_date(self, empty_workspace):
        """Test that an unparsable due date is reported and nothing changes."""
        task = empty_workspace.repository.add("Draft")
        result = await taskpad_update(UpdateTaskInput(task_id=task.id, due_date="next tuesday"))
        assert result.startswith("Error: Invalid value")
        assert task.due_date is None

    @pytest.mark.asyncio
    async def test_update_not_found(self, empty_workspace):
        """Test editing an unknown task."""
        result = await taskpad_update(UpdateTaskInput(task_id=5, title="x"))
        assert result.startswith("Error: Task '5' not found.")

    @pytest.mark.asyncio
    async def test_toggle(self, empty_workspace):
        """Test toggling a task back and forth."""
        task = empty_workspace.repository.add("Study DSA")
        assert await taskpad_toggle(ToggleTaskInput(task_id=task.id)) == f"Task {task.id} marked as Completed."
        assert task.completed_at is not None
        assert await taskpad_toggle(ToggleTaskInput(task_id=task.id)) == f"Task {task.id} marked as Pending."
        assert task.completed_at is None

    @pytest.mark.asyncio
    async def test_delete(self, empty_workspace):
        """Test deleting a task also drops it from the selection."""
        task = empty_workspace.repository.add("Gone")
        await taskpad_select(SelectTasksInput(task_ids=[task.id]))
        assert await taskpad_delete(DeleteTaskInput(task_id=task.id)) == f"Task {task.id} deleted."
        assert len(empty_workspace.repository) == 0
        assert empty_workspace.state.selected == frozenset()
        assert (await taskpad_delete(DeleteTaskInput(task_id=task.id))).startswith("Error:")

    @pytest.mark.asyncio
    async def test_reorder(self, empty_workspace):
        """Test moving a task in front of another."""
        a = empty_workspace.repository.add("a")
        b = empty_workspace.repository.add("b")
        result = await taskpad_reorder(ReorderTasksInput(dragged_id=b.id, target_id=a.id))
        assert result == f"Task {b.id} moved before task {a.id}."
        assert [t.title for t in empty_workspace.repository.tasks] == ["b", "a"]

        same = await taskpad_reorder(ReorderTasksInput(dragged_id=a.id, target_id=a.id))
        assert same.startswith("Nothing to do")
        missing = await taskpad_reorder(ReorderTasksInput(dragged_id=a.id, target_id=1))
        assert missing.startswith("Error: Both tasks must exist")

    @pytest.mark.asyncio
    async def test_expand(self, empty_workspace):
        """Test expanding and collapsing a task."""
        task = empty_workspace.repository.add("Parent")
        assert await taskpad_expand(ExpandTaskInput(task_id=task.id)) == f"Task {task.id} expanded."
        assert await taskpad_expand(ExpandTaskInput(task_id=task.id)) == f"Task {task.id} collapsed."


class TestSubtaskTools:
    """Tests for subtask tools."""

    @pytest.mark.asyncio
    async def test_lifecycle(self, empty_workspace):
        """Test adding, toggling and removing a subtask."""
        task = empty_workspace.repository.add("Parent")
        result = await taskpad_subtask_add(AddSubtaskInput(task_id=task.id, title="Step 1"))
        sub = task.subtasks[0]
        assert result == f"Subtask #{sub.id} added to task {task.id}."

        toggled = await taskpad_subtask_toggle(ToggleSubtaskInput(task_id=task.id, subtask_id=sub.id))
        assert toggled == f"Subtask #{sub.id} marked done."

        removed = await taskpad_subtask_delete(DeleteSubtaskInput(task_id=task.id, subtask_id=sub.id))
        assert removed == f"Subtask #{sub.id} removed."
        assert task.subtasks == []

    @pytest.mark.asyncio
    async def test_unknown_subtask(self, empty_workspace):
        """Test errors for unknown ids."""
        task = empty_workspace.repository.add("Parent")
        result = await taskpad_subtask_toggle(ToggleSubtaskInput(task_id=task.id, subtask_id=1))
        assert result.startswith("Error: Subtask '1' not found")
        assert (await taskpad_subtask_add(AddSubtaskInput(task_id=1, title="x"))).startswith("Error:")


class TestSelectionAndBulk:
    """Tests for selection and bulk tools."""

    @pytest.mark.asyncio
    async def test_select_modes(self, empty_workspace):
        """Test add, remove and toggle selection modes."""
        a = empty_workspace.repository.add("a")
        b = empty_workspace.repository.add("b")
        await taskpad_select(SelectTasksInput(task_ids=[a.id, b.id]))
        await taskpad_select(SelectTasksInput(task_ids=[a.id], mode="remove"))
        assert empty_workspace.state.selected == {b.id}
        result = await taskpad_select(SelectTasksInput(task_ids=[a.id, b.id, 7], mode="toggle"))
        assert empty_workspace.state.selected == {a.id}
        assert "Tasks not found: 7" in result

    @pytest.mark.asyncio
    async def test_select_all_respects_view(self, workspace):
        """Test that select-all picks only the visible tasks."""
        await taskpad_list(ListTasksInput(filter="Pending"))
        assert await taskpad_select_all() == "1 task(s) selected."
        pending = [t.id for t in workspace.repository.tasks if t.status == TaskStatus.PENDING]
        assert workspace.state.selected == set(pending)
        assert await taskpad_deselect_all() == "Selection cleared."
        assert workspace.state.selected == frozenset()

    @pytest.mark.asyncio
    async def test_bulk_without_selection(self, workspace):
        """Test that bulk tools refuse an empty selection."""
        assert (await taskpad_bulk_complete()).startswith("Error: No tasks selected.")
        assert (await taskpad_bulk_delete()).startswith("Error: No tasks selected.")
        assert (await taskpad_bulk_priority(BulkPriorityInput(priority="High"))).startswith("Error:")

    @pytest.mark.asyncio
    async def test_bulk_complete_after_select_all(self, empty_workspace):
        """Test completing every task in the list."""
        for title in ("a", "b", "c"):
            empty_workspace.repository.add(title)
        await taskpad_select_all()
        assert await taskpad_bulk_complete() == "3 task(s) marked as Completed."
        assert all(t.status == TaskStatus.COMPLETED for t in empty_workspace.repository.tasks)
        assert empty_workspace.state.selected == frozenset()

    @pytest.mark.asyncio
    async def test_bulk_delete(self, empty_workspace):
        """Test deleting the selection."""
        a = empty_workspace.repository.add("a")
        b = empty_workspace.repository.add("b")
        await taskpad_select(SelectTasksInput(task_ids=[a.id]))
        assert await taskpad_bulk_delete() == "1 task(s) deleted."
        assert [t.id for t in empty_workspace.repository.tasks] == [b.id]

    @pytest.mark.asyncio
    async def test_bulk_priority(self, empty_workspace):
        """Test setting priority on the selection."""
        a = empty_workspace.repository.add("a")
        await taskpad_select(SelectTasksInput(task_ids=[a.id]))
        assert await taskpad_bulk_priority(BulkPriorityInput(priority="Urgent")) == "1 task(s) set to Urgent priority."
        assert a.priority == Priority.URGENT


class TestTemplateTools:
    """Tests for template tools."""

    @pytest.mark.asyncio
    async def test_save_list_use(self, empty_workspace):
        """Test the template workflow through the tools."""
        task = empty_workspace.repository.add("Weekly review", category="work")
        saved = await taskpad_template_save(SaveTemplateInput(task_id=task.id))
        template = empty_workspace.templates.templates[0]
        assert saved == f"Template #{template.id} saved: Weekly review (Template)"

        listing = await taskpad_templates(ListTemplatesInput())
        assert "Weekly review (Template)" in listing

        used = await taskpad_template_use(UseTemplateInput(template_id=template.id))
        assert used.startswith("Task created from template.")
        assert [t.title for t in empty_workspace.repository.tasks] == ["Weekly review", "Weekly review"]

    @pytest.mark.asyncio
    async def test_unknown_template(self, empty_workspace):
        """Test using a missing template."""
        result = await taskpad_template_use(UseTemplateInput(template_id=3))
        assert result.startswith("Error: Template '3' not found.")

    @pytest.mark.asyncio
    async def test_delete(self, empty_workspace):
        """Test deleting a template and deleting it again."""
        task = empty_workspace.repository.add("Weekly review")
        template = empty_workspace.templates.save_from(task)

        result = await taskpad_template_delete(DeleteTemplateInput(template_id=template.id))
        assert result == f"Template #{template.id} deleted."
        assert empty_workspace.templates.templates == []
        assert [t.title for t in empty_workspace.repository.tasks] == ["Weekly review"]

        again = await taskpad_template_delete(DeleteTemplateInput(template_id=template.id))
        assert again.startswith(f"Error: Template '{template.id}' not found.")


class TestExportImportTools:
    """Tests for export and import tools."""

    @pytest.mark.asyncio
    async def test_export_inline(self, workspace):
        """Test exporting without a directory."""
        data = json.loads(await taskpad_export(ExportInput()))
        assert [t["title"] for t in data] == ["Study DSA", "Build To-Do App"]

    @pytest.mark.asyncio
    async def test_export_to_directory_and_import(self, workspace, tmp_path):
        """Test writing an export file and importing it into a fresh list."""
        result = await taskpad_export(ExportInput(directory=str(tmp_path / "out")))
        path = result.removeprefix("Tasks exported to ")
        assert path.endswith(".json")

        workspace.repository.add("extra")
        imported = await taskpad_import(ImportTasksInput(path=path))
        assert imported == "Imported 2 task(s). The previous list was replaced."
        assert [t.title for t in workspace.repository.tasks] == ["Study DSA", "Build To-Do App"]

    @pytest.mark.asyncio
    async def test_import_resets_view_state(self, workspace):
        """Test that selection, expansion and edit mode do not outlive the replaced list."""
        old_id = workspace.repository.tasks[0].id
        await taskpad_select(SelectTasksInput(task_ids=[old_id]))
        await taskpad_expand(ExpandTaskInput(task_id=old_id))
        workspace.state = workspace.state.model_copy(update={"editing_id": old_id})

        document = json.dumps([{"id": 1, "title": "Imported"}])
        assert await taskpad_import(ImportTasksInput(content=document)) == (
            "Imported 1 task(s). The previous list was replaced."
        )
        assert workspace.state.selected == frozenset()
        assert workspace.state.expanded == frozenset()
        assert workspace.state.editing_id is None

    @pytest.mark.asyncio
    async def test_import_rejects_object(self, workspace):
        """Test that a non-array document leaves the list untouched."""
        before = workspace.repository.tasks
        result = await taskpad_import(ImportTasksInput(content='{"tasks": []}'))
        assert result == "Error: Invalid file format: expected an array of tasks"
        assert workspace.repository.tasks == before

    @pytest.mark.asyncio
    async def test_import_missing_file(self, workspace, tmp_path):
        """Test importing from a path that does not exist."""
        result = await taskpad_import(ImportTasksInput(path=str(tmp_path / "missing.json")))
        assert result.startswith("Error: Could not read import file")


class TestSummaryAndTheme:
    """Tests for summary and theme tools."""

    @pytest.mark.asyncio
    async def test_summary(self, workspace):
        """Test the summary for the example tasks."""
        result = await taskpad_summary(SummaryInput())
        assert "**Total Tasks**: 2" in result
        assert "**Pending**: 1" in result
        assert "**Completed**: 1" in result

        data = json.loads(await taskpad_summary(SummaryInput(response_format="json")))
        assert data["by_priority"]["Medium"] == 2

    @pytest.mark.asyncio
    async def test_theme_default_and_set(self, workspace):
        """Test reading and changing the theme."""
        assert await taskpad_theme(ThemeInput()) == "Theme: light"
        assert await taskpad_theme(ThemeInput(theme="dark")) == "Theme set to dark."
        assert workspace.store.load_theme() == Theme.DARK

    @pytest.mark.asyncio
    async def test_theme_change_from_another_session(self, workspace):
        """Test that a theme written by another client is picked up."""
        other = Workspace(workspace.kv.root)
        seen = []
        workspace.watch_theme(seen.append)
        other.set_theme(Theme.DARK)

        assert await taskpad_theme(ThemeInput()) == "Theme: dark"
        assert seen == [Theme.DARK]
