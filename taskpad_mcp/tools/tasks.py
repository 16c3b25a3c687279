"""Task list MCP tools."""

import json
from pathlib import Path

from mcp.types import ToolAnnotations

from taskpad_mcp.core import view
from taskpad_mcp.core.transfer import export_filename, export_tasks, parse_import
from taskpad_mcp.core.workspace import get_workspace
from taskpad_mcp.enums import ResponseFormat, SelectMode, StatusFilter
from taskpad_mcp.errors import TaskpadError
from taskpad_mcp.models.inputs import (
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
    ReorderTasksInput,
    SaveTemplateInput,
    SelectTasksInput,
    SummaryInput,
    ThemeInput,
    ToggleSubtaskInput,
    ToggleTaskInput,
    UpdateTaskInput,
    UseTemplateInput,
)
from taskpad_mcp.server import mcp
from taskpad_mcp.utils.formatters import (
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
    _format_templates_markdown,
)


def _not_found(task_id: int) -> str:
    return f"Error: Task '{task_id}' not found.\nTip: Use taskpad_list to find valid task IDs."


def _write_export(directory: str, prefix: str, document: str) -> str:
    path = Path(directory).expanduser() / export_filename(prefix)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document, encoding="utf-8")
    return str(path)


# ============================================================================
# Listing and single-task tools
# ============================================================================


@mcp.tool(
    name="taskpad_list",
    annotations=ToolAnnotations(
        title="List Tasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_list(params: ListTasksInput) -> str:
    """
    Show the task list as currently filtered, searched and sorted.

    Any of filter, search, sort_by and search_mode that are given replace the
    current view settings and stay in effect for later calls (including
    taskpad_select_all, which selects exactly the listed tasks).

    Args:
        params: ListTasksInput with optional view settings, limit and response_format

    Returns:
        Formatted list of visible tasks (concise, markdown or JSON)

    Examples:
        - Pending tasks only: params with filter="Pending"
        - Search: params with search="report"
        - Most urgent first: params with sort_by="priority"
    """
    ws = get_workspace()
    state = ws.state
    if params.filter is not None:
        state = view.set_filter(state, params.filter)
    if params.search is not None:
        state = view.set_search(state, params.search)
    if params.sort_by is not None:
        state = view.set_sort(state, params.sort_by)
    if params.search_mode is not None:
        state = view.set_search_mode(state, params.search_mode)
    ws.state = state

    tasks = ws.visible_tasks()
    total_count = len(tasks)
    if params.limit and len(tasks) > params.limit:
        tasks = tasks[: params.limit]

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {
                "total": total_count,
                "count": len(tasks),
                "view": state.model_dump(mode="json", exclude={"selected", "expanded", "editing_id"}),
                "selected": sorted(state.selected),
                "tasks": [t.to_record() for t in tasks],
            },
            indent=2,
        )

    title = "Tasks"
    if state.filter != StatusFilter.ALL:
        title = f"{state.filter.value} Tasks"
    if state.search_query:
        title += f" matching '{state.search_query}'"

    if params.response_format == ResponseFormat.CONCISE:
        return _format_tasks_concise(tasks, title)

    return _format_tasks_markdown(tasks, title, expanded=state.expanded, selected=state.selected)


@mcp.tool(
    name="taskpad_get",
    annotations=ToolAnnotations(
        title="Get Task Details",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_get(params: GetTaskInput) -> str:
    """
    Retrieve full details for a single task, including its subtasks.

    Args:
        params: GetTaskInput containing task_id and response_format

    Returns:
        Detailed task information
    """
    task = get_workspace().repository.get(params.task_id)
    if task is None:
        return _not_found(params.task_id)

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(task.to_record(), indent=2)

    if params.response_format == ResponseFormat.CONCISE:
        return _format_task_concise(task)

    return _format_task_markdown(task)


@mcp.tool(
    name="taskpad_add",
    annotations=ToolAnnotations(
        title="Add Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def taskpad_add(params: AddTaskInput) -> str:
    """
    Create a new pending task.

    Args:
        params: AddTaskInput containing title and optional description,
            priority, due_date and category

    Returns:
        Confirmation message with the created task ID

    Examples:
        - Simple task: params with title="Buy groceries"
        - Urgent task due Friday: params with title="Submit report", priority="Urgent",
          due_date="2024-12-06T17:00"
    """
    task = get_workspace().repository.add(
        params.title,
        description=params.description,
        priority=params.priority,
        due_date=params.due_date,
        category=params.category,
    )
    if task is None:
        return "Error: Title cannot be empty."
    return f"Task created successfully.\n{_format_task_concise(task)}"


@mcp.tool(
    name="taskpad_update",
    annotations=ToolAnnotations(
        title="Edit Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_update(params: UpdateTaskInput) -> str:
    """
    Edit a task's fields. Only the fields given are changed.

    CLEARING VALUES: use an empty string for description, due_date or category.

    Args:
        params: UpdateTaskInput containing task_id and the fields to change

    Returns:
        Confirmation message with the updated task
    """
    fields = params.model_dump(exclude={"task_id"}, exclude_none=True)
    if not fields:
        return "Error: Nothing to update. Provide at least one field to change."

    ws = get_workspace()
    ws.state = view.start_editing(ws.state, params.task_id)
    try:
        task = ws.repository.update(params.task_id, fields)
    except ValueError as e:
        return f"Error: Invalid value - {e}"
    finally:
        ws.state = view.stop_editing(ws.state)

    if task is None:
        return _not_found(params.task_id)
    return f"Task {params.task_id} updated.\n{_format_task_concise(task)}"


@mcp.tool(
    name="taskpad_toggle",
    annotations=ToolAnnotations(
        title="Toggle Task Status",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def taskpad_toggle(params: ToggleTaskInput) -> str:
    """
    Flip a task between Pending and Completed.

    Completing stamps the completion time; reopening clears it.
    """
    task = get_workspace().repository.toggle_status(params.task_id)
    if task is None:
        return _not_found(params.task_id)
    return f"Task {params.task_id} marked as {task.status.value}."


@mcp.tool(
    name="taskpad_delete",
    annotations=ToolAnnotations(
        title="Delete Task",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_delete(params: DeleteTaskInput) -> str:
    """
    Delete a task and all of its subtasks. This cannot be undone.
    """
    if not get_workspace().remove_task(params.task_id):
        return _not_found(params.task_id)
    return f"Task {params.task_id} deleted."


@mcp.tool(
    name="taskpad_reorder",
    annotations=ToolAnnotations(
        title="Reorder Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def taskpad_reorder(params: ReorderTasksInput) -> str:
    """
    Move a task so it sits immediately before another task in the stored order.
    """
    if params.dragged_id == params.target_id:
        return "Nothing to do: a task cannot be moved in front of itself."
    if not get_workspace().repository.reorder(params.dragged_id, params.target_id):
        return "Error: Both tasks must exist.\nTip: Use taskpad_list to find valid task IDs."
    return f"Task {params.dragged_id} moved before task {params.target_id}."


@mcp.tool(
    name="taskpad_expand",
    annotations=ToolAnnotations(
        title="Expand or Collapse Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def taskpad_expand(params: ExpandTaskInput) -> str:
    """
    Show or hide a task's subtasks in markdown listings.
    """
    ws = get_workspace()
    if ws.repository.get(params.task_id) is None:
        return _not_found(params.task_id)
    ws.state = view.toggle_expanded(ws.state, params.task_id)
    shown = "expanded" if params.task_id in ws.state.expanded else "collapsed"
    return f"Task {params.task_id} {shown}."


# ============================================================================
# Subtask tools
# ============================================================================


@mcp.tool(
    name="taskpad_subtask_add",
    annotations=ToolAnnotations(
        title="Add Subtask",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def taskpad_subtask_add(params: AddSubtaskInput) -> str:
    """
    Add a checklist item to a task.
    """
    subtask = get_workspace().repository.add_subtask(params.task_id, params.title)
    if subtask is None:
        return _not_found(params.task_id)
    return f"Subtask #{subtask.id} added to task {params.task_id}."


@mcp.tool(
    name="taskpad_subtask_toggle",
    annotations=ToolAnnotations(
        title="Toggle Subtask",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def taskpad_subtask_toggle(params: ToggleSubtaskInput) -> str:
    """
    Check or uncheck a subtask.
    """
    subtask = get_workspace().repository.toggle_subtask(params.task_id, params.subtask_id)
    if subtask is None:
        return f"Error: Subtask '{params.subtask_id}' not found on task '{params.task_id}'."
    state = "done" if subtask.completed else "not done"
    return f"Subtask #{subtask.id} marked {state}."


@mcp.tool(
    name="taskpad_subtask_delete",
    annotations=ToolAnnotations(
        title="Delete Subtask",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_subtask_delete(params: DeleteSubtaskInput) -> str:
    """
    Remove a subtask from its task.
    """
    if not get_workspace().repository.remove_subtask(params.task_id, params.subtask_id):
        return f"Error: Subtask '{params.subtask_id}' not found on task '{params.task_id}'."
    return f"Subtask #{params.subtask_id} removed."


# ============================================================================
# Selection and bulk tools
# ============================================================================


@mcp.tool(
    name="taskpad_select",
    annotations=ToolAnnotations(
        title="Select Tasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_select(params: SelectTasksInput) -> str:
    """
    Add tasks to, remove them from, or toggle them in the selection used by bulk tools.

    Unknown task IDs are ignored.
    """
    ws = get_workspace()
    known = [tid for tid in params.task_ids if ws.repository.get(tid) is not None]
    if params.mode == SelectMode.ADD:
        ws.state = view.select(ws.state, known)
    elif params.mode == SelectMode.REMOVE:
        ws.state = view.deselect(ws.state, known)
    else:
        ws.state = view.toggle_selected(ws.state, known)

    lines = [f"{len(ws.state.selected)} task(s) selected."]
    ignored = [str(tid) for tid in params.task_ids if tid not in known]
    if ignored:
        lines.append(f"**Note:** Tasks not found: {', '.join(ignored)}")
    return "\n".join(lines)


@mcp.tool(
    name="taskpad_select_all",
    annotations=ToolAnnotations(
        title="Select All Visible Tasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_select_all() -> str:
    """
    Select exactly the tasks visible under the current filter and search.
    """
    count = get_workspace().select_all_visible()
    return f"{count} task(s) selected."


@mcp.tool(
    name="taskpad_deselect_all",
    annotations=ToolAnnotations(
        title="Clear Selection",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_deselect_all() -> str:
    """
    Clear the selection.
    """
    ws = get_workspace()
    ws.state = view.clear_selection(ws.state)
    return "Selection cleared."


@mcp.tool(
    name="taskpad_bulk_complete",
    annotations=ToolAnnotations(
        title="Complete Selected Tasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_bulk_complete() -> str:
    """
    Complete every selected pending task, then clear the selection.

    Tasks that are already completed are left as they are.
    """
    ws = get_workspace()
    if not ws.state.selected:
        return "Error: No tasks selected.\nTip: Use taskpad_select or taskpad_select_all first."
    count = ws.bulk_complete()
    return f"{count} task(s) marked as Completed."


@mcp.tool(
    name="taskpad_bulk_delete",
    annotations=ToolAnnotations(
        title="Delete Selected Tasks",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_bulk_delete() -> str:
    """
    Delete every selected task with its subtasks, then clear the selection.
    """
    ws = get_workspace()
    if not ws.state.selected:
        return "Error: No tasks selected.\nTip: Use taskpad_select or taskpad_select_all first."
    count = ws.bulk_delete()
    return f"{count} task(s) deleted."


@mcp.tool(
    name="taskpad_bulk_priority",
    annotations=ToolAnnotations(
        title="Set Priority of Selected Tasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_bulk_priority(params: BulkPriorityInput) -> str:
    """
    Set the priority of every selected task, then clear the selection.
    """
    ws = get_workspace()
    if not ws.state.selected:
        return "Error: No tasks selected.\nTip: Use taskpad_select or taskpad_select_all first."
    count = ws.bulk_set_priority(params.priority)
    return f"{count} task(s) set to {params.priority.value} priority."


# ============================================================================
# Templates, export and import
# ============================================================================


@mcp.tool(
    name="taskpad_template_save",
    annotations=ToolAnnotations(
        title="Save Task as Template",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def taskpad_template_save(params: SaveTemplateInput) -> str:
    """
    Save a task's title, description, priority, due date, category and
    subtasks as a reusable template.
    """
    ws = get_workspace()
    task = ws.repository.get(params.task_id)
    if task is None:
        return _not_found(params.task_id)
    template = ws.templates.save_from(task)
    return f"Template #{template.id} saved: {template.title}"


@mcp.tool(
    name="taskpad_template_use",
    annotations=ToolAnnotations(
        title="Create Task from Template",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def taskpad_template_use(params: UseTemplateInput) -> str:
    """
    Create a new pending task from a saved template.
    """
    ws = get_workspace()
    task = ws.templates.instantiate(params.template_id, ws.repository)
    if task is None:
        return (
            f"Error: Template '{params.template_id}' not found.\n"
            f"Tip: Use taskpad_templates to list saved templates."
        )
    return f"Task created from template.\n{_format_task_concise(task)}"


@mcp.tool(
    name="taskpad_templates",
    annotations=ToolAnnotations(
        title="List Templates",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_templates(params: ListTemplatesInput) -> str:
    """
    List saved task templates.
    """
    templates = get_workspace().templates.templates
    if params.response_format == ResponseFormat.JSON:
        return json.dumps({"templates": [t.to_record() for t in templates]}, indent=2)
    return _format_templates_markdown(templates)


@mcp.tool(
    name="taskpad_template_delete",
    annotations=ToolAnnotations(
        title="Delete Template",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_template_delete(params: DeleteTemplateInput) -> str:
    """
    Delete a saved template. Tasks already created from it are kept.
    """
    if not get_workspace().templates.remove(params.template_id):
        return (
            f"Error: Template '{params.template_id}' not found.\n"
            f"Tip: Use taskpad_templates to list saved templates."
        )
    return f"Template #{params.template_id} deleted."


@mcp.tool(
    name="taskpad_export",
    annotations=ToolAnnotations(
        title="Export Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_export(params: ExportInput) -> str:
    """
    Export the whole task list as a JSON array.

    With a directory, writes tasks-YYYY-MM-DD.json there; otherwise returns the
    document inline.
    """
    document = export_tasks(get_workspace().repository.tasks)
    if not params.directory:
        return document
    try:
        path = _write_export(params.directory, "tasks", document)
    except OSError as e:
        return f"Error: Could not write export - {e}"
    return f"Tasks exported to {path}"


@mcp.tool(
    name="taskpad_import",
    annotations=ToolAnnotations(
        title="Import Tasks",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_import(params: ImportTasksInput) -> str:
    """
    Replace the whole task list with the tasks in a JSON export.

    The document must be a JSON array of task records; anything else is
    rejected and the current list is left untouched.
    """
    if params.path:
        try:
            text = Path(params.path).expanduser().read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return f"Error: Could not read import file - {e}"
    else:
        text = params.content or ""

    try:
        tasks = parse_import(text)
    except TaskpadError as e:
        return f"Error: {e}"

    ws = get_workspace()
    old_ids = [t.id for t in ws.repository.tasks]
    ws.repository.replace_all(tasks)
    ws.state = view.clear_selection(view.forget_task(ws.state, old_ids))
    return f"Imported {len(tasks)} task(s). The previous list was replaced."


# ============================================================================
# Summary and theme
# ============================================================================


@mcp.tool(
    name="taskpad_summary",
    annotations=ToolAnnotations(
        title="Task Summary",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_summary(params: SummaryInput) -> str:
    """
    Get a high-level overview of task statistics.

    Returns:
        Counts by status and priority, overdue tasks and top categories
    """
    stats = view.summarize(get_workspace().repository.tasks)
    if params.response_format == ResponseFormat.JSON:
        return json.dumps(stats, indent=2)

    lines = [
        "# Task Summary",
        "",
        f"**Total Tasks**: {stats['total']}",
        f"**Pending**: {stats['pending']}",
        f"**Completed**: {stats['completed']}",
        f"**Overdue**: {stats['overdue']}",
        "",
        "## By Priority",
    ]
    for name, count in stats["by_priority"].items():
        lines.append(f"- {name}: {count}")

    lines.extend(["", "## Top Categories"])
    sorted_categories = sorted(stats["by_category"].items(), key=lambda x: x[1], reverse=True)[:5]
    for category, count in sorted_categories:
        lines.append(f"- {category}: {count}")

    return "\n".join(lines)


@mcp.tool(
    name="taskpad_theme",
    annotations=ToolAnnotations(
        title="Colour Theme",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def taskpad_theme(params: ThemeInput) -> str:
    """
    Read or change the persisted colour theme shared with other clients.
    """
    ws = get_workspace()
    ws.sync()
    if params.theme is None:
        return f"Theme: {ws.theme.value}"
    ws.set_theme(params.theme)
    return f"Theme set to {ws.theme.value}."
