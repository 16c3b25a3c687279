"""Formatting utilities for task output."""

from datetime import datetime

from taskpad_mcp.models.chat import ChatMessage
from taskpad_mcp.models.task import TaskModel, TemplateModel

PRIORITY_MARKS = {"Urgent": "!!!", "High": "!!", "Medium": "!", "Low": ""}


def _format_task_concise(task: TaskModel, now: datetime | None = None) -> str:
    """
    Format a single task in concise format for token efficiency.

    Output: "#1718000000000: Write report (High, due:2024-12-31, cat:work, 1/3)"
    """
    title = task.title[:50]
    check = "x" if task.is_completed else " "

    meta = [task.priority.value]
    if task.due_date:
        meta.append(f"due:{task.due_date.date().isoformat()}")
    if task.is_overdue(now):
        meta.append("OVERDUE")
    if task.category:
        meta.append(f"cat:{task.category}")
    if task.subtasks:
        done = sum(1 for s in task.subtasks if s.completed)
        meta.append(f"{done}/{len(task.subtasks)}")

    return f"[{check}] #{task.id}: {title} ({', '.join(meta)})"


def _format_tasks_concise(tasks: list[TaskModel], title: str | None = None, now: datetime | None = None) -> str:
    """
    Format a list of tasks in concise format.

    Output:
    2 task(s) | Pending
    [ ] #1: Task one (High)
    [ ] #2: Task two (Medium)
    """
    if not tasks:
        return "0 tasks"

    header = f"{len(tasks)} task(s)"
    if title:
        header = f"{len(tasks)} task(s) | {title}"

    lines = [header]
    for task in tasks:
        lines.append(_format_task_concise(task, now))

    return "\n".join(lines)


def _format_task_markdown(
    task: TaskModel,
    expanded: bool = True,
    selected: bool = False,
    now: datetime | None = None,
) -> str:
    """Format a single task as markdown. Subtasks are listed when ``expanded``."""
    lines = []

    check = "x" if task.is_completed else " "
    marker = " (selected)" if selected else ""
    lines.append(f"### [{check}] {task.title} `#{task.id}`{marker}")

    details = [f"**Status**: {task.status.value}", f"**Priority**: {task.priority.value}"]
    if task.due_date:
        due = task.due_date.strftime("%Y-%m-%d %H:%M")
        if task.is_overdue(now):
            due += " (overdue)"
        details.append(f"**Due**: {due}")
    if task.category:
        details.append(f"**Category**: {task.category}")
    if task.completed_at:
        details.append(f"**Completed**: {task.completed_at.strftime('%Y-%m-%d %H:%M')}")
    lines.append(" | ".join(details))

    if task.description:
        lines.append("")
        lines.append(task.description)

    if task.subtasks:
        done = sum(1 for s in task.subtasks if s.completed)
        lines.append(f"**Subtasks** ({done}/{len(task.subtasks)}):")
        if expanded:
            for sub in task.subtasks:
                lines.append(f"  - [{'x' if sub.completed else ' '}] {sub.title} `#{sub.id}`")

    return "\n".join(lines)


def _format_tasks_markdown(
    tasks: list[TaskModel],
    title: str = "Tasks",
    expanded: frozenset[int] | None = None,
    selected: frozenset[int] | None = None,
    now: datetime | None = None,
) -> str:
    """Format a list of tasks as markdown."""
    if not tasks:
        return f"# {title}\n\nNo tasks found."

    expanded = expanded or frozenset()
    selected = selected or frozenset()
    lines = [f"# {title}", f"*{len(tasks)} task(s)*", ""]

    for task in tasks:
        lines.append(_format_task_markdown(task, task.id in expanded, task.id in selected, now))
        lines.append("")

    return "\n".join(lines)


def _format_templates_markdown(templates: list[TemplateModel]) -> str:
    if not templates:
        return "# Templates\n\nNo templates saved."
    lines = ["# Templates", ""]
    for template in templates:
        extra = f", {template.category}" if template.category else ""
        lines.append(f"- **{template.title}** `#{template.id}` ({template.priority.value}{extra})")
    return "\n".join(lines)


def _format_chat_markdown(messages: list[ChatMessage]) -> str:
    if not messages:
        return "# Chat\n\nNo messages yet."
    lines = ["# Chat", ""]
    for message in messages:
        who = "You" if message.role.value == "user" else "Assistant"
        lines.append(f"**{who}** ({message.timestamp.strftime('%H:%M')}): {message.content}")
        lines.append("")
    return "\n".join(lines)
