# src/taskpad/tasks/task_api.py

from __future__ import annotations

"""
Display-side helpers over AppState.

Turns user references ("2", "task-...") into tasks and renders the
filtered view and counters as plain text for connectors.
"""

from ..core.state import AppState
from .task_errors import NotFoundError
from .task_models import Priority, Task, TaskStats

PRIORITY_ICONS = {
    Priority.HIGH: "🔴",
    Priority.NORMAL: "🟡",
    Priority.LOW: "🟢",
}

EMPTY_VIEW_TEXT = "No tasks here."


def resolve_task(state: AppState, ref: str) -> Task:
    """
    Find a task by 1-based row number in the current view or by full id.

    Raises NotFoundError when nothing matches.
    """
    ref = (ref or "").strip()
    if ref.isdigit():
        view = state.store.filtered_view()
        idx = int(ref) - 1
        if 0 <= idx < len(view):
            return view[idx]
        raise NotFoundError(f"#{ref}")
    return state.store.get_task(ref)


def priority_icon(priority: Priority) -> str:
    return PRIORITY_ICONS.get(priority, PRIORITY_ICONS[Priority.NORMAL])


def render_task(task: Task, number: int) -> str:
    box = "[x]" if task.completed else "[ ]"
    return f"{number:>2}. {box} {priority_icon(task.priority)} {task.text}"


def render_stats(stats: TaskStats) -> str:
    return f"Total: {stats.total} | Completed: {stats.completed} | Pending: {stats.pending}"


def render_view(state: AppState) -> str:
    store = state.store
    lines = [f"Filter: {store.current_filter.value}"]
    view = store.filtered_view()
    if not view:
        lines.append(EMPTY_VIEW_TEXT)
    else:
        lines.extend(render_task(t, i) for i, t in enumerate(view, start=1))
    lines.append(render_stats(store.stats()))
    return "\n".join(lines)
