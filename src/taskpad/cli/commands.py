# src/taskpad/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_api import render_stats, render_view, resolve_task
from ..tasks.task_errors import TaskError
from ..tasks.task_models import Priority, TaskFilter

ConfirmPrompt = Callable[[str], bool]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], ConfirmPrompt | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

NOTHING_TO_CLEAR_MESSAGE = "No completed tasks to clear"
DUPLICATED_MESSAGE = "Task duplicated successfully"


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._raw: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        *,
        raw_args: bool = False,
    ) -> None:
        """
        raw_args=True hands the handler the untouched text after the command
        name as a single argument instead of whitespace-split tokens.
        """
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in [key, *aliases]:
            self._handlers[alias.lower()] = handler
            if raw_args:
                self._raw.add(alias.lower())

    def handle(
        self,
        state: AppState,
        line: str,
        confirm: ConfirmPrompt | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Task errors (validation, stale references) are posted to the notice
        board and yield an empty reply; the collection is left untouched.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""
        if name in self._raw:
            args = [rest] if rest else []
        else:
            args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, confirm)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except TaskError as e:
            logger.debug("Command /%s rejected: %s", name, e)
            state.notices.error(str(e))
            return ""

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any other line is added as a new task. Use /exit to quit.")
        return "\n".join(lines)


registry = CommandRegistry()


def _confirmed(state: AppState, confirm: ConfirmPrompt | None, question: str) -> bool:
    if confirm is None or not getattr(state.settings, "confirm_destructive", True):
        return True
    return bool(confirm(question))


def add_from_text(state: AppState, text: str) -> str:
    state.store.add_task(text)
    return render_view(state)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    return add_from_text(state, args[0] if args else "")


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list           -> current view
    /list <filter>  -> switch filter, then show
    """
    if args:
        return cmd_filter(state, args)
    return render_view(state)


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /toggle <number|id>."
    task = resolve_task(state, args[0])
    state.store.toggle_task(task.id)
    return render_view(state)


def cmd_delete(state: AppState, args: list[str], confirm: ConfirmPrompt | None = None) -> str:
    if not args:
        return "Usage: /delete <number|id>."
    task = resolve_task(state, args[0])
    if not _confirmed(state, confirm, f'Delete task: "{task.text}"?'):
        return "Cancelled."
    state.store.delete_task(task.id)
    return render_view(state)


def cmd_duplicate(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /dup <number|id>."
    task = resolve_task(state, args[0])
    state.store.duplicate_task(task.id)
    state.notices.success(DUPLICATED_MESSAGE)
    return render_view(state)


def cmd_priority(state: AppState, args: list[str]) -> str:
    """
    /priority <ref> high|normal|low
    """
    choices = "|".join(p.value for p in Priority)
    if len(args) < 2:
        return f"Usage: /priority <number|id> {choices}."
    task = resolve_task(state, args[0])
    state.store.change_priority(task.id, args[1])
    return render_view(state)


def cmd_filter(state: AppState, args: list[str]) -> str:
    choices = [f.value for f in TaskFilter]
    if not args or args[0].lower() not in choices:
        return f"Usage: /filter {'|'.join(choices)}."
    state.store.set_filter(args[0].lower())
    return render_view(state)


def cmd_clear(state: AppState, args: list[str], confirm: ConfirmPrompt | None = None) -> str:
    completed = state.store.stats().completed
    if completed == 0:
        state.notices.error(NOTHING_TO_CLEAR_MESSAGE)
        return ""
    if not _confirmed(
        state, confirm, f"Are you sure you want to delete {completed} completed task(s)?"
    ):
        return "Cancelled."
    removed = state.store.clear_completed()
    state.notices.success(f"{removed} task(s) deleted")
    return render_view(state)


def cmd_stats(state: AppState, args: list[str]) -> str:
    return render_stats(state.store.stats())


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <text>.", aliases=["a"], raw_args=True
)
registry.register(
    "list", cmd_list, help_text="Show tasks: /list [all|active|completed].", aliases=["ls"]
)
registry.register(
    "toggle", cmd_toggle, help_text="Mark done/undone: /toggle <number|id>.", aliases=["t", "done"]
)
registry.register(
    "delete", cmd_delete, help_text="Delete a task: /delete <number|id>.", aliases=["del", "rm"]
)
registry.register(
    "dup", cmd_duplicate, help_text="Duplicate a task: /dup <number|id>.", aliases=["copy"]
)
registry.register(
    "priority",
    cmd_priority,
    help_text="Set priority: /priority <number|id> high|normal|low.",
    aliases=["p"],
)
registry.register(
    "filter", cmd_filter, help_text="Choose view: /filter all|active|completed.", aliases=["f"]
)
registry.register("clear", cmd_clear, help_text="Delete all completed tasks.")
registry.register("stats", cmd_stats, help_text="Show total/completed/pending counters.")
