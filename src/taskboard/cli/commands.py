# src/taskboard/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..sync.sync_client import SyncClient
from ..tasks.task_api import clean_task_input
from ..tasks.task_errors import TaskError, TaskNotFoundError, TaskValidationError
from ..tasks.task_models import Task, format_created

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /new, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _split_title_desc(args: list[str]) -> tuple[str, str | None]:
    """'/new Buy milk | 2 litres' -> ("Buy milk", "2 litres")."""
    raw = " ".join(args)
    title, sep, desc = raw.partition("|")
    return title, (desc if sep else None)


def _field_errors(e: TaskValidationError) -> str:
    return "\n".join(f"  {name}: {msg}" for name, msg in e.field_errors.items())


def _render_task(task: Task, *, full: bool = False) -> str:
    line = f"{task.id}  {task.title}"
    if task.description:
        desc = task.description if full else task.description.splitlines()[0][:60]
        line += f"\n    {desc}"
    line += f"\n    Created: {format_created(task)}"
    return line


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    infinite, page_size = state.run(_view_mode(state.client))
    mode = "INFINITE" if infinite else "REGULAR"
    interval = getattr(state.settings, "poll_interval_ms", 1000)
    return (
        "Status:\n"
        f"  View: {mode} (page size {page_size})\n"
        f"  Polling: every {interval} ms\n"
        f"  Tasks in store: {state.task_store.count_tasks()}"
    )


def cmd_new(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/new <title> [| <description>]"""
    title, desc = _split_title_desc(args)
    try:
        title, desc = clean_task_input(title, desc)
    except TaskValidationError as e:
        return "Cannot create task:\n" + _field_errors(e)

    try:
        task = state.run(state.client.create_task(title, desc))
    except TaskError:
        # Already surfaced through the notifier.
        return ""
    return _render_task(task)


# The helpers below touch SyncClient state, so they run as coroutines through
# state.run: on the sync loop thread, next to the poller.


async def _view_mode(client: SyncClient) -> tuple[bool, int]:
    return client.infinite, client.page_size


async def _open_list(client: SyncClient) -> tuple[list[Task], str | None]:
    client.mount()
    tasks = await client.visible_tasks()
    footer = None
    if client.infinite:
        if client.is_fetching_next_page:
            footer = "Loading more tasks..."
        elif client.has_next_page():
            footer = "(more: /more)"
    return tasks, footer


async def _load_more(state: AppState) -> list[Task] | None:
    if not await state.scroll.on_sentinel_visible(True):
        return None
    client = state.client
    pages = client.cache.get_data(client.pages_key) or []
    return pages[-1].items if pages else None


async def _switch_mode(client: SyncClient, infinite: bool) -> None:
    client.set_infinite(infinite)


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks, footer = state.run(_open_list(state.client))
    if not tasks:
        return "No tasks yet. Create your first task with /new <title>."

    lines = [_render_task(t) for t in tasks]
    if footer:
        lines.append(footer)
    return "\n".join(lines)


def cmd_more(state: AppState, args: list[str]) -> str:
    infinite, _ = state.run(_view_mode(state.client))
    if not infinite:
        return "Infinite scroll is off. Use /mode infinite."
    items = state.run(_load_more(state))
    if not items:
        return "No more tasks."
    return "\n".join(_render_task(t) for t in items)


def cmd_mode(state: AppState, args: list[str]) -> str:
    if not args or args[0].lower() not in ("regular", "infinite"):
        return "Usage: /mode regular | /mode infinite."
    state.run(_switch_mode(state.client, args[0].lower() == "infinite"))
    return f"List view: {args[0].lower()}."


def cmd_show(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /show <id>."
    try:
        task = state.run(state.client.get_task(args[0]))
    except TaskNotFoundError:
        return "Task not found. Back to tasks: /list"
    return _render_task(task, full=True)


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/edit <id> <title> [| <description>]"""
    if len(args) < 2:
        return "Usage: /edit <id> <title> [| <description>]."
    task_id = args[0]
    title, desc = _split_title_desc(args[1:])
    try:
        title, desc = clean_task_input(title, desc)
    except TaskValidationError as e:
        return "Cannot update task:\n" + _field_errors(e)

    try:
        task = state.run(state.client.update_task(task_id, title, desc))
    except TaskNotFoundError:
        return "Task not found. Back to tasks: /list"
    except TaskError:
        return ""
    return _render_task(task, full=True)


def cmd_del(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /del <id>."
    if emit:
        emit(f"Deleting {args[0]}...")
    state.run(state.client.delete_task(args[0]))
    # Outcome is reported by the notifier.
    return ""


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show view mode, polling and store size.")
registry.register("new", cmd_new, help_text="Create a task: /new <title> [| <description>].")
registry.register("list", cmd_list, help_text="Show the task list (newest first).", aliases=["ls"])
registry.register("more", cmd_more, help_text="Load the next page (infinite view).")
registry.register("mode", cmd_mode, help_text="Switch list view: /mode regular | /mode infinite.")
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> <title> [| <description>].")
registry.register("del", cmd_del, help_text="Delete a task: /del <id>.", aliases=["rm"])
