# src/todo_keeper/connectors/console_connector.py

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from ..cli.commands import CommandRegistry
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def format_task(task: dict[str, Any]) -> str:
    mark = "x" if task.get("completed") else " "
    line = f"[{mark}] {task.get('id')}  {task.get('text', '')}"
    category = task.get("category")
    if category:
        line += f"  #{category.get('name', '')}"
    if task.get("due_date"):
        line += f"  (due {task['due_date']})"
    if task.get("trashedAt"):
        line += f"  (trashed {task['trashedAt']})"
    return line


def format_categories(categories: list[dict[str, Any]]) -> str:
    """Indented tree; categories whose parent is missing are shown at the top level."""
    known = {c["id"] for c in categories}
    children: dict[int | None, list[dict[str, Any]]] = {}
    for c in categories:
        parent = c.get("parent_id")
        children.setdefault(parent if parent in known else None, []).append(c)

    lines: list[str] = []
    seen: set[int] = set()

    def walk(parent: int | None, depth: int) -> None:
        for c in children.get(parent, []):
            if c["id"] in seen:
                continue  # cycle or duplicate id
            seen.add(c["id"])
            lines.append(f"{'  ' * depth}- {c['id']}  {c['name']}  {c['color']}")
            walk(c["id"], depth + 1)

    walk(None, 0)
    return "\n".join(lines)


def _format_value(name: str, value: Any) -> str:
    if value is None:
        return "OK"
    if name == "load_categories":
        return format_categories(value) if value else "No categories."
    if isinstance(value, list):
        if not value:
            return "Empty."
        return "\n".join(format_task(t) for t in value)
    return str(value)


def handle_line(state: AppState, line: str, registry: CommandRegistry = command_registry) -> str | None:
    """
    Handle a console line like "/restore 5".

    Returns a reply string or None if the line is not a command.
    """
    if not line.startswith("/"):
        return None

    parts = line[1:].split(maxsplit=1)
    if not parts:
        return "Empty command. Use /help to list available commands."

    name = parts[0]
    rest = parts[1].strip() if len(parts) > 1 else ""

    if name.lower() in ("help", "h", "?"):
        return registry.build_help()

    spec = registry.get(name)
    if spec is None:
        return f"Unknown command: /{name}. Use /help to list available commands."

    params: dict[str, Any] = {}
    if spec.params:
        if not rest:
            return f"Usage: /{spec.name} " + " ".join(f"<{p}>" for p in spec.params)
        param = spec.params[0]
        if param == "id":
            try:
                params[param] = int(rest)
            except ValueError:
                return f"Invalid id: {rest!r}"
        else:
            try:
                params[param] = json.loads(rest)
            except ValueError as e:
                return f"Invalid JSON for {param}: {e}"

    result = registry.invoke(state, spec.name, **params)
    if not result.ok:
        return f"Error: {result.error}"
    return _format_value(spec.name, result.value)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (data_dir=%s).", state.store.resolver.data_dir)
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_line(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Commands start with '/'. Use /help to list available commands."
        _print_ts(reply)

    logger.info("Console connector finished.")
