# src/todo_keeper/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from ..categories.category_models import Category
from ..core.records import RecordError, as_u64
from ..core.state import AppState
from ..storage.errors import TodoStoreError
from ..tasks.task_models import Task

CommandHandler = Callable[..., Any]

logger = logging.getLogger(__name__)


class CommandParamError(ValueError):
    """A command was called with missing, unexpected or ill-typed parameters."""


@dataclass(frozen=True, slots=True)
class CommandResult:
    ok: bool
    value: Any = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class CommandSpec:
    name: str
    handler: CommandHandler
    help_text: str
    params: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()


class CommandRegistry:
    """
    Fixed command surface of the store.

    Parameters and results cross this boundary in their JSON shape (plain dicts
    and lists). Store failures come back as display-ready error strings.
    """

    def __init__(self) -> None:
        self._commands: dict[str, CommandSpec] = {}
        self._aliases: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        params: list[str] | None = None,
        aliases: list[str] | None = None,
    ) -> None:
        spec = CommandSpec(
            name=name,
            handler=handler,
            help_text=help_text,
            params=tuple(params or ()),
            aliases=tuple(aliases or ()),
        )
        self._commands[name] = spec
        for alias in spec.aliases:
            self._aliases[alias.lower()] = name

    def get(self, name: str) -> CommandSpec | None:
        """Look up by exact command name or (case-insensitive) alias."""
        spec = self._commands.get(name)
        if spec is not None:
            return spec
        target = self._aliases.get(name.lower())
        return self._commands.get(target) if target else None

    def names(self) -> list[str]:
        return list(self._commands)

    def invoke(self, state: AppState, name: str, **params: Any) -> CommandResult:
        spec = self.get(name)
        if spec is None:
            return CommandResult(ok=False, error=f"Unknown command: {name}")

        missing = [p for p in spec.params if p not in params]
        unexpected = sorted(set(params) - set(spec.params))
        if missing or unexpected:
            parts = []
            if missing:
                parts.append(f"missing {', '.join(missing)}")
            if unexpected:
                parts.append(f"unexpected {', '.join(unexpected)}")
            return CommandResult(ok=False, error=f"Invalid parameters for {spec.name}: {'; '.join(parts)}")

        try:
            value = spec.handler(state, **params)
        except CommandParamError as e:
            logger.warning("Command %s rejected: %s", spec.name, e)
            return CommandResult(ok=False, error=str(e))
        except TodoStoreError as e:
            logger.warning("Command %s failed: %s", spec.name, e)
            return CommandResult(ok=False, error=str(e))

        return CommandResult(ok=True, value=value)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for spec in self._commands.values():
            usage = " ".join(f"<{p}>" for p in spec.params)
            alias = f" (aliases: {', '.join(spec.aliases)})" if spec.aliases else ""
            lines.append(f"  /{spec.name}{' ' + usage if usage else ''} - {spec.help_text}{alias}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- parameter conversion ----


def _id_param(value: Any) -> int:
    try:
        return as_u64("id", value)
    except RecordError as e:
        raise CommandParamError(f"Invalid parameter: {e}") from e


def _records_param(key: str, value: Any, record_type: type[Task] | type[Category]) -> list[Any]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        raise CommandParamError(f"Invalid parameter `{key}`: expected a list")
    out = []
    for idx, raw in enumerate(value):
        try:
            out.append(record_type.from_dict(raw))
        except RecordError as e:
            raise CommandParamError(f"Invalid parameter `{key}`: record {idx}: {e}") from e
    return out


def _dump(items: Sequence[Task] | Sequence[Category]) -> list[dict[str, Any]]:
    return [item.to_dict() for item in items]


# ---- handlers ----


def cmd_load_todos(state: AppState) -> list[dict[str, Any]]:
    todos = state.tasks.load_active()
    logger.info("Loaded %d todos", len(todos))
    return _dump(todos)


def cmd_save_todos(state: AppState, todos: Any) -> None:
    items = _records_param("todos", todos, Task)
    state.tasks.save_active(items)
    logger.info("Saved %d todos", len(items))


def cmd_load_trash(state: AppState) -> list[dict[str, Any]]:
    trash = state.tasks.load_trash()
    logger.info("Loaded %d trashed todos", len(trash))
    return _dump(trash)


def cmd_save_trash(state: AppState, todos: Any) -> None:
    items = _records_param("todos", todos, Task)
    state.tasks.save_trash(items)
    logger.info("Saved %d trashed todos", len(items))


def cmd_load_categories(state: AppState) -> list[dict[str, Any]]:
    categories = state.categories.load_categories()
    logger.info("Loaded %d categories", len(categories))
    return _dump(categories)


def cmd_save_categories(state: AppState, categories: Any) -> None:
    items = _records_param("categories", categories, Category)
    state.categories.save_categories(items)
    logger.info("Saved %d categories", len(items))


def cmd_delete_permanently(state: AppState, id: Any) -> None:
    state.tasks.delete_permanently(_id_param(id))


def cmd_restore(state: AppState, id: Any) -> None:
    state.tasks.restore(_id_param(id))


def cmd_trash(state: AppState, id: Any) -> None:
    state.tasks.trash(_id_param(id))


def cmd_empty_trash(state: AppState) -> None:
    state.tasks.empty_trash()


def cmd_clear_completed(state: AppState) -> None:
    state.tasks.trash_completed()


registry.register("load_todos", cmd_load_todos, help_text="List active todos.", aliases=["todos", "ls"])
registry.register("save_todos", cmd_save_todos, help_text="Replace all active todos.", params=["todos"])
registry.register("load_trash", cmd_load_trash, help_text="List trashed todos.", aliases=["trash"])
registry.register("get_trash_data", cmd_load_trash, help_text="List trashed todos (trash window).")
registry.register("save_trash", cmd_save_trash, help_text="Replace all trashed todos.", params=["todos"])
registry.register("load_categories", cmd_load_categories, help_text="List categories.", aliases=["categories"])
registry.register(
    "save_categories", cmd_save_categories, help_text="Replace all categories.", params=["categories"]
)
registry.register(
    "delete_todo_item_permanently",
    cmd_delete_permanently,
    help_text="Delete a trashed todo for good.",
    params=["id"],
    aliases=["delete", "rm"],
)
registry.register(
    "restore_todo_item",
    cmd_restore,
    help_text="Move a trashed todo back to the list.",
    params=["id"],
    aliases=["restore"],
)
registry.register("empty_trash_bin", cmd_empty_trash, help_text="Delete every trashed todo.", aliases=["empty"])
registry.register(
    "trash_todo_item",
    cmd_trash,
    help_text="Move an active todo to the trash.",
    params=["id"],
    aliases=["del"],
)
registry.register(
    "clear_completed", cmd_clear_completed, help_text="Move all completed todos to the trash.", aliases=["clear"]
)
