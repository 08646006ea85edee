"""
Key dispatch for the browsing screen.

Keys are curses key names as returned by `getkey()` ("j", " ", "KEY_DOWN").
Text input goes through a `Prompt` callable that blocks until a line is
submitted, so the shell can be driven without a terminal.
"""

from __future__ import annotations

from collections.abc import Callable

from minitodo import operations
from minitodo.models import AppState

Prompt = Callable[[str], str]
Handler = Callable[[AppState, Prompt], str]

QUIT_KEY = "q"

HELP = "a:Add d:Delete Space:Toggle e:Edit D:Due c:Set-Cat C:Filter-Cat f:Filter-Status /:Search r:Reset q:Quit"


def _down(state: AppState, prompt: Prompt) -> str:
    if state.selected < len(state.todos) - 1:
        state.selected += 1
    return ""


def _up(state: AppState, prompt: Prompt) -> str:
    if state.selected > 0:
        state.selected -= 1
    return ""


def _add(state: AppState, prompt: Prompt) -> str:
    return operations.add_todo(state, prompt("New todo: "))


def _delete(state: AppState, prompt: Prompt) -> str:
    return operations.delete_todo(state, state.selected)


def _toggle(state: AppState, prompt: Prompt) -> str:
    return operations.toggle_todo(state, state.selected)


def _edit(state: AppState, prompt: Prompt) -> str:
    return operations.edit_todo(state, state.selected, prompt("Edit todo: "))


def _due(state: AppState, prompt: Prompt) -> str:
    return operations.set_due_date(state, state.selected, prompt("Due date (YYYY-MM-DD or blank to clear): "))


def _category(state: AppState, prompt: Prompt) -> str:
    return operations.set_category(state, state.selected, prompt("Category: "))


def _filter_category(state: AppState, prompt: Prompt) -> str:
    return operations.set_category_filter(state, prompt("Filter by category (blank for all): "))


def _filter_status(state: AppState, prompt: Prompt) -> str:
    return operations.cycle_status_filter(state)


def _search(state: AppState, prompt: Prompt) -> str:
    return operations.set_search(state, prompt("Search: "))


def _reset(state: AppState, prompt: Prompt) -> str:
    return operations.reset_filters(state)


KEYMAP: dict[str, Handler] = {
    "j": _down,
    "KEY_DOWN": _down,
    "k": _up,
    "KEY_UP": _up,
    "a": _add,
    "d": _delete,
    " ": _toggle,
    "e": _edit,
    "D": _due,
    "c": _category,
    "C": _filter_category,
    "f": _filter_status,
    "/": _search,
    "r": _reset,
}

# These act on the selected todo and need one to exist
ITEM_KEYS = frozenset({"d", " ", "e", "D", "c"})


def handle_key(state: AppState, key: str, prompt: Prompt) -> bool:
    """Apply one key press. Returns False once the user quits."""
    if key == QUIT_KEY:
        return False

    handler = KEYMAP.get(key)
    if handler is None:
        return True
    if key in ITEM_KEYS and not state.todos.todos:
        return True

    state.status = handler(state, prompt)
    return True
