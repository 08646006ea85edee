from __future__ import annotations

import re
import time

from minitodo.logging_utils import logger
from minitodo.models import MAX_TODOS, AppState, StatusFilter, Todo

# Three integers separated by dashes. Anything after the day is ignored.
_DATE_RE = re.compile(r"\s*([+-]?\d+)-\s*([+-]?\d+)-\s*([+-]?\d+)")


def add_todo(state: AppState, text: str) -> str:
    """Append a new todo and select it"""
    if not text:
        return ""
    if state.todos.is_full:
        logger.warning(f"Todo list is full, dropped: {text}")
        return f"List full ({MAX_TODOS} todos), not added."

    state.todos.todos.append(Todo(text=text))
    state.selected = len(state.todos) - 1
    return f"Added: {text}"


def delete_todo(state: AppState, idx: int) -> str:
    """Remove a todo, shifting the ones after it up"""
    removed = state.todos.todos.pop(idx)
    if state.selected >= len(state.todos) and state.selected > 0:
        state.selected -= 1
    return f"Deleted: {removed.text}"


def toggle_todo(state: AppState, idx: int) -> str:
    todo = state.todos.todos[idx]
    todo.done = not todo.done
    return f"{'Completed' if todo.done else 'Reopened'}: {todo.text}"


def edit_todo(state: AppState, idx: int, text: str) -> str:
    if not text:
        return ""
    state.todos.todos[idx].text = text
    return f"Edited: {text}"


def set_category(state: AppState, idx: int, category: str) -> str:
    todo = state.todos.todos[idx]
    todo.category = category
    return f"Category set: {category}" if category else f"Category cleared: {todo.text}"


def parse_due_date(value: str) -> int | None:
    """
    Turn `YYYY-MM-DD` into a timestamp at local midnight.

    Out-of-range months and days roll over the way mktime normalizes them,
    so 2024-13-45 becomes 2025-02-14. Returns None when the value does not
    scan as three integers or cannot be represented.
    """
    m = _DATE_RE.match(value)
    if m is None:
        return None

    year, month, day = (int(g) for g in m.groups())
    try:
        return int(time.mktime((year, month, day, 0, 0, 0, 0, 0, -1)))
    except (OverflowError, ValueError) as e:
        logger.warning(f"Cannot represent due date {value!r}: {e}")
        return None


def set_due_date(state: AppState, idx: int, value: str) -> str:
    """Set the due date; empty clears it, anything unparseable is ignored"""
    todo = state.todos.todos[idx]
    if not value:
        todo.due_date = 0
        return "Due date cleared."

    due = parse_due_date(value)
    if due is None:
        return f"Not a date: {value}"

    todo.due_date = due
    return f"Due date set: {time.strftime('%Y-%m-%d', time.localtime(due))}"


def set_category_filter(state: AppState, category: str) -> str:
    state.filters.category = category
    state.selected = 0
    return ""


def cycle_status_filter(state: AppState) -> str:
    state.filters.status = state.filters.status.next()
    state.selected = 0
    return ""


def set_search(state: AppState, term: str) -> str:
    state.filters.search = term
    state.selected = 0
    return ""


def reset_filters(state: AppState) -> str:
    state.filters.category = ""
    state.filters.status = StatusFilter.ALL
    state.filters.search = ""
    return "Filters reset."
