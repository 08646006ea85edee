from __future__ import annotations

from minitodo.models import FilterState, StatusFilter, Todo


def matches(todo: Todo, filters: FilterState) -> bool:
    """
    Decide whether a todo is visible under the current filters.

    All criteria must hold:
      - status: `done` must agree with the filter unless it is ALL.
      - category: case-insensitive exact match.
      - search: case-insensitive substring of the text or the category.
    """
    if filters.status != StatusFilter.ALL and todo.done != bool(filters.status.value):
        return False

    if filters.category and todo.category.lower() != filters.category.lower():
        return False

    if filters.search:
        term = filters.search.lower()
        if term not in todo.text.lower() and term not in todo.category.lower():
            return False

    return True


def visible(todos: list[Todo], filters: FilterState) -> list[tuple[int, Todo]]:
    """(index, todo) pairs that pass the filters, in store order"""
    return [(i, t) for i, t in enumerate(todos) if matches(t, filters)]
