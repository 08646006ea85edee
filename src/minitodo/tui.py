"""Curses screen: draws the filtered list and reads keys and prompt lines."""

from __future__ import annotations

import curses
import time
from typing import Literal

from minitodo.filters import visible
from minitodo.logging_utils import logger
from minitodo.models import MAX_LENGTH, AppState, FilterState, Todo
from minitodo.settings import DisplaySpec
from minitodo.shell import HELP, handle_key

TITLE = "MINIMAL TODO TUI"
EMPTY = "No matching todos found."
NO_TODOS = "No todos yet."
DAY_SECONDS = 24 * 60 * 60
LIST_TOP = 3

DueState = Literal["overdue", "soon"]


def header_line(filters: FilterState) -> str:
    return (
        f"Filter: {filters.category or 'All'} | "
        f"Status: {filters.status.label} | "
        f"Search: {filters.search or 'None'}"
    )


def empty_message(state: AppState) -> str:
    """Line shown when no rows are visible"""
    return NO_TODOS if len(state.todos) == 0 else EMPTY


def format_date(timestamp: int) -> str:
    return time.strftime("%Y-%m-%d", time.localtime(timestamp))


def due_state(todo: Todo, *, now: float, soon_days: int = 2) -> DueState | None:
    """How urgent a todo's due date is, if it has one"""
    if not todo.has_due_date:
        return None
    if todo.due_date < now:
        return "overdue"
    if todo.due_date < now + soon_days * DAY_SECONDS:
        return "soon"
    return None


class TodoScreen:
    """Curses front end for one `AppState`."""

    def __init__(self, stdscr, state: AppState, display: DisplaySpec | None = None):
        self.stdscr = stdscr
        self.state = state
        self.display = display or DisplaySpec()
        curses.curs_set(0)
        self.stdscr.keypad(True)
        self._init_colors()

    def _init_colors(self) -> None:
        self.col_done = self.col_overdue = self.col_soon = self.col_category = curses.A_NORMAL
        if not curses.has_colors():
            self.col_done = curses.A_BOLD
            self.col_overdue = curses.A_STANDOUT
            self.col_soon = curses.A_UNDERLINE
            return

        curses.start_color()
        background = curses.COLOR_BLACK
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            pass

        names = (
            self.display.done_color,
            self.display.overdue_color,
            self.display.due_soon_color,
            self.display.category_color,
        )
        for pair, name in enumerate(names, 1):
            curses.init_pair(pair, getattr(curses, f"COLOR_{name.upper()}"), background)
        self.col_done, self.col_overdue, self.col_soon, self.col_category = (
            curses.color_pair(pair) for pair in range(1, 5)
        )

    def _put(self, y: int, x: int, text: str, attr: int = curses.A_NORMAL) -> None:
        height, width = self.stdscr.getmaxyx()
        if not 0 <= y < height or not 0 <= x < width - 1:
            return
        try:
            self.stdscr.addnstr(y, x, text, width - 1 - x, attr)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen
            pass

    def draw(self) -> None:
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()

        self._put(0, 0, TITLE, curses.A_BOLD)
        self._put(1, 0, header_line(self.state.filters))

        rows = visible(self.state.todos.todos, self.state.filters)
        y = LIST_TOP
        now = time.time()
        for idx, todo in rows:
            if y >= height - 2:
                break
            self._draw_row(y, width, todo, selected=idx == self.state.selected, now=now)
            y += 1

        if not rows:
            self._put(y, 0, empty_message(self.state))

        if self.state.status:
            self._put(height - 2, 0, self.state.status, curses.A_DIM)
        self._put(height - 1, 0, HELP)
        self.stdscr.refresh()

    def _draw_row(self, y: int, width: int, todo: Todo, *, selected: bool, now: float) -> None:
        base = curses.A_REVERSE if selected else curses.A_NORMAL

        self._put(y, 0, f"[{'X' if todo.done else ' '}] ", base)
        self._put(y, 4, todo.text, base | (self.col_done if todo.done else curses.A_NORMAL))
        if todo.category:
            self._put(y, 4 + len(todo.text) + 1, f"({todo.category})", base | self.col_category)

        if todo.has_due_date:
            date_str = format_date(todo.due_date)
            color = {"overdue": self.col_overdue, "soon": self.col_soon}.get(
                due_state(todo, now=now, soon_days=self.display.due_soon_days), curses.A_NORMAL
            )
            self._put(y, width - len(date_str) - 1, date_str, base | color)

    def prompt(self, label: str) -> str:
        """Read one line on the prompt row. Blocks the whole screen until Enter."""
        height, width = self.stdscr.getmaxyx()
        # Leave at least one column for input on narrow terminals
        column = min(len(label), max(width - 2, 0))
        self.stdscr.move(height - 2, 0)
        self.stdscr.clrtoeol()
        self._put(height - 2, 0, label[:column])

        curses.echo()
        curses.curs_set(1)
        try:
            raw = self.stdscr.getstr(height - 2, column, MAX_LENGTH - 1)
        finally:
            curses.noecho()
            curses.curs_set(0)

        return raw.decode("utf-8", errors="replace")

    def read_key(self) -> str:
        while True:
            try:
                return self.stdscr.getkey()
            except curses.error:
                # Interrupted read, e.g. by a terminal resize
                continue

    def run(self) -> None:
        self.draw()
        while handle_key(self.state, self.read_key(), self.prompt):
            self.draw()
        logger.debug("Quit requested.")


def start_curses(state: AppState, display: DisplaySpec | None = None) -> None:
    """Initialize curses and run the screen until the user quits"""

    def _main(stdscr) -> None:
        TodoScreen(stdscr, state, display).run()

    curses.wrapper(_main)
