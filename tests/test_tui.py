import curses
import time

import pytest

from minitodo import tui
from minitodo.models import AppState, FilterState, StatusFilter, Todo, TodoList
from minitodo.tui import (
    DAY_SECONDS,
    EMPTY,
    LIST_TOP,
    NO_TODOS,
    TITLE,
    TodoScreen,
    due_state,
    empty_message,
    format_date,
    header_line,
)

NOW = 1_717_200_000.0


def test_header_line_defaults():
    assert header_line(FilterState()) == "Filter: All | Status: All | Search: None"


def test_header_line_with_filters():
    filters = FilterState(category="Work", status=StatusFilter.PENDING, search="milk")

    assert header_line(filters) == "Filter: Work | Status: Pending | Search: milk"
    assert "Status: Done" in header_line(FilterState(status=StatusFilter.DONE))


def test_format_date_uses_local_calendar_date():
    ts = int(time.mktime((2024, 3, 9, 0, 0, 0, 0, 0, -1)))

    assert format_date(ts) == "2024-03-09"


def test_due_state():
    assert due_state(Todo(text="a"), now=NOW) is None
    assert due_state(Todo(text="a", due_date=int(NOW) - 1), now=NOW) == "overdue"
    assert due_state(Todo(text="a", due_date=int(NOW) + DAY_SECONDS), now=NOW) == "soon"
    assert due_state(Todo(text="a", due_date=int(NOW) + 3 * DAY_SECONDS), now=NOW) is None


def test_due_state_respects_soon_window():
    todo = Todo(text="a", due_date=int(NOW) + 3 * DAY_SECONDS)

    assert due_state(todo, now=NOW, soon_days=5) == "soon"
    assert due_state(Todo(text="a", due_date=int(NOW) + 60), now=NOW, soon_days=0) is None


class FakeWindow:
    """Records what the screen writes instead of drawing it"""

    def __init__(self, height: int = 12, width: int = 60, keys=(), lines=()):
        self.size = (height, width)
        self.keys = list(keys)
        self.lines = list(lines)
        self.writes: list[tuple[int, int, str, int]] = []
        self.getstr_calls: list[tuple[int, int, int]] = []

    def getmaxyx(self):
        return self.size

    def addnstr(self, y, x, text, n, attr):
        self.writes.append((y, x, text[:n], attr))

    def getstr(self, y, x, n):
        self.getstr_calls.append((y, x, n))
        return self.lines.pop(0)

    def getkey(self):
        return self.keys.pop(0)

    def keypad(self, flag):
        pass

    def erase(self):
        pass

    def refresh(self):
        pass

    def move(self, y, x):
        pass

    def clrtoeol(self):
        pass

    def row(self, y: int) -> list[tuple[int, str, int]]:
        return [(x, text, attr) for wy, x, text, attr in self.writes if wy == y]


@pytest.fixture
def fake_curses(monkeypatch):
    for name in ("curs_set", "echo", "noecho", "start_color", "use_default_colors", "init_pair"):
        monkeypatch.setattr(tui.curses, name, lambda *args: None)
    monkeypatch.setattr(tui.curses, "has_colors", lambda: True)
    # Distinct, recognisable attribute per color pair
    monkeypatch.setattr(tui.curses, "color_pair", lambda n: n << 8)


def _screen(window: FakeWindow, *todos: Todo, **state) -> TodoScreen:
    return TodoScreen(window, AppState(todos=TodoList(todos=list(todos)), **state))


def test_empty_message_tells_empty_from_filtered():
    assert empty_message(AppState()) == NO_TODOS
    state = AppState(todos=TodoList(todos=[Todo(text="a")]), filters=FilterState(search="zzz"))
    assert empty_message(state) == EMPTY


def test_draw_empty_list(fake_curses):
    window = FakeWindow()

    _screen(window).draw()

    assert window.row(0) == [(0, TITLE, curses.A_BOLD)]
    assert window.row(1)[0][1] == "Filter: All | Status: All | Search: None"
    assert window.row(LIST_TOP) == [(0, NO_TODOS, curses.A_NORMAL)]
    assert window.row(11)[0][1].startswith("a:Add")


def test_draw_fully_filtered_list(fake_curses):
    window = FakeWindow()

    _screen(window, Todo(text="Buy milk"), filters=FilterState(search="zzz")).draw()

    assert window.row(LIST_TOP) == [(0, EMPTY, curses.A_NORMAL)]


def test_draw_selected_row_is_reversed(fake_curses):
    window = FakeWindow()

    _screen(window, Todo(text="a"), Todo(text="b", category="Work"), selected=1).draw()

    assert all(not attr & curses.A_REVERSE for _, _, attr in window.row(LIST_TOP))
    second = window.row(LIST_TOP + 1)
    assert all(attr & curses.A_REVERSE for _, _, attr in second)
    assert [(x, text) for x, text, _ in second] == [(0, "[ ] "), (4, "b"), (6, "(Work)")]
    # category color is pair 4
    assert second[2][2] & (4 << 8)


def test_draw_done_row_uses_done_color(fake_curses):
    window = FakeWindow()

    _screen(window, Todo(text="a", done=True)).draw()

    (mark, text) = window.row(LIST_TOP)
    assert mark[1] == "[X] "
    assert text[2] == 1 << 8


def test_draw_overdue_date_right_aligned_in_color(fake_curses):
    window = FakeWindow(width=60)
    overdue = int(time.time()) - DAY_SECONDS
    soon = int(time.time()) + DAY_SECONDS // 2

    _screen(window, Todo(text="late", due_date=overdue), Todo(text="soon", due_date=soon), selected=1).draw()

    x, text, attr = window.row(LIST_TOP)[-1]
    assert (x, text) == (60 - 10 - 1, format_date(overdue))
    assert attr == 2 << 8

    x, text, attr = window.row(LIST_TOP + 1)[-1]
    assert text == format_date(soon)
    assert attr == curses.A_REVERSE | (3 << 8)


def test_draw_stops_above_prompt_line(fake_curses):
    window = FakeWindow(height=8)

    _screen(window, *(Todo(text=f"todo {i}") for i in range(10)), status="Added: todo 9").draw()

    drawn = {y for y, _, text, _ in window.writes if text.startswith("todo")}
    assert drawn == {3, 4, 5}
    assert window.row(6) == [(0, "Added: todo 9", curses.A_DIM)]


def test_prompt_reads_after_label(fake_curses):
    window = FakeWindow(height=10, lines=[b"Buy milk"])

    assert _screen(window).prompt("New todo: ") == "Buy milk"
    assert window.getstr_calls == [(8, len("New todo: "), 127)]


def test_prompt_on_narrow_terminal_keeps_room_for_input(fake_curses):
    window = FakeWindow(height=10, width=20, lines=[b"2030-01-02"])
    label = "Due date (YYYY-MM-DD or blank to clear): "

    assert _screen(window).prompt(label) == "2030-01-02"
    assert window.getstr_calls == [(8, 18, 127)]
    assert window.row(8) == [(0, label[:18], curses.A_NORMAL)]


def test_run_feeds_keys_to_the_shell(fake_curses):
    window = FakeWindow(keys=["a", " ", "q"], lines=[b"Buy milk"])
    screen = _screen(window)

    screen.run()

    assert screen.state.todos.todos == [Todo(text="Buy milk", done=True)]
    assert screen.state.status == "Completed: Buy milk"
