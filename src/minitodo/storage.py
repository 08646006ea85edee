"""
Fixed-layout binary persistence.

The file is a native `int` count followed by that many records laid out like
the C struct

    struct { char text[128]; char category[128]; time_t due_date; int done; }

including the trailing alignment padding. The layout is not versioned, so
changing any field width breaks files written earlier.
"""

from __future__ import annotations

import struct
from pathlib import Path

from minitodo.logging_utils import logger
from minitodo.models import MAX_LENGTH, MAX_TODOS, Todo, TodoList

COUNT = struct.Struct("@i")
RECORD = struct.Struct(f"@{MAX_LENGTH}s{MAX_LENGTH}sqi4x")


def _encode_str(value: str) -> bytes:
    # struct pads `s` fields with NULs; always leave room for the terminator
    return value.encode("utf-8")[: MAX_LENGTH - 1]


def _decode_str(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def encode(todos: TodoList) -> bytes:
    parts = [COUNT.pack(len(todos))]
    for todo in todos.todos:
        parts.append(
            RECORD.pack(_encode_str(todo.text), _encode_str(todo.category), todo.due_date, int(todo.done))
        )
    return b"".join(parts)


def decode(data: bytes) -> TodoList:
    """Decode a saved file. Raises ValueError on anything malformed."""
    if len(data) < COUNT.size:
        raise ValueError(f"File too short for record count ({len(data)} bytes).")

    (count,) = COUNT.unpack_from(data)
    if not 0 <= count <= MAX_TODOS:
        raise ValueError(f"Record count {count} out of range.")

    expected = COUNT.size + count * RECORD.size
    if len(data) < expected:
        raise ValueError(f"Truncated file: expected {expected} bytes, got {len(data)}.")

    todos = []
    for offset in range(COUNT.size, expected, RECORD.size):
        text, category, due_date, done = RECORD.unpack_from(data, offset)
        todos.append(
            Todo(text=_decode_str(text), category=_decode_str(category), due_date=due_date, done=bool(done))
        )
    return TodoList(todos=todos)


def load(path: Path) -> TodoList:
    """Load todos from `path`. Any problem yields an empty list."""
    try:
        with path.open("rb") as fh:
            data = fh.read()
    except FileNotFoundError:
        logger.info(f"No data file at {path}, starting empty.")
        return TodoList()
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return TodoList()

    try:
        todos = decode(data)
    except (ValueError, struct.error) as e:
        logger.warning(f"Ignoring unreadable data file {path}: {e}")
        return TodoList()

    logger.info(f"Loaded {len(todos)} todos from {path}.")
    return todos


def save(path: Path, todos: TodoList) -> bool:
    """Overwrite `path` with `todos`. Best effort: failures are logged, not raised."""
    try:
        with path.open("wb") as fh:
            fh.write(encode(todos))
    except (OSError, struct.error) as e:
        logger.error(f"Could not save todos to {path}: {e}")
        return False

    logger.info(f"Saved {len(todos)} todos to {path}.")
    return True
