from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_validators import field_validator

MAX_TODOS = 100
MAX_LENGTH = 128


def clip(value: str, *, limit: int = MAX_LENGTH - 1) -> str:
    """Clip a string to `limit` UTF-8 bytes without splitting a character"""
    encoded = value.encode("utf-8")
    if len(encoded) <= limit:
        return value
    return encoded[:limit].decode("utf-8", errors="ignore")


class Todo(BaseModel):
    """A single task. `due_date` is a Unix timestamp, 0 meaning no due date."""

    model_config = ConfigDict(validate_assignment=True)

    text: str
    category: str = ""
    due_date: int = 0
    done: bool = False

    @field_validator("text", "category")
    @classmethod
    def _bounded(cls, value: str) -> str:
        # Stored in NUL-terminated buffers, so a NUL would cut the value short
        return clip(value.replace("\0", ""))

    @property
    def has_due_date(self) -> bool:
        return self.due_date > 0


class TodoList(BaseModel):
    """Ordered todos. Position is the only identity a todo has."""

    todos: list[Todo] = []

    @property
    def is_full(self) -> bool:
        return len(self.todos) >= MAX_TODOS

    def __len__(self) -> int:
        return len(self.todos)


class StatusFilter(IntEnum):
    ALL = -1
    PENDING = 0
    DONE = 1

    def next(self) -> StatusFilter:
        # ALL -> PENDING -> DONE -> ALL
        return StatusFilter((self.value + 2) % 3 - 1)

    @property
    def label(self) -> str:
        return self.name.capitalize()


class FilterState(BaseModel):
    """Transient view criteria. Never persisted."""

    category: str = ""
    status: StatusFilter = StatusFilter.ALL
    search: str = ""


class AppState(BaseModel):
    """Everything the shell and screen need, passed around explicitly."""

    todos: TodoList = Field(default_factory=TodoList)
    filters: FilterState = Field(default_factory=FilterState)
    selected: int = 0
    status: str = ""

