from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import SubtaskEntity, TodoEntity, TodoStatus
from .validation import parse_date


# PUBLIC_INTERFACE
class TaskInput(BaseModel):
    """
    Schema for creating or editing a todo or a subtask.

    Text and due date are validated by the store rather than here, so that a bad
    value produces the same user-facing message (and error notification) as any
    other caller would get.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "Buy groceries",
                "due_date": "2030-02-01",
            }
        }
    )

    text: str = Field(default="", description="Task text, 1..100 characters after trimming")
    due_date: Optional[str] = Field(
        default=None,
        description="Due date as an ISO8601 date ('2030-01-31') or datetime; must not be in the past",
    )


# PUBLIC_INTERFACE
class StatusInput(BaseModel):
    """Schema for setting an explicit todo status."""

    status: str = Field(..., description="Either 'pending' or 'completed'")


# PUBLIC_INTERFACE
class SortInput(BaseModel):
    order: str = Field(default="default", description="One of default, date-asc, date-desc")


# PUBLIC_INTERFACE
class FilterInput(BaseModel):
    status: str = Field(default="all", description="One of all, pending, completed")


# PUBLIC_INTERFACE
class SearchInput(BaseModel):
    term: str = Field(default="", description="Case-insensitive substring of todo text; empty resets the view")


# PUBLIC_INTERFACE
class SubtaskOut(BaseModel):
    """
    Schema returned by the API for a subtask.
    """

    id: str = Field(..., description="Unique identifier of the subtask")
    text: str = Field(..., description="Subtask text")
    status: TodoStatus = Field(..., description="pending or completed")
    due_date: Optional[date] = Field(default=None, description="Calendar due date")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "9f1c0f6e8a2b4d3c9e7a6b5c4d3e2f10",
                "text": "Buy groceries",
                "status": "pending",
                "due_date": "2030-02-01",
                "subtasks": [],
                "expanded": False,
            }
        }
    )

    id: str = Field(..., description="Unique identifier of the todo item")
    text: str = Field(..., description="Todo text")
    status: TodoStatus = Field(..., description="pending or completed")
    due_date: Optional[date] = Field(default=None, description="Calendar due date")
    subtasks: List[SubtaskOut] = Field(default_factory=list, description="Ordered subtasks")
    expanded: bool = Field(default=False, description="Whether subtasks are shown beneath the todo row")


# PUBLIC_INTERFACE
class StatsOut(BaseModel):
    """Aggregate completion statistics; todos and subtasks count as equal units."""

    total: int
    completed: int
    pending: int
    percentage: int = Field(..., description="Rounded completed/total percentage, 0 when empty")


# PUBLIC_INTERFACE
class RowOut(BaseModel):
    """
    One rendered row of the displayed list.
    """

    kind: Literal["todo", "subtask", "placeholder"]
    id: Optional[str] = None
    parent_id: Optional[str] = None
    text: str
    indent: int = 0
    subtask_count: int = 0
    expandable: bool = False
    expanded: bool = False
    due_label: str = ""
    status: Optional[TodoStatus] = None
    status_label: str = ""
    actions: List[str] = Field(default_factory=list)


# PUBLIC_INTERFACE
class ViewOut(BaseModel):
    """The displayed list, its rendered rows and the canonical statistics."""

    todos: List[TodoOut]
    rows: List[RowOut]
    stats: StatsOut


# PUBLIC_INTERFACE
class NotificationOut(BaseModel):
    message: str
    severity: Literal["info", "success", "error"]


class _PersistedBase(BaseModel):
    # Unknown keys written by newer versions are ignored.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    text: str
    status: TodoStatus = TodoStatus.PENDING
    due_date: Optional[date] = Field(default=None, alias="dueDate")

    @field_validator("due_date", mode="before")
    @classmethod
    def lenient_due_date(cls, v: object) -> Optional[date]:
        """
        Unreadable stored dates become None instead of failing the whole blob;
        they sort as the farthest future date.
        """
        return parse_date(v)  # type: ignore[arg-type]


class PersistedSubtask(_PersistedBase):
    """Stored shape of a subtask: {id, text, status, dueDate}."""

    def to_entity(self) -> SubtaskEntity:
        return {
            "id": self.id,
            "text": self.text,
            "status": self.status,
            "due_date": self.due_date,
        }


class PersistedTodo(_PersistedBase):
    """Stored shape of a todo: {id, text, status, dueDate, subtasks, expanded}."""

    subtasks: List[PersistedSubtask] = Field(default_factory=list)
    expanded: bool = False

    def to_entity(self) -> TodoEntity:
        return {
            "id": self.id,
            "text": self.text,
            "status": self.status,
            "due_date": self.due_date,
            "subtasks": [s.to_entity() for s in self.subtasks],
            "expanded": self.expanded,
        }
