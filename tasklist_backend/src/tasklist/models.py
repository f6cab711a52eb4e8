from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional, TypedDict


class TodoStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"

    def toggled(self) -> "TodoStatus":
        return TodoStatus.COMPLETED if self is TodoStatus.PENDING else TodoStatus.PENDING


# PUBLIC_INTERFACE
class SubtaskEntity(TypedDict):
    """
    A child task belonging to exactly one todo.

    Fields:
    - id: Unique opaque identifier
    - text: Trimmed text (1..100 chars), unique case-insensitively within the parent
    - status: pending or completed
    - due_date: Calendar due date; None only for stored records whose date was unreadable
    """

    id: str
    text: str
    status: TodoStatus
    due_date: Optional[date]


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A top-level task owned by the canonical collection.

    Fields:
    - id: Unique opaque identifier
    - text: Trimmed text (1..100 chars), unique case-insensitively in the collection
    - status: pending or completed
    - due_date: Calendar due date; None only for stored records whose date was unreadable
    - subtasks: Ordered subtasks
    - expanded: Display-only flag, meaningful when subtasks is non-empty
    """

    id: str
    text: str
    status: TodoStatus
    due_date: Optional[date]
    subtasks: List[SubtaskEntity]
    expanded: bool
