from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable

from .models import TodoEntity, TodoStatus


@dataclass(frozen=True)
class Stats:
    total: int = 0
    completed: int = 0
    pending: int = 0
    percentage: int = 0

    def as_dict(self) -> dict:
        return asdict(self)


# PUBLIC_INTERFACE
def compute_stats(todos: Iterable[TodoEntity]) -> Stats:
    """
    Count todos and subtasks as equal-weight units.

    percentage is completed/total rounded half up, and 0 for an empty collection.
    """
    total = 0
    completed = 0
    for todo in todos:
        total += 1 + len(todo["subtasks"])
        if todo["status"] == TodoStatus.COMPLETED:
            completed += 1
        completed += sum(1 for s in todo["subtasks"] if s["status"] == TodoStatus.COMPLETED)

    # integer form of floor(100 * completed / total + 0.5)
    percentage = 0 if total == 0 else (200 * completed + total) // (2 * total)
    return Stats(total=total, completed=completed, pending=total - completed, percentage=percentage)
