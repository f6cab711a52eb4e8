from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from .models import TodoEntity, TodoStatus
from .schemas import RowOut

TODO_ACTIONS = ["toggle", "add_subtask", "edit", "delete"]
SUBTASK_ACTIONS = ["toggle", "edit", "delete"]
NO_RESULTS_TEXT = "No todos found"


def format_due_date(value: Optional[date], date_format: str, placeholder: str) -> str:
    return value.strftime(date_format) if value is not None else placeholder


def _status_label(status: TodoStatus) -> str:
    return "Completed" if status == TodoStatus.COMPLETED else "Pending"


# PUBLIC_INTERFACE
def render_rows(
    displayed: Sequence[TodoEntity],
    date_format: str = "%d/%m/%Y",
    no_results: bool = False,
) -> List[RowOut]:
    """
    Project the displayed list onto presentation rows.

    Each todo yields one row; an expanded todo with subtasks is followed by one
    indented row per subtask. When `no_results` is set the result is a single
    placeholder row.
    """
    if no_results:
        return [RowOut(kind="placeholder", text=NO_RESULTS_TEXT)]

    rows: List[RowOut] = []
    for todo in displayed:
        subtasks = todo["subtasks"]
        rows.append(
            RowOut(
                kind="todo",
                id=todo["id"],
                text=todo["text"],
                subtask_count=len(subtasks),
                expandable=bool(subtasks),
                expanded=bool(subtasks) and todo["expanded"],
                due_label=format_due_date(todo["due_date"], date_format, "No Date"),
                status=todo["status"],
                status_label=_status_label(todo["status"]),
                actions=list(TODO_ACTIONS),
            )
        )
        if not (subtasks and todo["expanded"]):
            continue
        for sub in subtasks:
            rows.append(
                RowOut(
                    kind="subtask",
                    id=sub["id"],
                    parent_id=todo["id"],
                    text=sub["text"],
                    indent=1,
                    due_label=format_due_date(sub["due_date"], date_format, "-"),
                    status=sub["status"],
                    status_label=_status_label(sub["status"]),
                    actions=list(SUBTASK_ACTIONS),
                )
            )
    return rows
