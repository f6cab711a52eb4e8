from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..deps import get_store
from ..schemas import StatusInput, SubtaskOut, TaskInput, TodoOut
from ..store import TodoStore

router = APIRouter(
    prefix="/api/v1/todos",
    tags=["todos"],
)

_NOT_FOUND = {404: {"description": "Todo or subtask not found"}}
_INVALID = {422: {"description": "Validation error"}}


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return the canonical collection in insertion order, subtasks included.",
)
def list_todos(store: TodoStore = Depends(get_store)) -> List[TodoOut]:
    return [TodoOut(**t) for t in store.todos]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description=(
        "Create a pending todo. Text must be 1..100 characters and unique "
        "(case-insensitive); the due date is required and may not be in the past."
    ),
    responses={201: {"description": "Todo created successfully"}, **_INVALID},
)
def create_todo(payload: TaskInput, store: TodoStore = Depends(get_store)) -> TodoOut:
    created = store.add_todo(payload.text, payload.due_date)
    return TodoOut(**created)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete All Todos",
    description="Delete every todo and subtask. Fails with 409 when there is nothing to delete.",
    responses={204: {"description": "All todos deleted"}, 409: {"description": "No todos to delete"}},
)
def delete_all_todos(store: TodoStore = Depends(get_store)) -> Response:
    store.delete_all_todos()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    responses=_NOT_FOUND,
)
def get_todo(todo_id: str, store: TodoStore = Depends(get_store)) -> TodoOut:
    return TodoOut(**store.get_todo(todo_id))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Edit Todo",
    description="Replace the text and due date of a todo; the duplicate check ignores the todo itself.",
    responses={**_NOT_FOUND, **_INVALID},
)
def edit_todo(todo_id: str, payload: TaskInput, store: TodoStore = Depends(get_store)) -> TodoOut:
    updated = store.edit_todo(todo_id, payload.text, payload.due_date)
    return TodoOut(**updated)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a todo and all of its subtasks.",
    responses={204: {"description": "Todo deleted"}, **_NOT_FOUND},
)
def delete_todo(todo_id: str, store: TodoStore = Depends(get_store)) -> Response:
    store.delete_todo(todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
@router.post(
    "/{todo_id}/toggle",
    response_model=TodoOut,
    summary="Toggle Todo Status",
    description="Flip a todo between pending and completed.",
    responses=_NOT_FOUND,
)
def toggle_todo(todo_id: str, store: TodoStore = Depends(get_store)) -> TodoOut:
    return TodoOut(**store.toggle_todo_status(todo_id))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}/status",
    response_model=TodoOut,
    summary="Set Todo Status",
    responses={**_NOT_FOUND, **_INVALID},
)
def set_todo_status(todo_id: str, payload: StatusInput, store: TodoStore = Depends(get_store)) -> TodoOut:
    return TodoOut(**store.update_todo_status(todo_id, payload.status))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "/{todo_id}/expand",
    response_model=TodoOut,
    summary="Expand/Collapse Subtasks",
    description="Toggle whether subtasks are shown under the todo. Fails with 409 when it has none.",
    responses={**_NOT_FOUND, 409: {"description": "No subtasks to show"}},
)
def toggle_expand(todo_id: str, store: TodoStore = Depends(get_store)) -> TodoOut:
    return TodoOut(**store.toggle_expand(todo_id))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "/{todo_id}/subtasks",
    response_model=SubtaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add Subtask",
    description="Add a pending subtask; text must be unique within the parent. Expands the parent.",
    responses={201: {"description": "Subtask created"}, **_NOT_FOUND, **_INVALID},
)
def add_subtask(todo_id: str, payload: TaskInput, store: TodoStore = Depends(get_store)) -> SubtaskOut:
    created = store.add_subtask(todo_id, payload.text, payload.due_date)
    return SubtaskOut(**created)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}/subtasks/{subtask_id}",
    response_model=SubtaskOut,
    summary="Edit Subtask",
    responses={**_NOT_FOUND, **_INVALID},
)
def edit_subtask(
    todo_id: str, subtask_id: str, payload: TaskInput, store: TodoStore = Depends(get_store)
) -> SubtaskOut:
    updated = store.edit_subtask(todo_id, subtask_id, payload.text, payload.due_date)
    return SubtaskOut(**updated)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}/subtasks/{subtask_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Subtask",
    responses={204: {"description": "Subtask deleted"}, **_NOT_FOUND},
)
def delete_subtask(todo_id: str, subtask_id: str, store: TodoStore = Depends(get_store)) -> Response:
    store.delete_subtask(todo_id, subtask_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
@router.post(
    "/{todo_id}/subtasks/{subtask_id}/toggle",
    response_model=SubtaskOut,
    summary="Toggle Subtask Status",
    responses=_NOT_FOUND,
)
def toggle_subtask(todo_id: str, subtask_id: str, store: TodoStore = Depends(get_store)) -> SubtaskOut:
    return SubtaskOut(**store.toggle_subtask_status(todo_id, subtask_id))  # type: ignore[arg-type]
