from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from datetime import date
from typing import Callable, Iterator, List, Optional, Union

from .errors import EmptyError, NotFoundError, StoreError, ValidationError
from .models import SubtaskEntity, TodoEntity, TodoStatus
from .notifications import Notifier
from .persistence import TodoPersistence
from .projector import ViewProjector
from .stats import Stats, compute_stats
from .validation import DueDateInput, validate_due_date, validate_text

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


def _copy_subtask(subtask: SubtaskEntity) -> SubtaskEntity:
    return subtask.copy()


def _copy_todo(todo: TodoEntity) -> TodoEntity:
    copied = todo.copy()
    copied["subtasks"] = [_copy_subtask(s) for s in todo["subtasks"]]
    return copied


# PUBLIC_INTERFACE
class TodoStore:
    """
    Owns the canonical todo collection and every mutation of it.

    Each mutation validates first and touches state only once validation has
    passed. On success the displayed list is reset to the full collection, the
    collection is persisted and a success notification is shown. On failure an
    error notification is shown, state is left as it was and the error is
    re-raised; a failed save rolls the collection back to its previous state.

    Every operation holds one re-entrant lock from validation to notification,
    so concurrent requests from the server threadpool run one at a time.

    Returned todos and subtasks are copies; the store is the only owner of the
    canonical records.
    """

    def __init__(
        self,
        persistence: TodoPersistence,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._persistence = persistence
        self._notifier = notifier or Notifier()
        self._clock = clock
        self._new_id = id_factory
        self._lock = threading.RLock()
        self._todos: List[TodoEntity] = persistence.load()
        self._view = ViewProjector(lambda: self._todos)
        logger.info("TodoStore ready todos=%d", len(self._todos))

    # ---- read side ----

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    @property
    def view(self) -> ViewProjector:
        return self._view

    @property
    def todos(self) -> List[TodoEntity]:
        with self._lock:
            return [_copy_todo(t) for t in self._todos]

    def __len__(self) -> int:
        with self._lock:
            return len(self._todos)

    def get_todo(self, todo_id: str) -> TodoEntity:
        with self._lock:
            return _copy_todo(self._find_todo(todo_id))

    def get_subtask(self, todo_id: str, subtask_id: str) -> SubtaskEntity:
        with self._lock:
            return _copy_subtask(self._find_subtask(self._find_todo(todo_id), subtask_id))

    def stats(self) -> Stats:
        with self._lock:
            return compute_stats(self._todos)

    def today(self) -> date:
        return self._clock()

    # ---- internals ----

    def _find_todo(self, todo_id: str) -> TodoEntity:
        for todo in self._todos:
            if todo["id"] == todo_id:
                return todo
        raise NotFoundError("Todo not found!")

    @staticmethod
    def _find_subtask(todo: TodoEntity, subtask_id: str) -> SubtaskEntity:
        for subtask in todo["subtasks"]:
            if subtask["id"] == subtask_id:
                return subtask
        raise NotFoundError("Subtask not found!")

    @contextmanager
    def _reporting(self) -> Iterator[None]:
        with self._lock:
            try:
                yield
            except StoreError as exc:
                logger.info("Rejected: %s (%s)", exc.message, type(exc).__name__)
                self._notifier.notify(exc.message, "error")
                raise

    @contextmanager
    def _mutating(self) -> Iterator[None]:
        """
        Serialize a whole validate/mutate/persist/notify sequence, restoring the
        previous collection if anything other than a StoreError escapes.
        """
        with self._reporting():
            snapshot = [_copy_todo(t) for t in self._todos]
            try:
                yield
            except StoreError:
                raise
            except Exception:
                self._todos[:] = snapshot
                self._view.reset()
                logger.exception("Saving todos failed; changes rolled back")
                self._notifier.notify("Could not save todos!", "error")
                raise

    def _commit(self, message: str) -> None:
        self._view.reset()
        self._persistence.save(self._todos)
        self._notifier.notify(message, "success")
        logger.info("%s todos=%d", message, len(self._todos))

    # ---- todos ----

    def add_todo(self, text: Optional[str], due_date: DueDateInput) -> TodoEntity:
        with self._mutating():
            clean = validate_text(text, (t["text"] for t in self._todos), "todo")
            due = validate_due_date(due_date, self._clock())
            todo: TodoEntity = {
                "id": self._new_id(),
                "text": clean,
                "status": TodoStatus.PENDING,
                "due_date": due,
                "subtasks": [],
                "expanded": False,
            }
            self._todos.append(todo)
            self._commit("Todo added successfully!")
            return _copy_todo(todo)

    def edit_todo(self, todo_id: str, text: Optional[str], due_date: DueDateInput) -> TodoEntity:
        with self._mutating():
            todo = self._find_todo(todo_id)
            others = (t["text"] for t in self._todos if t["id"] != todo_id)
            clean = validate_text(text, others, "todo")
            due = validate_due_date(due_date, self._clock())
            todo["text"] = clean
            todo["due_date"] = due
            self._commit("Todo updated successfully!")
            return _copy_todo(todo)

    def delete_todo(self, todo_id: str) -> None:
        """Remove the todo together with all of its subtasks."""
        with self._mutating():
            todo = self._find_todo(todo_id)
            self._todos.remove(todo)
            self._commit("Todo deleted successfully!")

    def delete_all_todos(self) -> None:
        with self._mutating():
            if not self._todos:
                raise EmptyError("No todos to delete!")
            self._todos.clear()
            self._commit("All todos deleted!")

    def toggle_todo_status(self, todo_id: str) -> TodoEntity:
        with self._mutating():
            todo = self._find_todo(todo_id)
            todo["status"] = TodoStatus(todo["status"]).toggled()
            self._commit("Status updated!")
            return _copy_todo(todo)

    def update_todo_status(self, todo_id: str, status: Union[str, TodoStatus]) -> TodoEntity:
        with self._mutating():
            todo = self._find_todo(todo_id)
            try:
                new_status = TodoStatus(status)
            except ValueError:
                raise ValidationError("Invalid status!") from None
            todo["status"] = new_status
            self._commit("Status updated!")
            return _copy_todo(todo)

    def toggle_expand(self, todo_id: str) -> TodoEntity:
        with self._mutating():
            todo = self._find_todo(todo_id)
            if not todo["subtasks"]:
                raise EmptyError("No subtasks to show!")
            todo["expanded"] = not todo["expanded"]
            self._commit("Subtasks expanded!" if todo["expanded"] else "Subtasks collapsed!")
            return _copy_todo(todo)

    # ---- subtasks ----

    def add_subtask(self, todo_id: str, text: Optional[str], due_date: DueDateInput) -> SubtaskEntity:
        with self._mutating():
            todo = self._find_todo(todo_id)
            clean = validate_text(text, (s["text"] for s in todo["subtasks"]), "subtask")
            due = validate_due_date(due_date, self._clock())
            subtask: SubtaskEntity = {
                "id": self._new_id(),
                "text": clean,
                "status": TodoStatus.PENDING,
                "due_date": due,
            }
            todo["subtasks"].append(subtask)
            todo["expanded"] = True
            self._commit("Subtask added successfully!")
            return _copy_subtask(subtask)

    def edit_subtask(
        self, todo_id: str, subtask_id: str, text: Optional[str], due_date: DueDateInput
    ) -> SubtaskEntity:
        with self._mutating():
            todo = self._find_todo(todo_id)
            subtask = self._find_subtask(todo, subtask_id)
            others = (s["text"] for s in todo["subtasks"] if s["id"] != subtask_id)
            clean = validate_text(text, others, "subtask")
            due = validate_due_date(due_date, self._clock())
            subtask["text"] = clean
            subtask["due_date"] = due
            self._commit("Subtask updated successfully!")
            return _copy_subtask(subtask)

    def delete_subtask(self, todo_id: str, subtask_id: str) -> None:
        with self._mutating():
            todo = self._find_todo(todo_id)
            subtask = self._find_subtask(todo, subtask_id)
            todo["subtasks"].remove(subtask)
            self._commit("Subtask deleted successfully!")

    def toggle_subtask_status(self, todo_id: str, subtask_id: str) -> SubtaskEntity:
        with self._mutating():
            subtask = self._find_subtask(self._find_todo(todo_id), subtask_id)
            subtask["status"] = TodoStatus(subtask["status"]).toggled()
            self._commit("Subtask status updated!")
            return _copy_subtask(subtask)

    # ---- view ----

    def apply_sort(self, order: str) -> List[TodoEntity]:
        with self._reporting():
            return [_copy_todo(t) for t in self._view.apply_sort(order)]

    def apply_filter(self, status: str) -> List[TodoEntity]:
        with self._reporting():
            return [_copy_todo(t) for t in self._view.apply_filter(status)]

    def apply_search(self, term: str) -> List[TodoEntity]:
        with self._lock:
            return [_copy_todo(t) for t in self._view.apply_search(term)]

    def reset_view(self) -> List[TodoEntity]:
        with self._lock:
            return [_copy_todo(t) for t in self._view.reset()]

    def displayed(self) -> List[TodoEntity]:
        with self._lock:
            return [_copy_todo(t) for t in self._view.displayed]
