from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, TypeVar

from .errors import StoreError, ValidationError
from .models import SubtaskEntity, TodoEntity
from .store import TodoStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PromptResult:
    text: str
    date: str


# PUBLIC_INTERFACE
class InteractionSurface(ABC):
    """Modal capabilities the controller needs from a user interface."""

    @abstractmethod
    def prompt_text_and_date(
        self, title: str, initial_text: str, initial_date: str
    ) -> Optional[PromptResult]:
        """Ask for text and a due date; None means the prompt was dismissed."""

    @abstractmethod
    def prompt_confirm(self, title: str, message: str) -> bool:
        """Ask a yes/no question; False means cancelled."""

    @abstractmethod
    def notify(self, message: str, severity: str = "info") -> None:
        """Show a transient message."""


def _date_text(value: Optional[date]) -> str:
    return value.isoformat() if value is not None else ""


# PUBLIC_INTERFACE
class TodoController:
    """
    Runs the create/edit/confirm flows of the task list against a surface.

    Edit prompts stay open after a validation error: the surface is asked again
    with what the user typed, until the store accepts it or the prompt is
    dismissed. Store notifications are forwarded to the surface.
    """

    def __init__(self, store: TodoStore, surface: InteractionSurface) -> None:
        self._store = store
        self._surface = surface

    def _report(self, exc: StoreError) -> None:
        self._surface.notify(exc.message, "error")

    def _forward(self) -> None:
        current = self._store.notifier.current
        if current is not None:
            self._surface.notify(current.message, current.severity)

    def _prompt_until_valid(
        self,
        title: str,
        initial_text: str,
        initial_date: str,
        submit: Callable[[str, str], T],
    ) -> Optional[T]:
        answer = self._surface.prompt_text_and_date(title, initial_text, initial_date)
        while answer is not None:
            try:
                result = submit(answer.text, answer.date)
            except ValidationError as exc:
                self._report(exc)
                answer = self._surface.prompt_text_and_date(title, answer.text, answer.date)
                continue
            except StoreError as exc:
                self._report(exc)
                return None
            self._forward()
            return result
        logger.debug("%s dismissed", title)
        return None

    def _lookup(self, find: Callable[[], T]) -> Optional[T]:
        try:
            return find()
        except StoreError as exc:
            self._report(exc)
            return None

    def _confirm_then(self, title: str, message: str, action: Callable[[], None]) -> bool:
        if not self._surface.prompt_confirm(title, message):
            return False
        try:
            action()
        except StoreError as exc:
            self._report(exc)
            return False
        self._forward()
        return True

    # ---- todos ----

    def create_todo(self) -> Optional[TodoEntity]:
        return self._prompt_until_valid("Add Todo", "", "", self._store.add_todo)

    def edit_todo(self, todo_id: str) -> Optional[TodoEntity]:
        todo = self._lookup(lambda: self._store.get_todo(todo_id))
        if todo is None:
            return None
        return self._prompt_until_valid(
            "Edit Todo",
            todo["text"],
            _date_text(todo["due_date"]),
            lambda text, due: self._store.edit_todo(todo_id, text, due),
        )

    def delete_todo(self, todo_id: str) -> bool:
        todo = self._lookup(lambda: self._store.get_todo(todo_id))
        if todo is None:
            return False
        return self._confirm_then(
            "Delete Todo",
            f'Delete "{todo["text"]}" and all its subtasks?',
            lambda: self._store.delete_todo(todo_id),
        )

    def delete_all_todos(self) -> bool:
        count = len(self._store)
        if count == 0:
            try:
                self._store.delete_all_todos()
            except StoreError as exc:
                self._report(exc)
            return False
        return self._confirm_then(
            "Delete All Todos",
            f"Delete all {count} todo items?",
            self._store.delete_all_todos,
        )

    # ---- subtasks ----

    def add_subtask(self, todo_id: str) -> Optional[SubtaskEntity]:
        if self._lookup(lambda: self._store.get_todo(todo_id)) is None:
            return None
        return self._prompt_until_valid(
            "Add Subtask",
            "",
            self._store.today().isoformat(),
            lambda text, due: self._store.add_subtask(todo_id, text, due),
        )

    def edit_subtask(self, todo_id: str, subtask_id: str) -> Optional[SubtaskEntity]:
        subtask = self._lookup(lambda: self._store.get_subtask(todo_id, subtask_id))
        if subtask is None:
            return None
        return self._prompt_until_valid(
            "Edit Subtask",
            subtask["text"],
            _date_text(subtask["due_date"]),
            lambda text, due: self._store.edit_subtask(todo_id, subtask_id, text, due),
        )

    def delete_subtask(self, todo_id: str, subtask_id: str) -> bool:
        subtask = self._lookup(lambda: self._store.get_subtask(todo_id, subtask_id))
        if subtask is None:
            return False
        return self._confirm_then(
            "Delete Subtask",
            f'Delete subtask "{subtask["text"]}"?',
            lambda: self._store.delete_subtask(todo_id, subtask_id),
        )
