from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Sequence

from .errors import ValidationError
from .models import TodoEntity, TodoStatus

logger = logging.getLogger(__name__)

SORT_ORDERS = ("default", "date-asc", "date-desc")
FILTER_STATUSES = ("all", "pending", "completed")


def _due_key(todo: TodoEntity) -> date:
    # Missing or unreadable dates sort as the farthest future day.
    return todo["due_date"] or date.max


class ViewProjector:
    """
    Derives the displayed list from the canonical collection.

    sort, filter and search each replace the whole displayed list; they do not
    compose, and any store mutation resets the view to everything in canonical
    order. The displayed list holds references to canonical records, never
    copies that could drift.
    """

    def __init__(self, source: Callable[[], Sequence[TodoEntity]]) -> None:
        self._source = source
        self._displayed: List[TodoEntity] = list(source())
        self._no_results = False

    @property
    def displayed(self) -> List[TodoEntity]:
        return list(self._displayed)

    @property
    def show_placeholder(self) -> bool:
        """True when the last search matched nothing."""
        return self._no_results

    def _replace(self, todos: Sequence[TodoEntity]) -> List[TodoEntity]:
        self._displayed = list(todos)
        self._no_results = False
        return self.displayed

    def reset(self) -> List[TodoEntity]:
        return self._replace(self._source())

    def apply_sort(self, order: str) -> List[TodoEntity]:
        order = (order or "default").strip().lower()
        if order not in SORT_ORDERS:
            raise ValidationError(f"Unknown sort order: {order}")
        todos = list(self._source())
        if order == "date-asc":
            todos = sorted(todos, key=_due_key)
        elif order == "date-desc":
            todos = sorted(todos, key=_due_key, reverse=True)
        logger.debug("sort order=%s rows=%d", order, len(todos))
        return self._replace(todos)

    def apply_filter(self, status: str) -> List[TodoEntity]:
        status = (status or "all").strip().lower()
        if status not in FILTER_STATUSES:
            raise ValidationError(f"Unknown status filter: {status}")
        todos = self._source()
        if status != "all":
            wanted = TodoStatus(status)
            todos = [t for t in todos if t["status"] == wanted]
        logger.debug("filter status=%s rows=%d", status, len(todos))
        return self._replace(todos)

    def apply_search(self, term: str) -> List[TodoEntity]:
        needle = (term or "").strip().casefold()
        if not needle:
            return self.reset()
        matches = [t for t in self._source() if needle in t["text"].casefold()]
        result = self._replace(matches)
        self._no_results = not matches
        logger.debug("search term=%r rows=%d", needle, len(matches))
        return result
