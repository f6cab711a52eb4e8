from __future__ import annotations


class StoreError(Exception):
    """
    Base class for recoverable task list errors.

    The message is user facing: it is shown verbatim in the notification banner
    and returned in API error bodies.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    """Empty, too long or duplicate text; missing, invalid or past due date."""


class NotFoundError(StoreError):
    """A todo or subtask id that does not exist (e.g. a stale client reference)."""


class EmptyError(StoreError):
    """An operation whose non-empty precondition does not hold."""
