from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Union

from .errors import ValidationError

MAX_TEXT_LENGTH = 100

# Incoming due dates may be a date, a datetime or an ISO8601 string
DueDateInput = Union[date, datetime, str, None]

_EMPTY_MESSAGES = {
    "todo": "Please enter a todo item!",
    "subtask": "Subtask cannot be empty!",
}
_TOO_LONG_MESSAGES = {
    "todo": "Todo item must be less than 100 characters!",
    "subtask": "Subtask must be less than 100 characters!",
}
_DUPLICATE_MESSAGES = {
    "todo": "This todo item already exists!",
    "subtask": "This subtask already exists!",
}


def parse_date(value: DueDateInput) -> Optional[date]:
    """
    Normalize a due date input to a calendar date, or None when it is missing or
    cannot be parsed. Time-of-day components are dropped.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            return date.fromisoformat(s)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(s).date()
        except ValueError:
            return None

    return None


def validate_text(text: Optional[str], existing: Iterable[str], kind: str = "todo") -> str:
    """
    Return the trimmed text, or raise ValidationError when it is empty, longer
    than MAX_TEXT_LENGTH, or equal (case-insensitively) to one of `existing`.
    """
    s = (text or "").strip()
    if not s:
        raise ValidationError(_EMPTY_MESSAGES[kind])
    if len(s) > MAX_TEXT_LENGTH:
        raise ValidationError(_TOO_LONG_MESSAGES[kind])
    folded = s.casefold()
    if any(other.casefold() == folded for other in existing):
        raise ValidationError(_DUPLICATE_MESSAGES[kind])
    return s


def validate_due_date(value: DueDateInput, today: date) -> date:
    """
    Parse a user supplied due date and reject days strictly before `today`.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Please select a due date!")
    parsed = parse_date(value)
    if parsed is None:
        raise ValidationError("Invalid due date format!")
    if parsed < today:
        raise ValidationError("Due date cannot be in the past!")
    return parsed
