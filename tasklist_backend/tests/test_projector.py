from datetime import date

import pytest

from tasklist.errors import ValidationError
from tasklist.models import TodoStatus
from tasklist.projector import ViewProjector


def make_todo(tid, text, due, status=TodoStatus.PENDING, subtasks=None):
    return {
        "id": tid,
        "text": text,
        "status": status,
        "due_date": due,
        "subtasks": subtasks or [],
        "expanded": False,
    }


@pytest.fixture()
def todos():
    return [
        make_todo("1", "March report", date(2025, 3, 1)),
        make_todo("2", "January taxes", date(2025, 1, 1), TodoStatus.COMPLETED),
        make_todo(
            "3",
            "Undated chore",
            None,
            subtasks=[{"id": "s", "text": "hidden needle", "status": TodoStatus.PENDING, "due_date": None}],
        ),
    ]


@pytest.fixture()
def projector(todos):
    return ViewProjector(lambda: todos)


def ids(rows):
    return [t["id"] for t in rows]


def test_starts_with_everything(projector):
    assert ids(projector.displayed) == ["1", "2", "3"]


def test_sort_ascending_puts_missing_dates_last(projector):
    assert ids(projector.apply_sort("date-asc")) == ["2", "1", "3"]


def test_sort_descending_puts_missing_dates_first(projector):
    assert ids(projector.apply_sort("date-desc")) == ["3", "1", "2"]


def test_sort_default_restores_insertion_order(projector):
    projector.apply_sort("date-asc")
    assert ids(projector.apply_sort("default")) == ["1", "2", "3"]


def test_sort_is_stable_for_equal_dates():
    same = date(2025, 5, 5)
    todos = [make_todo(str(i), f"t{i}", same) for i in range(5)]
    projector = ViewProjector(lambda: todos)
    assert ids(projector.apply_sort("date-asc")) == ["0", "1", "2", "3", "4"]
    assert ids(projector.apply_sort("date-desc")) == ["0", "1", "2", "3", "4"]


def test_unknown_sort_order(projector):
    with pytest.raises(ValidationError):
        projector.apply_sort("by-name")


def test_filter(projector):
    assert ids(projector.apply_filter("completed")) == ["2"]
    assert ids(projector.apply_filter("pending")) == ["1", "3"]
    assert ids(projector.apply_filter("all")) == ["1", "2", "3"]
    with pytest.raises(ValidationError):
        projector.apply_filter("archived")


def test_search_matches_todo_text_only(projector):
    assert ids(projector.apply_search("REPORT")) == ["1"]
    assert projector.show_placeholder is False
    assert projector.apply_search("needle") == []
    assert projector.show_placeholder is True


def test_empty_search_equals_reset(projector):
    projector.apply_sort("date-desc")
    assert ids(projector.apply_search("   ")) == ids(projector.reset()) == ["1", "2", "3"]
    assert projector.show_placeholder is False


def test_operations_replace_rather_than_compose(projector):
    projector.apply_filter("completed")
    assert ids(projector.apply_sort("date-asc")) == ["2", "1", "3"]
    projector.apply_search("march")
    assert ids(projector.apply_filter("pending")) == ["1", "3"]


def test_displayed_references_canonical_records(projector, todos):
    shown = projector.apply_filter("completed")
    assert shown[0] is todos[1]
