from datetime import timedelta

from tasklist.interaction import TodoController

from .conftest import TODAY
from .fakes import ScriptedSurface

FUTURE = (TODAY + timedelta(days=3)).isoformat()
PAST = (TODAY - timedelta(days=3)).isoformat()


def test_create_todo_flow(store):
    surface = ScriptedSurface(answers=[("Write tests", FUTURE)])
    created = TodoController(store, surface).create_todo()
    assert created["text"] == "Write tests"
    assert surface.prompts == [("Add Todo", "", "")]
    assert surface.notifications == [("Todo added successfully!", "success")]


def test_invalid_input_is_retained_and_reprompted(store):
    surface = ScriptedSurface(answers=[("Too late", PAST), ("Too late", FUTURE)])
    created = TodoController(store, surface).create_todo()
    assert created["due_date"].isoformat() == FUTURE
    assert surface.prompts == [("Add Todo", "", ""), ("Add Todo", "Too late", PAST)]
    assert surface.notifications[0] == ("Due date cannot be in the past!", "error")
    assert len(store) == 1


def test_dismissed_prompt_leaves_store_untouched(store):
    surface = ScriptedSurface(answers=[None])
    assert TodoController(store, surface).create_todo() is None
    assert len(store) == 0
    assert surface.notifications == []


def test_edit_todo_prefills_current_values(store):
    todo = store.add_todo("Draft", FUTURE)
    surface = ScriptedSurface(answers=[("Final", FUTURE)])
    edited = TodoController(store, surface).edit_todo(todo["id"])
    assert edited["text"] == "Final"
    assert surface.prompts == [("Edit Todo", "Draft", FUTURE)]


def test_edit_missing_todo_reports_without_prompt(store):
    surface = ScriptedSurface(answers=[("x", FUTURE)])
    assert TodoController(store, surface).edit_todo("missing") is None
    assert surface.prompts == []
    assert surface.notifications == [("Todo not found!", "error")]


def test_add_subtask_defaults_to_today(store):
    todo = store.add_todo("Parent", FUTURE)
    surface = ScriptedSurface(answers=[("Child", TODAY.isoformat())])
    sub = TodoController(store, surface).add_subtask(todo["id"])
    assert sub["text"] == "Child"
    assert surface.prompts == [("Add Subtask", "", TODAY.isoformat())]


def test_edit_subtask_flow(store):
    todo = store.add_todo("Parent", FUTURE)
    sub = store.add_subtask(todo["id"], "Child", FUTURE)
    surface = ScriptedSurface(answers=[("", FUTURE), ("Grown up", FUTURE)])
    edited = TodoController(store, surface).edit_subtask(todo["id"], sub["id"])
    assert edited["text"] == "Grown up"
    assert surface.prompts[0] == ("Edit Subtask", "Child", FUTURE)
    assert surface.notifications[0] == ("Subtask cannot be empty!", "error")


def test_delete_todo_requires_confirmation(store):
    todo = store.add_todo("Groceries", FUTURE)
    declined = ScriptedSurface(confirms=[False])
    assert TodoController(store, declined).delete_todo(todo["id"]) is False
    assert len(store) == 1
    assert declined.confirm_prompts == [("Delete Todo", 'Delete "Groceries" and all its subtasks?')]

    accepted = ScriptedSurface(confirms=[True])
    assert TodoController(store, accepted).delete_todo(todo["id"]) is True
    assert len(store) == 0
    assert accepted.notifications == [("Todo deleted successfully!", "success")]


def test_delete_subtask_requires_confirmation(store):
    todo = store.add_todo("Parent", FUTURE)
    sub = store.add_subtask(todo["id"], "Child", FUTURE)
    surface = ScriptedSurface(confirms=[True])
    assert TodoController(store, surface).delete_subtask(todo["id"], sub["id"]) is True
    assert surface.confirm_prompts == [("Delete Subtask", 'Delete subtask "Child"?')]
    assert store.get_todo(todo["id"])["subtasks"] == []


def test_delete_all_flow(store):
    surface = ScriptedSurface(confirms=[True])
    controller = TodoController(store, surface)
    assert controller.delete_all_todos() is False
    assert surface.confirm_prompts == []
    assert surface.notifications == [("No todos to delete!", "error")]

    store.add_todo("One", FUTURE)
    store.add_todo("Two", FUTURE)
    assert controller.delete_all_todos() is True
    assert surface.confirm_prompts == [("Delete All Todos", "Delete all 2 todo items?")]
    assert len(store) == 0
