from datetime import date

from tasklist.models import TodoStatus
from tasklist.rendering import render_rows
from tasklist.stats import Stats, compute_stats


def sub(sid, status=TodoStatus.PENDING, due=date(2030, 2, 3)):
    return {"id": sid, "text": f"sub {sid}", "status": status, "due_date": due}


def todo(tid, status=TodoStatus.PENDING, subtasks=None, expanded=False, due=date(2030, 2, 1)):
    return {
        "id": tid,
        "text": f"todo {tid}",
        "status": status,
        "due_date": due,
        "subtasks": subtasks or [],
        "expanded": expanded,
    }


class TestStats:
    def test_todos_and_subtasks_weigh_equally(self):
        todos = [
            todo("a", TodoStatus.COMPLETED, [sub("1")]),
            todo("b", TodoStatus.PENDING, [sub("2")]),
        ]
        assert compute_stats(todos) == Stats(total=4, completed=1, pending=3, percentage=25)

    def test_empty_collection(self):
        assert compute_stats([]) == Stats(total=0, completed=0, pending=0, percentage=0)

    def test_completed_subtasks_count(self):
        todos = [todo("a", subtasks=[sub("1", TodoStatus.COMPLETED), sub("2", TodoStatus.COMPLETED)])]
        stats = compute_stats(todos)
        assert (stats.total, stats.completed, stats.pending, stats.percentage) == (3, 2, 1, 67)

    def test_half_rounds_up(self):
        todos = [todo("a", TodoStatus.COMPLETED, [sub(str(i)) for i in range(7)])]
        assert compute_stats(todos).percentage == 13


class TestRendering:
    def test_collapsed_todo_renders_single_row(self):
        rows = render_rows([todo("a", subtasks=[sub("1")], expanded=False)])
        assert len(rows) == 1
        row = rows[0]
        assert row.kind == "todo"
        assert row.expandable is True
        assert row.expanded is False
        assert row.subtask_count == 1
        assert row.due_label == "01/02/2030"
        assert row.status_label == "Pending"
        assert row.actions == ["toggle", "add_subtask", "edit", "delete"]

    def test_expanded_todo_renders_indented_subtasks(self):
        rows = render_rows(
            [
                todo("a", TodoStatus.COMPLETED, [sub("1"), sub("2", TodoStatus.COMPLETED, due=None)], expanded=True),
                todo("b", due=None),
            ]
        )
        assert [(r.kind, r.id) for r in rows] == [("todo", "a"), ("subtask", "1"), ("subtask", "2"), ("todo", "b")]
        assert rows[0].status_label == "Completed"
        assert rows[1].parent_id == "a"
        assert rows[1].indent == 1
        assert rows[1].actions == ["toggle", "edit", "delete"]
        assert rows[2].due_label == "-"
        assert rows[2].status_label == "Completed"
        assert rows[3].due_label == "No Date"
        assert rows[3].expandable is False

    def test_expanded_flag_without_subtasks_shows_no_affordance(self):
        rows = render_rows([todo("a", expanded=True)])
        assert len(rows) == 1
        assert rows[0].expandable is False
        assert rows[0].expanded is False

    def test_date_format_is_configurable(self):
        rows = render_rows([todo("a")], date_format="%Y-%m-%d")
        assert rows[0].due_label == "2030-02-01"

    def test_placeholder(self):
        rows = render_rows([], no_results=True)
        assert [(r.kind, r.text) for r in rows] == [("placeholder", "No todos found")]
        assert render_rows([]) == []
