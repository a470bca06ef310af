from datetime import datetime, timezone

from board_client import UNSET, SubtaskDraft, Task, TaskUpdate
from task.choices import Priority, Status


def make_task(**overrides):
    data = {
        "id": "t1",
        "title": "Report",
        "description": "quarterly",
        "priority": "HIGH",
        "status": "IN_PROGRESS",
        "dueDate": "2024-05-01T09:00:00+00:00",
        "recurring": "WEEKLY",
        "progress": 40,
    }
    data.update(overrides)
    return Task.from_payload(data)


def test_from_payload_parses_wire_fields():
    task = make_task(id=7, subtasks=[{"id": 8, "title": "child"}])

    assert task.id == "7"
    assert task.priority is Priority.HIGH
    assert task.status is Status.IN_PROGRESS
    assert task.due_date == datetime(2024, 5, 1, 9, tzinfo=timezone.utc)
    assert task.subtasks[0].id == "8"
    assert task.subtasks[0].status is Status.TODO


def test_empty_update():
    update = TaskUpdate()
    assert update.is_empty()
    assert update.to_payload() == {}
    assert update.title is UNSET


def test_update_payload_keeps_explicit_nulls():
    update = TaskUpdate(due_date=None, recurring=None, progress=0)

    assert update.to_payload() == {"dueDate": None, "recurring": None, "progress": 0}


def test_update_payload_serialises_subtasks_and_dates():
    due = datetime(2024, 6, 1, tzinfo=timezone.utc)
    update = TaskUpdate(due_date=due, subtasks=[SubtaskDraft("A"), SubtaskDraft("B", completed=True)])

    assert update.to_payload() == {
        "dueDate": "2024-06-01T00:00:00+00:00",
        "subtasks": [{"title": "A", "completed": False}, {"title": "B", "completed": True}],
    }


def test_apply_touches_only_present_fields():
    task = make_task()

    updated = TaskUpdate(status=Status.DONE, due_date=None).apply(task)

    assert updated.status is Status.DONE
    assert updated.due_date is None
    assert updated.title == "Report"
    assert updated.recurring == task.recurring
    assert task.status is Status.IN_PROGRESS


def test_apply_leaves_subtasks_for_the_server():
    task = make_task(subtasks=[{"id": "s1", "title": "old"}])

    updated = TaskUpdate(subtasks=[SubtaskDraft("new")]).apply(task)

    assert [s.title for s in updated.subtasks] == ["old"]
