"""
Tests for the task endpoints: ownership, sparse updates and subtask replacement.
"""
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from conftest import make_board
from task.choices import Priority, Status
from task.models import Task


pytestmark = pytest.mark.django_db


def task_url(task_id):
    return f"/api/tasks/{task_id}/"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Authentication boundary
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_list_requires_session(anon_client):
    response = anon_client.get("/api/tasks/")
    assert response.status_code == 401


def test_other_users_task_is_unauthorized_not_forbidden(other_client, task):
    response = other_client.get(task_url(task.id))
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_other_user_cannot_update_or_delete(other_client, task):
    assert other_client.patch(task_url(task.id), {"status": "DONE"}, format="json").status_code == 401
    assert other_client.delete(task_url(task.id)).status_code == 401

    task.refresh_from_db()
    assert task.status == Status.TODO


def test_missing_task_is_not_found(api_client):
    response = api_client.get(task_url(uuid.uuid4()))
    assert response.status_code == 404
    assert response.json() == {"error": "Task not found"}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Listing
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_list_returns_own_top_level_tasks_newest_first(api_client, user, other_user, board):
    now = datetime.now(timezone.utc)
    older = Task.objects.create(title="older", owner=user, board=board)
    newer = Task.objects.create(title="newer", owner=user, board=board)
    Task.objects.filter(pk=older.pk).update(created_at=now - timedelta(hours=1))
    Task.objects.filter(pk=newer.pk).update(created_at=now)
    Task.objects.create(title="child", owner=user, parent=newer)
    Task.objects.create(title="someone else's", owner=other_user, board=make_board(other_user))

    response = api_client.get("/api/tasks/")

    assert response.status_code == 200
    data = response.json()
    assert [t["title"] for t in data] == ["newer", "older"]
    assert [s["title"] for s in data[0]["subtasks"]] == ["child"]
    assert data[0]["id"] == str(newer.id)


def test_list_filters_by_status_and_search(api_client, user, board):
    Task.objects.create(title="Ship release", owner=user, board=board, status=Status.DONE)
    Task.objects.create(title="Plan release", owner=user, board=board, status=Status.TODO)
    Task.objects.create(title="Groceries", owner=user, board=board, status=Status.DONE)

    done = api_client.get("/api/tasks/", {"status": "DONE"}).json()
    assert sorted(t["title"] for t in done) == ["Groceries", "Ship release"]

    release = api_client.get("/api/tasks/", {"search": "release"}).json()
    assert sorted(t["title"] for t in release) == ["Plan release", "Ship release"]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Create
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_create_requires_title_and_board(api_client, board):
    response = api_client.post("/api/tasks/", {"title": "No board"}, format="json")
    assert response.status_code == 400
    assert response.json() == {"error": "Title and board ID are required"}

    response = api_client.post("/api/tasks/", {"boardId": str(board.id)}, format="json")
    assert response.status_code == 400


def test_create_applies_defaults(api_client, user, board):
    response = api_client.post(
        "/api/tasks/",
        {"title": "Draft", "boardId": str(board.id)},
        format="json",
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["priority"] == Priority.MEDIUM
    assert data["status"] == Status.TODO
    assert data["description"] == ""
    assert data["dueDate"] is None
    assert data["boardId"] == str(board.id)

    task = Task.objects.get(pk=data["id"])
    assert task.owner == user


def test_create_on_unknown_board_is_not_found(api_client):
    response = api_client.post(
        "/api/tasks/",
        {"title": "Lost", "boardId": str(uuid.uuid4())},
        format="json",
    )
    assert response.status_code == 404


def test_create_on_foreign_board_is_unauthorized(api_client, other_user):
    foreign = make_board(other_user, name="Private")
    response = api_client.post(
        "/api/tasks/",
        {"title": "Sneaky", "boardId": str(foreign.id)},
        format="json",
    )
    assert response.status_code == 401
    assert not Task.objects.filter(title="Sneaky").exists()


def test_create_with_subtasks(api_client, board):
    response = api_client.post(
        "/api/tasks/",
        {
            "title": "Parent",
            "priority": "HIGH",
            "boardId": str(board.id),
            "subtasks": [
                {"title": "A", "completed": False},
                {"title": "B", "completed": True},
            ],
        },
        format="json",
    )

    assert response.status_code == 201
    subtasks = response.json()["data"]["subtasks"]
    assert sorted((s["title"], s["progress"], s["priority"], s["status"]) for s in subtasks) == [
        ("A", 0, "HIGH", "TODO"),
        ("B", 100, "HIGH", "TODO"),
    ]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Update
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_status_only_update_leaves_other_fields(api_client, user, board):
    due = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)
    task = Task.objects.create(title="Keep me", description="body", owner=user, board=board, due_date=due)

    response = api_client.put(task_url(task.id), {"status": "DONE"}, format="json")

    assert response.status_code == 200
    task.refresh_from_db()
    assert task.status == Status.DONE
    assert task.title == "Keep me"
    assert task.description == "body"
    assert task.due_date == due


def test_explicit_null_clears_due_date(api_client, user, board):
    task = Task.objects.create(
        title="Dated", owner=user, board=board,
        due_date=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )

    response = api_client.patch(task_url(task.id), {"dueDate": None}, format="json")

    assert response.status_code == 200
    assert response.json()["dueDate"] is None
    task.refresh_from_db()
    assert task.due_date is None


def test_update_rejects_invalid_values(api_client, task):
    response = api_client.patch(task_url(task.id), {"status": "ARCHIVED"}, format="json")
    assert response.status_code == 400
    assert "status" in response.json()

    response = api_client.patch(task_url(task.id), {"progress": 150}, format="json")
    assert response.status_code == 400
    assert "progress" in response.json()


def test_subtask_update_replaces_instead_of_merging(api_client, board):
    created = api_client.post(
        "/api/tasks/",
        {
            "title": "Parent",
            "boardId": str(board.id),
            "subtasks": [
                {"title": "A", "completed": False},
                {"title": "B", "completed": True},
            ],
        },
        format="json",
    ).json()["data"]

    response = api_client.put(
        task_url(created["id"]),
        {"subtasks": [{"title": "C", "completed": True}]},
        format="json",
    )

    assert response.status_code == 200
    assert [s["title"] for s in response.json()["subtasks"]] == ["C"]
    assert Task.objects.filter(parent_id=created["id"]).count() == 1


def test_update_without_subtasks_keeps_them(api_client, user, task):
    Task.objects.create(title="child", owner=user, parent=task)

    response = api_client.patch(task_url(task.id), {"title": "Renamed"}, format="json")

    assert response.status_code == 200
    assert [s["title"] for s in response.json()["subtasks"]] == ["child"]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Delete
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_delete_cascades_to_subtasks(api_client, user, task):
    Task.objects.create(title="child", owner=user, parent=task)

    response = api_client.delete(task_url(task.id))

    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted successfully"}
    assert not Task.objects.filter(pk=task.pk).exists()
    assert not Task.objects.filter(parent_id=task.pk).exists()


def test_create_with_list_body_is_a_bad_request(api_client):
    response = api_client.post("/api/tasks/", [{"title": "x"}], format="json")
    assert response.status_code == 400
    assert response.json() == {"error": "Title and board ID are required"}
