"""
Tests for the board endpoints.
"""
import uuid

import pytest

from conftest import make_board, make_user
from board.models import Board
from task.choices import Status
from task.models import Task


pytestmark = pytest.mark.django_db


def board_url(board_id):
    return f"/api/boards/{board_id}/"


def test_list_includes_owned_and_member_boards_only(api_client, user, other_user):
    own = make_board(user, name="Mine")
    shared = make_board(other_user, name="Shared", members=[user])
    make_board(other_user, name="Hidden")

    response = api_client.get("/api/boards/")

    assert response.status_code == 200
    names = sorted(b["name"] for b in response.json())
    assert names == ["Mine", "Shared"]
    assert {b["id"] for b in response.json()} == {str(own.id), str(shared.id)}


def test_list_reports_progress_and_task_statuses(api_client, user, board):
    Task.objects.create(title="a", owner=user, board=board, status=Status.DONE)
    Task.objects.create(title="b", owner=user, board=board, status=Status.DONE)
    Task.objects.create(title="c", owner=user, board=board, status=Status.REVIEW)

    data = api_client.get("/api/boards/").json()[0]

    assert data["progress"] == 67
    assert sorted(t["status"] for t in data["tasks"]) == ["DONE", "DONE", "REVIEW"]
    assert set(data["tasks"][0]) == {"id", "status"}


def test_empty_board_has_zero_progress(api_client, board):
    assert api_client.get("/api/boards/").json()[0]["progress"] == 0


def test_create_board_adds_default_columns_and_membership(api_client, user):
    response = api_client.post("/api/boards/", {"name": "Launch", "description": "Q3"}, format="json")

    assert response.status_code == 201
    data = response.json()
    assert [(c["name"], c["order"]) for c in data["columns"]] == [
        ("To Do", 0),
        ("In Progress", 1),
        ("Review", 2),
        ("Done", 3),
    ]
    assert data["owner"]["id"] == user.id
    assert data["owner"]["name"] == "Ada"
    assert [m["id"] for m in data["members"]] == [user.id]


def test_create_board_requires_name(api_client):
    response = api_client.post("/api/boards/", {"description": "nameless"}, format="json")
    assert response.status_code == 400
    assert response.json() == {"error": "Name is required"}


def test_detail_nests_full_tasks(api_client, user, board):
    parent = Task.objects.create(title="Parent", owner=user, board=board)
    Task.objects.create(title="Child", owner=user, parent=parent)

    response = api_client.get(board_url(board.id))

    assert response.status_code == 200
    tasks = response.json()["tasks"]
    assert len(tasks) == 1
    assert tasks[0]["title"] == "Parent"
    assert tasks[0]["owner"]["email"] == user.email
    assert tasks[0]["assignees"] == []
    assert tasks[0]["attachments"] == []
    assert [s["title"] for s in tasks[0]["subtasks"]] == ["Child"]


def test_detail_missing_board_is_not_found(api_client):
    response = api_client.get(board_url(uuid.uuid4()))
    assert response.status_code == 404
    assert response.json() == {"error": "Board not found"}


def test_detail_for_outsider_is_unauthorized(other_client, board):
    response = other_client.get(board_url(board.id))
    assert response.status_code == 401


def test_member_can_read_but_not_edit(other_client, other_user, user):
    board = make_board(user, members=[other_user])

    assert other_client.get(board_url(board.id)).status_code == 200
    assert other_client.put(board_url(board.id), {"name": "Hijack"}, format="json").status_code == 401
    assert other_client.delete(board_url(board.id)).status_code == 401

    board.refresh_from_db()
    assert board.name == "Sprint"


def test_owner_replaces_member_set(api_client, user, other_user, board):
    carol = make_user("carol@example.com", name="Carol")

    response = api_client.put(
        board_url(board.id),
        {"memberIds": [user.id, carol.id]},
        format="json",
    )

    assert response.status_code == 200
    assert sorted(m["id"] for m in response.json()["members"]) == sorted([user.id, carol.id])
    assert response.json()["name"] == "Sprint"


def test_delete_board_cascades_to_tasks(api_client, board, task):
    response = api_client.delete(board_url(board.id))

    assert response.status_code == 200
    assert not Board.objects.filter(pk=board.pk).exists()
    assert not Task.objects.filter(pk=task.pk).exists()


def test_create_with_list_body_is_a_bad_request(api_client):
    response = api_client.post("/api/boards/", ["Launch"], format="json")
    assert response.status_code == 400
    assert response.json() == {"error": "Name is required"}
