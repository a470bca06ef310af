"""Shared fixtures for the API and client tests."""

import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient

from board.models import DEFAULT_COLUMNS, Board, Column
from task.models import Task
from user.models import UserProfile


def make_user(email, name="", password="s3cret-pass!"):
    user = User.objects.create_user(username=email, email=email, password=password)
    UserProfile.objects.create(user=user, name=name)
    return user


def make_board(owner, name="Sprint", members=()):
    board = Board.objects.create(name=name, owner=owner)
    board.members.set([owner, *members])
    for column in DEFAULT_COLUMNS:
        Column.objects.create(board=board, **column)
    return board


@pytest.fixture
def user(db):
    return make_user("ada@example.com", name="Ada")


@pytest.fixture
def other_user(db):
    return make_user("bob@example.com", name="Bob")


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def other_client(other_user):
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def board(user):
    return make_board(user)


@pytest.fixture
def task(user, board):
    return Task.objects.create(title="Write report", owner=user, board=board)
