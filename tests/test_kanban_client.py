"""
Tests for the board client, driven through FastAPI's TestClient.
"""

import asyncio

import pytest

from app.client import ApiError, KanbanClient
from app.services.notification_evaluator import DUE_SOON, OVERDUE, REMINDER

from conftest import iso_from_now


@pytest.fixture
def board(client):
    kanban = KanbanClient(client)
    kanban.register("alice@example.com", "secret-pass")
    kanban.login("alice@example.com", "secret-pass")
    return kanban


def test_login_stores_identity(board):
    assert board.authenticated
    assert board.user["email"] == "alice@example.com"


def test_bad_login_surfaces_server_message(client):
    kanban = KanbanClient(client)
    with pytest.raises(ApiError) as exc_info:
        kanban.login("nobody@example.com", "x")
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "invalid email or password"
    assert not kanban.authenticated


def test_fetch_derives_notifications(board):
    overdue = board.create_task("Late", due_date=iso_from_now(hours=-2))
    soon = board.create_task("Soon", due_date=iso_from_now(hours=3), reminder_date=iso_from_now(minutes=-1))
    board.create_task("Calm")

    tasks = board.fetch_tasks()
    assert [task.title for task in tasks] == ["Late", "Soon", "Calm"]
    assert (overdue.id, OVERDUE) in board.notifications
    assert (soon.id, DUE_SOON) in board.notifications
    assert (soon.id, REMINDER) in board.notifications
    assert len(board.notifications) == 3


def test_move_task_changes_column_only(board):
    task = board.create_task("Card", description="details", priority="high", due_date="2030-05-01T10:00:00")
    moved = board.move_task(task.id, "in-progress")
    assert moved.status == "in-progress"
    assert moved.description == "details"
    assert moved.priority == "high"
    assert moved.due_date == task.due_date

    columns = board.columns()
    assert [t.id for t in columns["in-progress"]] == [task.id]
    assert columns["todo"] == []
    assert columns["done"] == []


def test_move_unknown_task_raises_api_error(board):
    board.fetch_tasks()
    with pytest.raises(ApiError) as exc_info:
        board.move_task(4242, "done")
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "task not found"


def test_delete_removes_from_snapshot(board):
    task = board.create_task("Temp")
    board.delete_task(task.id)
    assert board.tasks == []
    assert board.fetch_tasks() == []


def test_reminder_flow(board):
    task = board.create_task("Call", reminder_date=iso_from_now(minutes=-10))
    assert [t.id for t in board.pending_reminders()] == [task.id]
    marked = board.mark_reminder_sent(task.id)
    assert marked.is_reminder_sent is True
    assert board.pending_reminders() == []
    board.fetch_tasks()
    assert (task.id, REMINDER) not in board.notifications


def test_due_soon_listing(board):
    task = board.create_task("Soon", due_date=iso_from_now(hours=1))
    board.create_task("Later", due_date=iso_from_now(days=3))
    assert [t.id for t in board.due_soon()] == [task.id]


def test_update_error_message_verbatim(board):
    task = board.create_task("Card")
    with pytest.raises(ApiError) as exc_info:
        board.update_task(task.id, title="", status="todo")
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "title required"


def test_invalid_token_on_fetch_forces_logout(board):
    board.create_task("Card", due_date=iso_from_now(hours=-1))
    board.fetch_tasks()
    board.token = "expired-or-forged"

    with pytest.raises(ApiError) as exc_info:
        board.fetch_tasks()
    assert exc_info.value.status_code == 403
    assert not board.authenticated
    assert board.tasks == []
    assert len(board.notifications) == 0


def test_dismissed_notification_reappears_on_next_fetch(board):
    task = board.create_task("Late", due_date=iso_from_now(hours=-1))
    board.fetch_tasks()
    assert board.dismiss(task.id, OVERDUE)
    assert (task.id, OVERDUE) not in board.notifications
    board.fetch_tasks()
    assert (task.id, OVERDUE) in board.notifications


def test_monitor_requires_session(client):
    with pytest.raises(RuntimeError):
        asyncio.run(_start(KanbanClient(client)))


async def _start(kanban):
    kanban.start_monitor(interval=0.01)


def test_logout_cancels_monitor(board):
    board.create_task("Late", due_date=iso_from_now(hours=-1))
    board.fetch_tasks()

    async def scenario():
        monitor = board.start_monitor(interval=0.01)
        await asyncio.sleep(0.05)
        board.logout()
        await asyncio.sleep(0.02)
        return monitor

    monitor = asyncio.run(scenario())
    assert monitor.ticks >= 1
    assert not monitor.running
    assert not board.authenticated
