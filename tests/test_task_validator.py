"""
Tests for TaskValidator and timestamp parsing.
"""

from datetime import datetime

import pytest

from app.exceptions import ValidationError
from app.services.task_validator import TaskValidator
from app.utils.dates import parse_timestamp


@pytest.mark.parametrize("value, expected", [
    ("2025-03-01", datetime(2025, 3, 1)),
    ("2025-03-01T08:15:00", datetime(2025, 3, 1, 8, 15)),
    ("2025-03-01T08:15:00Z", datetime(2025, 3, 1, 8, 15)),
    ("2025-03-01T08:15:00-05:00", datetime(2025, 3, 1, 13, 15)),
])
def test_parse_timestamp_normalizes_to_utc(value, expected):
    assert parse_timestamp(value) == expected


@pytest.mark.parametrize("value", ["", "soon", "2025-02-30", "12/01/2025"])
def test_parse_timestamp_rejects_garbage(value):
    assert parse_timestamp(value) is None


def test_update_normalizes_fields():
    fields = TaskValidator.validate_update(title="  Title ", status="done", description=None)
    assert fields.title == "Title"
    assert fields.status == "done"
    assert fields.description == ""
    assert fields.priority == "medium"
    assert fields.due_date is None
    assert fields.reminder_date is None


def test_title_checked_before_everything():
    with pytest.raises(ValidationError) as exc_info:
        TaskValidator.validate_update(
            title=None, status="nope", priority="nope", due_date="nope", reminder_date="nope"
        )
    assert exc_info.value.message == "title required"


def test_reminder_date_checked_last():
    with pytest.raises(ValidationError) as exc_info:
        TaskValidator.validate_update(title="t", status="todo", priority="low", due_date="2025-01-01", reminder_date="x")
    assert exc_info.value.message == "invalid reminder date"


def test_create_always_starts_in_todo():
    fields = TaskValidator.validate_create(title="t", priority="low")
    assert fields.status == "todo"
    assert fields.priority == "low"
