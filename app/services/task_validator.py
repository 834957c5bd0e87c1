"""Task field validation."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.exceptions import ValidationError
from app.models.task import TASK_PRIORITIES, TASK_STATUSES
from app.utils.dates import parse_timestamp


@dataclass(frozen=True)
class TaskFields:
    """Validated, normalized mutable fields of a task."""
    title: str
    description: str
    priority: str
    due_date: Optional[datetime]
    reminder_date: Optional[datetime]
    status: Optional[str] = None


def _present(value: Optional[str]) -> bool:
    # Empty form inputs arrive as "" and count as absent
    return value is not None and value != ""


class TaskValidator:
    """Validate task payloads before anything touches the store."""

    @staticmethod
    def validate_title(title: Optional[str]) -> str:
        if title is None or not title.strip():
            raise ValidationError("title required")
        return title.strip()

    @staticmethod
    def validate_status(status: Optional[str]) -> str:
        if status not in TASK_STATUSES:
            raise ValidationError("invalid status")
        return status

    @staticmethod
    def validate_priority(priority: Optional[str]) -> str:
        if not _present(priority):
            return "medium"
        if priority not in TASK_PRIORITIES:
            raise ValidationError("invalid priority")
        return priority

    @staticmethod
    def validate_date(value: Optional[str], message: str) -> Optional[datetime]:
        if not _present(value):
            return None
        parsed = parse_timestamp(value)
        if parsed is None:
            raise ValidationError(message)
        return parsed

    @classmethod
    def validate_create(
        cls,
        title: Optional[str],
        description: Optional[str] = None,
        due_date: Optional[str] = None,
        reminder_date: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> TaskFields:
        """
        Validate a create payload.

        Same rules as an update except that status is not accepted; new
        tasks always start in ``todo``.
        """
        title = cls.validate_title(title)
        priority = cls.validate_priority(priority)
        due = cls.validate_date(due_date, "invalid due date")
        reminder = cls.validate_date(reminder_date, "invalid reminder date")
        return TaskFields(
            title=title,
            description=description or "",
            priority=priority,
            due_date=due,
            reminder_date=reminder,
            status="todo",
        )

    @classmethod
    def validate_update(
        cls,
        title: Optional[str],
        status: Optional[str],
        description: Optional[str] = None,
        due_date: Optional[str] = None,
        reminder_date: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> TaskFields:
        """
        Validate a full-replace update payload.

        Checks run in a fixed order and the first failure wins: title,
        status, priority, due date, reminder date.

        Raises:
            ValidationError: with the message of the first failing rule
        """
        title = cls.validate_title(title)
        status = cls.validate_status(status)
        priority = cls.validate_priority(priority)
        due = cls.validate_date(due_date, "invalid due date")
        reminder = cls.validate_date(reminder_date, "invalid reminder date")
        return TaskFields(
            title=title,
            description=description or "",
            priority=priority,
            due_date=due,
            reminder_date=reminder,
            status=status,
        )
