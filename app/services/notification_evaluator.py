"""
Notification evaluation.

Derives the ephemeral reminder / overdue / due-soon notifications shown on
the board from a snapshot of tasks. Nothing here is persisted: the working
set is rebuilt from the task list on every fetch and on every poll tick.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from app.config import DUE_SOON_HOURS
from app.utils.dates import to_naive_utc, utcnow

REMINDER = "reminder"
OVERDUE = "overdue"
DUE_SOON = "due-soon"


@dataclass(frozen=True)
class Notification:
    task_id: int
    message: str
    category: str

    @property
    def key(self) -> Tuple[int, str]:
        return (self.task_id, self.category)


def _instant(value) -> Optional[datetime]:
    if value is None:
        return None
    return to_naive_utc(value)


def evaluate(tasks: Iterable, now: Optional[datetime] = None) -> List[Notification]:
    """
    Derive notifications for every open task.

    A task may yield a reminder and, independently, either an overdue or a
    due-soon notification. Tasks in ``done`` yield nothing.

    Args:
        tasks: objects exposing id, title, status, due_date, reminder_date
            and is_reminder_sent (ORM rows or TaskResponse models)
        now: evaluation instant, naive UTC (defaults to the current time)
    """
    now = _instant(now) if now is not None else utcnow()
    window = timedelta(hours=DUE_SOON_HOURS)
    notifications = []

    for task in tasks:
        if task.status == "done":
            continue

        reminder_at = _instant(task.reminder_date)
        if reminder_at is not None and not task.is_reminder_sent and reminder_at <= now:
            notifications.append(Notification(task.id, f"Reminder: {task.title}", REMINDER))

        due_at = _instant(task.due_date)
        if due_at is None:
            continue
        if due_at < now:
            notifications.append(Notification(task.id, f"Overdue: {task.title}", OVERDUE))
        elif timedelta(0) < due_at - now <= window:
            notifications.append(Notification(task.id, f"Due soon: {task.title}", DUE_SOON))

    return notifications


class NotificationBoard:
    """Working set of notifications keyed by (task id, category)."""

    def __init__(self):
        self._items: Dict[Tuple[int, str], Notification] = {}

    def add_all(self, notifications: Iterable[Notification]) -> None:
        # Dismissed entries whose condition still holds come back here
        for notification in notifications:
            self._items[notification.key] = notification

    def dismiss(self, task_id: int, category: str) -> bool:
        """Remove one notification. Returns False if it was not present."""
        return self._items.pop((task_id, category), None) is not None

    def clear(self) -> None:
        self._items.clear()

    def items(self) -> List[Notification]:
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key) -> bool:
        return key in self._items
